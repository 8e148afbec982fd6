"""
FastAPI API routes.
"""

import time
from typing import List, Literal, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from waftriage import __version__
from waftriage.analysis.composer import AnalysisError, analyze
from waftriage.analysis.filters import available_threat_types, filter_events
from waftriage.analysis.labels import action_label, threat_label
from waftriage.client.logs_client import LogRetrievalError
from waftriage.models.criteria import FilterCriteria
from waftriage.models.log_event import LogEvent, TimeRange
from waftriage.models.report import Report
from waftriage.api.dependencies import get_logs_client, get_report_composer


router = APIRouter()


# Request/Response Models
class AnalyzeRequest(BaseModel):
    """Analyze a batch of events supplied by the caller."""
    events: List[LogEvent]
    criteria: FilterCriteria = Field(default_factory=FilterCriteria)
    question: str = ""
    range: TimeRange = TimeRange.LAST_DAY


class FetchAndAnalyzeRequest(BaseModel):
    """Fetch events for a range from the logs API, then analyze them."""
    criteria: FilterCriteria = Field(default_factory=FilterCriteria)
    question: str = ""
    range: TimeRange = TimeRange.LAST_DAY


class AnalyzeResponse(BaseModel):
    """Response model for log analysis."""
    report: Report
    text: str
    processing_time_ms: int


class EventView(LogEvent):
    """Event with its display badges."""
    action_label: str
    threat_label: str


class LogsResponse(BaseModel):
    """Filtered events for a time range."""
    range: TimeRange
    total: int
    threat_types: List[str]
    events: List[EventView]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


def _run_analysis(question: str, events: List[LogEvent], time_range: TimeRange) -> AnalyzeResponse:
    start_time = time.time()
    
    try:
        report = analyze(question, events, time_range.value, composer=get_report_composer())
    except AnalysisError as e:
        raise HTTPException(status_code=500, detail=str(e))
    
    return AnalyzeResponse(
        report=report,
        text=report.render(),
        processing_time_ms=int((time.time() - start_time) * 1000),
    )


async def _fetch_events(time_range: TimeRange) -> List[LogEvent]:
    client = get_logs_client()
    try:
        return await client.get_events(time_range)
    except LogRetrievalError as e:
        raise HTTPException(status_code=502, detail=str(e))


# Routes
@router.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@router.get("/api/logs", response_model=LogsResponse)
async def list_logs(
    range: TimeRange = TimeRange.LAST_DAY,
    q: Optional[str] = None,
    action: Literal["all", "ALLOWED", "BLOCKED"] = "all",
    threat_type: str = "all",
):
    """
    List events for a time range, filtered like the analysis input.
    
    The threat type list is computed before filtering so a caller can
    offer every type present in the range.
    """
    events = await _fetch_events(range)
    criteria = FilterCriteria(text_query=q, action=action, threat_type=threat_type)
    filtered = filter_events(events, criteria)
    
    return LogsResponse(
        range=range,
        total=len(filtered),
        threat_types=available_threat_types(events),
        events=[
            EventView(
                **event.model_dump(),
                action_label=action_label(event.action),
                threat_label=threat_label(event.threat_type),
            )
            for event in filtered
        ],
    )


@router.post("/api/analyze", response_model=AnalyzeResponse)
async def analyze_events(request: AnalyzeRequest):
    """
    Analyze caller-supplied events.
    
    1. Applies the filter criteria
    2. Composes the triage report
    """
    filtered = filter_events(request.events, request.criteria)
    return _run_analysis(request.question, filtered, request.range)


@router.post("/api/logs/analyze", response_model=AnalyzeResponse)
async def fetch_and_analyze(request: FetchAndAnalyzeRequest):
    """
    Analyze the events of a time range.
    
    1. Fetches events from the logs API
    2. Applies the filter criteria
    3. Composes the triage report
    """
    events = await _fetch_events(request.range)
    filtered = filter_events(events, request.criteria)
    return _run_analysis(request.question, filtered, request.range)

"""
Pydantic models for WAF Triage.
"""

from waftriage.models.log_event import LogEvent, LogAction, TimeRange
from waftriage.models.criteria import FilterCriteria
from waftriage.models.report import RankedEntry, ReportSection, Report

__all__ = [
    "LogEvent",
    "LogAction",
    "TimeRange",
    "FilterCriteria",
    "RankedEntry",
    "ReportSection",
    "Report",
]

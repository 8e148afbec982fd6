"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache

from waftriage.analysis.composer import ReportComposer
from waftriage.client.logs_client import LogsClient
from waftriage.config import get_settings


@lru_cache()
def get_report_composer() -> ReportComposer:
    """Get cached report composer instance."""
    return ReportComposer(thousands_separator=get_settings().thousands_separator)


def get_logs_client() -> LogsClient:
    """Get logs API client (new each request for async safety)."""
    return LogsClient()

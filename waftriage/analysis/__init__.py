"""
Triage engine: filtering, ranking, pattern detection and report composition.
"""

from waftriage.analysis.filters import filter_events
from waftriage.analysis.ranking import top_n
from waftriage.analysis.patterns import is_suspicious_path, repeated_404_ranking
from waftriage.analysis.composer import ReportComposer, AnalysisError, analyze

__all__ = [
    "filter_events",
    "top_n",
    "is_suspicious_path",
    "repeated_404_ranking",
    "ReportComposer",
    "AnalysisError",
    "analyze",
]

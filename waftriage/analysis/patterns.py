"""
Suspicious pattern detection.

Classifies request paths that point at sensitive resources and surfaces
repeated 404s on them, which usually means someone is enumerating the
site for login pages, admin panels or leaked config files.
"""

from typing import List, Optional, Sequence

from waftriage.analysis.ranking import top_n
from waftriage.models.log_event import LogAction, LogEvent
from waftriage.models.report import RankedEntry


# Changing this list changes report output; bump the version with it.
SUSPICIOUS_PATH_KEYWORDS_VERSION = 1
SUSPICIOUS_PATH_KEYWORDS = (
    "wp-login",
    "xmlrpc",
    "admin",
    "login",
    "phpmyadmin",
    "shell",
    ".env",
    "config.php",
    "/api/auth",
)


def is_suspicious_path(path: Optional[str]) -> bool:
    """Check whether a path contains a sensitive-resource keyword."""
    path_lower = (path or "").lower()
    return any(keyword in path_lower for keyword in SUSPICIOUS_PATH_KEYWORDS)


def is_blocked(event: LogEvent) -> bool:
    return (event.action or "").upper() == LogAction.BLOCKED.value


def is_server_error(event: LogEvent) -> bool:
    return (event.status_code or 0) >= 500


def host_path_key(event: LogEvent) -> str:
    """Composite ``hostname + path`` key, e.g. ``shop.example.com/api/pay``."""
    return f"{event.hostname or ''}{event.path or ''}"


def repeated_404_ranking(events: Sequence[LogEvent], n: int = 5) -> List[RankedEntry]:
    """
    Rank host/path pairs that keep returning 404 on sensitive paths.
    
    Args:
        events: Already-filtered events
        n: Maximum number of entries
        
    Returns:
        Ranking keyed by ``hostname + path``
    """
    scanning = [
        e for e in events
        if e.status_code == 404 and is_suspicious_path(e.path)
    ]
    return top_n(scanning, host_path_key, n)


def server_error_ranking(events: Sequence[LogEvent], n: int = 5) -> List[RankedEntry]:
    """Rank host/path pairs by number of 5xx responses."""
    return top_n([e for e in events if is_server_error(e)], host_path_key, n)

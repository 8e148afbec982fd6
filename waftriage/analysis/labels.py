"""
Display labels for event tables.

Labels are presentation only. Filtering always works on the raw values.
"""

from typing import Optional

from waftriage.models.log_event import LogAction


CLEAN_LABEL = "clean"

THREAT_LABELS = {
    "sql_injection": "SQLi",
    "xss": "XSS",
    "bot": "Bot",
    "lfi": "LFI",
    "rce": "RCE",
}


def action_label(action: Optional[str]) -> str:
    """Anything that is not BLOCKED displays as ALLOWED."""
    value = (action or LogAction.ALLOWED.value).upper()
    if value == LogAction.BLOCKED.value:
        return LogAction.BLOCKED.value
    return LogAction.ALLOWED.value


def threat_label(threat_type: Optional[str]) -> str:
    """Short badge label for a threat type."""
    if not threat_type or threat_type == "none":
        return CLEAN_LABEL
    return THREAT_LABELS.get(threat_type, threat_type)

"""
Event filter - narrows a batch of events to the caller's criteria.
"""

from typing import List, Sequence

from waftriage.models.criteria import ALL, FilterCriteria
from waftriage.models.log_event import LogEvent


def build_haystack(event: LogEvent) -> str:
    """Space-joined, lowercased searchable text of an event."""
    fields = [
        event.hostname or "",
        event.method or "",
        event.path or "",
        str(event.status_code) if event.status_code is not None else "",
        event.threat_type or "",
        event.rule_id or "",
        event.country or "",
    ]
    return " ".join(fields).lower()


def matches(event: LogEvent, criteria: FilterCriteria) -> bool:
    """Check a single event against every criterion."""
    if criteria.action != ALL:
        if (event.action or "").upper() != criteria.action:
            return False
    
    # Exact and case-sensitive, unlike the action check
    if criteria.threat_type != ALL:
        if (event.threat_type or "") != criteria.threat_type:
            return False
    
    query = criteria.text_query or ""
    if query.strip():
        if query.lower() not in build_haystack(event):
            return False
    
    return True


def filter_events(events: Sequence[LogEvent], criteria: FilterCriteria) -> List[LogEvent]:
    """
    Return the events matching ``criteria``, in their original order.
    
    Args:
        events: Events to filter
        criteria: Conjunctive filter criteria
        
    Returns:
        Matching events (possibly empty)
    """
    return [event for event in events if matches(event, criteria)]


def available_threat_types(events: Sequence[LogEvent]) -> List[str]:
    """Distinct non-empty threat types present in the batch, in first-seen order."""
    seen = {}
    for event in events:
        if event.threat_type:
            seen.setdefault(event.threat_type, None)
    return list(seen)

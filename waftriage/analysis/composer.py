"""
Report composer - turns a filtered batch of events into a triage report.
"""

import logging
from typing import Iterable, List, Optional

from waftriage.analysis.patterns import (
    is_blocked,
    is_server_error,
    is_suspicious_path,
    repeated_404_ranking,
    server_error_ranking,
)
from waftriage.analysis.ranking import count_where, top_n
from waftriage.config import get_settings
from waftriage.models.log_event import LogEvent
from waftriage.models.report import RankedEntry, Report, ReportSection


logger = logging.getLogger(__name__)

TOP_N = 5

NO_EVENTS_MESSAGE = (
    "No events match the current filters; widen the time range or remove filters."
)
RULES_ADVISORY = (
    "  If high-volume rules are matching traffic you know is legitimate, "
    "review them as possible false positives."
)
QUESTION_GUIDANCE = (
    "→ Use the findings above to answer it: focus on noisy hosts, rules with "
    "the most matches and paths with 5xx/404 errors on sensitive resources."
)


class AnalysisError(Exception):
    """Raised when a report could not be composed."""
    
    def __init__(self, message: str = "Error analyzing logs."):
        super().__init__(message)


class ReportComposer:
    """
    Builds the triage report for a batch of events.
    
    Sections appear in a fixed order and only when they have content:
    overview and 5xx summary always, then suspicious paths, threat
    types, rules, hosts, blocked hosts, key issues and the echoed
    question. The composer keeps no state between calls.
    """
    
    def __init__(self, thousands_separator: str = ","):
        self.thousands_separator = thousands_separator
    
    def compose(
        self,
        question: str,
        events_in_scope: Iterable[LogEvent],
        range_label: str,
    ) -> Report:
        """
        Compose a report.
        
        Args:
            question: Optional free-text focus question, echoed verbatim
            events_in_scope: Events that passed the caller's filters
            range_label: Time range the events were fetched for
            
        Returns:
            The composed Report
        """
        events = list(events_in_scope)
        if not events:
            return Report(
                range_label=range_label,
                total_events=0,
                sections=[ReportSection(key="no_events", lines=[NO_EVENTS_MESSAGE])],
            )
        
        blocked_events = [e for e in events if is_blocked(e)]
        errors_5xx = [e for e in events if is_server_error(e)]
        
        sections = [
            self._overview(events, blocked_events, range_label),
            self._server_errors(errors_5xx),
        ]
        
        suspicious = [e for e in events if is_suspicious_path(e.path)]
        sections.append(self._ranked_section(
            key="suspicious_paths",
            title="• Potentially sensitive or attacked paths (login/admin/etc.):",
            ranking=top_n(suspicious, lambda e: e.path or "", TOP_N),
            unit="hits",
        ))
        sections.append(self._ranked_section(
            key="threat_types",
            title="• Most frequent threat types:",
            ranking=top_n(
                [e for e in events if e.threat_type],
                lambda e: e.threat_type or "",
                TOP_N,
            ),
            unit="events",
        ))
        
        rules_section = self._ranked_section(
            key="rules",
            title="• Rules firing the most:",
            ranking=top_n(
                [e for e in events if e.rule_id],
                lambda e: e.rule_id or "",
                TOP_N,
            ),
            unit="matches",
        )
        if rules_section:
            rules_section.lines.append(RULES_ADVISORY)
        sections.append(rules_section)
        
        sections.append(self._ranked_section(
            key="hosts",
            title="• Most active hosts (all traffic):",
            ranking=top_n(events, lambda e: e.hostname or "", TOP_N),
            unit="events",
        ))
        sections.append(self._ranked_section(
            key="blocked_hosts",
            title="• Hosts with the most blocks:",
            ranking=top_n(blocked_events, lambda e: e.hostname or "", TOP_N),
            unit="blocks",
        ))
        
        sections.append(self._key_issues(errors_5xx, events))
        sections.append(self._question(question))
        
        return Report(
            range_label=range_label,
            total_events=len(events),
            sections=[s for s in sections if s is not None],
        )
    
    def format_count(self, value: int) -> str:
        """Render an integer with the configured thousands separator."""
        return f"{value:,}".replace(",", self.thousands_separator)
    
    def _overview(
        self,
        events: List[LogEvent],
        blocked_events: List[LogEvent],
        range_label: str,
    ) -> ReportSection:
        total = len(events)
        blocked = len(blocked_events)
        blocked_pct = blocked / total * 100 if total else 0.0
        
        return ReportSection(
            key="overview",
            lines=[
                f"Analyzed {self.format_count(total)} events for range "
                f"{range_label} with the current filters.",
                f"• Blocked: {self.format_count(blocked)} ({blocked_pct:.1f}% of total).",
            ],
        )
    
    def _server_errors(self, errors_5xx: List[LogEvent]) -> ReportSection:
        if not errors_5xx:
            line = "• No 5xx responses observed in the filtered events."
        else:
            also_blocked = count_where(errors_5xx, is_blocked)
            line = (
                f"• 5xx errors detected: {self.format_count(len(errors_5xx))} "
                f"({self.format_count(also_blocked)} were also blocked by the WAF/bot layer)."
            )
        return ReportSection(key="server_errors", lines=[line])
    
    def _ranked_section(
        self,
        key: str,
        title: str,
        ranking: List[RankedEntry],
        unit: str,
    ) -> Optional[ReportSection]:
        if not ranking:
            return None
        return ReportSection(
            key=key,
            title=title,
            lines=self._ranking_lines(ranking, unit),
            rankings={key: ranking},
        )
    
    def _ranking_lines(self, ranking: List[RankedEntry], unit: str) -> List[str]:
        return [
            f"   - {entry.value} → {self.format_count(entry.count)} {unit}"
            for entry in ranking
        ]
    
    def _key_issues(
        self,
        errors_5xx: List[LogEvent],
        events: List[LogEvent],
    ) -> Optional[ReportSection]:
        """5xx clusters and repeated 404 scanning, under one heading."""
        lines = []
        rankings = {}
        
        if errors_5xx:
            top_5xx = server_error_ranking(errors_5xx, TOP_N)
            if top_5xx:
                rankings["server_errors"] = top_5xx
                lines.append("• Paths with the most 5xx errors:")
                lines.extend(self._ranking_lines(top_5xx, "5xx errors"))
        
        top_404 = repeated_404_ranking(events, TOP_N)
        if top_404:
            rankings["repeated_404"] = top_404
            lines.append(
                "• Repeated 404s on sensitive paths (likely scanning/resource enumeration):"
            )
            lines.extend(self._ranking_lines(top_404, "times (404)"))
        
        if not lines:
            return None
        
        return ReportSection(
            key="key_issues",
            title="Possible key issues / points to review:",
            lines=lines,
            rankings=rankings,
            spaced=True,
        )
    
    def _question(self, question: Optional[str]) -> Optional[ReportSection]:
        # The question is echoed as plain text, never interpreted.
        text = (question or "").strip()
        if not text:
            return None
        return ReportSection(
            key="question",
            lines=[f'User question: "{text}"', QUESTION_GUIDANCE],
            spaced=True,
        )


def analyze(
    question: str,
    filtered_events: Iterable[LogEvent],
    range_label: str,
    composer: Optional[ReportComposer] = None,
) -> Report:
    """
    Compose a report, hiding internal failures from the caller.
    
    Any unexpected error is logged with its traceback and re-raised as a
    generic AnalysisError. Analysis is idempotent, so callers may retry.
    
    Raises:
        AnalysisError: If the report could not be composed
    """
    if composer is None:
        composer = ReportComposer(thousands_separator=get_settings().thousands_separator)
    
    events = list(filtered_events)
    try:
        return composer.compose(question, events, range_label)
    except Exception as e:
        logger.exception(
            "Log analysis failed (range=%s, events=%d)",
            range_label, len(events),
        )
        raise AnalysisError() from e

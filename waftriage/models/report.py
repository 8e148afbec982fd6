"""
Report model - output of the triage engine.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict


class RankedEntry(BaseModel):
    """One value of a top-N ranking and how often it occurred."""
    
    value: str
    count: int

    model_config = ConfigDict(frozen=True)


class ReportSection(BaseModel):
    """
    A titled group of finding lines.
    
    ``lines`` is what a reader sees; ``rankings`` keeps the structured
    data each ranked sub-list was rendered from.
    """
    
    key: str = Field(
        description="Stable identifier of the section (e.g. 'suspicious_paths')"
    )
    title: Optional[str] = Field(
        default=None,
        description="Heading rendered before the lines"
    )
    lines: List[str] = Field(
        default_factory=list,
        description="Rendered finding lines, in order"
    )
    rankings: Dict[str, List[RankedEntry]] = Field(
        default_factory=dict,
        description="Rankings backing the lines, by name"
    )
    spaced: bool = Field(
        default=False,
        description="Separate from the previous section with a blank line"
    )


class Report(BaseModel):
    """
    Security triage report for one batch of events.
    
    Fully determined by (question, events, range label): identical
    inputs render identical text.
    """
    
    range_label: str = Field(
        description="Time range the events were fetched for"
    )
    total_events: int = Field(
        default=0,
        description="Number of events analyzed"
    )
    sections: List[ReportSection] = Field(
        default_factory=list,
        description="Report sections, in display order"
    )
    
    def section(self, key: str) -> Optional[ReportSection]:
        """Return the section with the given key, if present."""
        for section in self.sections:
            if section.key == key:
                return section
        return None
    
    def lines(self) -> List[str]:
        """Flatten the report into display lines."""
        out = []
        for section in self.sections:
            if section.spaced and out:
                out.append("")
            if section.title:
                out.append(section.title)
            out.extend(section.lines)
        return out
    
    def render(self) -> str:
        """Render the report as newline-joined text."""
        return "\n".join(self.lines())

"""
Filter criteria applied to a batch of events before analysis.
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


ALL = "all"


class FilterCriteria(BaseModel):
    """
    Conjunctive event filter. ``all`` (or an absent value) means no constraint.
    """
    
    text_query: Optional[str] = Field(
        default=None,
        description="Case-insensitive substring searched across host, method, path, "
                    "status, threat type, rule and country"
    )
    action: Literal["all", "ALLOWED", "BLOCKED"] = Field(
        default=ALL,
        description="Keep only events with this (uppercased) action"
    )
    threat_type: str = Field(
        default=ALL,
        description="Keep only events with exactly this threat type"
    )

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

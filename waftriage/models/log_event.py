"""
HTTP security event model.
Events are produced by the WAF / bot-detection layer and fetched in batches.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


class LogAction(str, Enum):
    """Firewall decisions."""
    ALLOWED = "ALLOWED"
    BLOCKED = "BLOCKED"


class TimeRange(str, Enum):
    """Time windows supported by the log retrieval API."""
    LAST_HOUR = "1h"
    LAST_DAY = "24h"
    LAST_WEEK = "7d"
    LAST_MONTH = "30d"


class LogEvent(BaseModel):
    """
    A single allow/block decision on an HTTP request.
    
    Events are read-only once ingested; every analysis step is a
    projection over them. All descriptive fields are nullable because
    the upstream API does not guarantee them.
    """
    
    id: str = Field(
        description="Opaque unique identifier (numeric ids are kept as text)"
    )
    timestamp: datetime = Field(
        description="When the request was seen"
    )
    hostname: Optional[str] = Field(
        default=None,
        description="Protected domain the request targeted"
    )
    method: Optional[str] = Field(
        default=None,
        description="HTTP method"
    )
    path: Optional[str] = Field(
        default=None,
        description="Requested resource path"
    )
    status_code: Optional[int] = Field(
        default=None,
        description="HTTP status returned to the client"
    )
    action: Optional[str] = Field(
        default=None,
        description="Firewall decision, normally ALLOWED or BLOCKED (kept verbatim)"
    )
    threat_type: Optional[str] = Field(
        default=None,
        description="Threat category (e.g. 'sql_injection', 'xss', 'bot')"
    )
    rule_id: Optional[str] = Field(
        default=None,
        description="Identifier of the rule that matched"
    )
    country: Optional[str] = Field(
        default=None,
        description="Client country code"
    )

    model_config = ConfigDict(
        frozen=True,
        coerce_numbers_to_str=True,
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "b3f1c2d4",
                "timestamp": "2024-01-15T03:22:15Z",
                "hostname": "shop.example.com",
                "method": "POST",
                "path": "/wp-login.php",
                "statusCode": 403,
                "action": "BLOCKED",
                "threatType": "bot",
                "ruleId": "bot-score-low",
                "country": "NL"
            }
        }
    )

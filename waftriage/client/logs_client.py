"""
Log retrieval API client.
"""

import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from waftriage.config import get_settings
from waftriage.models.log_event import LogEvent, TimeRange


logger = logging.getLogger(__name__)


class LogRetrievalError(Exception):
    """Raised when events could not be fetched from the logs API."""


class LogsClient:
    """
    Async client for the ``/logs`` endpoint of the firewall API.
    
    Fetches the events for a time range; the triage engine never
    talks to the API itself.
    """
    
    def __init__(self, http_client: Optional[httpx.AsyncClient] = None):
        self.settings = get_settings()
        self.http_client = http_client
    
    def _build_client(self) -> httpx.AsyncClient:
        cookies = {}
        if self.settings.logs_api_session_cookie:
            cookies["session"] = self.settings.logs_api_session_cookie
        
        return httpx.AsyncClient(
            base_url=self.settings.logs_api_url,
            cookies=cookies,
            timeout=httpx.Timeout(self.settings.logs_api_timeout_seconds, connect=10.0),
        )
    
    async def get_events(self, time_range: TimeRange) -> List[LogEvent]:
        """
        Fetch events for a time range.
        
        Args:
            time_range: Window to fetch (1h, 24h, 7d or 30d)
            
        Returns:
            Events in the order the API returned them
            
        Raises:
            LogRetrievalError: On transport errors, non-2xx responses,
                ``success: false`` or a malformed payload
        """
        if self.http_client is not None:
            return await self._fetch(self.http_client, time_range)
        
        async with self._build_client() as client:
            return await self._fetch(client, time_range)
    
    async def _fetch(self, client: httpx.AsyncClient, time_range: TimeRange) -> List[LogEvent]:
        try:
            response = await client.get("/logs", params={"range": time_range.value})
        except httpx.HTTPError as e:
            logger.error("[LOGS] request failed: %s", e)
            raise LogRetrievalError(f"Could not reach the logs API: {e}") from e
        
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}
        
        if response.is_error or data.get("success") is False:
            message = data.get("error") or f"HTTP {response.status_code} on /logs"
            logger.error("[LOGS] error: %s", message)
            raise LogRetrievalError(message)
        
        raw_logs = data.get("logs") or []
        if not isinstance(raw_logs, list):
            logger.error("[LOGS] malformed payload: 'logs' is %s", type(raw_logs).__name__)
            raise LogRetrievalError("Malformed response from /logs")
        
        events = []
        for raw in raw_logs:
            try:
                events.append(LogEvent.model_validate(raw))
            except ValidationError as e:
                # Invalid records are dropped, the rest of the batch is kept
                logger.warning("[LOGS] skipping invalid event: %s", e.errors()[:1])
        
        return events

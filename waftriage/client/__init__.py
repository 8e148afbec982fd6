"""
Log retrieval client module.
"""

from waftriage.client.logs_client import LogsClient, LogRetrievalError

__all__ = ["LogsClient", "LogRetrievalError"]

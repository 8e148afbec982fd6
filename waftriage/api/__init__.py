"""
HTTP API module.
"""

from waftriage.api.routes import router

__all__ = ["router"]

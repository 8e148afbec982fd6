"""
FastAPI application entry point.
WAF Triage - security log triage for firewall events
"""

import logging

from fastapi import FastAPI

from waftriage import __version__
from waftriage.config import get_settings
from waftriage.api.routes import router


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(
    title=settings.app_name,
    description="Deterministic triage of WAF and bot-detection events. "
                "Summarizes noisy hosts, hot rules, sensitive paths and error clusters.",
    version=__version__,
)

# Include API routes
app.include_router(router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "waftriage.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )

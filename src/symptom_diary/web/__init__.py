"""JSON API over the diary: entries, trigger analysis and reports."""

import uvicorn

from ..utils.config import get_settings


def run():
    """Serve the API on the configured WEB_HOST and WEB_PORT."""
    settings = get_settings()
    uvicorn.run(
        "symptom_diary.web.app:app",
        host=settings.web_host,
        port=settings.web_port,
        log_level=settings.log_level.lower(),
    )


__all__ = ["run"]

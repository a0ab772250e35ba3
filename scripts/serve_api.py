"""
Serve the JSON API.

Usage:
    uv run python scripts/serve_api.py
"""
import logging

import uvicorn

from legisync.config.settings import settings


def main():
    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
    uvicorn.run(
        "legisync.api.app:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    main()

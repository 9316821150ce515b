"""
FastAPI application entry point.
"""
import logging

import uvicorn
from fastapi import FastAPI

from pricefeed.api.routes import router, snapshot_error_handler
from pricefeed.config.logging_config import configure_logging
from pricefeed.config.settings import Settings, get_settings
from pricefeed.storage.snapshot_file import SnapshotFileError

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API app. Passing ``settings`` pins them for every request."""
    app = FastAPI(
        title="pricefeed API",
        description="Latest token price snapshot written by the pricefeed worker",
        version="0.1.0",
    )
    app.include_router(router)
    app.add_exception_handler(SnapshotFileError, snapshot_error_handler)
    if settings is not None:
        app.dependency_overrides[get_settings] = lambda: settings
    return app


app = create_app()


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("🚀 API server starting on http://%s:%s", settings.api_host, settings.api_port)
    logger.info("📊 Health check: /   💰 Prices: /prices (reading %s)", settings.prices_file)
    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

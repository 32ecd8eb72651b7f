from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from kbmedic import __version__
from kbmedic.api._deps import Container
from kbmedic.api._errors import register_error_handlers
from kbmedic.api._routes import router
from kbmedic.config import get_config
from kbmedic.logging import get_logger

logger = get_logger(__name__)


def create_app(container: Container | None = None) -> FastAPI:
    """Build the storefront API; the container defaults to one wired from config."""
    config = get_config()
    container = container or Container.build(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        logger.info("Starting {} order service ({})", container.settings.store_name, config.app_env)
        try:
            yield
        finally:
            await container.database.dispose()
            logger.info("Order service stopped")

    app = FastAPI(title=f"{container.settings.store_name} orders", version=__version__, lifespan=lifespan)
    app.state.container = container
    register_error_handlers(app)
    app.include_router(router)
    return app


__all__ = ("create_app",)

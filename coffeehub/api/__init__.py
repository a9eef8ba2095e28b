"""FastAPI application setup."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coffeehub import __version__
from coffeehub.api.controller import product_router, stats_router
from coffeehub.api.errors import error_to_response, register_error_handlers
from coffeehub.config import AppConfig, get_config
from coffeehub.storage import ProductStore, create_store

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the store once at startup and release it on shutdown."""
    store: ProductStore = app.state.store
    await store.connect()
    logger.info(f"CoffeeHub API started with '{store.backend_name}' store")
    try:
        yield
    finally:
        await store.close()
        logger.info("CoffeeHub API stopped")


def create_app(config: Optional[AppConfig] = None, store: Optional[ProductStore] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application configuration; loaded from config files when omitted.
        store: Storage backend; built from ``config.database`` when omitted.
    """
    config = config or get_config()
    logging.basicConfig(level=config.logging.level, format=LOG_FORMAT)

    app = FastAPI(
        title="CoffeeHub API",
        description="Coffee catalog CRUD and statistics",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.store = store or create_store(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(product_router)
    app.include_router(stats_router)

    return app


__all__ = ["create_app", "error_to_response", "lifespan"]

# ngsi2/main.py
"""
NGSI v2 application factory.

Creates a FastAPI application exposing the NGSI v2 surface under the
configured prefix. Requests are validated by the ``RequestContract`` and
forwarded to the context store declared in ``config/store.yaml`` (or the
one passed to ``create_app``).
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ngsi2.api.discovery import router as discovery_router
from ngsi2.api.errors import install_error_handlers
from ngsi2.api.routes import router as ngsi_router
from ngsi2.core.config import settings
from ngsi2.core.contract import RequestContract
from ngsi2.core.logging import configure_logging
from ngsi2.core.store import ContextStore, load_context_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start and stop the context store with the application."""
    store: ContextStore = app.state.contract.store
    await store.on_startup()
    logger.info("Context store '%s' started", type(store).__name__)

    yield

    try:
        await store.on_shutdown()
    except Exception:
        logger.exception("Context store shutdown error")


def create_app(store: ContextStore | None = None) -> FastAPI:
    """Build and wire the NGSI v2 FastAPI application."""
    configure_logging(settings.log_level, json=settings.log_json)
    logger.info("Creating NGSI v2 application (env=%s)", settings.app_env)

    if store is None:
        try:
            store = load_context_store(settings.store_config_paths)
        except Exception:
            logger.exception("Failed to load context store")
            raise

    app = FastAPI(
        title="NGSI v2",
        version="0.1.0",
        description="NGSI v2 request-contract layer",
        lifespan=lifespan,
    )
    app.state.contract = RequestContract(store, api_prefix=settings.api_prefix)

    install_error_handlers(app)
    app.include_router(discovery_router)
    app.include_router(ngsi_router, prefix=settings.api_prefix)

    logger.info(
        "NGSI v2 application ready at %s (store=%s)",
        settings.api_prefix,
        type(store).__name__,
    )
    return app

"""
FastAPI application entry point for the search and sheets proxy backend.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from backend.config import get_settings
from backend.dependencies import close_item_store, get_item_store
from backend.routes import router
from backend.seed import seed_items_if_empty

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    store = get_item_store()
    if settings.seed_on_startup:
        seed_items_if_empty(store)
    yield
    close_item_store()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="SecureSearch Backend", version="0.1.0", lifespan=lifespan)
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Server running on http://localhost:%d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()

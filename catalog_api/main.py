"""Catalog API — application assembly.

Invariants:
    - Routers registered explicitly: health, then products
    - Logging configured and DB engine created inside the lifespan, engine disposed on exit
    - Every response passes through the access log and carries X-Request-ID
    - Error envelopes for non-route failures come from api/error_handlers.py

Design Decisions:
    - Module-level app so `uvicorn catalog_api.main:app` works without a factory flag
    - CORS origins from settings; the catalog exposes no cookies, so no credentials
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog_api.api.error_handlers import register_error_handlers
from catalog_api.api.routes import health, products
from catalog_api.config import get_settings
from catalog_api.infrastructure.database import init_db
from catalog_api.infrastructure.observability import AccessLogMiddleware, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(f"Catalog API ready (roles: {sorted(settings.role_permissions)})")
    try:
        yield
    finally:
        await manager.dispose()
        logger.info("Catalog API stopped")


app = FastAPI(
    title="Catalog API",
    version="1.0.0",
    description="Product catalog: list, detail, create, delete and publish.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(AccessLogMiddleware)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(products.router)

"""FastAPI application for Catalog RAG."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .... import __version__
from ....config.logging import setup_logging
from ....config.settings import settings
from ....core.domain.exceptions import CatalogRAGError
from ...common.exception_handler import (
    format_exception_json,
    get_http_status_code,
    log_exception,
)
from .routers import ask, health, products, webhook

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup and release the store client on shutdown."""
    setup_logging(settings.log_level, json_format=settings.log_json)
    logger.info("Catalog RAG API starting up...")
    logger.info("Debug mode: %s", "ENABLED" if settings.debug else "DISABLED")
    yield
    from .deps import get_vector_store

    if get_vector_store.cache_info().currsize:
        await get_vector_store().close()
    logger.info("Catalog RAG API shutting down...")


app = FastAPI(
    title="Catalog RAG API",
    description=(
        "Similar-product lookup and grounded question answering over products "
        "ingested from Stripe webhooks."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(products.router)
app.include_router(ask.router)
app.include_router(webhook.router)


# =============================================================================
# Global Exception Handlers
# =============================================================================


@app.exception_handler(CatalogRAGError)
async def catalog_error_handler(request: Request, exc: CatalogRAGError) -> JSONResponse:
    """Handle all CatalogRAGError exceptions with structured JSON response."""
    log_exception(
        exc,
        log=logger,
        level=logging.WARNING if get_http_status_code(exc) < 500 else logging.ERROR,
        extra_context={"path": str(request.url.path), "method": request.method},
    )

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=exc.to_dict(include_trace=settings.debug),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions with structured JSON response."""
    log_exception(exc, log=logger, extra_context={"path": str(request.url.path), "method": request.method})

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=format_exception_json(exc, include_trace=settings.debug),
    )


__all__ = ["app"]

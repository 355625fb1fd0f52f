"""FastAPI application for the digital twin API."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .... import __version__
from ....config import settings
from ....config.logging import setup_logging
from ....core.domain.exceptions import DigitalTwinError
from ...common.exception_handler import (
    format_exception_json,
    get_http_status_code,
    log_exception,
)
from .deps import get_orchestrator
from .routers import chat, health, knowledge

logger = logging.getLogger(__name__)

# Shows full stack traces in error responses
DEBUG_MODE = settings.debug

app = FastAPI(
    title="Digital Twin API",
    description=(
        "Portfolio chat assistant that answers questions about the site owner "
        "using retrieval over a local knowledge base."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(chat.router)
app.include_router(knowledge.router)


# =============================================================================
# Global Exception Handlers
# =============================================================================


@app.exception_handler(DigitalTwinError)
async def digital_twin_error_handler(request: Request, exc: DigitalTwinError) -> JSONResponse:
    """Handle all DigitalTwinError exceptions with a structured JSON response."""
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=exc.to_dict(include_trace=DEBUG_MODE),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions with a structured JSON response."""
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=format_exception_json(exc, include_trace=DEBUG_MODE),
    )


# =============================================================================
# Lifecycle Events
# =============================================================================


@app.on_event("startup")
async def startup_event():
    """Initialize resources on startup."""
    setup_logging(level=settings.log_level, json_format=settings.log_json)
    settings.ensure_directories()

    logger.info("Digital Twin API starting up...")
    logger.info("Knowledge base: %s", settings.knowledge_base_path)
    logger.info("Debug mode: %s", "ENABLED" if DEBUG_MODE else "DISABLED")


@app.on_event("shutdown")
async def shutdown_event():
    """Wait for in-flight owner notifications before exiting."""
    if get_orchestrator.cache_info().currsize:
        await get_orchestrator().drain_notifications()
    logger.info("Digital Twin API shutting down...")


__all__ = ["app"]

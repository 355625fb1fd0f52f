"""Health check endpoints."""

import asyncio

from fastapi import APIRouter

from ..... import __version__
from ..deps import get_repository
from ..models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic liveness check; does not touch the knowledge base."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        knowledge_base="not_checked",
    )


@router.get("/ready", response_model=HealthResponse)
async def readiness_check() -> HealthResponse:
    """Readiness check.

    Checks that the knowledge base file can be read and reports its size.
    """
    try:
        count = len(await asyncio.to_thread(get_repository().load))
        kb_status = f"loaded ({count} docs)"
    except Exception as e:
        kb_status = f"error: {e}"

    return HealthResponse(
        status="ready",
        version=__version__,
        knowledge_base=kb_status,
    )

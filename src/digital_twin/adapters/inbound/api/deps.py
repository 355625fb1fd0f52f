"""FastAPI dependency access to the composition root."""

from ....composition.container import (
    get_index_cache,
    get_orchestrator,
    get_repository,
)

__all__ = ["get_index_cache", "get_orchestrator", "get_repository"]

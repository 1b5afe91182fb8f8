"""API endpoints for the lexicon search service."""

from .search import router as search_router
from .entries import router as entries_router
from .health import router as health_router
from .metrics import router as metrics_router

__all__ = [
    "search_router",
    "entries_router",
    "health_router",
    "metrics_router",
]

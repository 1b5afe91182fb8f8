"""Data models for the lexicon search engine."""

from .entry import Entry, SearchMode, Sense
from .response import (
    CountResponse,
    EntryResult,
    ErrorResponse,
    HealthResponse,
    LoadResponse,
    MetricsResponse,
    SearchResponse,
)
from .request import LoadEntriesRequest, SearchRequest

__all__ = [
    "Entry",
    "Sense",
    "SearchMode",
    "EntryResult",
    "SearchResponse",
    "CountResponse",
    "LoadResponse",
    "ErrorResponse",
    "HealthResponse",
    "MetricsResponse",
    "SearchRequest",
    "LoadEntriesRequest",
]

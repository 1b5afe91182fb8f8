"""
Lexicon Search - In-memory search engine for a regional dialect dictionary.

This package provides accent-insensitive substring and prefix search over
dictionary entries in two directions: forward (by dialect headword) and
reverse (by definition text), with results ranked by match quality.
"""

__version__ = "1.0.0"

from .core.engine import SearchEngine, search
from .models.entry import Entry, SearchMode, Sense
from .models.response import SearchResponse

__all__ = [
    "SearchEngine",
    "search",
    "Entry",
    "Sense",
    "SearchMode",
    "SearchResponse",
]

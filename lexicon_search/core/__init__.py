"""Core search engine functionality."""

from .engine import RankedEntry, SearchEngine, is_candidate, rank, search
from .exceptions import IndexNotBuiltError, LexiconError, LexiconFormatError
from .index import EntryIndex, IndexManager, build_index
from .loader import load_entries_from_file, load_entries_from_parts, load_lexicon, parse_entries
from .normalizer import normalize, tokenize
from .scorer import rank_class, score

__all__ = [
    "SearchEngine",
    "RankedEntry",
    "search",
    "rank",
    "is_candidate",
    "score",
    "rank_class",
    "EntryIndex",
    "IndexManager",
    "build_index",
    "normalize",
    "tokenize",
    "parse_entries",
    "load_entries_from_file",
    "load_entries_from_parts",
    "load_lexicon",
    "LexiconError",
    "LexiconFormatError",
    "IndexNotBuiltError",
]

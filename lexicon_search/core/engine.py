"""Main search engine implementation."""

import time
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence

import structlog

from ..models.entry import Entry, SearchMode
from ..models.response import EntryResult, SearchResponse
from .exceptions import IndexNotBuiltError
from .index import EntryIndex, IndexManager
from .normalizer import normalize
from .scorer import BEST_RANK, rank_class

logger = structlog.get_logger(__name__)


class RankedEntry(NamedTuple):
    """An entry together with its collection position and rank class."""

    position: int
    rank: int
    entry: Entry


def is_candidate(lemma: str, query: str, index: EntryIndex, mode: SearchMode) -> bool:
    """
    Coarse substring filter deciding whether an entry is ranked at all.

    Args:
        lemma: Normalized lemma of the entry
        query: Normalized, non-empty query
        index: Precomputed index of the entry
        mode: Search direction

    Returns:
        True if the entry belongs in the result set
    """
    if SearchMode(mode) is SearchMode.FORWARD:
        return query in lemma or query in index.standard_text
    return query in index.dialect_text


def rank(
    entries: Sequence[Entry],
    query: str,
    mode: SearchMode,
    indexes: Optional[IndexManager] = None
) -> List[RankedEntry]:
    """
    Filter and order entries for a query, keeping their positions and ranks.

    Args:
        entries: The entry collection (not modified)
        query: Raw query text
        mode: Search direction
        indexes: Prebuilt index table for ``entries``; built here if omitted

    Returns:
        Ranked entries, best first
    """
    mode = SearchMode(mode)
    normalized_query = normalize(query)

    if not normalized_query:
        return [
            RankedEntry(position, BEST_RANK, entry)
            for position, entry in enumerate(entries)
        ]

    if indexes is None:
        indexes = IndexManager.build(entries)
    elif not indexes.covers(entries):
        raise IndexNotBuiltError(
            f"Index table was not built from this collection of {len(entries)} entries"
        )

    candidates = []
    for position, entry in enumerate(entries):
        index = indexes.get(position)
        lemma = indexes.normalized_lemma(position)

        if not is_candidate(lemma, normalized_query, index, mode):
            continue

        candidates.append(
            (rank_class(lemma, normalized_query, index, mode), lemma, position, entry)
        )

    # Ties on (rank, lemma) keep collection order
    candidates.sort(key=lambda item: (item[0], item[1]))

    return [
        RankedEntry(position, entry_rank, entry)
        for entry_rank, _, position, entry in candidates
    ]


def search(
    entries: Sequence[Entry],
    query: str,
    mode: SearchMode,
    indexes: Optional[IndexManager] = None
) -> List[Entry]:
    """
    Search an entry collection.

    An empty query returns every entry in collection order. Otherwise only
    entries passing the mode's substring filter are returned, ordered by rank
    class and then by normalized lemma.

    Args:
        entries: The entry collection (not modified)
        query: Raw query text
        mode: Search direction
        indexes: Prebuilt index table for ``entries``; built here if omitted

    Returns:
        Ordered list of matching entries
    """
    return [ranked.entry for ranked in rank(entries, query, mode, indexes)]


class SearchEngine:
    """Search engine holding a loaded lexicon and its index table."""

    def __init__(self, default_mode: SearchMode = SearchMode.FORWARD) -> None:
        """
        Initialize the search engine.

        Args:
            default_mode: Direction used when a query does not specify one
        """
        self.default_mode = SearchMode(default_mode)
        self._entries: tuple = ()
        self.index_manager = IndexManager()
        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            "total_queries": 0,
            "forward_queries": 0,
            "reverse_queries": 0,
            "empty_queries": 0,
            "no_matches": 0,
            "total_execution_time": 0.0,
        }

    @property
    def entries(self) -> tuple:
        """The loaded entries, in collection order."""
        return self._entries

    def load_entries(self, entries: Iterable[Entry]) -> None:
        """
        Replace the loaded collection and rebuild its indexes.

        Args:
            entries: Entries in display order
        """
        entries = tuple(entries)
        index_manager = IndexManager.build(entries)

        self._entries = entries
        self.index_manager = index_manager

        logger.info(
            "Lexicon indexed",
            total_entries=len(entries),
            build_time_ms=round(index_manager.get_stats()["build_time_ms"], 2)
        )

    def replace_entry(self, position: int, entry: Entry) -> None:
        """
        Replace one entry and rebuild only its index.

        Args:
            position: Position of the entry to replace
            entry: The new entry
        """
        index_manager = self.index_manager.rebuild(position, entry)

        entries = list(self._entries)
        entries[position] = entry
        self._entries = tuple(entries)
        self.index_manager = index_manager

    def get_entry(self, position: int) -> Optional[Entry]:
        """Get an entry by collection position, or None if out of range."""
        if 0 <= position < len(self._entries):
            return self._entries[position]
        return None

    def search(
        self,
        query: str,
        mode: Optional[SearchMode] = None,
        offset: int = 0,
        limit: Optional[int] = None,
        include_raw: bool = False
    ) -> SearchResponse:
        """
        Search the loaded lexicon and return one page of ranked results.

        Args:
            query: Raw query text
            mode: Search direction (engine default if None)
            offset: Number of ranked results to skip
            limit: Maximum number of results to return (all if None)
            include_raw: Whether to attach joined sense text to each result

        Returns:
            SearchResponse with the page and match counts
        """
        start_time = time.time()
        mode = SearchMode(mode) if mode is not None else self.default_mode
        normalized_query = normalize(query or "")

        ranked = rank(self._entries, normalized_query, mode, self.index_manager)

        end = None if limit is None else offset + limit
        page = ranked[offset:end]

        execution_time = (time.time() - start_time) * 1000
        self._record(mode, normalized_query, len(ranked), execution_time)

        return SearchResponse(
            query=query or "",
            normalized_query=normalized_query,
            mode=mode,
            execution_time_ms=execution_time,
            total_entries=len(self._entries),
            total_results=len(ranked),
            offset=offset,
            limit=limit,
            has_more=end is not None and end < len(ranked),
            results=[
                EntryResult.from_entry(item.position, item.rank, item.entry, include_raw)
                for item in page
            ],
        )

    def _record(
        self,
        mode: SearchMode,
        normalized_query: str,
        total_results: int,
        execution_time: float
    ) -> None:
        self._stats["total_queries"] += 1
        self._stats[f"{mode.value}_queries"] += 1
        self._stats["total_execution_time"] += execution_time

        if not normalized_query:
            self._stats["empty_queries"] += 1
        elif total_results == 0:
            self._stats["no_matches"] += 1

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics."""
        stats = self._stats.copy()

        if stats["total_queries"] > 0:
            stats["average_execution_time_ms"] = (
                stats["total_execution_time"] / stats["total_queries"]
            )
        else:
            stats["average_execution_time_ms"] = 0.0

        filtered_queries = stats["total_queries"] - stats["empty_queries"]
        if filtered_queries > 0:
            stats["no_match_rate"] = stats["no_matches"] / filtered_queries
        else:
            stats["no_match_rate"] = 0.0

        stats["default_mode"] = self.default_mode.value
        stats["index_stats"] = self.index_manager.get_stats()

        return stats

    def reset_stats(self) -> None:
        """Reset query statistics, keeping the loaded lexicon."""
        self._stats = self._empty_stats()

    def clear(self) -> None:
        """Clear all data and reset statistics."""
        self._entries = ()
        self.index_manager = IndexManager()
        self.reset_stats()

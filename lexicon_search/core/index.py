"""Precomputed per-entry search indexes."""

import time
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Tuple

from ..models.entry import Entry
from .exceptions import IndexNotBuiltError
from .normalizer import normalize, tokenize


@dataclass(frozen=True)
class EntryIndex:
    """Normalized fields of one entry, built once and reused for every query."""

    standard_text: str
    dialect_text: str
    dialect_tokens: Tuple[str, ...]


def build_index(entry: Entry) -> EntryIndex:
    """
    Build the search index for a single entry.

    All sense texts are joined with a single space and normalized once. The
    data carries no separate standard-language field, so the same string
    backs both ``standard_text`` and ``dialect_text``.

    Args:
        entry: The entry to index

    Returns:
        EntryIndex for the entry
    """
    text = normalize(entry.raw_text)
    return EntryIndex(
        standard_text=text,
        dialect_text=text,
        dialect_tokens=tuple(tokenize(text)),
    )


class IndexManager:
    """Immutable side-table mapping the entries it was built from to their indexes."""

    def __init__(
        self,
        entries: Iterable[Entry] = (),
        indexes: Iterable[EntryIndex] = (),
        lemmas: Iterable[str] = (),
        build_time_ms: float = 0.0
    ) -> None:
        """
        Initialize the index table.

        Args:
            entries: The indexed entries, in collection order
            indexes: One EntryIndex per entry, in collection order
            lemmas: Normalized lemma per entry, in collection order
            build_time_ms: Time spent building the table
        """
        self._entries: Tuple[Entry, ...] = tuple(entries)
        self._indexes: Tuple[EntryIndex, ...] = tuple(indexes)
        self._lemmas: Tuple[str, ...] = tuple(lemmas)

        if not len(self._entries) == len(self._indexes) == len(self._lemmas):
            raise IndexNotBuiltError(
                f"Index table has {len(self._entries)} entries, "
                f"{len(self._indexes)} indexes and {len(self._lemmas)} lemmas"
            )

        self._stats = {
            "total_entries": len(self._indexes),
            "total_tokens": sum(len(index.dialect_tokens) for index in self._indexes),
            "build_time_ms": build_time_ms,
            "last_updated": time.time() if self._indexes else None,
        }

    @classmethod
    def build(cls, entries: Sequence[Entry]) -> "IndexManager":
        """
        Build indexes for a whole collection.

        Args:
            entries: The entry collection

        Returns:
            IndexManager covering every entry
        """
        start_time = time.time()
        entries = tuple(entries)

        indexes = [build_index(entry) for entry in entries]
        lemmas = [normalize(entry.lemma) for entry in entries]

        build_time_ms = (time.time() - start_time) * 1000
        return cls(entries, indexes, lemmas, build_time_ms)

    def get(self, position: int) -> EntryIndex:
        """
        Get the index for the entry at a collection position.

        Args:
            position: Position of the entry in the collection

        Returns:
            EntryIndex for that entry
        """
        if not 0 <= position < len(self._indexes):
            raise IndexNotBuiltError(f"No index built for entry at position {position}")
        return self._indexes[position]

    def normalized_lemma(self, position: int) -> str:
        """Get the cached normalized lemma for the entry at a position."""
        if not 0 <= position < len(self._lemmas):
            raise IndexNotBuiltError(f"No index built for entry at position {position}")
        return self._lemmas[position]

    def rebuild(self, position: int, entry: Entry) -> "IndexManager":
        """
        Return a new table with one entry's index rebuilt.

        Args:
            position: Position of the changed entry
            entry: The replacement entry

        Returns:
            New IndexManager; this one is left untouched
        """
        self.get(position)

        entries = list(self._entries)
        indexes = list(self._indexes)
        lemmas = list(self._lemmas)
        entries[position] = entry
        indexes[position] = build_index(entry)
        lemmas[position] = normalize(entry.lemma)

        return IndexManager(entries, indexes, lemmas, self._stats["build_time_ms"])

    def covers(self, entries: Sequence[Entry]) -> bool:
        """Check whether this table was built from exactly these entries, in this order."""
        return len(self._entries) == len(entries) and all(
            indexed is entry for indexed, entry in zip(self._entries, entries)
        )

    def __len__(self) -> int:
        return len(self._indexes)

    def get_stats(self) -> Dict[str, Optional[float]]:
        """Get index statistics."""
        return self._stats.copy()

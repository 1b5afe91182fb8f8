"""Rank classes for lexicon matches."""

from ..models.entry import Entry, SearchMode
from .index import EntryIndex
from .normalizer import normalize

BEST_RANK = 0
FORWARD_FALLBACK_RANK = 5
REVERSE_FALLBACK_RANK = 7


def rank_class(lemma: str, query: str, index: EntryIndex, mode: SearchMode) -> int:
    """
    Rank an already-normalized lemma and query against an entry index.

    Forward lookups rank the headword first, reverse lookups rank the
    definition tokens first. The first matching rule wins.

    Args:
        lemma: Normalized lemma of the entry
        query: Normalized query
        index: Precomputed index of the entry
        mode: Search direction

    Returns:
        Rank class, 0 is the strongest match
    """
    if not query:
        return BEST_RANK

    if SearchMode(mode) is SearchMode.FORWARD:
        if lemma == query:
            return 0
        if lemma.startswith(query):
            return 1
        if query in lemma:
            return 2
        if query in index.standard_text:
            return 3
        if query in index.dialect_text:
            return 4
        return FORWARD_FALLBACK_RANK

    tokens = index.dialect_tokens
    if query in tokens:
        return 0
    if any(token.startswith(query) for token in tokens):
        return 1
    if query in index.dialect_text:
        return 2
    if lemma == query:
        return 3
    if lemma.startswith(query):
        return 4
    if query in lemma:
        return 5
    if query in index.standard_text:
        return 6
    return REVERSE_FALLBACK_RANK


def score(entry: Entry, query: str, index: EntryIndex, mode: SearchMode) -> int:
    """
    Score an entry against a raw query.

    Args:
        entry: The entry being ranked
        query: Query text, normalized here
        index: Precomputed index of the entry
        mode: Search direction

    Returns:
        Rank class in [0, 7]
    """
    return rank_class(normalize(entry.lemma), normalize(query), index, mode)

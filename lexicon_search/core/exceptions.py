"""Exceptions raised by the lexicon search core."""


class LexiconError(Exception):
    """Base class for lexicon search errors."""


class LexiconFormatError(LexiconError):
    """Raised when lexicon source data does not have the expected shape."""


class IndexNotBuiltError(LexiconError):
    """Raised when an entry is scored without a matching precomputed index."""

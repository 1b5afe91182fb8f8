"""Text normalization utilities for accent-insensitive lexicon matching."""

import re
import unicodedata
from typing import List

# Combining diacritical marks block
_COMBINING_MARKS = re.compile('[\u0300-\u036f]')

# Anything that is not a (possibly accented) Latin letter separates tokens
_TOKEN_DELIMITERS = re.compile(r'[^a-zàèéìòùáíóúäëïöü]+', re.IGNORECASE)


def normalize(text: str) -> str:
    """
    Fold text to its canonical comparable form.

    Lower-cases, decomposes to NFD, strips combining diacritics and trims
    surrounding whitespace, so "Furmâi" and "furmai" compare equal.

    Args:
        text: Input text to normalize

    Returns:
        Normalized text
    """
    if not text:
        return ""

    normalized = unicodedata.normalize('NFD', text.lower())
    normalized = _COMBINING_MARKS.sub('', normalized)

    return normalized.strip()


def tokenize(text: str) -> List[str]:
    """
    Split text into word tokens.

    Args:
        text: Already-normalized dialect text

    Returns:
        List of non-empty tokens in order of appearance
    """
    if not text:
        return []

    return [token for token in _TOKEN_DELIMITERS.split(text) if token]

from __future__ import annotations

from functools import lru_cache

from nltk.stem import PorterStemmer

_STEMMER = PorterStemmer()


@lru_cache(maxsize=4096)
def porter_stem(token: str) -> str:
    """Porter stem of a lowercased token."""
    return _STEMMER.stem((token or "").lower())

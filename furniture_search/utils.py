"""Text normalization helpers shared by the parser, scorer and suggestions.

Every comparison in the engine goes through :func:`normalize_text` on both
sides, so case and accents never decide whether two strings match.
"""
from __future__ import annotations

from typing import Iterable, Optional

from unidecode import unidecode


def normalize_text(value: Optional[str]) -> str:
    """Lowercase, strip and transliterate ``value`` to plain ASCII."""
    if not value:
        return ""
    return unidecode(value).lower().strip()


def normalize_terms(values: Optional[Iterable[str]]) -> tuple[str, ...]:
    """Normalize a collection of terms, dropping blanks and duplicates.

    Order of first appearance is kept so the result is deterministic.
    """
    if not values:
        return ()
    normalized = (normalize_text(value) for value in values if isinstance(value, str))
    return tuple(dict.fromkeys(term for term in normalized if term))

"""Edit-distance similarity used for the typo-tolerant score bonus."""
from __future__ import annotations

from rapidfuzz.distance import Levenshtein

from .utils import normalize_text

# Similarities at or below this value do not count as a fuzzy match.
FUZZY_THRESHOLD = 0.6


def edit_distance(a: str, b: str) -> int:
    """Unit-cost insert/delete/substitute distance between the two strings."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Return ``1 - distance / max_len`` for the normalized strings, in [0, 1]."""
    left = normalize_text(a)
    right = normalize_text(b)
    max_len = max(len(left), len(right))
    if max_len == 0:
        return 0.0
    return 1.0 - edit_distance(left, right) / max_len


def fuzzy_match(a: str, b: str) -> float:
    """Similarity when it clears :data:`FUZZY_THRESHOLD`, otherwise ``0.0``."""
    value = similarity(a, b)
    return value if value > FUZZY_THRESHOLD else 0.0

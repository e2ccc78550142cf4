"""Sort, filter and truncate scored candidates."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .models import CatalogItem, SearchRequest


@dataclass(frozen=True)
class ScoredCandidate:
    item: CatalogItem
    score: float
    position: int


def _passes_filters(item: CatalogItem, request: SearchRequest) -> bool:
    if request.price_range is not None and not request.price_range.contains(item.price):
        return False
    if request.category is not None and item.category != request.category:
        return False
    if request.available_only and not item.is_available:
        return False
    return True


def rank_candidates(candidates: Iterable[ScoredCandidate], request: SearchRequest) -> List[ScoredCandidate]:
    """Sort by score (ties keep catalog order), then filter, then cap."""
    ordered = sorted(
        (candidate for candidate in candidates if candidate.score > 0),
        key=lambda candidate: (-candidate.score, candidate.position),
    )
    kept = [candidate for candidate in ordered if _passes_filters(candidate.item, request)]
    return kept[: request.max_results]


def rank(candidates: Iterable[ScoredCandidate], request: SearchRequest) -> List[CatalogItem]:
    return [candidate.item for candidate in rank_candidates(candidates, request)]

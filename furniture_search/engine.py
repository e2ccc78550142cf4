"""In-process furniture search engine.

The engine owns an immutable catalog snapshot and an immutable keyword
taxonomy. Both are swapped as a whole (``load_catalog`` / ``configure``)
and every search reads one consistent snapshot taken on entry, so a reload
never interleaves with a scoring pass.
"""
from __future__ import annotations

import hashlib
import json
import logging
import threading
from dataclasses import dataclass
from time import perf_counter
from typing import Iterable, List, Optional, Sequence

from .cache import CacheBackend
from .config import settings
from .models import CatalogItem, SearchRequest, SearchResult
from .parser import parse_query
from .ranking import ScoredCandidate, rank_candidates
from .scoring import basic_match, score_item
from .taxonomy import ColorKeyword, MaterialKeyword, SizeKeyword, StyleKeyword, Taxonomy
from .utils import normalize_text

logger = logging.getLogger(__name__)

CLEARED_STATUS = "Search cleared"


def status_message(query: str, count: int) -> str:
    if count == 0:
        return f"No results found for '{query}'"
    return f"Found {count} result{'' if count == 1 else 's'} for '{query}'"


@dataclass(frozen=True)
class _CatalogSnapshot:
    items: tuple[CatalogItem, ...]
    fingerprint: str


def _fingerprint_items(items: Sequence[CatalogItem]) -> str:
    digest = hashlib.sha1()
    for item in items:
        digest.update(item.model_dump_json().encode("utf-8"))
    return digest.hexdigest()


class SearchEngine:
    def __init__(
        self,
        items: Optional[Iterable[CatalogItem]] = None,
        taxonomy: Optional[Taxonomy] = None,
        *,
        fuzzy_enabled: bool = settings.fuzzy_matching,
        cache: Optional[CacheBackend] = None,
        cache_ttl: int = settings.cache_ttl_seconds,
    ) -> None:
        self.fuzzy_enabled = fuzzy_enabled
        self._cache = cache
        self._cache_ttl = cache_ttl
        self._lock = threading.Lock()
        self._taxonomy = taxonomy or Taxonomy()
        self._catalog = _CatalogSnapshot((), _fingerprint_items(()))
        if items is not None:
            self.load_catalog(items)

    @property
    def taxonomy(self) -> Taxonomy:
        return self._taxonomy

    @property
    def catalog(self) -> tuple[CatalogItem, ...]:
        return self._catalog.items

    def configure(
        self,
        colors: Optional[Sequence[ColorKeyword]] = None,
        materials: Optional[Sequence[MaterialKeyword]] = None,
        styles: Optional[Sequence[StyleKeyword]] = None,
        sizes: Optional[Sequence[SizeKeyword]] = None,
    ) -> Taxonomy:
        """Replace the keyword taxonomy; omitted tables use the defaults."""
        taxonomy = Taxonomy(colors=colors, materials=materials, styles=styles, sizes=sizes)
        with self._lock:
            self._taxonomy = taxonomy
        logger.info("Taxonomy configured: %s", taxonomy.table_sizes())
        return taxonomy

    def load_catalog(self, items: Iterable[CatalogItem]) -> int:
        snapshot_items = tuple(items)
        snapshot = _CatalogSnapshot(snapshot_items, _fingerprint_items(snapshot_items))
        with self._lock:
            self._catalog = snapshot
        logger.info("Catalog loaded with %s items", len(snapshot_items))
        return len(snapshot_items)

    def price_bounds(self) -> tuple[float, float]:
        """Cheapest and most expensive price in the catalog, for slider hosts."""
        items = self._catalog.items
        if not items:
            return 0.0, 2000.0
        prices = [item.price for item in items]
        return min(prices), max(prices)

    def display_names(self) -> List[str]:
        return [item.display_name for item in self._catalog.items if item.display_name]

    def _cache_key(self, request: SearchRequest, smart_mode: bool, catalog: _CatalogSnapshot, taxonomy: Taxonomy) -> str:
        payload = {
            "request": request.model_dump(mode="json"),
            "smart": smart_mode,
            "fuzzy": self.fuzzy_enabled,
            "catalog": catalog.fingerprint,
            "taxonomy": taxonomy.fingerprint,
        }
        return hashlib.sha1(json.dumps(payload, sort_keys=True).encode("utf-8")).hexdigest()

    def search(self, request: SearchRequest, smart_mode: bool = settings.smart_search) -> SearchResult:
        """Score, rank and cap the catalog for ``request``.

        Never raises for degenerate input: blank text yields an empty
        result, and so does a query nothing scores above zero for.
        """
        with self._lock:
            catalog = self._catalog
            taxonomy = self._taxonomy

        query = request.text.strip()
        if not query:
            return SearchResult(query=query, status_message=CLEARED_STATUS)

        cache_key = None
        if self._cache is not None:
            cache_key = self._cache_key(request, smart_mode, catalog, taxonomy)
            cached = self._cache.get(cache_key)
            if cached is not None:
                logger.debug("cache_hit q=%r", query)
                return SearchResult.model_validate(cached)

        t0 = perf_counter()
        if smart_mode:
            parsed = parse_query(query, taxonomy)
            t1 = perf_counter()
            candidates = [
                ScoredCandidate(item, score_item(item, parsed, self.fuzzy_enabled), position)
                for position, item in enumerate(catalog.items)
            ]
        else:
            t1 = perf_counter()
            normalized = normalize_text(query)
            candidates = [
                ScoredCandidate(item, 1.0, position)
                for position, item in enumerate(catalog.items)
                if basic_match(item, normalized)
            ]
        t2 = perf_counter()
        ranked = rank_candidates(candidates, request)
        t3 = perf_counter()

        result = SearchResult(
            query=query,
            items=[candidate.item for candidate in ranked],
            scores=[candidate.score for candidate in ranked],
            status_message=status_message(query, len(ranked)),
        )
        logger.info(
            "timing: total=%.2fms parse=%.2fms score=%.2fms rank=%.2fms q=%r smart=%s candidates=%s hits=%s",
            (t3 - t0) * 1000,
            (t1 - t0) * 1000,
            (t2 - t1) * 1000,
            (t3 - t2) * 1000,
            query,
            smart_mode,
            sum(1 for candidate in candidates if candidate.score > 0),
            len(ranked),
        )

        if self._cache is not None and cache_key is not None:
            self._cache.set(cache_key, result.model_dump(mode="json"), self._cache_ttl)
            logger.debug("cache_store q=%r ttl=%s", query, self._cache_ttl)
        return result

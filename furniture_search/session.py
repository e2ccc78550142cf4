"""Debounced incremental search, history and suggestions for one user.

The controller is a two-state machine. Typing (``on_text_changed``) cancels
any pending timer and, for texts of at least ``min_query_length``
characters, schedules a search after ``delay`` seconds (PENDING_DEBOUNCE).
Shorter texts clear the results and leave the controller IDLE. Submitting
(``on_submit``) cancels the timer and searches immediately.

Timers come from an injectable :class:`Scheduler`; the default one uses the
running asyncio loop, tests drive a manual scheduler instead.
"""
from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, List, Optional, Protocol

from .config import settings
from .engine import CLEARED_STATUS, SearchEngine
from .models import CatalogItem, FurnitureCategory, PriceRange, SearchRequest, SearchResult
from .utils import normalize_text

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 10
SUGGESTION_LIMIT = 5
POPULAR_TERMS = ("chair", "table", "sofa", "bed", "lamp", "shelf", "modern", "leather", "wood")


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Schedule callbacks on an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class SessionState(str, Enum):
    IDLE = "idle"
    PENDING_DEBOUNCE = "pending_debounce"


class SearchSession:
    def __init__(
        self,
        engine: SearchEngine,
        scheduler: Optional[Scheduler] = None,
        *,
        delay: float = settings.search_delay_seconds,
        min_query_length: int = settings.min_query_length,
        max_results: int = settings.max_search_results,
        smart_mode: bool = settings.smart_search,
    ) -> None:
        self.engine = engine
        self.scheduler = scheduler or AsyncioScheduler()
        self.delay = delay
        self.min_query_length = min_query_length
        self.smart_mode = smart_mode
        self.price_range: Optional[PriceRange] = None
        self.category: Optional[FurnitureCategory] = None
        self.available_only = False
        self.max_results = max_results

        self.state = SessionState.IDLE
        self.text = ""
        self.status = "Ready to search"
        self.on_search_started: Optional[Callable[[str], None]] = None
        self.on_search_completed: Optional[Callable[[SearchResult], None]] = None

        self._history: List[str] = []
        self._results: List[CatalogItem] = []
        self._pending: Optional[TimerHandle] = None
        # bumped on every cancel so a callback that already left the loop queue is ignored
        self._generation = 0

    @property
    def current_results(self) -> List[CatalogItem]:
        return list(self._results)

    def get_history(self) -> List[str]:
        return list(self._history)

    def _cancel_pending(self) -> None:
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self.state = SessionState.IDLE

    def _clear_results(self) -> None:
        self._results = []

    def on_text_changed(self, text: str) -> None:
        self._cancel_pending()
        self.text = text
        if len(text) < self.min_query_length:
            self._clear_results()
            return
        generation = self._generation
        self._pending = self.scheduler.call_later(self.delay, lambda: self._fire(generation, text))
        self.state = SessionState.PENDING_DEBOUNCE
        logger.debug("debounce scheduled q=%r delay=%.2fs", text, self.delay)

    def _fire(self, generation: int, text: str) -> None:
        if generation != self._generation:
            logger.debug("stale debounce timer ignored q=%r", text)
            return
        self._pending = None
        self.state = SessionState.IDLE
        self._execute(text)

    def on_submit(self, text: Optional[str] = None) -> SearchResult:
        self._cancel_pending()
        if text is not None:
            self.text = text
        return self._execute(self.text)

    def clear(self) -> None:
        self._cancel_pending()
        self.text = ""
        self._clear_results()
        self.status = CLEARED_STATUS

    def set_filters(
        self,
        *,
        price_range: Optional[PriceRange] = None,
        category: Optional[FurnitureCategory] = None,
        available_only: bool = False,
        max_results: Optional[int] = None,
        smart_mode: Optional[bool] = None,
    ) -> Optional[SearchResult]:
        """Replace the filters; re-runs the search when there is current text."""
        self.price_range = price_range
        self.category = category
        self.available_only = available_only
        if max_results is not None:
            self.max_results = max_results
        if smart_mode is not None:
            self.smart_mode = smart_mode
        if self.text:
            return self.on_submit()
        return None

    def build_request(self, text: str) -> SearchRequest:
        return SearchRequest(
            text=text,
            price_range=self.price_range,
            category=self.category,
            available_only=self.available_only,
            max_results=self.max_results,
        )

    def _execute(self, text: str) -> SearchResult:
        if not text.strip():
            self._clear_results()
            self.status = CLEARED_STATUS
            return SearchResult(query="", status_message=CLEARED_STATUS)

        if self.on_search_started is not None:
            self.on_search_started(text)
        self.status = f"Searching for '{text}'..."

        result = self.engine.search(self.build_request(text), self.smart_mode)
        self._remember(text)
        self._results = list(result.items)
        self.status = result.status_message

        if self.on_search_completed is not None:
            self.on_search_completed(result)
        return result

    def _remember(self, text: str) -> None:
        # an existing entry keeps its position; it is not moved to the front
        if text in self._history:
            return
        self._history.insert(0, text)
        del self._history[HISTORY_LIMIT:]

    def get_suggestions(self, prefix: str) -> List[str]:
        """History, catalog names and popular terms starting with ``prefix``."""
        needle = normalize_text(prefix)
        candidates: List[str] = []
        candidates.extend(entry for entry in self._history if normalize_text(entry).startswith(needle))
        candidates.extend(name for name in self.engine.display_names() if normalize_text(name).startswith(needle))
        candidates.extend(term for term in POPULAR_TERMS if term.startswith(needle))
        return list(dict.fromkeys(candidates))[:SUGGESTION_LIMIT]

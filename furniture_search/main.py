"""FastAPI application wiring the furniture search engine."""
from __future__ import annotations

import logging
from pathlib import Path
from time import perf_counter
from typing import List

from fastapi import FastAPI, Header, Query

from .cache import get_cache
from .catalog import default_catalog, load_catalog_file
from .config import settings
from .engine import SearchEngine
from .models import (
    CatalogItem,
    FurnitureCategory,
    ItemResult,
    PriceRange,
    SearchRequest,
    SearchResponse,
    SessionResponse,
    TextEvent,
)
from .session import SearchSession
from .taxonomy import Taxonomy, load_keywords

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL = logging.getLevelName(settings.log_level.upper())

# ``force=True`` replaces uvicorn's default handlers so engine timing lines
# share one format with the server logs.
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, force=True)
for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
    logging.getLogger(name).setLevel(LOG_LEVEL)

logger = logging.getLogger(__name__)
logger.info("Logging configured at %s", settings.log_level.upper())

app = FastAPI(title="Furniture Search Service")


def _load_items() -> list[CatalogItem]:
    items = load_catalog_file(Path(settings.catalog_path))
    if not items:
        logger.info("Falling back to the built-in demo catalog")
        items = default_catalog()
    return items


def _to_result(item: CatalogItem, score: float | None = None) -> ItemResult:
    return ItemResult(
        id=item.id,
        displayName=item.display_name,
        description=item.description,
        category=item.category,
        price=item.price,
        brand=item.brand,
        tags=list(item.tags),
        isAvailable=item.is_available,
        score=score,
    )


DEFAULT_SESSION_ID = "default"


def _session(session_id: str = DEFAULT_SESSION_ID) -> SearchSession:
    """Return the session for one client, creating it on first use."""
    sessions: dict[str, SearchSession] = app.state.sessions
    session = sessions.get(session_id)
    if session is None:
        session = SearchSession(app.state.engine)
        sessions[session_id] = session
        logger.info("Opened search session %s", session_id)
    return session


def _session_response(session: SearchSession) -> SessionResponse:
    return SessionResponse(
        state=session.state.value,
        text=session.text,
        status=session.status,
        results=[_to_result(item) for item in session.current_results],
        history=session.get_history(),
    )


@app.on_event("startup")
async def startup_event() -> None:
    tables = load_keywords(Path(settings.keywords_path))
    engine = SearchEngine(taxonomy=Taxonomy(**tables), cache=get_cache())
    engine.load_catalog(_load_items())
    app.state.engine = engine
    app.state.sessions = {}


@app.get("/health")
async def health() -> dict:
    engine: SearchEngine = app.state.engine
    return {
        "catalog_items": len(engine.catalog),
        "taxonomy": engine.taxonomy.table_sizes(),
        "sessions": len(app.state.sessions),
    }


@app.get("/search", response_model=SearchResponse)
async def search(
    q: str = Query("", description="Search query"),
    min_price: float | None = None,
    max_price: float | None = None,
    category: FurnitureCategory | None = None,
    available_only: bool = False,
    limit: int = Query(settings.max_search_results, gt=0),
    smart: bool = settings.smart_search,
) -> SearchResponse:
    price_range = None
    if min_price is not None or max_price is not None:
        price_range = PriceRange(min_price=min_price, max_price=max_price)
    request = SearchRequest(
        text=q,
        price_range=price_range,
        category=category,
        available_only=available_only,
        max_results=limit,
    )
    t0 = perf_counter()
    result = app.state.engine.search(request, smart)
    took_ms = (perf_counter() - t0) * 1000
    products: List[ItemResult] = [_to_result(item, score) for item, score in zip(result.items, result.scores)]
    return SearchResponse(query=result.query, status=result.status_message, results=products, took_ms=took_ms)


@app.post("/session/text", response_model=SessionResponse)
async def session_text(event: TextEvent, x_session_id: str = Header(DEFAULT_SESSION_ID)) -> SessionResponse:
    session = _session(x_session_id)
    session.on_text_changed(event.text)
    return _session_response(session)


@app.post("/session/submit", response_model=SessionResponse)
async def session_submit(event: TextEvent, x_session_id: str = Header(DEFAULT_SESSION_ID)) -> SessionResponse:
    session = _session(x_session_id)
    session.on_submit(event.text)
    return _session_response(session)


@app.post("/session/clear", response_model=SessionResponse)
async def session_clear(x_session_id: str = Header(DEFAULT_SESSION_ID)) -> SessionResponse:
    session = _session(x_session_id)
    session.clear()
    return _session_response(session)


@app.get("/session/results", response_model=SessionResponse)
async def session_results(x_session_id: str = Header(DEFAULT_SESSION_ID)) -> SessionResponse:
    return _session_response(_session(x_session_id))


@app.get("/suggestions")
async def suggestions(prefix: str = "", x_session_id: str = Header(DEFAULT_SESSION_ID)) -> list[str]:
    return _session(x_session_id).get_suggestions(prefix)


@app.get("/history")
async def history(x_session_id: str = Header(DEFAULT_SESSION_ID)) -> list[str]:
    return _session(x_session_id).get_history()


@app.post("/catalog/reload")
async def reload_catalog() -> dict:
    count = app.state.engine.load_catalog(_load_items())
    return {"loaded": count}

"""Terminal client that reuses the in-process search logic."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable

from furniture_search.catalog import default_catalog, load_catalog_file
from furniture_search.config import settings
from furniture_search.engine import SearchEngine
from furniture_search.models import SearchRequest, SearchResult
from furniture_search.taxonomy import Taxonomy, load_keywords

GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"


def build_engine(catalog_path: Path | None = None, keywords_path: Path | None = None) -> SearchEngine:
    tables = load_keywords(keywords_path or Path(settings.keywords_path))
    items = load_catalog_file(catalog_path or Path(settings.catalog_path)) or default_catalog()
    return SearchEngine(items, Taxonomy(**tables))


def perform_query(engine: SearchEngine, query: str, smart: bool, limit: int) -> SearchResult:
    return engine.search(SearchRequest(text=query, max_results=limit), smart)


def pretty_print_response(result: SearchResult) -> None:
    color = GREEN if result.items else RED
    print(f"{color}{result.status_message}{RESET}")
    for idx, (item, score) in enumerate(zip(result.items, result.scores), start=1):
        print(
            f"  {idx:02d}. score={score:.2f} | {item.display_name} | "
            f"{item.category.value} | ${item.price:.2f} | {item.brand}"
        )


def interactive_shell(engine: SearchEngine, smart: bool, limit: int) -> None:
    print("Interactive furniture search. Type 'exit' to quit.")
    while True:
        try:
            query = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if not query:
            continue
        if query.lower() in {"exit", "quit"}:
            return
        pretty_print_response(perform_query(engine, query, smart, limit))


def batch_mode(engine: SearchEngine, file_path: Path, smart: bool, limit: int) -> None:
    with file_path.open("r", encoding="utf-8") as fh:
        for line in fh:
            query = line.strip()
            if not query:
                continue
            pretty_print_response(perform_query(engine, query, smart, limit))


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="CLI client for the furniture search engine")
    parser.add_argument("query", nargs="?", help="Query string. If omitted, starts REPL mode.")
    parser.add_argument("--batch", type=Path, help="File with queries to execute line by line")
    parser.add_argument("--catalog", type=Path, help="JSON catalog file (defaults to the demo catalog)")
    parser.add_argument("--keywords", type=Path, help="JSON keyword tables")
    parser.add_argument("--basic", action="store_true", help="Plain substring search without scoring")
    parser.add_argument("--limit", type=int, default=settings.max_search_results)
    args = parser.parse_args(list(argv) if argv is not None else None)

    engine = build_engine(args.catalog, args.keywords)
    smart = not args.basic
    if args.batch:
        batch_mode(engine, args.batch, smart, args.limit)
        return 0
    if args.query:
        pretty_print_response(perform_query(engine, args.query, smart, args.limit))
        return 0
    interactive_shell(engine, smart, args.limit)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

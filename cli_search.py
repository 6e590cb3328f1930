"""Terminal client that runs catalog searches in-process."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable, Iterable

from pydantic import BaseModel, ValidationError

from catalog.config import settings
from catalog.inventory import FileFacets
from catalog.models import ProductSearchResponse, RecordSearchResponse
from catalog.search_service import search_files, search_points, search_products

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"

logger = logging.getLogger("cli_search")

Runner = Callable[[str], BaseModel]


def configure_logging(level: str = settings.log_level) -> None:
    logging.basicConfig(level=logging.getLevelName(level.upper()), format=LOG_FORMAT, force=True)


def pretty_print_response(query: str, payload: BaseModel, limit: int = settings.search_result_size) -> None:
    results = payload.results
    took = float(payload.took_ms)
    color = GREEN if took < 200 else RED
    print(f"Query: {query} | results: {len(results)} | took: {color}{took:.1f} ms{RESET}")
    for idx, item in enumerate(results[:limit], start=1):
        if isinstance(payload, ProductSearchResponse):
            skus = ", ".join(item.skus) or "-"
            kind = item.matchType or "-"
            print(f"  {idx:02d}. [{kind}] {item.name} | {item.group or '-'} | {skus}")
        elif isinstance(payload, RecordSearchResponse):
            score = "-" if item.score is None else str(item.score)
            label = f" [{item.label}]" if item.label else ""
            print(f"  {idx:02d}. score={score} | #{item.id} | {item.title} | {item.subtitle}{label}")


def build_runner(target: str, facets: FileFacets) -> Runner:
    if target == "points":
        return search_points
    if target == "files":
        return lambda query: search_files(query, facets)
    return search_products


def interactive_shell(run: Runner) -> None:
    print("Interactive catalog search. Type 'exit' to quit.")
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
        pretty_print_response(query, run(query))


def batch_mode(run: Runner, file_path: Path) -> None:
    with file_path.open("r", encoding="utf-8") as fh:
        for line in fh:
            query = line.strip()
            if not query:
                continue
            pretty_print_response(query, run(query))


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Search the asset catalog, map points or layout files")
    parser.add_argument("target", choices=("products", "points", "files"), help="What to search")
    parser.add_argument("query", nargs="?", help="Query string. If omitted, starts REPL mode.")
    parser.add_argument("--batch", type=Path, help="File with queries to execute line by line")
    parser.add_argument("--category", action="append", default=[], help="Layout category facet (files only)")
    parser.add_argument("--subcategory", action="append", default=[], help="Layout subcategory facet (files only)")
    parser.add_argument("--responsible", action="append", default=[], help="Responsible person facet (files only)")
    parser.add_argument("--group", action="append", default=[], help="Product group facet (files only)")
    args = parser.parse_args(list(argv) if argv is not None else None)

    configure_logging()
    facets = FileFacets(
        categories=tuple(args.category),
        subcategories=tuple(args.subcategory),
        responsible=tuple(args.responsible),
        product_groups=tuple(args.group),
    )
    run = build_runner(args.target, facets)

    try:
        if args.batch:
            batch_mode(run, args.batch)
            return 0
        if args.query is not None:
            pretty_print_response(args.query, run(args.query))
            return 0
        interactive_shell(run)
    except (FileNotFoundError, RuntimeError, ValidationError) as exc:
        logger.error("Search failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

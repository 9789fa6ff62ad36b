"""Command-line demo: index configured records and print ranked matches."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from config_loader import load_config
from document_loader import DocumentLoader
from errors import SearchEngineError
from search_engine import SearchEngine

LOGGER = logging.getLogger("record_search.demo")


def run_demo(config_path: Path, queries: list[str], limit: int) -> None:
    """Build the index once and print the top matches for each query."""
    config = load_config(config_path)

    engine = SearchEngine(cache_ttl_seconds=config.cache_ttl_seconds, logger=LOGGER)
    engine.add_many(DocumentLoader(config.sources, LOGGER).load())
    engine.build_index()

    for query in queries:
        started = time.perf_counter()
        results = engine.search(query)
        elapsed_ms = (time.perf_counter() - started) * 1000

        print(f"{query!r}: {len(results)} matches")
        for result in results[:limit]:
            print(f"\t{result.doc_id} => {result.score:.6f}")
        print(f"Search took {elapsed_ms:.3f}ms")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search structured records with TF-IDF ranking")
    parser.add_argument("queries", nargs="*", default=["Green Smoothie"], help="Queries to run")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(__file__).resolve().parent / "config.yml",
        help="Path to the YAML configuration file",
    )
    parser.add_argument(
        "--limit", type=_positive_int, default=10, help="Number of hits to print per query"
    )
    return parser.parse_args(argv)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def main(argv: list[str] | None = None) -> int:
    """Entry point of the demo mode."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = parse_args(argv)

    try:
        run_demo(args.config, args.queries, args.limit)
    except (FileNotFoundError, ValueError, SearchEngineError) as exc:
        LOGGER.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

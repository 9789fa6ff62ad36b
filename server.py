"""Entry point for the record search HTTP service."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any
from urllib.parse import parse_qs, urlparse

from config_loader import load_config
from document_loader import DocumentLoader
from errors import IndexNotBuiltError
from search_engine import SearchEngine

LOGGER = logging.getLogger("record_search")


@dataclass(frozen=True)
class SearchResponse:
    """Truncated hits plus the figures reported alongside them."""

    query: str
    total: int
    hits: list[dict[str, Any]]
    took_ms: float

    def to_payload(self) -> dict[str, object]:
        return {
            "query": self.query,
            "total": self.total,
            "took_ms": self.took_ms,
            "hits": self.hits,
        }


def run_search(engine: SearchEngine, query: str, limit: int) -> SearchResponse:
    """Search, keep the first ``limit`` hits and time the engine call."""
    started = time.perf_counter()
    results = engine.search(query)
    took_ms = round((time.perf_counter() - started) * 1000, 3)

    return SearchResponse(
        query=query,
        total=len(results),
        hits=[result.document for result in results[:limit]],
        took_ms=took_ms,
    )


class SearchRequestHandler(BaseHTTPRequestHandler):
    """HTTP handler exposing health and search endpoints."""

    engine: SearchEngine
    logger: logging.Logger
    default_limit: int = 10
    max_limit: int = 50

    def do_GET(self) -> None:
        parsed = urlparse(self.path)
        path = parsed.path

        if path in ("/health", "/api/v1/health"):
            payload = {
                "status": "ok",
                "state": self.engine.state.value,
                "documents": self.engine.document_count,
            }
            self._send_json(HTTPStatus.OK, payload)
            return

        if path not in ("/search", "/api/v1/search"):
            self._send_json(
                HTTPStatus.NOT_FOUND,
                {"error": "Not found", "message": "Use GET /search?q=<text>"},
            )
            return

        query_params = parse_qs(parsed.query, keep_blank_values=True)
        query = (query_params.get("q") or [""])[0]

        limit_raw = (query_params.get("limit") or [str(self.default_limit)])[0].strip()
        try:
            limit = max(1, min(int(limit_raw), self.max_limit))
        except ValueError:
            self._send_json(
                HTTPStatus.BAD_REQUEST,
                {"error": "Invalid query parameter 'limit'"},
            )
            return

        try:
            response = run_search(self.engine, query, limit)
        except IndexNotBuiltError as exc:
            self._send_json(
                HTTPStatus.SERVICE_UNAVAILABLE,
                {"error": "index not ready", "details": str(exc)},
            )
            return
        except Exception as exc:
            self.logger.exception("Search failed for query: %s", query)
            self._send_json(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                {"error": "internal server error", "details": str(exc)},
            )
            return

        self._send_json(HTTPStatus.OK, response.to_payload())

    def _send_json(self, status: HTTPStatus, payload: dict[str, object]) -> None:
        body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        self.send_response(status.value)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: object) -> None:
        self.logger.info("%s - %s", self.client_address[0], format % args)


def main() -> None:
    """Load configuration, ingest records, build the index and start serving."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    base_dir = Path(__file__).resolve().parent
    config = load_config(base_dir / "config.yml")

    engine = SearchEngine(cache_ttl_seconds=config.cache_ttl_seconds, logger=LOGGER)
    engine.add_many(DocumentLoader(config.sources, LOGGER).load())
    engine.build_index()

    SearchRequestHandler.engine = engine
    SearchRequestHandler.logger = LOGGER
    SearchRequestHandler.default_limit = config.default_limit
    SearchRequestHandler.max_limit = config.max_limit

    server_address = (config.host, config.port)
    httpd = ThreadingHTTPServer(server_address, SearchRequestHandler)

    LOGGER.info("Search service started on http://%s:%d", config.host, config.port)
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        LOGGER.info("Shutdown signal received")
    finally:
        httpd.server_close()
        LOGGER.info("Server stopped")


if __name__ == "__main__":
    main()

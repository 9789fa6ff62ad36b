"""Time-bounded cache of ranked results keyed by raw query string."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable

DEFAULT_TTL_SECONDS = 60.0

Ranking = tuple[tuple[int, float], ...]


@dataclass(frozen=True)
class CachedResult:
    """A stored ranking and the monotonic instant it stops being valid."""

    ranking: Ranking
    expires_at: float


class QueryCache:
    """Memoizes rankings for a fixed time window.

    Keys are the exact query strings, so queries differing only in case or
    whitespace are cached separately. Expired entries are replaced lazily on
    the next ``put`` for the same query and are never evicted otherwise.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CachedResult] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, query: str) -> Ranking | None:
        """Return the cached ranking if present and not yet expired."""
        with self._lock:
            entry = self._entries.get(query)
        if entry is None or entry.expires_at <= self._clock():
            return None
        return entry.ranking

    def put(self, query: str, ranking: list[tuple[int, float]] | Ranking) -> Ranking:
        """Store a ranking for ``query``, overwriting any previous entry."""
        stored: Ranking = tuple(ranking)
        entry = CachedResult(ranking=stored, expires_at=self._clock() + self._ttl)
        with self._lock:
            self._entries[query] = entry
        return stored

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

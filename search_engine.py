"""Thread-safe TF-IDF search engine over structured records."""

from __future__ import annotations

import copy
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Mapping

from errors import EmptyCollectionError, IndexNotBuiltError, StaleIndexError
from indexer import ID_FIELD, IndexData, Indexer
from query_cache import DEFAULT_TTL_SECONDS, QueryCache
from rwlock import ReadWriteLock
from scorer import Scorer
from tokenizer import Tokenizer


class EngineState(Enum):
    EMPTY = "empty"
    POPULATED = "populated"
    INDEXED = "indexed"


@dataclass(frozen=True)
class SearchResult:
    """Single ranked match."""

    doc_id: int
    score: float
    document: dict[str, Any]


class SearchEngine:
    """Owns the documents, their index and the query cache.

    Concurrency contract: ``search`` takes the read side of a reader-writer
    lock and may run alongside other searches; ``add`` and ``build_index``
    take the write side and run exclusively.

    Documents added after ``build_index`` are not searchable until the next
    rebuild, and ``search`` raises ``StaleIndexError`` while that is the case.
    """

    def __init__(
        self,
        tokenizer: Tokenizer | None = None,
        cache_ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        logger: logging.Logger | None = None,
    ) -> None:
        self._tokenizer = tokenizer or Tokenizer()
        self._logger = logger or logging.getLogger(__name__)
        self._indexer = Indexer(self._tokenizer, self._logger)
        self._cache = QueryCache(ttl_seconds=cache_ttl_seconds, clock=clock)
        self._lock = ReadWriteLock()

        self._documents: list[dict[str, Any]] = []
        self._index: IndexData | None = None
        self._scorer: Scorer | None = None
        self._stale = False

    @property
    def state(self) -> EngineState:
        if self._index is not None:
            return EngineState.INDEXED
        if self._documents:
            return EngineState.POPULATED
        return EngineState.EMPTY

    @property
    def document_count(self) -> int:
        return len(self._documents)

    @property
    def documents(self) -> list[dict[str, Any]]:
        """Copies of the stored documents, in id order."""
        return copy.deepcopy(self._documents)

    @property
    def index(self) -> IndexData | None:
        return self._index

    @property
    def is_stale(self) -> bool:
        return self._stale

    def add(self, document: Mapping[str, Any]) -> int:
        """Store a deep copy of ``document`` under the next sequential id.

        Documents holding values that cannot be indexed are rejected with
        ``MalformedDocumentError`` and never enter the collection.
        """
        if not isinstance(document, Mapping):
            raise TypeError(f"Documents must be mappings, got {type(document).__name__}")

        with self._lock.write_locked():
            doc_id = len(self._documents) + 1
            stored = copy.deepcopy(dict(document))
            stored[ID_FIELD] = doc_id
            self._indexer.fragments(stored, doc_id)
            self._documents.append(stored)
            if self._index is not None:
                self._stale = True
        return doc_id

    def add_many(self, documents: Iterable[Mapping[str, Any]]) -> list[int]:
        return [self.add(document) for document in documents]

    def get_document(self, doc_id: int) -> dict[str, Any]:
        return copy.deepcopy(self._stored(doc_id))

    def _stored(self, doc_id: int) -> dict[str, Any]:
        if doc_id < 1 or doc_id > len(self._documents):
            raise KeyError(doc_id)
        return self._documents[doc_id - 1]

    def build_index(self) -> IndexData:
        """Rebuild the index from every document added so far.

        On failure the previous index, if any, stays in place.
        """
        with self._lock.write_locked():
            if not self._documents:
                raise EmptyCollectionError("Cannot build an index without documents")

            index = self._indexer.build(self._documents)
            self._index = index
            self._scorer = Scorer(index)
            self._stale = False
        return index

    def search(self, query: str) -> list[SearchResult]:
        """Rank indexed documents against ``query``, best match first."""
        with self._lock.read_locked():
            if self._index is None or self._scorer is None:
                raise IndexNotBuiltError("Search requires build_index() to be called first")
            if self._stale:
                raise StaleIndexError(
                    "Documents were added after the last build_index(); rebuild before searching"
                )

            ranking = self._cache.get(query)
            if ranking is None:
                terms = self._tokenizer.terms(query)
                ranking = self._cache.put(query, self._scorer.rank(terms))
                self._logger.debug("Ranked query %r: %d matches", query, len(ranking))

            return [
                SearchResult(
                    doc_id=doc_id,
                    score=score,
                    document=copy.deepcopy(self._stored(doc_id)),
                )
                for doc_id, score in ranking
            ]

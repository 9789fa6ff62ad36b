"""TF-IDF relevance scoring over a built index."""

from __future__ import annotations

import math
from typing import Iterable

from errors import ScoreInvariantError
from indexer import IndexData


class Scorer:
    """Scores documents of one index against normalized query terms.

    idf values are memoized; a Scorer is tied to the index it was created
    with and is replaced whenever the index is rebuilt.
    """

    def __init__(self, index: IndexData) -> None:
        self._index = index
        self._idf_cache: dict[str, float] = {}

    def tf(self, doc_id: int, term: str) -> float:
        """Share of a document's tokens equal to ``term``."""
        total = self._index.totals[doc_id]
        if total == 0:
            return 0.0
        return self._index.tables[doc_id].get(term, 0) / total

    def df(self, term: str) -> int:
        """Number of documents containing ``term``, floored at 1."""
        containing = sum(1 for table in self._index.tables.values() if table.get(term, 0) > 0)
        return max(1, containing)

    def idf(self, term: str) -> float:
        cached = self._idf_cache.get(term)
        if cached is not None:
            return cached

        total_docs = self._index.document_count
        value = math.log(total_docs / self.df(term)) if total_docs > 0 else 0.0
        self._idf_cache[term] = value
        return value

    def score(self, doc_id: int, term: str) -> float:
        return self.tf(doc_id, term) * self.idf(term)

    def relevance(self, doc_id: int, terms: Iterable[str]) -> float:
        """Sum of per-term scores; repeated query terms count repeatedly."""
        total = 0.0
        for term in terms:
            total += self.score(doc_id, term)

        if not math.isfinite(total) or total < 0:
            raise ScoreInvariantError(f"Invalid relevance {total!r} for document {doc_id}")
        return total

    def rank(self, terms: list[str]) -> list[tuple[int, float]]:
        """Return (doc_id, score) pairs with positive score, best first.

        Equal scores are ordered by ascending document id.
        """
        if not terms:
            return []

        matches: list[tuple[int, float]] = []
        for doc_id in self._index.tables:
            relevance = self.relevance(doc_id, terms)
            if relevance > 0:
                matches.append((doc_id, relevance))

        matches.sort(key=lambda match: (-match[1], match[0]))
        return matches

"""Term-frequency indexing of structured documents."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from errors import MalformedDocumentError, UnsupportedValueError
from flattener import flatten
from tokenizer import Tokenizer

ID_FIELD = "id"

TermFrequencyTable = dict[str, int]


@dataclass
class IndexData:
    """Complete in-memory search index."""

    tables: dict[int, TermFrequencyTable]
    totals: dict[int, int]
    document_count: int
    built_at: float


class Indexer:
    """Builds the per-document term-frequency index from scratch."""

    def __init__(self, tokenizer: Tokenizer, logger: logging.Logger) -> None:
        self._tokenizer = tokenizer
        self._logger = logger

    def build(self, documents: Iterable[Any]) -> IndexData:
        """Index every document, failing the whole build on the first bad one."""
        tables: dict[int, TermFrequencyTable] = {}
        totals: dict[int, int] = {}

        for position, document in enumerate(documents, start=1):
            doc_id = resolve_document_id(document, position)
            if doc_id in tables:
                raise MalformedDocumentError(f"Duplicate document id {doc_id}")

            tokens = self.document_terms(document, doc_id)
            tables[doc_id] = count_terms(tokens)
            totals[doc_id] = len(tokens)
            self._logger.debug("Indexed document %d (%d terms)", doc_id, len(tokens))

        self._logger.info("Built term-frequency index for %d documents", len(tables))
        return IndexData(
            tables=tables,
            totals=totals,
            document_count=len(tables),
            built_at=time.time(),
        )

    def document_terms(self, document: Any, doc_id: int) -> list[str]:
        """Flatten, tokenize and normalize one document into its term sequence."""
        terms: list[str] = []
        for fragment in self.fragments(document, doc_id):
            terms.extend(self._tokenizer.terms(fragment))
        return terms

    def fragments(self, document: Any, doc_id: int) -> list[str]:
        """Flatten a document, reporting unsupported values as malformed."""
        try:
            return flatten(document)
        except UnsupportedValueError as exc:
            raise MalformedDocumentError(f"Document {doc_id}: {exc}") from exc


def resolve_document_id(document: Any, position: int | None = None) -> int:
    """Return the unsigned integer id stored in a document."""
    where = f"at position {position}" if position is not None else "given"
    if not isinstance(document, Mapping):
        raise MalformedDocumentError(f"Document {where} is not a mapping")
    if ID_FIELD not in document:
        raise MalformedDocumentError(f"Document {where} has no '{ID_FIELD}' field")

    raw_id = document[ID_FIELD]
    if isinstance(raw_id, bool) or not isinstance(raw_id, int):
        raise MalformedDocumentError(f"Document {where} has a non-integer id: {raw_id!r}")
    if raw_id < 0:
        raise MalformedDocumentError(f"Document {where} has a negative id: {raw_id}")
    return raw_id


def count_terms(tokens: Iterable[str]) -> TermFrequencyTable:
    counts: TermFrequencyTable = {}
    for token in tokens:
        counts[token] = counts.get(token, 0) + 1
    return counts

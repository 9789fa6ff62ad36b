"""Error types raised by the record search engine."""

from __future__ import annotations


class SearchEngineError(Exception):
    """Base class for recoverable search engine failures."""


class MalformedDocumentError(SearchEngineError):
    """A document has no usable identifier or holds unsupported values."""


class IndexNotBuiltError(SearchEngineError):
    """Search was requested before an index exists."""


class StaleIndexError(IndexNotBuiltError):
    """Documents were added after the last index build."""


class EmptyCollectionError(SearchEngineError):
    """An index build was requested with no documents added."""


class UnsupportedValueError(TypeError):
    """A document tree contains a value of an unsupported type."""


class ScoreInvariantError(RuntimeError):
    """A relevance score came out non-finite or negative."""

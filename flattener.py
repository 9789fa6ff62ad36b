"""Flattening of tree-shaped documents into searchable text fragments."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from errors import UnsupportedValueError


class NodeKind(Enum):
    """Every shape a document value can take."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ABSENT = "absent"


def classify(value: Any) -> NodeKind:
    """Map a Python value onto its document node kind."""
    # bool is a subclass of int and must be checked first.
    if value is None:
        return NodeKind.ABSENT
    if isinstance(value, bool):
        return NodeKind.BOOLEAN
    if isinstance(value, (int, float)):
        return NodeKind.NUMBER
    if isinstance(value, str):
        return NodeKind.TEXT
    if isinstance(value, Mapping):
        return NodeKind.MAPPING
    if isinstance(value, (list, tuple)):
        return NodeKind.SEQUENCE
    raise UnsupportedValueError(f"Unsupported document value of type {type(value).__name__}")


def flatten(document: Any) -> list[str]:
    """Return the scalar text fragments of a document in pre-order.

    Mapping keys are ignored, only values contribute. Absent values
    contribute nothing.
    """
    fragments: list[str] = []
    _collect(document, fragments)
    return fragments


def _collect(value: Any, fragments: list[str]) -> None:
    kind = classify(value)
    if kind is NodeKind.MAPPING:
        for child in value.values():
            _collect(child, fragments)
    elif kind is NodeKind.SEQUENCE:
        for child in value:
            _collect(child, fragments)
    elif kind is NodeKind.TEXT:
        fragments.append(value)
    elif kind is NodeKind.NUMBER:
        fragments.append(_number_text(value))
    elif kind is NodeKind.BOOLEAN:
        fragments.append("true" if value else "false")
    elif kind is NodeKind.ABSENT:
        return
    else:  # pragma: no cover - every NodeKind is handled above
        raise UnsupportedValueError(f"Unhandled node kind: {kind}")


def _number_text(value: int | float) -> str:
    if isinstance(value, int):
        return str(value)
    return repr(value)

"""Word tokenizer shared by indexing and querying."""

from __future__ import annotations

import re
from typing import Iterable

WORD_PATTERN = r"[^\W_]+"


class Tokenizer:
    """Splits text into maximal runs of letters and digits.

    The pattern is compiled once per instance; the engine holds a single
    instance for its whole lifetime.
    """

    def __init__(self, pattern: str = WORD_PATTERN) -> None:
        self._pattern = re.compile(pattern, re.UNICODE)

    def tokenize(self, text: str) -> list[str]:
        """Return word tokens in order of appearance, case preserved."""
        if not text:
            return []
        return self._pattern.findall(text)

    def terms(self, text: str) -> list[str]:
        """Tokenize and upper-case, the form used for both index and query."""
        return normalize(self.tokenize(text))


def normalize(tokens: Iterable[str]) -> list[str]:
    return [token.upper() for token in tokens]


_DEFAULT_TOKENIZER = Tokenizer()


def tokenize(text: str) -> list[str]:
    """Tokenize with the module's shared default tokenizer."""
    return _DEFAULT_TOKENIZER.tokenize(text)

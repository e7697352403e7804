"""Small text helpers used by extraction and parsing."""

import re
from typing import List

_MULTI_SPACE = re.compile(r"\s{2,}")
_ANY_SPACE = re.compile(r"\s+")
_LINE_BREAK = re.compile(r"\r?\n")


class TextPreprocessor:
    """Whitespace normalization shared by the line reconstructor and parser."""

    @staticmethod
    def collapse_spaces(text: str) -> str:
        """Collapse runs of 2+ whitespace characters and trim."""
        return _MULTI_SPACE.sub(" ", text or "").strip()

    @staticmethod
    def tokens(text: str) -> List[str]:
        text = (text or "").strip()
        if not text:
            return []
        return _ANY_SPACE.split(text)

    @staticmethod
    def split_lines(text: str) -> List[str]:
        """Split text into trimmed, non-empty lines."""
        lines = (line.strip() for line in _LINE_BREAK.split(text or ""))
        return [line for line in lines if line]

    @staticmethod
    def compact_key(text: str) -> str:
        """Uppercase, drop all whitespace and fold en-dashes into hyphens."""
        return _ANY_SPACE.sub("", (text or "").upper()).replace("–", "-")


__all__ = ["TextPreprocessor"]

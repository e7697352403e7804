"""Rebuild logical text lines from positioned PDF fragments."""

import math
from typing import Dict, Iterable, List

from shared.text_utils import TextPreprocessor

from .models import GlyphFragment

PAGE_SEPARATOR = ""


class LineReconstructor:
    """
    Turn per-page glyph fragments into ordered text lines.

    Fragments sharing the same vertical position (rounded to the nearest
    unit) form one line. Lines are emitted top to bottom and fragments
    left to right; a space is inserted only where the visual gap between
    two fragments exceeds ``gap_threshold``, so e-mail addresses and
    numbers split by kerning stay in one token.

    Example:
        >>> rec = LineReconstructor()
        >>> rec.reconstruct_page([GlyphFragment("b", 20, 700, 5), GlyphFragment("a", 10, 700, 5)])
        ['a b']
    """

    def __init__(self, gap_threshold: float = 2.0):
        """
        Initialize LineReconstructor.

        Args:
            gap_threshold: Minimum horizontal gap (layout units) that
                separates two words
        """
        self.gap_threshold = gap_threshold

    def reconstruct_page(self, fragments: Iterable[GlyphFragment]) -> List[str]:
        """
        Build the lines of a single page.

        Args:
            fragments: Glyph fragments of one page, in any order

        Returns:
            Non-empty line strings in reading order
        """
        by_y: Dict[int, List[GlyphFragment]] = {}
        for frag in fragments:
            text = (frag.text or "").rstrip()
            if not text.strip():
                continue
            if text != frag.text:
                frag = GlyphFragment(text, frag.x, frag.y, frag.width)
            by_y.setdefault(math.floor(frag.y + 0.5), []).append(frag)

        lines: List[str] = []
        for y_key in sorted(by_y, reverse=True):
            line = self._join_fragments(sorted(by_y[y_key], key=lambda f: f.x))
            line = TextPreprocessor.collapse_spaces(line)
            if line:
                lines.append(line)
        return lines

    def reconstruct(self, pages: Iterable[Iterable[GlyphFragment]]) -> List[str]:
        """
        Build the lines of a whole document.

        Args:
            pages: Fragment collections, one per page, in page order

        Returns:
            Lines of every page, each page followed by a blank separator
        """
        lines: List[str] = []
        for fragments in pages:
            lines.extend(self.reconstruct_page(fragments))
            lines.append(PAGE_SEPARATOR)
        return lines

    def _join_fragments(self, fragments: List[GlyphFragment]) -> str:
        line = ""
        prev = None
        for frag in fragments:
            gap = float("inf") if prev is None else frag.x - prev.right
            if line and gap > self.gap_threshold:
                line += " "
            line += frag.text
            prev = frag
        return line


def join_lines(lines: Iterable[str]) -> str:
    return "\n".join(lines)


__all__ = ["LineReconstructor", "PAGE_SEPARATOR", "join_lines"]

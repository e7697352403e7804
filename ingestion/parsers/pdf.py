"""PDF glyph extraction with selectable decoder backends.

Backends:
- pymupdf:  spans from ``page.get_text("dict")`` (baseline origin + bbox width)
- pdfminer: text lines from pdfminer.six layout analysis

Both report coordinates with the PDF origin at the bottom-left, which is
what LineReconstructor expects.
"""

import io
import os
import threading
from typing import Iterable, List, Optional, Union

from shared.exceptions import ExtractionError

from ..lines import LineReconstructor, join_lines
from ..models import GlyphFragment

PdfSource = Union[str, bytes]

BACKENDS = ("pymupdf", "pdfminer")

# MuPDF is not thread-safe; documents are decoded one at a time.
_PYMUPDF_LOCK = threading.Lock()


def _describe(source: PdfSource) -> str:
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    return str(source)


class PdfExtractor:
    """
    Extract positioned text from a text-bearing PDF.

    Scanned (image only) PDFs have no text layer; they yield no lines
    rather than an error. Documents the decoder cannot open raise
    ExtractionError.

    Example:
        >>> extractor = PdfExtractor(backend="pymupdf")
        >>> lines = extractor.extract_lines("roster.pdf")
    """

    def __init__(
        self,
        backend: str = "pymupdf",
        *,
        reconstructor: Optional[LineReconstructor] = None,
        verbose: bool = False,
    ):
        """
        Initialize PdfExtractor.

        Args:
            backend: Decoder to use ("pymupdf" or "pdfminer")
            reconstructor: Line reconstructor (default gap threshold if None)
            verbose: Print extraction progress
        """
        backend = (backend or "pymupdf").lower()
        if backend not in BACKENDS:
            raise ValueError(f"Unknown PDF backend '{backend}', expected one of {BACKENDS}")
        self.backend = backend
        self.reconstructor = reconstructor or LineReconstructor()
        self.verbose = verbose

    def extract_pages(self, source: PdfSource) -> List[List[GlyphFragment]]:
        """
        Read glyph fragments of every page.

        Args:
            source: Path to a PDF file or the raw PDF bytes

        Returns:
            One fragment list per page, in page order

        Raises:
            ExtractionError: The document cannot be opened or decoded
        """
        try:
            if self.backend == "pdfminer":
                pages = self._pdfminer_pages(source)
            else:
                pages = self._pymupdf_pages(source)
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(_describe(source), str(e)) from e

        if self.verbose:
            total = sum(len(p) for p in pages)
            print(f"[extract] {_describe(source)}: pages={len(pages)} fragments={total} backend={self.backend}")
        return pages

    def extract_lines(self, source: PdfSource) -> List[str]:
        """Reconstructed lines of the whole document (blank line between pages)."""
        return self.reconstructor.reconstruct(self.extract_pages(source))

    def extract_text(self, source: PdfSource) -> str:
        return join_lines(self.extract_lines(source))

    def _pymupdf_pages(self, source: PdfSource) -> List[List[GlyphFragment]]:
        import fitz  # PyMuPDF

        if not isinstance(source, (bytes, bytearray)) and not os.path.isfile(source):
            raise ExtractionError(source, "file not found")

        with _PYMUPDF_LOCK:
            if isinstance(source, (bytes, bytearray)):
                doc = fitz.open(stream=bytes(source), filetype="pdf")
            else:
                doc = fitz.open(source)
            try:
                return [self._pymupdf_page(page) for page in doc]
            finally:
                doc.close()

    @staticmethod
    def _pymupdf_page(page) -> List[GlyphFragment]:
        height = page.rect.height
        fragments: List[GlyphFragment] = []
        for block in page.get_text("dict")["blocks"]:
            if block.get("type", 0) != 0:  # image block
                continue
            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    text = span.get("text", "")
                    if not text.strip():
                        continue
                    x0, _, x1, _ = span["bbox"]
                    origin_x, origin_y = span.get("origin", (x0, span["bbox"][3]))
                    # PyMuPDF measures y from the top; flip to the PDF convention.
                    fragments.append(GlyphFragment(text, origin_x, height - origin_y, x1 - x0))
        return fragments

    def _pdfminer_pages(self, source: PdfSource) -> List[List[GlyphFragment]]:
        from pdfminer.high_level import extract_pages

        if isinstance(source, (bytes, bytearray)):
            stream = io.BytesIO(bytes(source))
        else:
            if not os.path.isfile(source):
                raise ExtractionError(source, "file not found")
            stream = source
        return [list(self._pdfminer_fragments(layout)) for layout in extract_pages(stream)]

    def _pdfminer_fragments(self, container) -> Iterable[GlyphFragment]:
        from pdfminer.layout import LTTextLine

        for obj in container:
            if isinstance(obj, LTTextLine):
                text = obj.get_text().rstrip("\n")
                if text.strip():
                    yield GlyphFragment(text, obj.x0, obj.y0, obj.width)
            elif hasattr(obj, "__iter__"):
                yield from self._pdfminer_fragments(obj)

    @staticmethod
    def is_low_text_density(lines: List[str], min_len: int = 40, min_ratio: float = 0.2) -> bool:
        """
        Check if extracted lines look like a scanned document.

        Args:
            lines: Reconstructed lines
            min_len: Minimum characters to consider the text layer present
            min_ratio: Minimum ratio of alphanumeric characters

        Returns:
            True if the text layer is missing or mostly noise
        """
        text = "".join(lines)
        if len(text.strip()) < min_len:
            return True
        letters = sum(ch.isalnum() for ch in text)
        return letters / max(1, len(text)) < min_ratio


__all__ = ["PdfExtractor", "PdfSource", "BACKENDS"]

"""Ingestion layer for Roster Continuity.

Turns roster PDFs into StudentRecord lists.

Rules:
- Extraction: positioned glyphs -> logical lines (LineReconstructor)
- Parsing: logical lines -> StudentRecord (RosterParser)
- MUST NOT compare rosters or format output
- MUST NOT import comparison or api
"""

from .lines import LineReconstructor, join_lines
from .models import GlyphFragment, SectionMetadata, StudentRecord
from .normalization import (
    SCHEDULE_BLOCKS,
    normalize_category,
    normalize_level,
    normalize_schedule,
)
from .parsers import PdfExtractor, RosterParser, parse_roster_lines

__all__ = [
    # Models
    "GlyphFragment",
    "SectionMetadata",
    "StudentRecord",
    # Lines
    "LineReconstructor",
    "join_lines",
    # Normalization
    "SCHEDULE_BLOCKS",
    "normalize_category",
    "normalize_level",
    "normalize_schedule",
    # Parsers
    "PdfExtractor",
    "RosterParser",
    "parse_roster_lines",
]

"""File parsers for ingestion layer."""

from .pdf import BACKENDS, PdfExtractor
from .roster import LineOutcome, RosterParser, parse_roster_lines

__all__ = ["PdfExtractor", "BACKENDS", "RosterParser", "LineOutcome", "parse_roster_lines"]

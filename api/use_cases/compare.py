"""Roster comparison use case orchestration.

Rules:
- MAY import ingestion, comparison, shared
- MUST NOT implement parsing or comparison logic directly
"""

import os
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

from comparison import ComparisonResult, RosterDiffer
from ingestion import LineReconstructor, PdfExtractor, RosterParser, StudentRecord
from ingestion.parsers.pdf import PdfSource
from shared.config import RosterConfig
from shared.exceptions import EmptyRosterError


class CompareRostersUseCase:
    """Orchestrates extraction, parsing and comparison of two rosters.

    Pipeline:
    1. Extract lines from both PDFs (ingestion layer), in parallel
    2. Parse each document into StudentRecord lists (ingestion layer)
    3. Join; reject the run if either roster is empty
    4. Compare rosters (comparison layer)

    Example:
        >>> use_case = CompareRostersUseCase(config)
        >>> result = use_case.execute("2024-3.pdf", "2025-1.pdf")
    """

    def __init__(
        self,
        config: RosterConfig,
        extractor: Optional[PdfExtractor] = None,
        parser: Optional[RosterParser] = None,
    ):
        self.config = config
        self.extractor = extractor or PdfExtractor(
            config.pdf_backend,
            reconstructor=LineReconstructor(config.line_gap_threshold),
            verbose=config.verbose,
        )
        self.parser = parser or RosterParser(verbose=config.verbose)
        self.differ = RosterDiffer(config.terminal_level, verbose=config.verbose)

    def parse_document(self, source: PdfSource, file_name: str = "") -> List[StudentRecord]:
        """
        Extract and parse one roster.

        Args:
            source: PDF path or bytes
            file_name: Name used for category inference (defaults to the path basename)

        Returns:
            Student records in document order; empty for scanned PDFs
        """
        if not file_name and isinstance(source, str):
            file_name = os.path.basename(source)
        lines = self.extractor.extract_lines(source)
        if self.config.verbose and PdfExtractor.is_low_text_density(lines):
            print(f"[warn] {file_name or '<bytes>'}: little or no text layer (scanned PDF?)")
        return self.parser.parse_lines(lines, file_name)

    def parse_both(
        self,
        old_source: PdfSource,
        new_source: PdfSource,
        old_name: str = "",
        new_name: str = "",
    ) -> Tuple[List[StudentRecord], List[StudentRecord]]:
        """Parse both documents concurrently; raises the first extraction error."""
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
            old_future = pool.submit(self.parse_document, old_source, old_name)
            new_future = pool.submit(self.parse_document, new_source, new_name)
            return old_future.result(), new_future.result()

    def execute(
        self,
        old_source: PdfSource,
        new_source: PdfSource,
        old_name: str = "",
        new_name: str = "",
    ) -> ComparisonResult:
        """
        Execute the comparison pipeline.

        Args:
            old_source: Earlier-period roster (path or bytes)
            new_source: Current-period roster (path or bytes)

        Returns:
            ComparisonResult with counts and lost students

        Raises:
            ExtractionError: A PDF could not be decoded
            EmptyRosterError: A roster produced no students
        """
        old_list, new_list = self.parse_both(old_source, new_source, old_name, new_name)
        if not old_list or not new_list:
            raise EmptyRosterError(len(old_list), len(new_list))
        return self.differ.compare(old_list, new_list)


__all__ = ["CompareRostersUseCase"]

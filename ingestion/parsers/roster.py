"""Roster parser: classify reconstructed lines and build student records.

Roster PDFs interleave letterhead, section metadata and numbered student
rows with no column delimiters. Each line is run through an ordered list of
rules; the first rule that claims the line decides its outcome:

- skip:     letterhead, titles, header fields, column-header row
- metadata: ``Categoría:``, ``Nivel:``, ``Horario:`` and room/course lines
- record:   ``<n> <id 6-12 digits> <name...> [email] [phone]``
- no_match: anything else (silently dropped)

Section metadata is carried forward from the line that sets it to every
following student row of the same document.
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from shared.text_utils import TextPreprocessor

from ..models import SectionMetadata, StudentRecord
from ..normalization import normalize_category, normalize_level, normalize_schedule

SKIP = "skip"
METADATA = "metadata"
RECORD = "record"
NO_MATCH = "no_match"

STUDENT_ROW_REGEX = re.compile(r"^(\d+)\s+(\d{6,12})\s+(.+)$")
PHONE_REGEX = re.compile(r"(\+?\d[\d\s-]{6,}\d)")
SALON_PREFIX_REGEX = re.compile(r"^SAL[ÓO]N:", re.IGNORECASE)
SALON_COURSE_REGEX = re.compile(r"SAL[ÓO]N:\s*([A-Z0-9]+).*CURSO\s*ID:\s*(\d+)", re.IGNORECASE)

SKIP_CONTAINS = ("CENTRO VENEZOLANO", "LISTA DE ALUMNOS")
SKIP_PREFIXES = ("R.I.F", "SEDE:", "FECHA:", "PERIODO:")
ROOM_PREFIXES = ("SALÓN:", "SALON:")
HEADER_KEYWORDS = ("APELLIDOS", "EMAIL")

CATEGORY_LABELS = ("Categoría:", "Categoria:")
LEVEL_LABELS = ("Nivel:",)
SCHEDULE_LABELS = ("Horario:",)


@dataclass
class LineOutcome:
    """Result of classifying one line."""

    kind: str  # "skip" | "metadata" | "record" | "no_match"
    record: Optional[StudentRecord] = None


def _label_value(line: str) -> str:
    return line.split(":", 1)[1].strip() if ":" in line else ""


def is_noise_line(line: str) -> bool:
    """Letterhead, report title, header fields and the column-header row."""
    up = line.upper()
    if any(marker in up for marker in SKIP_CONTAINS):
        return True
    if up.startswith(SKIP_PREFIXES):
        return True
    return all(keyword in up for keyword in HEADER_KEYWORDS)


def is_room_line(line: str) -> bool:
    return line.upper().startswith(ROOM_PREFIXES)


def split_contact(rest: str) -> Tuple[str, str, str]:
    """
    Split the text after the identifier into name, email and phone.

    The name is every token before the first token containing ``@``.
    The phone is the first 7+ digit run after the email, reduced to
    digits and ``+``. Without an email there is no phone either.

    Returns:
        Tuple of (name, email, phone)
    """
    tokens = TextPreprocessor.tokens(rest)

    email = ""
    name_tokens = tokens
    after_tokens: List[str] = []
    for idx, token in enumerate(tokens):
        if "@" in token:
            email = token
            name_tokens = tokens[:idx]
            after_tokens = tokens[idx + 1:]
            break

    name = TextPreprocessor.collapse_spaces(" ".join(name_tokens))

    phone = ""
    match = PHONE_REGEX.search(" ".join(after_tokens))
    if match:
        phone = re.sub(r"[^\d+]", "", match.group(1))

    return name, email, phone


class RosterParser:
    """
    Parse one roster document into StudentRecord objects.

    A fresh SectionMetadata is created for every call, so a parser instance
    can be shared across documents and threads.

    Example:
        >>> parser = RosterParser()
        >>> parser.parse_lines(["Nivel: Level 9", "1 12345678 Ana Diaz ana@x.com"])[0].level_norm
        'L09'
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.rules: Sequence[Callable[[str, SectionMetadata, str], Optional[LineOutcome]]] = (
            self._skip_noise,
            self._room_metadata,
            self._skip_room,
            self._section_metadata,
            self._student_row,
        )

    def parse_text(self, text: str, file_name: str = "") -> List[StudentRecord]:
        """Parse newline separated text (blank lines are ignored)."""
        return self.parse_lines(TextPreprocessor.split_lines(text), file_name)

    def parse_lines(self, lines: Sequence[str], file_name: str = "") -> List[StudentRecord]:
        """
        Parse reconstructed lines of one document.

        Args:
            lines: Lines in reading order
            file_name: Source file name, used only to infer the category
                before any ``Categoría:`` line is seen

        Returns:
            Student records in document order (duplicates kept)
        """
        meta = self.new_metadata(file_name)
        students: List[StudentRecord] = []
        skipped = 0

        for raw_line in lines:
            line = (raw_line or "").strip()
            if not line:
                continue
            outcome = self.classify(line, meta, file_name)
            if outcome.kind == RECORD and outcome.record is not None:
                students.append(outcome.record)
            elif outcome.kind in (SKIP, NO_MATCH):
                skipped += 1

        if self.verbose:
            print(f"[parse] {file_name or '<lines>'}: students={len(students)} skipped={skipped}")
        return students

    @staticmethod
    def new_metadata(file_name: str = "") -> SectionMetadata:
        return SectionMetadata(category=normalize_category("", file_name))

    def classify(self, line: str, meta: SectionMetadata, file_name: str = "") -> LineOutcome:
        """Run the rules in order; metadata rules update ``meta`` in place."""
        for rule in self.rules:
            outcome = rule(line, meta, file_name)
            if outcome is not None:
                return outcome
        return LineOutcome(NO_MATCH)

    # ---- rules -------------------------------------------------------

    def _skip_noise(self, line, meta, file_name):
        if is_noise_line(line):
            return LineOutcome(SKIP)
        return None

    def _room_metadata(self, line, meta, file_name):
        if not SALON_PREFIX_REGEX.match(line):
            return None
        meta.salon_raw = line
        match = SALON_COURSE_REGEX.search(line)
        if match:
            meta.salon = match.group(1)
            meta.course_id = match.group(2)
        return LineOutcome(METADATA)

    def _skip_room(self, line, meta, file_name):
        if is_room_line(line):
            return LineOutcome(SKIP)
        return None

    def _section_metadata(self, line, meta, file_name):
        if line.startswith(CATEGORY_LABELS):
            raw = _label_value(line)
            meta.category_raw = raw
            meta.category = normalize_category(raw, file_name)
        elif line.startswith(LEVEL_LABELS):
            raw = _label_value(line)
            meta.level_raw = raw
            meta.level_norm = normalize_level(raw)
        elif line.startswith(SCHEDULE_LABELS):
            raw = _label_value(line)
            meta.schedule_raw = raw
            meta.schedule_block = normalize_schedule(raw)
        else:
            return None
        # a labelled line may still look like a row; let the row rule decide
        outcome = self._student_row(line, meta, file_name)
        return outcome or LineOutcome(METADATA)

    def _student_row(self, line, meta, file_name):
        match = STUDENT_ROW_REGEX.match(line)
        if not match:
            return None

        student_id = match.group(2)
        name, email, phone = split_contact(match.group(3))
        if not name:
            return LineOutcome(NO_MATCH)

        record = StudentRecord(
            id=student_id,
            name=name,
            email=email,
            phone=phone,
            category=meta.category or "Otra",
            category_raw=meta.category_raw or "",
            level=meta.level_raw or "N/A",
            level_norm=meta.level_norm or "N/A",
            schedule=meta.schedule_raw or "N/A",
            schedule_block=meta.schedule_block or "N/A",
            salon=meta.salon or "",
            course_id=meta.course_id or "",
        )
        return LineOutcome(RECORD, record)


def parse_roster_lines(lines: Sequence[str], file_name: str = "") -> List[StudentRecord]:
    return RosterParser().parse_lines(lines, file_name)


__all__ = [
    "RosterParser",
    "LineOutcome",
    "parse_roster_lines",
    "split_contact",
    "is_noise_line",
    "STUDENT_ROW_REGEX",
]

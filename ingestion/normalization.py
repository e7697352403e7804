"""Normalization of roster section fields (category, level, schedule)."""

import re
from typing import Optional

from shared.text_utils import TextPreprocessor

# Canonical schedule blocks used by the institution, in display order.
SCHEDULE_BLOCKS = (
    "8:30 AM - 10:00 AM",
    "10:30 AM - 12:00 PM",
    "1:00 PM - 2:30 PM",
    "2:45 PM - 4:15 PM",
    "4:30 PM - 6:00 PM",
    "6:15 PM - 7:45 PM",
    "8:00 AM - 10:40 AM",
    "10:50 AM - 1:30 PM",
    "2:30 PM - 5:10 PM",
)

_BLOCKS_BY_KEY = {TextPreprocessor.compact_key(b): b for b in SCHEDULE_BLOCKS}

# Matches "8:30 A 10:00 AM", "10:30 A 12:00 PM", "8:00 AM - 10:40 AM", "1:00 TO 2:30 PM"
TIME_RANGE_REGEX = re.compile(
    r"(\d{1,2}):(\d{2})\s*(AM|PM)?\s*(?:A|TO|-)\s*(\d{1,2}):(\d{2})\s*(AM|PM)",
    re.IGNORECASE,
)
LEVEL_DIGITS_REGEX = re.compile(r"(\d{1,2})")

CATEGORY_KEYWORDS = (
    ("Adultos", ("ADULT",)),
    ("Niños", ("KIDS", "NIÑ", "NIN")),
    ("Jóvenes", ("YOUNG", "JOV", "TEEN")),
)

# Start hours that read as morning when only the end meridiem is printed
# and it is PM (e.g. "10:30 A 12:00 PM").
MORNING_START_HOURS = range(8, 12)


def normalize_level(raw: Optional[str]) -> str:
    """Return ``Lnn`` from the first 1-2 digit run ("Level 9" -> "L09")."""
    match = LEVEL_DIGITS_REGEX.search((raw or "").upper())
    if not match:
        return (raw or "N/A").strip()
    return f"L{match.group(1).zfill(2)}"


def normalize_category(raw: Optional[str], file_name: str = "") -> str:
    """Map a category label (or the file name as fallback) to a known group."""
    source = f"{raw or ''} {file_name or ''}".upper()
    for label, keywords in CATEGORY_KEYWORDS:
        if any(keyword in source for keyword in keywords):
            return label
    return raw.strip() if raw else "Otra"


def infer_start_meridiem(start_hour: int, end_meridiem: str) -> str:
    """
    Resolve a missing start meridiem from the known schedule blocks.

    - end is AM -> start is AM
    - end is PM and start hour is 8..11 -> AM (crosses noon)
    - otherwise PM
    """
    if end_meridiem == "AM":
        return "AM"
    if start_hour in MORNING_START_HOURS:
        return "AM"
    return "PM"


def match_schedule_block(text: str) -> Optional[str]:
    """Return the catalog label equal to ``text`` ignoring case and spacing."""
    return _BLOCKS_BY_KEY.get(TextPreprocessor.compact_key(text))


def normalize_schedule(raw: Optional[str]) -> str:
    """
    Normalize a raw schedule value to a canonical block label.

    Text before the last ``/`` (day or group prefix) is dropped. When a time
    range is found, a ``H:MM AM - H:MM PM`` candidate is built and mapped to
    the catalog; unknown ranges return the candidate itself.

    Args:
        raw: Schedule text, e.g. ``"A / 10:30 A 12:00 PM"``

    Returns:
        Canonical block, best-effort candidate, or the trimmed input
    """
    if not raw:
        return "N/A"

    after_slash = raw.split("/")[-1].strip() if "/" in raw else raw.strip()

    match = TIME_RANGE_REGEX.search(after_slash)
    if not match:
        return match_schedule_block(after_slash) or after_slash

    start_hour = int(match.group(1))
    start_min = match.group(2)
    start_mer = (match.group(3) or "").upper()
    end_hour = int(match.group(4))
    end_min = match.group(5)
    end_mer = match.group(6).upper()

    if not start_mer:
        start_mer = infer_start_meridiem(start_hour, end_mer)

    candidate = f"{start_hour}:{start_min} {start_mer} - {end_hour}:{end_min} {end_mer}"
    return match_schedule_block(candidate) or candidate


__all__ = [
    "SCHEDULE_BLOCKS",
    "normalize_level",
    "normalize_category",
    "normalize_schedule",
    "infer_start_meridiem",
    "match_schedule_block",
]

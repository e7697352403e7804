"""Breakdowns, filters and course risk over lists of students."""

import re
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ingestion.models import StudentRecord
from ingestion.normalization import SCHEDULE_BLOCKS

ALL = "All"

# Course headcount thresholds.
RISK_THRESHOLD = 8
ALERT_THRESHOLD = 5

STATUS_ALERT = "ALERTA"
STATUS_AT_RISK = "EN RIESGO"
STATUS_OK = "OK"


@dataclass
class CourseRisk:
    course_id: str
    salon: str
    students: int
    status: str


def _facet_active(value: Optional[str]) -> bool:
    return bool(value) and value != ALL


def filter_students(
    records: Iterable[StudentRecord],
    query: str = "",
    category: Optional[str] = None,
    level: Optional[str] = None,
    schedule: Optional[str] = None,
) -> List[StudentRecord]:
    """
    Filter students by free-text query and exact facets.

    Args:
        records: Students to filter
        query: Case-insensitive match on name or email, substring on id or phone
        category: Exact category (None or "All" disables)
        level: Exact normalized level (None or "All" disables)
        schedule: Exact schedule block (None or "All" disables)

    Returns:
        Matching students in input order
    """
    q = (query or "").strip().lower()
    out: List[StudentRecord] = []
    for s in records:
        if q and not (
            q in (s.name or "").lower()
            or q in (s.id or "")
            or q in (s.email or "").lower()
            or q in (s.phone or "")
        ):
            continue
        if _facet_active(category) and s.category != category:
            continue
        if _facet_active(level) and s.level_norm != level:
            continue
        if _facet_active(schedule) and s.schedule_block != schedule:
            continue
        out.append(s)
    return out


def filter_options(records: Sequence[StudentRecord]) -> Dict[str, List[str]]:
    """Distinct facet values; known schedule blocks keep catalog order."""
    categories = sorted({s.category for s in records if s.category})
    levels = sorted({s.level_norm for s in records if s.level_norm})
    schedules = {s.schedule_block for s in records if s.schedule_block}

    known = [b for b in SCHEDULE_BLOCKS if b in schedules]
    unknown = sorted(schedules - set(SCHEDULE_BLOCKS))
    return {
        "categories": [ALL] + categories,
        "levels": [ALL] + levels,
        "schedules": [ALL] + known + unknown,
    }


def _level_number(label: str) -> int:
    digits = re.sub(r"\D", "", label or "")
    return int(digits) if digits else 0


def breakdown_by_level(records: Iterable[StudentRecord]) -> List[Tuple[str, int]]:
    """Students per normalized level, ordered by level number."""
    counts = Counter(s.level_norm or "N/A" for s in records)
    return sorted(counts.items(), key=lambda item: _level_number(item[0]))


def breakdown_by_schedule(records: Iterable[StudentRecord]) -> List[Tuple[str, int]]:
    """Students per schedule block, largest first (ties keep first-seen order)."""
    counts = Counter(s.schedule_block or "N/A" for s in records)
    return sorted(counts.items(), key=lambda item: -item[1])


def top_schedule(records: Iterable[StudentRecord]) -> str:
    breakdown = breakdown_by_schedule(records)
    return breakdown[0][0] if breakdown else "N/A"


def course_status(count: int) -> str:
    n = int(count or 0)
    if n < ALERT_THRESHOLD:
        return STATUS_ALERT
    if n < RISK_THRESHOLD:
        return STATUS_AT_RISK
    return STATUS_OK


def course_risk(records: Iterable[StudentRecord]) -> List[CourseRisk]:
    """Headcount and status per course id (students without course are ignored)."""
    counts: Dict[str, int] = {}
    salons: Dict[str, str] = {}
    for s in records:
        if not s.course_id:
            continue
        counts[s.course_id] = counts.get(s.course_id, 0) + 1
        salons.setdefault(s.course_id, s.salon)
    return [
        CourseRisk(course_id, salons[course_id], n, course_status(n))
        for course_id, n in counts.items()
    ]


__all__ = [
    "CourseRisk",
    "filter_students",
    "filter_options",
    "breakdown_by_level",
    "breakdown_by_schedule",
    "top_schedule",
    "course_status",
    "course_risk",
    "RISK_THRESHOLD",
    "ALERT_THRESHOLD",
]

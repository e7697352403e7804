"""Comparison layer for Roster Continuity.

Pure functions over StudentRecord lists.

Rules:
- MAY import ingestion.models, ingestion.normalization, shared
- MUST NOT read files or parse PDFs
"""

from .analysis import (
    CourseRisk,
    breakdown_by_level,
    breakdown_by_schedule,
    course_risk,
    course_status,
    filter_options,
    filter_students,
    top_schedule,
)
from .differ import (
    ComparisonResult,
    RosterDiffer,
    compare_rosters,
    dedupe_by_id,
    is_graduated,
)

__all__ = [
    # Differ
    "ComparisonResult",
    "RosterDiffer",
    "compare_rosters",
    "dedupe_by_id",
    "is_graduated",
    # Analysis
    "CourseRisk",
    "filter_students",
    "filter_options",
    "breakdown_by_level",
    "breakdown_by_schedule",
    "top_schedule",
    "course_status",
    "course_risk",
]

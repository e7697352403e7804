"""Roster comparison: who among last period's students did not come back."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from ingestion.models import StudentRecord

TERMINAL_LEVEL = "L19"


@dataclass
class ComparisonResult:
    """Outcome of comparing an earlier roster against the current one.

    Attributes:
        total_old: Unique students in the earlier roster
        total_new: Unique students in the current roster
        eligible_old: Earlier students below the terminal level
        graduated_old: Earlier students at the terminal level
        reenrolled_count: Eligible students present in the current roster
        reenrolled_pct: reenrolled_count as a rounded percentage of eligible_old
        lost_count: Eligible students missing from the current roster
        lost_pct: lost_count as a rounded percentage of eligible_old
        lost: The missing students, in earlier-roster order
    """

    total_old: int
    total_new: int
    eligible_old: int
    graduated_old: int
    reenrolled_count: int
    reenrolled_pct: int
    lost_count: int
    lost_pct: int
    lost: List[StudentRecord] = field(default_factory=list)
    old_students: List[StudentRecord] = field(default_factory=list)
    new_students: List[StudentRecord] = field(default_factory=list)

    def stats(self) -> Dict[str, int]:
        return {
            "totalOld": self.total_old,
            "totalNew": self.total_new,
            "eligibleOld": self.eligible_old,
            "graduatedOld": self.graduated_old,
            "reenrolled": self.reenrolled_count,
            "reenrolledPct": self.reenrolled_pct,
            "lost": self.lost_count,
            "lostPct": self.lost_pct,
        }

    def to_dict(self) -> Dict[str, object]:
        return {
            "stats": self.stats(),
            "lost": [s.to_dict() for s in self.lost],
        }


def dedupe_by_id(records: Iterable[StudentRecord]) -> List[StudentRecord]:
    """Keep the first record per id, in input order; records without id are dropped."""
    seen = set()
    out: List[StudentRecord] = []
    for record in records:
        if record is None or not record.id:
            continue
        if record.id in seen:
            continue
        seen.add(record.id)
        out.append(record)
    return out


def is_graduated(record: StudentRecord, terminal_level: str = TERMINAL_LEVEL) -> bool:
    return (record.level_norm or "").upper() == terminal_level.upper()


def percentage(count: int, total: int) -> int:
    """Rounded integer percentage (half up); 0 when total is 0."""
    if not total:
        return 0
    return int(count * 100 / total + 0.5)


class RosterDiffer:
    """
    Classify earlier-period students as re-enrolled or lost.

    Students at the terminal level finished the program and are not
    expected back, so they are excluded before matching by id.

    Example:
        >>> result = RosterDiffer().compare(old_students, new_students)
        >>> result.lost_count
    """

    def __init__(self, terminal_level: str = TERMINAL_LEVEL, verbose: bool = False):
        self.terminal_level = terminal_level
        self.verbose = verbose

    def compare(
        self,
        old: Iterable[StudentRecord],
        new: Iterable[StudentRecord],
    ) -> ComparisonResult:
        """
        Compare two rosters. Inputs are not modified.

        Args:
            old: Records parsed from the earlier roster
            new: Records parsed from the current roster

        Returns:
            ComparisonResult with counts and the lost students
        """
        old_unique = dedupe_by_id(old)
        new_unique = dedupe_by_id(new)
        new_ids = {s.id for s in new_unique}

        eligible = [s for s in old_unique if not is_graduated(s, self.terminal_level)]
        reenrolled = [s for s in eligible if s.id in new_ids]
        lost = [s for s in eligible if s.id not in new_ids]

        result = ComparisonResult(
            total_old=len(old_unique),
            total_new=len(new_unique),
            eligible_old=len(eligible),
            graduated_old=len(old_unique) - len(eligible),
            reenrolled_count=len(reenrolled),
            reenrolled_pct=percentage(len(reenrolled), len(eligible)),
            lost_count=len(lost),
            lost_pct=percentage(len(lost), len(eligible)),
            lost=lost,
            old_students=old_unique,
            new_students=new_unique,
        )
        if self.verbose:
            print(
                f"[compare] old={result.total_old} new={result.total_new} "
                f"eligible={result.eligible_old} reenrolled={result.reenrolled_count} lost={result.lost_count}"
            )
        return result


def compare_rosters(
    old: Iterable[StudentRecord],
    new: Iterable[StudentRecord],
    terminal_level: str = TERMINAL_LEVEL,
) -> ComparisonResult:
    return RosterDiffer(terminal_level).compare(old, new)


__all__ = [
    "ComparisonResult",
    "RosterDiffer",
    "compare_rosters",
    "dedupe_by_id",
    "is_graduated",
    "percentage",
    "TERMINAL_LEVEL",
]

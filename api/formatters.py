"""Console and JSON rendering of comparison results."""

import json
from typing import List, Optional, Sequence

from comparison import (
    ComparisonResult,
    CourseRisk,
    breakdown_by_level,
    breakdown_by_schedule,
    top_schedule,
)
from ingestion import StudentRecord


class ResponseFormatter:
    """Format results for the terminal (plain text) or for scripts (JSON)."""

    @staticmethod
    def students_json(students: Sequence[StudentRecord]) -> str:
        return json.dumps([s.to_dict() for s in students], ensure_ascii=False, indent=2)

    @staticmethod
    def result_json(
        result: ComparisonResult,
        lost: Optional[Sequence[StudentRecord]] = None,
        courses: Optional[Sequence[CourseRisk]] = None,
    ) -> str:
        payload = result.to_dict()
        if lost is not None:
            payload["lost"] = [s.to_dict() for s in lost]
        if courses is not None:
            payload["courses"] = [
                {"courseId": c.course_id, "salon": c.salon, "students": c.students, "status": c.status}
                for c in courses
            ]
        return json.dumps(payload, ensure_ascii=False, indent=2)

    @staticmethod
    def result_text(result: ComparisonResult, lost: Optional[Sequence[StudentRecord]] = None) -> str:
        lost = result.lost if lost is None else lost
        lines: List[str] = [
            f"Earlier roster:   {result.total_old} students",
            f"Current roster:   {result.total_new} students",
            f"Eligible:         {result.eligible_old} (graduated excluded: {result.graduated_old})",
            f"Re-enrolled:      {result.reenrolled_count} ({result.reenrolled_pct}%)",
            f"Lost:             {result.lost_count} ({result.lost_pct}%)",
            f"Top schedule:     {top_schedule(result.lost)}",
            "",
            "Lost by level:",
        ]
        for level, count in breakdown_by_level(result.lost):
            lines.append(f"  {level:<8} {count}")
        lines.append("Lost by schedule:")
        for block, count in breakdown_by_schedule(result.lost):
            lines.append(f"  {block:<20} {count}")
        lines.append("")
        lines.append(f"Students ({len(lost)} shown):")
        for s in lost:
            lines.append(ResponseFormatter.student_line(s))
        return "\n".join(lines)

    @staticmethod
    def student_line(s: StudentRecord) -> str:
        contact = " ".join(part for part in (s.email, s.phone) if part)
        return f"  {s.id:<12} {s.name:<32} {s.category:<8} {s.level_norm:<5} {s.schedule_block:<20} {contact}".rstrip()

    @staticmethod
    def courses_text(courses: Sequence[CourseRisk]) -> str:
        lines = ["Courses:"]
        for c in courses:
            lines.append(f"  {c.course_id:<10} {c.salon or '-':<6} {c.students:>3}  {c.status}")
        return "\n".join(lines)


__all__ = ["ResponseFormatter"]

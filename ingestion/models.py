"""Data models for ingestion layer."""

from dataclasses import asdict, dataclass
from typing import Dict


@dataclass(frozen=True)
class GlyphFragment:
    """
    Positioned text run as reported by a PDF text-content API.

    Coordinates use the PDF convention (origin bottom-left), so a larger
    ``y`` means higher on the page.
    """

    text: str
    x: float
    y: float
    width: float = 0.0

    @property
    def right(self) -> float:
        return self.x + (self.width or 0.0)


@dataclass
class SectionMetadata:
    """
    Section fields in effect while scanning one document.

    Values set by a metadata line are carried forward to every following
    student row until another metadata line overwrites them.
    """

    category: str = ""
    category_raw: str = ""
    level_norm: str = ""
    level_raw: str = ""
    schedule_block: str = ""
    schedule_raw: str = ""
    salon_raw: str = ""
    salon: str = ""
    course_id: str = ""


@dataclass(frozen=True)
class StudentRecord:
    """One student row recognized in a roster."""

    id: str
    name: str
    email: str = ""
    phone: str = ""
    category: str = "Otra"
    category_raw: str = ""
    level: str = "N/A"  # raw level text
    level_norm: str = "N/A"
    schedule: str = "N/A"  # raw schedule text
    schedule_block: str = "N/A"
    salon: str = ""
    course_id: str = ""

    def to_dict(self) -> Dict[str, str]:
        data = asdict(self)
        return {
            "id": data["id"],
            "name": data["name"],
            "email": data["email"],
            "phone": data["phone"],
            "category": data["category"],
            "categoryRaw": data["category_raw"],
            "level": data["level"],
            "levelNorm": data["level_norm"],
            "schedule": data["schedule"],
            "scheduleBlock": data["schedule_block"],
            "salon": data["salon"],
            "courseId": data["course_id"],
        }


__all__ = ["GlyphFragment", "SectionMetadata", "StudentRecord"]

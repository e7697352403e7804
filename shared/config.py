import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


PDF_BACKEND_DEFAULT = "pymupdf"
TERMINAL_LEVEL_DEFAULT = "L19"


@dataclass
class RosterConfig:
    """Configuration for roster extraction and comparison."""

    pdf_backend: str
    line_gap_threshold: float
    terminal_level: str
    verbose: bool
    max_workers: int


def _parse_int(value: Optional[str], default: int = 0) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _parse_float(value: Optional[str], default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes", "y", "on")


def load_config() -> RosterConfig:
    """Load configuration from environment variables."""
    load_dotenv()

    max_workers = _parse_int(os.getenv("MAX_WORKERS"), 2)
    if max_workers < 1:
        max_workers = 1

    config = RosterConfig(
        pdf_backend=os.getenv("PDF_BACKEND", PDF_BACKEND_DEFAULT).lower(),
        line_gap_threshold=_parse_float(os.getenv("LINE_GAP_THRESHOLD"), 2.0),
        terminal_level=os.getenv("TERMINAL_LEVEL", TERMINAL_LEVEL_DEFAULT).upper(),
        verbose=_parse_bool(os.getenv("ROSTER_VERBOSE", "false"), False),
        max_workers=max_workers,
    )
    return config


__all__ = ["RosterConfig", "load_config"]

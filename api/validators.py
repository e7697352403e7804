"""Request validation for the CLI."""

import os
import re

from ingestion.parsers.pdf import BACKENDS

LEVEL_REGEX = re.compile(r"^L\d{2}$", re.IGNORECASE)


class ValidationError(ValueError):
    """Invalid user input."""


class RequestValidator:
    """Validate CLI arguments before any PDF is opened."""

    @staticmethod
    def validate_pdf_path(path: str) -> str:
        if not path:
            raise ValidationError("PDF path is required")
        if not path.lower().endswith(".pdf"):
            raise ValidationError(f"Not a PDF file: {path}")
        if not os.path.isfile(path):
            raise ValidationError(f"File not found: {path}")
        return path

    @staticmethod
    def validate_terminal_level(level: str) -> str:
        if not level or not LEVEL_REGEX.match(level):
            raise ValidationError(f"Terminal level must look like L19, got: {level!r}")
        return level.upper()

    @staticmethod
    def validate_backend(backend: str) -> str:
        backend = (backend or "").lower()
        if backend not in BACKENDS:
            raise ValidationError(f"Invalid backend: {backend!r} (choose from {', '.join(BACKENDS)})")
        return backend


__all__ = ["RequestValidator", "ValidationError"]

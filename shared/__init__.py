"""Shared utilities and configuration for Roster Continuity."""

from .config import RosterConfig, load_config
from .exceptions import EmptyRosterError, ExtractionError, SharedError
from .text_utils import TextPreprocessor

__all__ = [
    "load_config",
    "RosterConfig",
    "SharedError",
    "ExtractionError",
    "EmptyRosterError",
    "TextPreprocessor",
]

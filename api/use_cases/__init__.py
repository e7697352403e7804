"""Use case orchestration for Roster Continuity."""

from .compare import CompareRostersUseCase

__all__ = ["CompareRostersUseCase"]

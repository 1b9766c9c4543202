"""Character data consumed from the character-sheet collaborator."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SpeedStat:
    """Speed statistic as stored on a character sheet."""

    base: float
    bonus: float = 0
    gain: float = 1


@dataclass(frozen=True, slots=True)
class Character:
    """Read-only view of a character sheet as seen by the scheduler."""

    id: str
    name: str
    level: int = 1
    speed: SpeedStat | None = None

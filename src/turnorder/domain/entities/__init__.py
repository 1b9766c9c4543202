"""Runtime entity exports."""

from .character import Character, SpeedStat

__all__ = [
    "Character",
    "SpeedStat",
]

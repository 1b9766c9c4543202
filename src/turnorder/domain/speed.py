"""Speed resolution helpers for turn scheduling."""
from __future__ import annotations

import logging
import math

from turnorder.core.constants import DEFAULT_SPEED, MIN_SPEED, PERIOD_NUMERATOR
from turnorder.domain.entities import Character

logger = logging.getLogger(__name__)


def resolve_speed(character: Character) -> int:
    """
    Derive a combatant speed from a character sheet.

    Speed is ``base + bonus + level / gain`` floored, with ``gain`` treated as 1
    when it is zero. Characters without a speed statistic, or whose statistic
    evaluates to zero or a non-finite number, get DEFAULT_SPEED. Negative
    results are clamped to MIN_SPEED so the value is always usable as a divisor.
    """
    stat = character.speed
    if stat is None:
        return DEFAULT_SPEED
    gain = stat.gain or 1
    try:
        calculated = stat.base + stat.bonus + (character.level or 0) / gain
    except TypeError:
        logger.debug("Unreadable speed stat for %s, using default", character.id)
        return DEFAULT_SPEED
    if not math.isfinite(calculated):
        return DEFAULT_SPEED
    speed = math.floor(calculated)
    if not speed:
        return DEFAULT_SPEED
    return clamp_speed(speed)


def clamp_speed(speed: object) -> int:
    """Return a positive integer speed, treating malformed values as MIN_SPEED."""
    if isinstance(speed, bool) or not isinstance(speed, (int, float)) or not math.isfinite(speed):
        logger.debug("Malformed speed %r clamped to %d", speed, MIN_SPEED)
        return MIN_SPEED
    if speed < MIN_SPEED:
        logger.debug("Speed %r clamped to %d", speed, MIN_SPEED)
        return MIN_SPEED
    return int(speed)


def turn_period(speed: object) -> float:
    """Schedule units between two consecutive turns at the given speed."""
    return PERIOD_NUMERATOR / clamp_speed(speed)

"""Scheduling constants shared by the simulator, mutators and projector."""
from __future__ import annotations

# A combatant with speed S acts every PERIOD_NUMERATOR / S schedule units.
PERIOD_NUMERATOR = 1000.0
DEFAULT_SPEED = 10
MIN_SPEED = 1

ADD_GAP = 10
REORDER_GAP = 10
ANCHOR_TOLERANCE = 1e-3

QUEUE_STEPS = 50
ORDER_WALK_STEPS = 10
TIMELINE_LENGTH = 12

LOCKED_PREFIX_OFFSET = 10000

DEFAULT_TEAM = "blue"
KNOWN_TEAMS = ("blue", "red", "green", "yellow", "purple", "orange")

TURN_SEPARATOR = " & "

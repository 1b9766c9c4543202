"""UI-agnostic controllers for battle tracker orchestration."""
from __future__ import annotations

from .battle_tracker_controller import BattleTrackerController, TrackerAction, TrackerActionType

__all__ = [
    "BattleTrackerController",
    "TrackerAction",
    "TrackerActionType",
]

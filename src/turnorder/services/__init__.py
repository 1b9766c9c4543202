"""Service layer exports."""

from .queue_simulator import group_turns, simulate, simulate_turns, walk_turn_order
from .schedule_service import AvailableCharacter, ScheduleService
from .timeline_projector import project, project_tiles
from .controllers import BattleTrackerController, TrackerAction, TrackerActionType

__all__ = [
    "AvailableCharacter",
    "BattleTrackerController",
    "ScheduleService",
    "TrackerAction",
    "TrackerActionType",
    "group_turns",
    "project",
    "project_tiles",
    "simulate",
    "simulate_turns",
    "walk_turn_order",
]

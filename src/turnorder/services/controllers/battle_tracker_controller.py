"""UI-agnostic battle tracker controller that separates roster updates from publishing."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Literal

from turnorder.core.constants import QUEUE_STEPS, TIMELINE_LENGTH
from turnorder.core.types import CommitRoster
from turnorder.domain.battle_models import BattleGroup, Roster, TimelineView
from turnorder.services.schedule_service import ScheduleService
from turnorder.services.timeline_projector import project

logger = logging.getLogger(__name__)

TrackerActionType = Literal[
    "add",
    "remove",
    "advance",
    "reset",
    "refresh",
    "sync",
    "set_order",
    "reorder",
    "team",
    "lock",
]


@dataclass(slots=True)
class TrackerAction:
    """Represents a structured GM decision against the roster."""

    action_type: TrackerActionType
    character_id: str | None = None
    target_id: str | None = None
    index: int | None = None
    team: str | None = None


class BattleTrackerController:
    """
    UI-agnostic controller for battle roster progression.

    Wraps ScheduleService and the projector, and hands every changed roster
    to the injected commit capability (optimistic local apply plus broadcast
    in the hosting application).

    Non-responsibilities (handled by the host):
    - Storing the roster between calls
    - Replicating or persisting committed rosters
    - Rendering
    """

    def __init__(self, service: ScheduleService, commit: CommitRoster) -> None:
        self._service = service
        self._commit = commit

    def get_queue(self, roster: Roster, steps: int = QUEUE_STEPS) -> List[BattleGroup]:
        return self._service.simulate(roster, steps)

    def get_timeline(self, roster: Roster, timeline_length: int = TIMELINE_LENGTH) -> TimelineView:
        return project(roster, timeline_length)

    def apply_action(self, roster: Roster, action: TrackerAction) -> Roster:
        """Apply a GM action and commit the result when the roster changed."""
        updated = self._dispatch(roster, action)
        if updated is roster:
            logger.debug("Action %s left the roster unchanged", action.action_type)
            return roster
        self._commit(updated)
        return updated

    def _dispatch(self, roster: Roster, action: TrackerAction) -> Roster:
        service = self._service
        character_id = action.character_id or ""
        kind = action.action_type
        if kind == "advance":
            return service.advance_turn(roster)
        if kind == "reset":
            return service.reset(roster)
        if kind == "refresh":
            return service.refresh_speeds(roster)
        if kind == "lock":
            return service.set_locked_prefix(roster, action.index or 0)
        if not character_id:
            return roster
        if kind == "add":
            return service.add(roster, character_id)
        if kind == "remove":
            return service.remove(roster, character_id)
        if kind == "sync":
            return service.sync_turns(roster, character_id, action.target_id or "")
        if kind == "set_order":
            if action.index is None:
                return roster
            return service.set_turn_order(roster, character_id, action.index)
        if kind == "reorder":
            if action.index is None:
                return roster
            return service.reorder_participants(roster, character_id, action.index)
        if kind == "team":
            if not action.team:
                return roster
            return service.change_team(roster, character_id, action.team)
        return roster

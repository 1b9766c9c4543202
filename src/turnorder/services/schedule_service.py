"""Roster mutators for the battle turn-order tracker."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List

from turnorder.core.constants import (
    ADD_GAP,
    DEFAULT_TEAM,
    ORDER_WALK_STEPS,
    QUEUE_STEPS,
    REORDER_GAP,
)
from turnorder.core.types import CharacterLookup
from turnorder.domain.battle_models import BattleGroup, Combatant, Roster
from turnorder.domain.speed import clamp_speed, resolve_speed, turn_period
from turnorder.services.queue_simulator import simulate, walk_turn_order

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AvailableCharacter:
    """Entry in the list of characters that can join a battle."""

    id: str
    name: str
    speed: int


class ScheduleService:
    """
    Pure roster mutators backed by a character lookup.

    Every mutator takes a roster snapshot and returns a new one. When a
    precondition is not met the input roster is returned unchanged (the same
    object), so callers can skip publishing it.
    """

    def __init__(self, lookup: CharacterLookup) -> None:
        self._lookup = lookup

    # -----------------------
    # Queries
    # -----------------------
    def fresh_speed(self, combatant: Combatant) -> int:
        """Live speed for a combatant, falling back to its cached speed."""
        character = self._lookup(combatant.character_id)
        if character is None:
            return clamp_speed(combatant.speed)
        return resolve_speed(character)

    def simulate(self, roster: Roster, steps: int = QUEUE_STEPS) -> List[BattleGroup]:
        """Grouped queue projection using live speeds where available."""
        speeds = {c.character_id: self.fresh_speed(c) for c in roster.combatants}
        return simulate(roster, steps, speeds=speeds)

    def available_characters(self, character_ids: Iterable[str]) -> List[AvailableCharacter]:
        available: List[AvailableCharacter] = []
        for character_id in character_ids:
            character = self._lookup(character_id)
            if character is None:
                continue
            available.append(
                AvailableCharacter(
                    id=character_id,
                    name=character.name or character_id,
                    speed=resolve_speed(character),
                )
            )
        return available

    # -----------------------
    # Membership
    # -----------------------
    def add(self, roster: Roster, character_id: str) -> Roster:
        character = self._lookup(character_id)
        if character is None:
            logger.debug("add: unknown character %s", character_id)
            return roster
        if character_id in roster:
            logger.debug("add: %s already in battle", character_id)
            return roster

        speed = resolve_speed(character)
        latest = max((c.next_turn_at for c in roster.combatants), default=0)
        combatant = Combatant(
            character_id=character_id,
            name=character.name or character_id,
            speed=speed,
            turn_frequency=speed,
            next_turn_at=max(latest, 0) + ADD_GAP,
            team=DEFAULT_TEAM,
        )
        logger.debug("add: %s joins at %s", character_id, combatant.next_turn_at)
        return roster.with_combatants(roster.combatants + (combatant,))

    def remove(self, roster: Roster, character_id: str) -> Roster:
        if character_id not in roster:
            logger.debug("remove: %s not in battle", character_id)
            return roster
        logger.debug("remove: %s", character_id)
        return roster.with_combatants([c for c in roster.combatants if c.character_id != character_id])

    # -----------------------
    # Turn progression
    # -----------------------
    def advance_turn(self, roster: Roster) -> Roster:
        """Move every member of the imminent group one period forward."""
        queue = self.simulate(roster)
        if not queue:
            return roster
        acting = set(queue[0].character_ids)
        logger.debug("advance_turn: %s act at %s", sorted(acting), queue[0].start_time)

        def _advance(combatant: Combatant, speed: int) -> Combatant:
            if combatant.character_id in acting:
                return combatant.with_changes(speed=speed, next_turn_at=combatant.next_turn_at + turn_period(speed))
            return combatant.with_changes(speed=speed)

        return self._map_with_speed(roster, _advance)

    def reset(self, roster: Roster) -> Roster:
        if roster.is_empty:
            return roster
        return self._map_with_speed(roster, lambda c, speed: c.with_changes(speed=speed, next_turn_at=0))

    def refresh_speeds(self, roster: Roster) -> Roster:
        if roster.is_empty:
            return roster
        return self._map_with_speed(roster, lambda c, speed: c.with_changes(speed=speed))

    # -----------------------
    # Manual ordering
    # -----------------------
    def sync_turns(self, roster: Roster, source_id: str, target_id: str) -> Roster:
        """Pin the source's next turn to exactly the target's."""
        target = roster.get(target_id)
        if target is None or source_id not in roster:
            return roster
        return self._set_next_turn(roster, source_id, target.next_turn_at)

    def set_turn_order(self, roster: Roster, character_id: str, position: int) -> Roster:
        """Give a combatant the time of the raw turn at ``position`` in a short greedy walk."""
        if character_id not in roster:
            return roster
        walk = walk_turn_order(roster, ORDER_WALK_STEPS)
        if not 0 <= position < len(walk):
            logger.debug("set_turn_order: position %s out of range", position)
            return roster
        return self._set_next_turn(roster, character_id, walk[position].time)

    def reorder_participants(self, roster: Roster, character_id: str, new_index: int) -> Roster:
        """Move a combatant to ``new_index`` in the grouped queue."""
        if character_id not in roster:
            return roster
        queue = self.simulate(roster)
        if not queue:
            return roster
        if new_index <= 0:
            target = queue[0].start_time - REORDER_GAP
        elif new_index >= len(queue):
            target = queue[-1].start_time + REORDER_GAP
        else:
            target = (queue[new_index - 1].start_time + queue[new_index].start_time) / 2
        return self._set_next_turn(roster, character_id, target)

    def change_team(self, roster: Roster, character_id: str, team: str) -> Roster:
        if character_id not in roster:
            return roster
        return roster.with_combatants(
            [c.with_changes(team=team) if c.character_id == character_id else c for c in roster.combatants]
        )

    def set_locked_prefix(self, roster: Roster, count: int) -> Roster:
        return Roster(combatants=roster.combatants, locked_prefix_length=max(0, count))

    # -----------------------
    # Helpers
    # -----------------------
    def _map_with_speed(self, roster: Roster, update: Callable[[Combatant, int], Combatant]) -> Roster:
        return roster.with_combatants([update(c, self.fresh_speed(c)) for c in roster.combatants])

    def _set_next_turn(self, roster: Roster, character_id: str, next_turn_at: float) -> Roster:
        logger.debug("%s next turn set to %s", character_id, next_turn_at)
        return roster.with_combatants(
            [
                c.with_changes(next_turn_at=next_turn_at) if c.character_id == character_id else c
                for c in roster.combatants
            ]
        )

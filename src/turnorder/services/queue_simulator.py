"""Discrete-event projection of upcoming battle turns."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Sequence

from turnorder.core.constants import ANCHOR_TOLERANCE, DEFAULT_TEAM, ORDER_WALK_STEPS, QUEUE_STEPS
from turnorder.domain.battle_models import BattleGroup, Combatant, Roster, SimulatedTurn
from turnorder.domain.grouping import build_groups
from turnorder.domain.speed import clamp_speed, turn_period


@dataclass(slots=True)
class _Cursor:
    combatant: Combatant
    speed: int
    current_turn_at: float


def _earliest(cursors: Sequence[_Cursor]) -> _Cursor:
    # Linear scan; strict comparison keeps the first-listed combatant on ties.
    best = cursors[0]
    for cursor in cursors[1:]:
        if cursor.current_turn_at < best.current_turn_at:
            best = cursor
    return best


def simulate_turns(
    roster: Roster,
    steps: int = QUEUE_STEPS,
    *,
    speeds: Mapping[str, int] | None = None,
) -> List[SimulatedTurn]:
    """
    Project ``steps`` turns in the order they would happen.

    ``speeds`` overrides the cached speed per character id. Returns an empty
    list for an empty roster.
    """
    if roster.is_empty or steps <= 0:
        return []
    overrides = speeds or {}
    cursors = [
        _Cursor(
            combatant=c,
            speed=clamp_speed(overrides.get(c.character_id, c.speed)),
            current_turn_at=c.next_turn_at,
        )
        for c in roster.combatants
    ]

    turns: List[SimulatedTurn] = []
    for _ in range(steps):
        cursor = _earliest(cursors)
        time = cursor.current_turn_at
        turns.append(
            SimulatedTurn(
                character_id=cursor.combatant.character_id,
                name=cursor.combatant.name,
                team=cursor.combatant.team or DEFAULT_TEAM,
                time=time,
                is_anchor=abs(cursor.combatant.next_turn_at - time) < ANCHOR_TOLERANCE,
                speed=cursor.speed,
            )
        )
        cursor.current_turn_at += turn_period(cursor.speed)
    return turns


def group_turns(turns: Sequence[SimulatedTurn]) -> List[BattleGroup]:
    return build_groups(turns, lambda run, team, start: BattleGroup(turns=run, team=team, start_time=start))


def simulate(
    roster: Roster,
    steps: int = QUEUE_STEPS,
    *,
    speeds: Mapping[str, int] | None = None,
) -> List[BattleGroup]:
    """Project upcoming turns and collapse them into simultaneous-action groups."""
    return group_turns(simulate_turns(roster, steps, speeds=speeds))


def walk_turn_order(roster: Roster, steps: int = ORDER_WALK_STEPS) -> List[SimulatedTurn]:
    """
    Ungrouped greedy walk used for positional turn assignment.

    Uses only cached speeds and may list the same combatant several times.
    The working list is re-sorted by time before every pick, so ties go to
    whichever combatant the previous sort left first rather than to roster
    order. Its positions can disagree with the grouped queue once two
    combatants share a team, since grouping merges their turns into one entry.
    """
    if roster.is_empty or steps <= 0:
        return []
    cursors = [
        _Cursor(combatant=c, speed=clamp_speed(c.speed), current_turn_at=c.next_turn_at)
        for c in roster.combatants
    ]
    turns: List[SimulatedTurn] = []
    for _ in range(steps):
        cursors.sort(key=lambda cur: cur.current_turn_at)
        cursor = cursors[0]
        turns.append(
            SimulatedTurn(
                character_id=cursor.combatant.character_id,
                name=cursor.combatant.name,
                team=cursor.combatant.team or DEFAULT_TEAM,
                time=cursor.current_turn_at,
                is_anchor=abs(cursor.combatant.next_turn_at - cursor.current_turn_at) < ANCHOR_TOLERANCE,
                speed=cursor.speed,
            )
        )
        cursor.current_turn_at += turn_period(cursor.speed)
    return turns

"""Read-only spectator timeline with a GM-scripted prefix."""
from __future__ import annotations

from typing import Dict, List

from turnorder.core.constants import DEFAULT_TEAM, PERIOD_NUMERATOR, TIMELINE_LENGTH, TURN_SEPARATOR
from turnorder.core.types import CharacterLookup
from turnorder.domain.battle_models import Combatant, DisplayGroup, DisplayTile, Roster, TimelineView
from turnorder.domain.grouping import split_into_runs
from turnorder.domain.speed import clamp_speed, resolve_speed


def _tile(combatant: Combatant, speed: int, turn_number: int) -> DisplayTile:
    return DisplayTile(
        character_id=combatant.character_id,
        name=combatant.name,
        team=combatant.team or DEFAULT_TEAM,
        time=turn_number * PERIOD_NUMERATOR / speed,
        speed=speed,
        turn_number=turn_number,
    )


def project_tiles(
    roster: Roster,
    timeline_length: int = TIMELINE_LENGTH,
    *,
    lookup: CharacterLookup | None = None,
) -> List[DisplayTile]:
    """
    Build the flat spectator timeline.

    The first tile of every combatant is emitted in saved turn order. Further
    tiles are filled greedily by projected time until the timeline is full or
    the iteration cap of twice the timeline length is reached. The leading
    ``locked`` tiles keep their saved order; the rest are sorted by time.
    """
    if roster.is_empty or timeline_length <= 0:
        return []

    ordered = roster.sorted_by_turn()
    locked = roster.effective_locked_count()
    speeds: Dict[str, int] = {}
    for combatant in ordered:
        character = lookup(combatant.character_id) if lookup is not None else None
        speeds[combatant.character_id] = (
            resolve_speed(character) if character is not None else clamp_speed(combatant.speed)
        )

    tiles: List[DisplayTile] = []
    turns_taken: Dict[str, int] = {}
    for combatant in ordered:
        if len(tiles) >= timeline_length:
            break
        tiles.append(_tile(combatant, speeds[combatant.character_id], 1))
        turns_taken[combatant.character_id] = 1

    iterations = 0
    while len(tiles) < timeline_length and iterations < 2 * timeline_length:
        iterations += 1
        best: Combatant | None = None
        best_time = 0.0
        for combatant in ordered:
            speed = speeds[combatant.character_id]
            projected = (turns_taken.get(combatant.character_id, 0) + 1) * PERIOD_NUMERATOR / speed
            if best is None or projected < best_time:
                best, best_time = combatant, projected
        if best is None:
            break
        turn_number = turns_taken.get(best.character_id, 0) + 1
        turns_taken[best.character_id] = turn_number
        tiles.append(_tile(best, speeds[best.character_id], turn_number))

    scripted = tiles[:locked]
    calculated = sorted(tiles[locked:], key=lambda tile: tile.time)
    return [
        DisplayTile(
            character_id=tile.character_id,
            name=tile.name,
            team=tile.team,
            time=tile.time,
            speed=tile.speed,
            turn_number=tile.turn_number,
            is_scripted=index < locked,
        )
        for index, tile in enumerate(scripted + calculated)
    ]


def project(
    roster: Roster,
    timeline_length: int = TIMELINE_LENGTH,
    *,
    lookup: CharacterLookup | None = None,
) -> TimelineView:
    """Project the spectator timeline as display groups plus the current-turn caption."""
    tiles = project_tiles(roster, timeline_length, lookup=lookup)
    locked = roster.effective_locked_count()

    groups: List[DisplayGroup] = []
    offset = 0
    for run in split_into_runs(tiles):
        groups.append(
            DisplayGroup(
                tiles=tuple(run),
                team=run[0].team,
                start_time=run[0].time,
                is_scripted=offset < locked,
            )
        )
        offset += len(run)

    current = TURN_SEPARATOR.join(tile.name for tile in groups[0].tiles) if groups else None
    return TimelineView(groups=tuple(groups), current_turn_display=current)

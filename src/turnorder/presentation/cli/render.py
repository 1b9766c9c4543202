"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
from typing import List, Sequence

from turnorder.domain.battle_models import BattleGroup, Roster, TimelineView


def debug_enabled() -> bool:
    """Return True only when TURNORDER_DEBUG is explicitly set to '1'."""
    return os.getenv("TURNORDER_DEBUG") == "1"


def format_time(value: float) -> str:
    return f"{value:.1f}"


def format_queue(groups: Sequence[BattleGroup], *, limit: int = 10) -> List[str]:
    """Return one line per upcoming group, marking anchor turns with '*'."""
    lines: List[str] = []
    for idx, group in enumerate(groups[:limit]):
        names = ", ".join(f"{turn.name}{'*' if turn.is_anchor else ''}" for turn in group.turns)
        line = f"{idx}. [{group.team}] {names}"
        if debug_enabled():
            line += f" @ {format_time(group.start_time)}"
        lines.append(line)
    return lines


def format_timeline(view: TimelineView) -> List[str]:
    """Return the spectator timeline, with scripted groups flagged."""
    lines: List[str] = []
    if view.current_turn_display:
        lines.append(f"Now: {view.current_turn_display}")
    for group in view.groups:
        marker = "#" if group.is_scripted else "-"
        tiles = ", ".join(tile.id if debug_enabled() else tile.name for tile in group.tiles)
        lines.append(f"{marker} [{group.team}] {tiles}")
    return lines


def format_roster(roster: Roster) -> List[str]:
    if roster.is_empty:
        return ["(no combatants)"]
    return [
        f"{c.character_id}: {c.name} speed={c.speed} next={format_time(c.next_turn_at)} team={c.team}"
        for c in roster.sorted_by_turn()
    ]


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_lines(title: str, lines: Sequence[str]) -> None:
    render_heading(title)
    for line in lines:
        print(line)

"""Collapse ordered turns into simultaneous-action groups."""
from __future__ import annotations

from typing import Callable, List, Protocol, Sequence, Tuple, TypeVar


class TurnLike(Protocol):
    @property
    def character_id(self) -> str: ...

    @property
    def team(self) -> str: ...

    @property
    def time(self) -> float: ...


T = TypeVar("T", bound=TurnLike)
G = TypeVar("G")


def split_into_runs(turns: Sequence[T]) -> List[List[T]]:
    """
    Split ordered turns into runs of same-team turns.

    A new run starts when the team changes or when the character already has
    a turn in the current run.
    """
    runs: List[List[T]] = []
    current: List[T] = []
    members: set[str] = set()
    for turn in turns:
        if current and (turn.team != current[0].team or turn.character_id in members):
            runs.append(current)
            current = []
            members = set()
        current.append(turn)
        members.add(turn.character_id)
    if current:
        runs.append(current)
    return runs


def build_groups(turns: Sequence[T], make_group: Callable[[Tuple[T, ...], str, float], G]) -> List[G]:
    """Group turns and build one value per run via ``make_group(turns, team, start_time)``."""
    return [make_group(tuple(run), run[0].team, run[0].time) for run in split_into_runs(turns)]

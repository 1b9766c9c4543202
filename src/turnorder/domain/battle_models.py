"""Battle roster and turn-order view models."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Tuple

from turnorder.core.constants import DEFAULT_TEAM, LOCKED_PREFIX_OFFSET


@dataclass(frozen=True, slots=True)
class Combatant:
    """Represents a character's entry in the battle roster."""

    character_id: str
    name: str
    speed: int
    next_turn_at: float
    team: str = DEFAULT_TEAM
    turn_frequency: int = 0

    def with_changes(self, **changes: object) -> Combatant:
        return replace(self, **changes)


@dataclass(frozen=True, slots=True)
class Roster:
    """
    Immutable snapshot of every combatant in a battle.

    ``locked_prefix_length`` is the number of leading timeline tiles a GM has
    scripted. When it is ``None`` the count is decoded from the legacy
    ``turn_frequency`` marker on the earliest-scheduled combatant.
    """

    combatants: Tuple[Combatant, ...] = ()
    locked_prefix_length: int | None = None

    def __len__(self) -> int:
        return len(self.combatants)

    def __iter__(self):
        return iter(self.combatants)

    @property
    def is_empty(self) -> bool:
        return not self.combatants

    def get(self, character_id: str) -> Combatant | None:
        for combatant in self.combatants:
            if combatant.character_id == character_id:
                return combatant
        return None

    def __contains__(self, character_id: object) -> bool:
        return any(c.character_id == character_id for c in self.combatants)

    def sorted_by_turn(self) -> list[Combatant]:
        """Return combatants ordered by next turn, keeping roster order for ties."""
        return sorted(self.combatants, key=lambda c: c.next_turn_at)

    def effective_locked_count(self) -> int:
        if self.locked_prefix_length is not None:
            return max(0, self.locked_prefix_length)
        ordered = self.sorted_by_turn()
        if not ordered:
            return 0
        return decode_locked_count(ordered[0].turn_frequency)

    def with_combatants(self, combatants: Tuple[Combatant, ...] | list[Combatant]) -> Roster:
        return Roster(combatants=tuple(combatants), locked_prefix_length=self.locked_prefix_length)


def decode_locked_count(turn_frequency: int) -> int:
    """Decode the legacy locked-prefix marker stored in ``turn_frequency``."""
    if turn_frequency >= LOCKED_PREFIX_OFFSET:
        return turn_frequency - LOCKED_PREFIX_OFFSET
    return 0


@dataclass(frozen=True, slots=True)
class SimulatedTurn:
    """A projected turn emitted by the queue simulator."""

    character_id: str
    name: str
    team: str
    time: float
    is_anchor: bool
    speed: int


@dataclass(frozen=True, slots=True)
class BattleGroup:
    """Consecutive same-team turns that resolve as one simultaneous action."""

    turns: Tuple[SimulatedTurn, ...]
    team: str
    start_time: float

    @property
    def character_ids(self) -> list[str]:
        return [turn.character_id for turn in self.turns]


@dataclass(frozen=True, slots=True)
class DisplayTile:
    """Spectator timeline tile with a stable, content-addressed id."""

    character_id: str
    name: str
    team: str
    time: float
    speed: int
    turn_number: int
    is_scripted: bool = False

    @property
    def id(self) -> str:
        return f"{self.character_id}_t{self.turn_number}"


@dataclass(frozen=True, slots=True)
class DisplayGroup:
    tiles: Tuple[DisplayTile, ...]
    team: str
    start_time: float
    is_scripted: bool = False

    @property
    def id(self) -> str:
        return self.tiles[0].id if self.tiles else ""


@dataclass(frozen=True, slots=True)
class TimelineView:
    """Presentation view of the projected spectator timeline."""

    groups: Tuple[DisplayGroup, ...] = field(default_factory=tuple)
    current_turn_display: str | None = None

    @property
    def tiles(self) -> list[DisplayTile]:
        return [tile for group in self.groups for tile in group.tiles]

"""Shared type aliases for the core and domain layers."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from turnorder.domain.battle_models import Roster
    from turnorder.domain.entities import Character

TeamTag = str
CharacterLookup = Callable[[str], "Character | None"]
CommitRoster = Callable[["Roster"], None]

__all__ = ["CharacterLookup", "CommitRoster", "TeamTag"]

"""Conversion between replicated battle participant payloads and rosters."""
from __future__ import annotations

import logging
import math
from typing import Dict, List

from turnorder.core.constants import DEFAULT_SPEED, DEFAULT_TEAM, LOCKED_PREFIX_OFFSET
from turnorder.data.errors import DataValidationError
from turnorder.domain.battle_models import Combatant, Roster

logger = logging.getLogger(__name__)

_PARTICIPANTS_KEY = "participants"
_LOCKED_KEY = "lockedPrefixLength"


def _number(value: object, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return default
    return value


def _combatant_from_entry(entry: dict[str, object]) -> Combatant | None:
    character_id = entry.get("characterId")
    if not isinstance(character_id, str) or not character_id:
        return None
    name = entry.get("name")
    team = entry.get("team")
    speed = int(_number(entry.get("speed"), DEFAULT_SPEED))
    return Combatant(
        character_id=character_id,
        name=name if isinstance(name, str) and name else character_id,
        speed=speed,
        turn_frequency=int(_number(entry.get("turnFrequency"), speed)),
        next_turn_at=_number(entry.get("nextTurnAt"), 0),
        team=team if isinstance(team, str) and team else DEFAULT_TEAM,
    )


def roster_from_payload(payload: object) -> Roster:
    """
    Build a roster from a list of participant dicts or a wrapped payload.

    Malformed entries are skipped and the first entry wins on duplicate ids.
    A wrapped payload is ``{"participants": [...], "lockedPrefixLength": n}``.
    """
    locked: int | None = None
    if isinstance(payload, dict):
        entries = payload.get(_PARTICIPANTS_KEY)
        raw_locked = payload.get(_LOCKED_KEY)
        if isinstance(raw_locked, int) and not isinstance(raw_locked, bool):
            locked = max(0, raw_locked)
    else:
        entries = payload
    if not isinstance(entries, list):
        raise DataValidationError("Battle participants must be a list.")

    combatants: List[Combatant] = []
    seen: set[str] = set()
    for entry in entries:
        if not isinstance(entry, dict):
            logger.debug("Skipping non-object participant %r", entry)
            continue
        combatant = _combatant_from_entry(entry)
        if combatant is None or combatant.character_id in seen:
            logger.debug("Skipping participant %r", entry)
            continue
        seen.add(combatant.character_id)
        combatants.append(combatant)
    return Roster(combatants=tuple(combatants), locked_prefix_length=locked)


def roster_to_payload(roster: Roster, *, wrapped: bool = False) -> object:
    """
    Serialize a roster for the replication layer.

    A non-zero locked prefix is also written onto the earliest combatant's
    ``turnFrequency`` so clients that only read the participant list see it.
    """
    locked = roster.effective_locked_count()
    ordered = roster.sorted_by_turn()
    marker_id = ordered[0].character_id if ordered and locked > 0 else None

    entries: List[Dict[str, object]] = []
    for combatant in roster.combatants:
        turn_frequency = combatant.turn_frequency
        if combatant.character_id == marker_id:
            turn_frequency = LOCKED_PREFIX_OFFSET + locked
        elif turn_frequency >= LOCKED_PREFIX_OFFSET:
            turn_frequency = combatant.speed
        entries.append(
            {
                "characterId": combatant.character_id,
                "name": combatant.name,
                "speed": combatant.speed,
                "turnFrequency": turn_frequency,
                "nextTurnAt": combatant.next_turn_at,
                "team": combatant.team,
            }
        )
    if wrapped:
        return {_PARTICIPANTS_KEY: entries, _LOCKED_KEY: roster.locked_prefix_length}
    return entries

from __future__ import annotations

import pytest

from turnorder.data import DataValidationError, roster_from_payload, roster_to_payload
from turnorder.domain.battle_models import Combatant, Roster


def _entry(character_id: str, **overrides: object) -> dict[str, object]:
    entry: dict[str, object] = {
        "characterId": character_id,
        "name": character_id.title(),
        "speed": 10,
        "turnFrequency": 10,
        "nextTurnAt": 0,
        "team": "blue",
    }
    entry.update(overrides)
    return entry


def test_roster_from_list_payload() -> None:
    roster = roster_from_payload([_entry("aria", nextTurnAt=12.5, team="red"), _entry("borin", speed=20)])

    aria, borin = roster.combatants
    assert aria.next_turn_at == 12.5
    assert aria.team == "red"
    assert borin.speed == 20
    assert roster.locked_prefix_length is None


def test_roster_from_payload_fills_defaults_for_malformed_fields() -> None:
    roster = roster_from_payload([{"characterId": "ghost", "speed": "fast", "nextTurnAt": None, "team": ""}])

    ghost = roster.combatants[0]
    assert ghost.name == "ghost"
    assert ghost.speed == 10
    assert ghost.turn_frequency == 10
    assert ghost.next_turn_at == 0
    assert ghost.team == "blue"


def test_roster_from_payload_skips_invalid_and_duplicate_entries() -> None:
    roster = roster_from_payload(
        [_entry("aria", nextTurnAt=1), "junk", {"name": "No Id"}, _entry("aria", nextTurnAt=99)]
    )

    assert [c.character_id for c in roster] == ["aria"]
    assert roster.get("aria").next_turn_at == 1


def test_roster_from_wrapped_payload_reads_locked_prefix() -> None:
    roster = roster_from_payload({"participants": [_entry("aria")], "lockedPrefixLength": 3})

    assert roster.locked_prefix_length == 3
    assert roster.effective_locked_count() == 3


def test_roster_from_payload_rejects_non_list() -> None:
    with pytest.raises(DataValidationError):
        roster_from_payload({"participants": "nope"})
    with pytest.raises(DataValidationError):
        roster_from_payload(42)


def test_roster_to_payload_writes_legacy_marker_on_earliest_combatant() -> None:
    roster = Roster(
        combatants=(
            Combatant(character_id="aria", name="Aria", speed=10, next_turn_at=5, turn_frequency=10),
            Combatant(character_id="borin", name="Borin", speed=20, next_turn_at=0, turn_frequency=20),
        ),
        locked_prefix_length=3,
    )

    payload = roster_to_payload(roster)

    assert [entry["turnFrequency"] for entry in payload] == [10, 10003]
    assert roster_from_payload(payload).effective_locked_count() == 3


def test_roster_to_payload_clears_stale_marker_when_unlocked() -> None:
    roster = Roster(
        combatants=(Combatant(character_id="aria", name="Aria", speed=10, next_turn_at=0, turn_frequency=10004),),
        locked_prefix_length=0,
    )

    payload = roster_to_payload(roster, wrapped=True)

    assert payload["participants"][0]["turnFrequency"] == 10
    assert payload["lockedPrefixLength"] == 0

from __future__ import annotations

from turnorder.domain.battle_models import Combatant, Roster
from turnorder.services.queue_simulator import simulate, simulate_turns


def _combatant(character_id: str, team: str, next_turn_at: float, speed: int = 10) -> Combatant:
    return Combatant(
        character_id=character_id,
        name=character_id.title(),
        speed=speed,
        turn_frequency=speed,
        next_turn_at=next_turn_at,
        team=team,
    )


def _roster(*combatants: Combatant) -> Roster:
    return Roster(combatants=combatants)


def test_simulate_empty_roster_returns_empty_queue() -> None:
    assert simulate(Roster()) == []


def test_simulate_distinct_teams_yield_single_member_groups_in_time_order() -> None:
    roster = _roster(_combatant("a", "red", 5), _combatant("b", "blue", 0), _combatant("c", "green", 3))

    groups = simulate(roster, steps=3)

    assert [group.character_ids for group in groups] == [["b"], ["c"], ["a"]]
    assert [group.start_time for group in groups] == [0, 3, 5]


def test_simulate_runs_requested_number_of_steps() -> None:
    roster = _roster(_combatant("a", "red", 0), _combatant("b", "blue", 0))

    assert len(simulate_turns(roster)) == 50
    assert len(simulate_turns(roster, steps=7)) == 7


def test_simulate_breaks_ties_by_roster_order() -> None:
    roster = _roster(_combatant("b", "blue", 0), _combatant("a", "red", 0))

    turns = simulate_turns(roster, steps=4)

    assert [turn.character_id for turn in turns] == ["b", "a", "b", "a"]


def test_simulate_marks_only_real_next_turn_as_anchor() -> None:
    roster = _roster(_combatant("a", "red", 0))

    turns = simulate_turns(roster, steps=3)

    assert [turn.is_anchor for turn in turns] == [True, False, False]
    assert [turn.time for turn in turns] == [0, 100, 200]


def test_same_team_nearby_turns_share_a_group() -> None:
    roster = _roster(_combatant("a", "red", 0), _combatant("b", "red", 1), _combatant("c", "blue", 50))

    groups = simulate(roster, steps=4)

    assert [group.character_ids for group in groups] == [["a", "b"], ["c"], ["a"]]


def test_other_team_between_same_team_turns_splits_them() -> None:
    roster = _roster(_combatant("a", "red", 0), _combatant("c", "blue", 0.5), _combatant("b", "red", 1))

    groups = simulate(roster, steps=3)

    assert [group.character_ids for group in groups] == [["a"], ["c"], ["b"]]


def test_zero_speed_is_clamped_instead_of_dividing_by_zero() -> None:
    roster = _roster(_combatant("a", "red", 0, speed=0), _combatant("b", "blue", 0, speed=10))

    turns = simulate_turns(roster, steps=5)

    assert [turn.character_id for turn in turns] == ["a", "b", "b", "b", "b"]
    assert turns[0].speed == 1


def test_speed_overrides_replace_cached_speed() -> None:
    roster = _roster(_combatant("a", "red", 0, speed=10), _combatant("b", "blue", 0, speed=10))

    turns = simulate_turns(roster, steps=4, speeds={"a": 20})

    assert [(turn.character_id, turn.time) for turn in turns] == [("a", 0), ("b", 0), ("a", 50), ("a", 100)]


def test_missing_team_falls_back_to_blue() -> None:
    roster = _roster(_combatant("a", "", 0))

    assert simulate_turns(roster, steps=1)[0].team == "blue"

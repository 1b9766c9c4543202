"""Battle tracker controller only publishes rosters that actually changed."""
from __future__ import annotations

from typing import List, Tuple

from turnorder.domain.battle_models import Roster
from turnorder.domain.entities import Character, SpeedStat
from turnorder.services import BattleTrackerController, ScheduleService, TrackerAction


def _build_controller() -> Tuple[BattleTrackerController, List[Roster]]:
    characters = {
        "hero": Character(id="hero", name="Hero", level=0, speed=SpeedStat(base=10)),
        "goblin": Character(id="goblin", name="Goblin", level=0, speed=SpeedStat(base=5)),
    }
    committed: List[Roster] = []
    controller = BattleTrackerController(ScheduleService(characters.get), committed.append)
    return controller, committed


def test_add_commits_new_roster() -> None:
    controller, committed = _build_controller()

    roster = controller.apply_action(Roster(), TrackerAction(action_type="add", character_id="hero"))

    assert committed == [roster]
    assert [c.character_id for c in roster] == ["hero"]


def test_noop_action_does_not_commit() -> None:
    controller, committed = _build_controller()
    roster = Roster()

    result = controller.apply_action(roster, TrackerAction(action_type="add", character_id="dragon"))

    assert result is roster
    assert committed == []


def test_actions_missing_required_fields_are_ignored() -> None:
    controller, committed = _build_controller()
    roster = controller.apply_action(Roster(), TrackerAction(action_type="add", character_id="hero"))

    controller.apply_action(roster, TrackerAction(action_type="reorder", character_id="hero"))
    controller.apply_action(roster, TrackerAction(action_type="team", character_id="hero"))
    controller.apply_action(roster, TrackerAction(action_type="remove"))

    assert len(committed) == 1


def test_full_round_of_actions() -> None:
    controller, committed = _build_controller()
    roster = Roster()
    for character_id in ("hero", "goblin"):
        roster = controller.apply_action(roster, TrackerAction(action_type="add", character_id=character_id))
    roster = controller.apply_action(roster, TrackerAction(action_type="team", character_id="goblin", team="red"))
    roster = controller.apply_action(roster, TrackerAction(action_type="advance"))
    roster = controller.apply_action(roster, TrackerAction(action_type="lock", index=1))

    assert roster.get("hero").next_turn_at == 110
    assert roster.get("goblin").next_turn_at == 20
    assert roster.locked_prefix_length == 1
    assert len(committed) == 5


def test_queue_and_timeline_views() -> None:
    controller, _ = _build_controller()
    roster = controller.apply_action(Roster(), TrackerAction(action_type="add", character_id="hero"))

    queue = controller.get_queue(roster, steps=3)
    timeline = controller.get_timeline(roster, timeline_length=3)

    assert [group.start_time for group in queue] == [10, 110, 210]
    assert timeline.current_turn_display == "Hero"
    assert [tile.id for tile in timeline.tiles] == ["hero_t1", "hero_t2", "hero_t3"]

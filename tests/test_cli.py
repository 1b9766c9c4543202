from __future__ import annotations

from pathlib import Path
from typing import Iterator

from turnorder.domain.battle_models import Combatant, Roster
from turnorder.domain.entities import Character, SpeedStat
from turnorder.presentation.cli import app
from turnorder.presentation.cli.app import TrackerSession, _main_menu_options, run_menu_loop
from turnorder.presentation.cli.render import format_queue, format_roster, format_timeline
from turnorder.services import BattleTrackerController, ScheduleService, project, simulate

_SETTINGS = {"queue_steps": 6, "timeline_length": 4}


def _scripted_input(*answers: str):
    feed: Iterator[str] = iter(answers)
    return lambda prompt: next(feed)


def _menu_index(key: str) -> str:
    keys = [value for _, value in _main_menu_options()]
    return str(keys.index(key) + 1)


def _build() -> tuple[BattleTrackerController, TrackerSession]:
    characters = {"aria": Character(id="aria", name="Aria", level=0, speed=SpeedStat(base=10))}
    session = TrackerSession()
    return BattleTrackerController(ScheduleService(characters.get), session.commit), session


def _roster() -> Roster:
    return Roster(
        combatants=(
            Combatant(character_id="aria", name="Aria", speed=10, next_turn_at=0, team="red"),
            Combatant(character_id="borin", name="Borin", speed=10, next_turn_at=50, team="blue"),
        )
    )


def test_format_queue_marks_anchor_turns(monkeypatch) -> None:
    monkeypatch.delenv("TURNORDER_DEBUG", raising=False)

    lines = format_queue(simulate(_roster(), 3))

    assert lines == ["0. [red] Aria*", "1. [blue] Borin*", "2. [red] Aria"]


def test_format_queue_shows_times_in_debug(monkeypatch) -> None:
    monkeypatch.setenv("TURNORDER_DEBUG", "1")

    lines = format_queue(simulate(_roster(), 1))

    assert lines == ["0. [red] Aria* @ 0.0"]


def test_format_timeline_flags_scripted_groups(monkeypatch) -> None:
    monkeypatch.delenv("TURNORDER_DEBUG", raising=False)
    roster = Roster(combatants=_roster().combatants, locked_prefix_length=1)

    lines = format_timeline(project(roster, 2))

    assert lines == ["Now: Aria", "# [red] Aria", "- [blue] Borin"]


def test_format_roster_empty() -> None:
    assert format_roster(Roster()) == ["(no combatants)"]


def test_menu_loop_adds_and_shows_queue(capsys) -> None:
    controller, session = _build()
    read = _scripted_input(_menu_index("add"), "aria", _menu_index("queue"), _menu_index("quit"))

    run_menu_loop(controller, session, _SETTINGS, read)

    out = capsys.readouterr().out
    assert session.commits == 1
    assert session.roster.get("aria").next_turn_at == 10
    assert "0. [blue] Aria*" in out


def test_menu_loop_reports_unchanged_roster(capsys) -> None:
    controller, session = _build()
    read = _scripted_input(_menu_index("remove"), "ghost", "99", "abc", _menu_index("quit"))

    run_menu_loop(controller, session, _SETTINGS, read)

    out = capsys.readouterr().out
    assert "Nothing changed." in out
    assert "Invalid selection." in out
    assert session.commits == 0


def test_main_reports_missing_character_data(tmp_path: Path, capsys) -> None:
    app.main(["--data-dir", str(tmp_path), "--config", str(tmp_path / "config.json")])

    assert "Unable to load characters" in capsys.readouterr().out

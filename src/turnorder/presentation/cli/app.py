"""Console-driven GM loop for the battle tracker."""
from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple

from turnorder.core.constants import KNOWN_TEAMS
from turnorder.data import DataError
from turnorder.data.repositories import CharactersRepository
from turnorder.domain.battle_models import Roster
from turnorder.presentation.cli.config import load_config
from turnorder.presentation.cli.render import (
    debug_enabled,
    format_queue,
    format_roster,
    format_timeline,
    render_lines,
)
from turnorder.services import BattleTrackerController, ScheduleService, TrackerAction

InputFn = Callable[[str], str]


@dataclass(slots=True)
class TrackerSession:
    """In-memory stand-in for the replicated roster store."""

    roster: Roster = field(default_factory=Roster)
    commits: int = 0

    def commit(self, roster: Roster) -> None:
        self.roster = roster
        self.commits += 1


def _main_menu_options() -> List[Tuple[str, str]]:
    return [
        ("Show Queue", "queue"),
        ("Show Spectator Timeline", "timeline"),
        ("Show Roster", "roster"),
        ("Add Combatant", "add"),
        ("Remove Combatant", "remove"),
        ("Next Turn", "advance"),
        ("Reset Battle", "reset"),
        ("Refresh Speeds", "refresh"),
        ("Sync Turn With", "sync"),
        ("Set Turn Position", "set_order"),
        ("Move In Queue", "reorder"),
        ("Change Team", "team"),
        ("Lock Timeline Prefix", "lock"),
        ("Quit", "quit"),
    ]


def _prompt_int(prompt: str, read: InputFn) -> int | None:
    raw = read(prompt).strip()
    try:
        return int(raw)
    except ValueError:
        print("Please enter a whole number.")
        return None


def _build_action(key: str, read: InputFn) -> TrackerAction | None:
    """Collect the inputs a menu entry needs; None when the input was invalid."""
    if key in ("advance", "reset", "refresh"):
        return TrackerAction(action_type=key)
    if key == "lock":
        count = _prompt_int("Locked tiles: ", read)
        return None if count is None else TrackerAction(action_type="lock", index=count)

    character_id = read("Character id: ").strip()
    if key in ("add", "remove"):
        return TrackerAction(action_type=key, character_id=character_id)
    if key == "sync":
        target_id = read("Sync with character id: ").strip()
        return TrackerAction(action_type="sync", character_id=character_id, target_id=target_id)
    if key in ("set_order", "reorder"):
        index = _prompt_int("Position: ", read)
        return None if index is None else TrackerAction(action_type=key, character_id=character_id, index=index)
    if key == "team":
        team = read(f"Team ({', '.join(KNOWN_TEAMS)}): ").strip()
        return TrackerAction(action_type="team", character_id=character_id, team=team)
    return None


def run_menu_loop(
    controller: BattleTrackerController,
    session: TrackerSession,
    settings: Dict[str, int],
    read: InputFn = input,
) -> None:
    options = _main_menu_options()
    while True:
        print()
        for idx, (label, _) in enumerate(options, start=1):
            print(f"{idx}. {label}")
        choice = _prompt_int("Select an option: ", read)
        if choice is None or not 1 <= choice <= len(options):
            print("Invalid selection.")
            continue
        key = options[choice - 1][1]
        if key == "quit":
            return
        if key == "queue":
            groups = controller.get_queue(session.roster, settings["queue_steps"])
            render_lines("Queue", format_queue(groups) or ["(empty)"])
        elif key == "timeline":
            view = controller.get_timeline(session.roster, settings["timeline_length"])
            render_lines("Timeline", format_timeline(view) or ["(empty)"])
        elif key == "roster":
            render_lines("Roster", format_roster(session.roster))
        else:
            action = _build_action(key, read)
            if action is None:
                continue
            before = session.roster
            controller.apply_action(session.roster, action)
            if session.roster is before:
                print("Nothing changed.")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="turnorder", description="Battle turn-order tracker")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory containing characters.json")
    parser.add_argument("--config", type=Path, default=None, help="Path to a config.json file")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """Start the interactive tracker session."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if debug_enabled() else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = load_config(args.config)
    characters = CharactersRepository(args.data_dir)
    try:
        known_ids = characters.ids()
    except DataError as exc:
        print(f"Unable to load characters: {exc}")
        return

    service = ScheduleService(characters)
    session = TrackerSession()
    controller = BattleTrackerController(service, session.commit)
    print("=== Battle Turn Tracker ===")
    roster_names = ", ".join(f"{entry.id} ({entry.speed})" for entry in service.available_characters(known_ids))
    print(f"Characters: {roster_names or '(none)'}")
    run_menu_loop(controller, session, settings)
    print("Goodbye!")

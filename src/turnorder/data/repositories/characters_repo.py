"""Character sheet repository usable as a scheduler lookup."""
from __future__ import annotations

from typing import Dict

from turnorder.data.errors import DataValidationError
from turnorder.data.repositories.base import RepositoryBase
from turnorder.domain.entities import Character, SpeedStat


class CharactersRepository(RepositoryBase[Character]):
    """Loads character speed data and answers scheduler lookups."""

    def __init__(self, base_path=None) -> None:
        super().__init__("characters.json", base_path)

    def __call__(self, character_id: str) -> Character | None:
        self._ensure_loaded()
        assert self._definitions is not None
        return self._definitions.get(character_id)

    def _build(self, raw: dict[str, object]) -> Dict[str, Character]:
        characters: Dict[str, Character] = {}
        for raw_id, payload in raw.items():
            data = self._require_mapping(payload, f"character '{raw_id}'")
            name = data.get("name", raw_id)
            if not isinstance(name, str):
                raise DataValidationError(f"character '{raw_id}' name must be a string.")
            level = data.get("level", 1)
            if isinstance(level, bool) or not isinstance(level, int):
                raise DataValidationError(f"character '{raw_id}' level must be an integer.")
            characters[raw_id] = Character(
                id=raw_id,
                name=name,
                level=level,
                speed=self._build_speed(raw_id, data.get("speed")),
            )
        return characters

    def _build_speed(self, raw_id: str, value: object) -> SpeedStat | None:
        if value is None:
            return None
        stat = self._require_mapping(value, f"character '{raw_id}' speed")
        return SpeedStat(
            base=self._require_number(stat.get("base"), f"character '{raw_id}' speed.base"),
            bonus=self._require_number(stat.get("bonus", 0), f"character '{raw_id}' speed.bonus"),
            gain=self._require_number(stat.get("gain", 1), f"character '{raw_id}' speed.gain"),
        )

"""HustleSettings - where the leaderboard lives and how it is shaped."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from hustle import DATA_DIR
from hustle.services.leaderboard import (
    DEFAULT_LEADERBOARD_PATH,
    DEFAULT_NAME_LENGTH,
    MAX_ENTRIES,
    LeaderboardStore,
)

_log = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = DATA_DIR / "settings.json"


@dataclass
class HustleSettings:
    """User-adjustable settings for the leaderboard."""

    DEFAULT_MAX_ENTRIES: ClassVar[int] = MAX_ENTRIES
    DEFAULT_NAME_LENGTH: ClassVar[int] = DEFAULT_NAME_LENGTH

    leaderboard_path: Path = DEFAULT_LEADERBOARD_PATH
    max_entries: int = DEFAULT_MAX_ENTRIES
    name_length: int = DEFAULT_NAME_LENGTH

    def build_store(self) -> LeaderboardStore:
        return LeaderboardStore(self.leaderboard_path, capacity=self.max_entries)

    def to_json(self) -> dict:
        return {
            "leaderboard_path": str(self.leaderboard_path),
            "max_entries": self.max_entries,
            "name_length": self.name_length,
        }


class HustleSettingsManager:
    """Manages settings persistence to a JSON file."""

    def __init__(self, settings_path: Path = DEFAULT_SETTINGS_PATH) -> None:
        self._path = settings_path

    def load(self) -> HustleSettings:
        """Load settings from disk. Returns defaults if the file is missing or unreadable."""
        defaults = HustleSettings()
        if not self._path.exists():
            return defaults
        try:
            data = json.loads(self._path.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            _log.warning("Ignoring unreadable settings %s: %s", self._path, exc)
            return defaults
        if not isinstance(data, dict):
            _log.warning("Ignoring malformed settings %s", self._path)
            return defaults

        raw_path = data.get("leaderboard_path")
        return HustleSettings(
            leaderboard_path=Path(raw_path).expanduser() if raw_path else defaults.leaderboard_path,
            max_entries=self._positive_int(data, "max_entries", defaults.max_entries),
            name_length=self._positive_int(data, "name_length", defaults.name_length),
        )

    def _positive_int(self, data: dict, key: str, default: int) -> int:
        value = data.get(key, default)
        # bool is an int subclass; true/false in JSON is never a count
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            _log.warning(
                "Ignoring invalid %s=%r in settings %s, using %d", key, value, self._path, default
            )
            return default
        return value

    def save(self, settings: HustleSettings) -> None:
        """Save settings to disk."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(settings.to_json(), indent=2) + "\n")

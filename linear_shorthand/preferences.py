"""Persisted choices and metadata snapshot, stored as a JSON file."""

import json
import time
from dataclasses import replace
from pathlib import Path
from typing import Any

import structlog

from linear_shorthand.errors import CacheError
from linear_shorthand.models import CHOICE_FIELDS, Choice, Preferences

logger = structlog.get_logger()

CACHE_FILE_NAME = "create-linear-issue-cache.json"


def _now_ms() -> int:
    return int(time.time() * 1000)


class PreferenceStore:
    """Reads and writes the preference file under the user data directory.

    The file holds the last metadata snapshot and, for teams, projects, users
    and priorities, the last explicit choice together with the time it was made.
    """

    def __init__(self, data_dir: Path) -> None:
        """Initialize the store.

        Args:
            data_dir: Directory holding the preference file
        """
        self.data_dir = Path(data_dir)
        self.cache_file = self.data_dir / CACHE_FILE_NAME
        logger.debug("Preference store initialized", cache_file=str(self.cache_file))

    def _load(self) -> Preferences:
        if not self.cache_file.exists():
            logger.debug("Preference file does not exist, starting empty")
            return Preferences()

        try:
            with open(self.cache_file, "r") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise TypeError(f"expected a JSON object, got {type(data).__name__}")
            return Preferences.from_dict(data)
        except (OSError, ValueError, TypeError, KeyError) as e:
            raise CacheError(f"Failed to read preferences from {self.cache_file}: {e}") from e

    def read(self) -> Preferences:
        """Read preferences, returning empty ones if the file is missing or unreadable."""
        try:
            preferences = self._load()
        except CacheError as e:
            logger.warning("Ignoring unreadable preference file", error=str(e))
            return Preferences()

        logger.debug(
            "Preferences loaded",
            teams=len(preferences.metadata.teams),
            projects=len(preferences.metadata.projects),
            users=len(preferences.metadata.users),
        )
        return preferences

    def write(
        self,
        preferences: Preferences,
        choices: dict[str, Any] | None = None,
        pretty: bool = False,
    ) -> Preferences:
        """Merge explicit choices over ``preferences`` and persist the result.

        Args:
            preferences: Snapshot to persist, carrying the previous choices
            choices: New explicit choices keyed by ``teams``, ``projects``, ``users``
                or ``priorities``; None values leave the previous choice untouched
            pretty: Indent the JSON output

        Returns:
            The preferences that were written
        """
        now = _now_ms()
        merged = {}
        for name in CHOICE_FIELDS:
            value = (choices or {}).get(name)
            if value is not None:
                merged[f"{name}_choice"] = Choice(value=value, timestamp=now)
        updated = replace(preferences, **merged)

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(self.cache_file, "w") as f:
                json.dump(updated.to_dict(), f, indent=2 if pretty else None)
        except OSError as e:
            logger.error("Failed to save preferences", error=str(e))
            raise CacheError(f"Failed to save preferences to {self.cache_file}: {e}") from e

        logger.debug("Preferences saved", changed=sorted(merged))
        return updated

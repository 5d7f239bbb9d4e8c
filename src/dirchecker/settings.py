"""Persistent JSON-backed scan defaults."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from dirchecker.utils import xdg_config_home

log = logging.getLogger(__name__)

_SETTINGS_DIR = "dirchecker"
_SETTINGS_FILE = "settings.json"

THREADS_KEY = "scan.threads"
SKIP_HASHES_KEY = "scan.skip_hashes"


def _valid_threads(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def _valid_flag(value: Any) -> bool:
    return isinstance(value, bool)


_KNOWN_KEYS = {
    THREADS_KEY: (_valid_threads, "a positive integer"),
    SKIP_HASHES_KEY: (_valid_flag, "true or false"),
}


class SettingsError(Exception):
    """Raised for unknown keys, invalid values or an unwritable settings file."""


class Settings:
    """Scan defaults stored as ``{"scan": {"threads": 4, ...}}``.

    Keys are addressed as ``section.name``; only the keys in
    ``_KNOWN_KEYS`` can be written.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or (xdg_config_home() / _SETTINGS_DIR / _SETTINGS_FILE)
        self._data: dict[str, Any] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    @staticmethod
    def known_keys() -> list[str]:
        return sorted(_KNOWN_KEYS)

    def get(self, key: str, default: Any = None) -> Any:
        section, _, name = key.partition(".")
        node = self._data.get(section)
        if not isinstance(node, dict):
            return default
        return node.get(name, default)

    def set(self, key: str, value: Any) -> None:
        """Validate and store a known key, then persist to disk."""
        if key not in _KNOWN_KEYS:
            raise SettingsError(f"Unknown setting '{key}' (known: {', '.join(self.known_keys())})")
        check, expected = _KNOWN_KEYS[key]
        if not check(value):
            raise SettingsError(f"Setting '{key}' must be {expected}, got {value!r}")

        section, _, name = key.partition(".")
        node = self._data.get(section)
        if not isinstance(node, dict):
            node = self._data[section] = {}
        node[name] = value
        self._save()

    def threads(self, default: int) -> int:
        """Stored worker count, or ``default`` when unset or invalid."""
        value = self.get(THREADS_KEY)
        if _valid_threads(value):
            return value
        if value is not None:
            log.warning("Ignoring invalid %s setting: %r", THREADS_KEY, value)
        return default

    def skip_hashes(self) -> bool:
        return self.get(SKIP_HASHES_KEY) is True

    def _load(self) -> None:
        """Load settings from disk; a missing or unreadable file means no overrides."""
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load settings from %s: %s", self._path, e)
            return
        if isinstance(data, dict):
            self._data = data
        else:
            log.warning("Settings file %s does not contain an object, ignoring", self._path)

    def _save(self) -> None:
        tmp = self._path.with_suffix(".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(self._data, indent=2) + "\n", encoding="utf-8")
            tmp.replace(self._path)
        except OSError as e:
            raise SettingsError(f"Could not save settings to {self._path}: {e}") from e

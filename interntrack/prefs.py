"""
User preferences.

Preferences are one explicit object (UserPrefs) that is created at start-up,
handed to the ModelManager and saved again at shutdown. Nothing reads
preferences from a global.

File format (preferences.json):

    {
      "internship_catalogue_path": "...",
      "event_catalogue_path": "...",
      "window": {"width": 120, "height": 40}
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def _default_home() -> Path:
    """
    Return the directory holding preferences and data files.

    A function instead of a constant, so tests can point everything elsewhere.
    """
    return Path.home() / ".interntrack"


def default_prefs_path() -> Path:
    return _default_home() / "preferences.json"


@dataclass
class WindowSettings:
    """Size of the terminal view, in columns and rows."""

    width: int = 120
    height: int = 40


@dataclass
class UserPrefs:
    internship_catalogue_path: Path = field(default_factory=lambda: _default_home() / "data" / "internships.json")
    event_catalogue_path: Path = field(default_factory=lambda: _default_home() / "data" / "events.json")
    window: WindowSettings = field(default_factory=WindowSettings)

    def reset_data(self, other: UserPrefs) -> None:
        self.internship_catalogue_path = Path(other.internship_catalogue_path)
        self.event_catalogue_path = Path(other.event_catalogue_path)
        self.window = WindowSettings(**asdict(other.window))

    def to_dict(self) -> dict[str, Any]:
        return {
            "internship_catalogue_path": str(self.internship_catalogue_path),
            "event_catalogue_path": str(self.event_catalogue_path),
            "window": asdict(self.window),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserPrefs:
        """
        Build prefs from a decoded JSON object. Unknown keys are ignored,
        missing keys keep their defaults.
        """
        prefs = cls()
        if "internship_catalogue_path" in data:
            prefs.internship_catalogue_path = Path(str(data["internship_catalogue_path"]))
        if "event_catalogue_path" in data:
            prefs.event_catalogue_path = Path(str(data["event_catalogue_path"]))
        window = data.get("window")
        if isinstance(window, dict):
            prefs.window = WindowSettings(
                width=int(window.get("width", prefs.window.width)),
                height=int(window.get("height", prefs.window.height)),
            )
        return prefs


def load_user_prefs(path: str | Path | None = None) -> UserPrefs:
    """
    Load preferences from preferences.json.

    Returns default preferences if the file does not exist or is invalid,
    so a broken prefs file never stops the application from starting.
    """
    prefs_path = Path(path) if path is not None else default_prefs_path()

    # First run: nothing saved yet
    if not prefs_path.exists():
        logger.info("Preferences file %s not found, using defaults", prefs_path)
        return UserPrefs()

    try:
        data = json.loads(prefs_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("preferences must be a JSON object")
        return UserPrefs.from_dict(data)
    except (OSError, ValueError, TypeError, UnicodeDecodeError) as exc:
        logger.warning("Preferences file %s is not in the correct format, using defaults (%s)", prefs_path, exc)
        return UserPrefs()


def save_user_prefs(prefs: UserPrefs, path: str | Path | None = None) -> None:
    """
    Save preferences, creating parent directories if needed.
    """
    prefs_path = Path(path) if path is not None else default_prefs_path()
    prefs_path.parent.mkdir(parents=True, exist_ok=True)
    prefs_path.write_text(json.dumps(prefs.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug("Saved preferences to %s", prefs_path)

"""
Unit tests for user preferences.

Missing or invalid preference files fall back to defaults instead of failing.
"""

import json
import tempfile
import unittest
from pathlib import Path

from interntrack.prefs import UserPrefs, WindowSettings, load_user_prefs, save_user_prefs


class TestPrefs(unittest.TestCase):
    def test_missing_file_gives_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            prefs = load_user_prefs(Path(d) / "missing.json")
            self.assertEqual(prefs, UserPrefs())

    def test_save_and_load_roundtrip(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "prefs" / "preferences.json"
            prefs = UserPrefs(
                internship_catalogue_path=Path(d) / "i.json",
                event_catalogue_path=Path(d) / "e.json",
                window=WindowSettings(width=100, height=30),
            )
            save_user_prefs(prefs, p)
            self.assertEqual(load_user_prefs(p), prefs)

            data = json.loads(p.read_text(encoding="utf-8"))
            self.assertEqual(data["window"], {"width": 100, "height": 30})

    def test_partial_file_keeps_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "preferences.json"
            p.write_text(json.dumps({"window": {"width": 90}}), encoding="utf-8")
            prefs = load_user_prefs(p)
            self.assertEqual(prefs.window.width, 90)
            self.assertEqual(prefs.window.height, WindowSettings().height)
            self.assertEqual(prefs.internship_catalogue_path, UserPrefs().internship_catalogue_path)

    def test_corrupt_file_gives_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "preferences.json"
            p.write_text("[1, 2", encoding="utf-8")
            self.assertEqual(load_user_prefs(p), UserPrefs())

    def test_reset_data_copies(self) -> None:
        source = UserPrefs(window=WindowSettings(width=50, height=10))
        target = UserPrefs()
        target.reset_data(source)
        source.window.width = 1
        self.assertEqual(target.window.width, 50)


if __name__ == "__main__":
    unittest.main()

"""
Tests for the Logic entry point: parse -> execute -> save.

All data lives in temporary directories; the user's real files are never touched.
"""

import tempfile
import unittest
from pathlib import Path

from interntrack.errors import CommandException, ParseException
from interntrack.logic import Logic
from interntrack.prefs import UserPrefs
from interntrack.storage import event_storage, internship_storage
from typical_data import acme, acme_interview, beta


def _prefs(d: str) -> UserPrefs:
    return UserPrefs(
        internship_catalogue_path=Path(d) / "internships.json",
        event_catalogue_path=Path(d) / "events.json",
    )


class TestLogic(unittest.TestCase):
    def test_execute_persists_catalogues(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            logic = Logic.from_prefs(_prefs(d))
            logic.execute("add na/Acme ro/SWE s/applied d/2026-03-01")
            logic.execute("select 1")
            logic.execute("event add na/Technical interview st/2026-04-02 14:00 en/2026-04-02 15:00")

            reloaded = Logic.from_prefs(_prefs(d))
            self.assertEqual(reloaded.model.internships, [acme()])
            self.assertEqual(len(reloaded.model.events), 1)
            ev = reloaded.model.events[0]
            self.assertEqual(ev.internship_id, reloaded.model.internships[0].internship_id)

    def test_find_scenario(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            internship_storage(Path(d) / "internships.json").save([acme(), beta()])
            logic = Logic.from_prefs(_prefs(d))

            result = logic.execute("find na/Acme")

            self.assertEqual(result.feedback, "Found internships: 1")
            self.assertEqual(logic.filtered_internships.as_list(), [acme()])

            with self.assertRaises(CommandException) as ctx:
                logic.execute("delete 2")
            self.assertIn("Invalid index", str(ctx.exception))

            logic.execute("delete 1")
            self.assertEqual(internship_storage(Path(d) / "internships.json").load(), [beta()])

    def test_parse_errors_propagate(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            logic = Logic.from_prefs(_prefs(d))
            with self.assertRaises(ParseException):
                logic.execute("launch rockets")

    def test_corrupt_data_starts_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            (Path(d) / "internships.json").write_text("garbage", encoding="utf-8")
            logic = Logic.from_prefs(_prefs(d))
            self.assertEqual(logic.model.internships, [])

    def test_corrupt_events_file_keeps_internships(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            internship_storage(Path(d) / "internships.json").save([acme()])
            (Path(d) / "events.json").write_text("{not json", encoding="utf-8")

            logic = Logic.from_prefs(_prefs(d))
            self.assertEqual(logic.model.internships, [acme()])
            self.assertEqual(logic.model.events, [])

            logic.execute("list")
            self.assertEqual(internship_storage(Path(d) / "internships.json").load(), [acme()])

    def test_duplicate_internships_start_only_that_catalogue_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            internship_storage(Path(d) / "internships.json").save([acme(), acme()])
            logic = Logic.from_prefs(_prefs(d))
            self.assertEqual(logic.model.internships, [])
            self.assertEqual(logic.model.events, [])

    def test_orphan_events_are_dropped(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            internship_storage(Path(d) / "internships.json").save([beta()])
            event_storage(Path(d) / "events.json").save([acme_interview()])
            logic = Logic.from_prefs(_prefs(d))
            self.assertEqual(logic.model.events, [])

    def test_save_failure_becomes_command_exception(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            prefs = _prefs(d)
            prefs.event_catalogue_path = Path(d) / "events_dir"
            prefs.event_catalogue_path.mkdir()
            logic = Logic.from_prefs(prefs)
            with self.assertRaises(CommandException) as ctx:
                logic.execute("list")
            self.assertIn("Could not save data to file", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()

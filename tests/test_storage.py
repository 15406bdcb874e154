"""
Unit tests for JSON storage of the catalogues.

Storage contract:
- Missing file -> empty list
- Corrupt file -> DataLoadingError
- JSON schema: {"internships": [...]} / {"events": [...]}
"""

import json
import tempfile
import unittest
from pathlib import Path

from interntrack.errors import DataLoadingError
from interntrack.storage import event_storage, internship_storage
from typical_data import acme, acme_deadline, acme_interview, beta


class TestStorage(unittest.TestCase):
    def test_load_missing_file_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "missing.json"
            self.assertEqual(internship_storage(p).load(), [])

    def test_save_and_load_internships(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "nested" / "internships.json"
            store = internship_storage(p)
            store.save([acme(), beta()])

            loaded = store.load()
            self.assertEqual(loaded, [acme(), beta()])
            self.assertEqual([i.internship_id for i in loaded], ["acme", "beta"])

            data = json.loads(p.read_text(encoding="utf-8"))
            self.assertIn("internships", data)
            self.assertEqual(data["internships"][0]["applied_on"], "2026-03-01")

    def test_save_and_load_events(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "events.json"
            store = event_storage(p)
            store.save([acme_interview(), acme_deadline()])

            self.assertEqual(store.load(), [acme_interview(), acme_deadline()])
            data = json.loads(p.read_text(encoding="utf-8"))
            self.assertEqual(data["events"][0]["start"], "2026-04-02 14:00")
            self.assertIsNone(data["events"][1]["end"])

    def test_save_overwrites(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "internships.json"
            store = internship_storage(p)
            store.save([acme(), beta()])
            store.save([beta()])
            self.assertEqual(store.load(), [beta()])

    def test_corrupt_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "internships.json"
            p.write_text("{not json", encoding="utf-8")
            with self.assertRaises(DataLoadingError):
                internship_storage(p).load()

    def test_wrong_schema_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "events.json"
            p.write_text(json.dumps({"internships": []}), encoding="utf-8")
            with self.assertRaises(DataLoadingError):
                event_storage(p).load()

    def test_invalid_entry_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "internships.json"
            entry = {"internship_id": "x", "company": "Acme", "role": "SWE", "status": "lost", "applied_on": "2026-03-01"}
            p.write_text(json.dumps({"internships": [entry]}), encoding="utf-8")
            with self.assertRaises(DataLoadingError):
                internship_storage(p).load()


if __name__ == "__main__":
    unittest.main()

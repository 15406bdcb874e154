"""
Tests for the CLI entry point and the interactive loop.

These tests focus on:
- Exit codes of 'run' for good and bad commands
- Persistence through a temporary preferences file
  (to avoid touching real user data during tests)
- The interactive loop ending on 'exit'
"""

import io
import json
import tempfile
import unittest
from pathlib import Path

from rich.console import Console

from interntrack.cli import main
from interntrack.interactive import run_interactive
from interntrack.logic import Logic
from interntrack.prefs import UserPrefs, save_user_prefs
from interntrack.storage import internship_storage


def _write_prefs(d: str) -> Path:
    p = Path(d) / "preferences.json"
    save_user_prefs(
        UserPrefs(
            internship_catalogue_path=Path(d) / "data" / "internships.json",
            event_catalogue_path=Path(d) / "data" / "events.json",
        ),
        p,
    )
    return p


class TestCLI(unittest.TestCase):
    def test_cli_run_requires_text(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            prefs = _write_prefs(d)
            with self.assertRaises(SystemExit) as ctx:
                main(["--prefs", str(prefs), "run"])
            self.assertNotEqual(ctx.exception.code, 0)

    def test_cli_add_then_find(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            prefs = _write_prefs(d)
            with self.assertRaises(SystemExit) as ctx:
                main(["--prefs", str(prefs), "run", "add", "na/Acme", "ro/SWE", "s/applied", "d/2026-03-01"])
            self.assertEqual(ctx.exception.code, 0)

            stored = internship_storage(Path(d) / "data" / "internships.json").load()
            self.assertEqual([i.company for i in stored], ["Acme"])

            with self.assertRaises(SystemExit) as ctx:
                main(["--prefs", str(prefs), "run", "find", "na/acme"])
            self.assertEqual(ctx.exception.code, 0)

    def test_cli_bad_command_exits_nonzero(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            prefs = _write_prefs(d)
            with self.assertRaises(SystemExit) as ctx:
                main(["--prefs", str(prefs), "run", "delete", "1"])
            self.assertEqual(ctx.exception.code, 1)

    def test_cli_saves_prefs_on_exit(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            prefs = _write_prefs(d)
            data = json.loads(prefs.read_text(encoding="utf-8"))
            del data["window"]
            prefs.write_text(json.dumps(data), encoding="utf-8")

            with self.assertRaises(SystemExit):
                main(["--prefs", str(prefs), "run", "frobnicate"])

            data = json.loads(prefs.read_text(encoding="utf-8"))
            self.assertIn("window", data)


class TestInteractive(unittest.TestCase):
    def test_loop_until_exit(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            logic = Logic.from_prefs(
                UserPrefs(
                    internship_catalogue_path=Path(d) / "internships.json",
                    event_catalogue_path=Path(d) / "events.json",
                )
            )
            inputs = iter(
                [
                    "add na/Acme ro/SWE s/applied d/2026-03-01",
                    "add na/Beta ro/PM s/interview d/2026-03-05",
                    "find na/Acme",
                    "delete 2",
                    "exit",
                    "list",
                ]
            )
            out = io.StringIO()
            console = Console(file=out, width=120)

            run_interactive(logic, console, prompt_fn=lambda _msg: next(inputs))

            text = out.getvalue()
            self.assertIn("Found internships: 1", text)
            self.assertIn("Invalid index", text)
            self.assertIn("Exiting InternTrack", text)
            self.assertEqual(next(inputs), "list")

    def test_loop_ends_on_eof(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            logic = Logic.from_prefs(
                UserPrefs(
                    internship_catalogue_path=Path(d) / "internships.json",
                    event_catalogue_path=Path(d) / "events.json",
                )
            )

            def _eof(_msg: str) -> str:
                raise EOFError

            out = io.StringIO()
            run_interactive(logic, Console(file=out, width=120), prompt_fn=_eof)
            self.assertIn("Bye.", out.getvalue())


if __name__ == "__main__":
    unittest.main()

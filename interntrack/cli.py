"""
CLI (Command Line Interface).

This module provides quick terminal commands, e.g.:

    interntrack run add na/Acme ro/SWE s/applied d/2026-03-01
    interntrack run find na/Acme
    interntrack run event find en/2026-05-01 12:00
    interntrack interactive

'run' executes exactly one command (the same syntax the interactive mode
accepts) and exits. Global options:

    --prefs PATH       preferences file (default ~/.interntrack/preferences.json)
    --log-level LEVEL  console log level (default WARNING)
    --log-file PATH    additionally write a full DEBUG log to this file

Note:
- The interactive UI lives in interntrack/interactive.py
- Preferences are loaded at start and saved again when the program ends
"""

from __future__ import annotations

import argparse
import logging

from rich.console import Console

from interntrack.errors import CommandException, ParseException
from interntrack.interactive import render_result, run_interactive
from interntrack.logic import Logic
from interntrack.logs import configure_logging
from interntrack.prefs import default_prefs_path, load_user_prefs, save_user_prefs

logger = logging.getLogger(__name__)


def _cmd_run(args: argparse.Namespace, logic: Logic, console: Console) -> int:
    """
    Execute one command text and print its result.
    """
    text = " ".join(args.text).strip()
    if not text:
        console.print("Please provide a command, e.g. 'list' or 'help'.")
        return 1

    try:
        result = logic.execute(text)
    except (ParseException, CommandException) as exc:
        console.print(str(exc), style="red", markup=False)
        return 1

    render_result(console, logic, result)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="interntrack", description="InternTrack CLI")
    parser.add_argument("--prefs", type=str, default=None, help="Preferences file path")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Console log level (e.g. INFO, DEBUG)")
    parser.add_argument("--log-file", type=str, default=None, help="Write a detailed log to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    p_run = sub.add_parser("run", help="Run one command (e.g. run find na/Acme)")
    p_run.add_argument("text", nargs=argparse.REMAINDER, help="Command text")

    sub.add_parser("interactive", help="Interactive command loop")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, loads prefs and data, dispatches,
    saves prefs and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level, args.log_file)

    prefs_path = args.prefs or default_prefs_path()
    prefs = load_user_prefs(prefs_path)
    logic = Logic.from_prefs(prefs)
    console = Console(width=logic.window_settings.width)

    try:
        if args.command == "run":
            code = _cmd_run(args, logic, console)
        elif args.command == "interactive":
            run_interactive(logic, console)
            code = 0
        else:
            code = 2
    finally:
        try:
            save_user_prefs(logic.model.user_prefs, prefs_path)
        except OSError as exc:
            logger.error("Could not save preferences to %s: %s", prefs_path, exc)

    raise SystemExit(code)

from __future__ import annotations

import logging
from typing import Callable, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from interntrack.commands import CommandResult, ResultType
from interntrack.errors import CommandException, ParseException
from interntrack.logic import Logic
from interntrack.model import DATETIME_FORMAT, Event, Internship

logger = logging.getLogger(__name__)

STATUS_STYLES = {
    "new": "white",
    "applied": "cyan",
    "assessment": "blue",
    "interview": "magenta",
    "offered": "green",
    "accepted": "bold green",
    "rejected": "red",
}


def _fmt_when(ev: Event) -> str:
    start = ev.start.strftime(DATETIME_FORMAT)
    if ev.end is None:
        return f"{start} (deadline)"
    if ev.end.date() == ev.start.date():
        return f"{start}-{ev.end.strftime('%H:%M')}"
    return f"{start} - {ev.end.strftime(DATETIME_FORMAT)}"


def _owner_label(logic: Logic, ev: Event) -> str:
    owner = logic.model.find_internship(ev.internship_id)
    return f"{owner.company} | {owner.role}" if owner else "(unknown internship)"


def internships_table(internships: tuple[Internship, ...], selected: Optional[Internship]) -> Table:
    table = Table(title="Internships", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Company", style="bold cyan")
    table.add_column("Role")
    table.add_column("Status")
    table.add_column("Applied")
    table.add_column("Notes", style="dim")

    for i, it in enumerate(internships, start=1):
        marker = " *" if selected is not None and it.internship_id == selected.internship_id else ""
        style = STATUS_STYLES.get(it.status, "white")
        table.add_row(
            f"{i}{marker}",
            escape(it.company),
            escape(it.role),
            f"[{style}]{it.status}[/]",
            it.applied_on.isoformat(),
            escape(it.notes or ""),
        )
    return table


def events_table(logic: Logic, events: tuple[Event, ...], title: str = "Events", with_owner: bool = True) -> Table:
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Event", style="bold")
    table.add_column("When", style="yellow")
    if with_owner:
        table.add_column("Internship", style="cyan")
    table.add_column("Description", style="dim")

    for i, ev in enumerate(events, start=1):
        row = [str(i), escape(ev.name), _fmt_when(ev)]
        if with_owner:
            row.append(escape(_owner_label(logic, ev)))
        row.append(escape(ev.description or ""))
        table.add_row(*row)
    return table


def render_result(console: Console, logic: Logic, result: CommandResult) -> None:
    """
    Display one command result. result_type only picks the view.
    """
    console.print(result.feedback, markup=False, highlight=False)

    if result.result_type == ResultType.HOME and result.internships is not None:
        if not result.internships:
            console.print("No internships to show.")
            return
        console.print(internships_table(result.internships, result.internship))

    elif result.result_type == ResultType.SHOW_INFO and result.internship is not None:
        it = result.internship
        body = (
            f"[bold cyan]{escape(it.company)}[/] | {escape(it.role)}\n"
            f"Status: {it.status}\n"
            f"Applied: {it.applied_on.isoformat()}"
        )
        if it.notes:
            body += f"\nNotes: {escape(it.notes)}"
        console.print(Panel(body, title="Selected internship", expand=False))
        if result.events:
            console.print(events_table(logic, result.events, title="Events of this internship", with_owner=False))
        else:
            console.print("No events for this internship yet.")

    elif result.result_type == ResultType.FIND_EVENT and result.events is not None:
        if result.events:
            console.print(events_table(logic, result.events))

    elif result.result_type == ResultType.CLASH and result.clashes:
        table = Table(title="Clashing events", box=box.SIMPLE)
        table.add_column("#", justify="right")
        table.add_column("Event")
        table.add_column("")
        table.add_column("Event")
        for k, (a, b) in enumerate(result.clashes, start=1):
            table.add_row(
                str(k),
                f"{escape(a.name)} ({escape(_owner_label(logic, a))})\n[yellow]{_fmt_when(a)}[/]",
                "↔",
                f"{escape(b.name)} ({escape(_owner_label(logic, b))})\n[yellow]{_fmt_when(b)}[/]",
            )
        console.print(table)


def run_interactive(
    logic: Logic,
    console: Optional[Console] = None,
    prompt_fn: Optional[Callable[[str], str]] = None,
) -> None:
    """
    Read-execute-display loop. Ends on 'exit' or end of input.
    """
    console = console or Console(width=logic.window_settings.width)
    prompt = prompt_fn or console.input

    console.print("\n=== InternTrack ===")
    console.print("Type 'help' to see all commands.")
    render_result(console, logic, logic.execute("list"))

    while True:
        try:
            text = prompt("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            console.print("Bye.")
            return
        if not text:
            continue

        try:
            result = logic.execute(text)
        except (ParseException, CommandException) as exc:
            logger.debug("Command failed: %s", exc)
            console.print(str(exc), style="red", markup=False)
            continue

        render_result(console, logic, result)
        if result.result_type == ResultType.EXIT:
            return

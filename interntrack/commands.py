"""
Command layer.

Every user action is a small immutable command object. The parser builds it
from command text, and execute(model) applies it and returns a CommandResult:

    add na/Acme ro/SWE s/applied d/2026-03-01   -> AddCommand
    event find en/2026-05-01 12:00               -> EventFindCommand

A command either succeeds completely or raises CommandException and leaves
the model as it was. Indexes are 1-based positions in the list currently
shown (the filtered view), not in the whole catalogue.
"""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Sequence, TypeVar

from interntrack.catalogue import FilteredView, Predicate
from interntrack.conflicts import find_clashes
from interntrack.errors import CommandException, DuplicateEntryError, EntryNotFoundError
from interntrack.export_ics import export_events_to_ics
from interntrack.model import Event, Internship
from interntrack.model_manager import (
    PREDICATE_SHOW_ALL_EVENTS,
    PREDICATE_SHOW_ALL_INTERNSHIPS,
    ModelManager,
    events_by_internship,
)

T = TypeVar("T")

MESSAGE_INVALID_INTERNSHIP_INDEX = "Invalid index: no internship is displayed at this position"
MESSAGE_INVALID_EVENT_INDEX = "Invalid index: no event is displayed at this position"
MESSAGE_NOT_FILTERED = "At least one field to filter must be provided."
MESSAGE_NOT_EDITED = "At least one field to edit must be provided."
MESSAGE_DUPLICATE_INTERNSHIP = "This internship already exists in the catalogue"
MESSAGE_DUPLICATE_EVENT = "This event already exists for the internship"
MESSAGE_NO_SELECTION = "No internship selected. Use 'select INDEX' first."


class ResultType(Enum):
    """Tells the display which view to render. Carries no other meaning."""

    NO_CHANGE = "no_change"
    HOME = "home"
    SHOW_INFO = "show_info"
    FIND_EVENT = "find_event"
    CLASH = "clash"
    HELP = "help"
    EXIT = "exit"


@dataclass(frozen=True)
class CommandResult:
    feedback: str
    result_type: ResultType = ResultType.NO_CHANGE
    internship: Optional[Internship] = None
    internships: Optional[tuple[Internship, ...]] = None
    events: Optional[tuple[Event, ...]] = None
    clashes: Optional[tuple[tuple[Event, Event], ...]] = None


class Command(ABC):
    @abstractmethod
    def execute(self, model: ModelManager) -> CommandResult:
        raise NotImplementedError


def _resolve_index(view: FilteredView[T], index: int, message: str) -> T:
    """
    Return the element shown at 1-based index of the filtered view.
    """
    if index < 1 or index > len(view):
        raise CommandException(message)
    return view[index - 1]


def _home(model: ModelManager, feedback: str) -> CommandResult:
    return CommandResult(
        feedback,
        ResultType.HOME,
        internship=model.selected_internship,
        internships=tuple(model.filtered_internships),
    )


def _show_info(model: ModelManager, feedback: str, internship: Internship) -> CommandResult:
    model.update_filtered_event_list(events_by_internship(internship))
    return CommandResult(
        feedback,
        ResultType.SHOW_INFO,
        internship=internship,
        events=tuple(model.filtered_events),
    )


def _contains_ignore_case(text: Optional[str], query: str) -> bool:
    return query.lower() in (text or "").lower()


def _all_of(predicates: Sequence[Predicate[T]]) -> Predicate[T]:
    return lambda item: all(p(item) for p in predicates)


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InternshipDescriptor:
    """
    Optional internship fields, used by edit (new values) and find (filters).
    """

    company: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None
    applied_on: Optional[date] = None
    notes: Optional[str] = None

    def is_any_field_set(self) -> bool:
        return any(v is not None for v in dataclasses.astuple(self))


@dataclass(frozen=True)
class EventDescriptor:
    """
    Optional event fields, used by edit (new values) and find (filters).
    """

    name: Optional[str] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    description: Optional[str] = None

    def is_any_field_set(self) -> bool:
        return any(v is not None for v in dataclasses.astuple(self))


# ---------------------------------------------------------------------------
# Internship commands
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AddCommand(Command):
    COMMAND_WORD = "add"
    USAGE = "add na/COMPANY ro/ROLE s/STATUS d/YYYY-MM-DD [no/NOTES]"

    internship: Internship

    def execute(self, model: ModelManager) -> CommandResult:
        if model.has_internship(self.internship):
            raise CommandException(MESSAGE_DUPLICATE_INTERNSHIP)
        model.add_internship(self.internship)
        return _home(model, f"New internship added: {self.internship}")


@dataclass(frozen=True)
class DeleteCommand(Command):
    COMMAND_WORD = "delete"
    USAGE = "delete INDEX"

    index: int

    def execute(self, model: ModelManager) -> CommandResult:
        target = _resolve_index(model.filtered_internships, self.index, MESSAGE_INVALID_INTERNSHIP_INDEX)
        try:
            model.delete_internship(target)
        except EntryNotFoundError as exc:
            raise CommandException(str(exc)) from exc
        # the selection is left alone; it keeps pointing at the deleted internship
        model.delete_events_of(target)
        return _home(model, f"Deleted internship: {target}")


@dataclass(frozen=True)
class EditCommand(Command):
    COMMAND_WORD = "edit"
    USAGE = "edit INDEX [na/COMPANY] [ro/ROLE] [s/STATUS] [d/YYYY-MM-DD] [no/NOTES]"

    index: int
    descriptor: InternshipDescriptor

    def execute(self, model: ModelManager) -> CommandResult:
        if not self.descriptor.is_any_field_set():
            raise CommandException(MESSAGE_NOT_EDITED)
        target = _resolve_index(model.filtered_internships, self.index, MESSAGE_INVALID_INTERNSHIP_INDEX)
        changes = {k: v for k, v in dataclasses.asdict(self.descriptor).items() if v is not None}
        try:
            edited = dataclasses.replace(target, **changes)
        except ValueError as exc:
            raise CommandException(str(exc)) from exc

        try:
            model.set_internship(target, edited)
        except DuplicateEntryError as exc:
            raise CommandException(MESSAGE_DUPLICATE_INTERNSHIP) from exc
        except EntryNotFoundError as exc:
            raise CommandException(str(exc)) from exc
        model.update_filtered_internship_list(PREDICATE_SHOW_ALL_INTERNSHIPS)
        return _home(model, f"Edited internship: {edited}")


@dataclass(frozen=True)
class FindCommand(Command):
    """
    Show the internships matching every given field.
    Text fields match by case-insensitive substring, status must match exactly.
    """

    COMMAND_WORD = "find"
    USAGE = "find [na/COMPANY] [ro/ROLE] [s/STATUS] [d/YYYY-MM-DD] [no/NOTES]"

    descriptor: InternshipDescriptor

    def predicate(self) -> Predicate[Internship]:
        d = self.descriptor
        checks: list[Predicate[Internship]] = []
        if d.company is not None:
            checks.append(lambda x: _contains_ignore_case(x.company, d.company))
        if d.role is not None:
            checks.append(lambda x: _contains_ignore_case(x.role, d.role))
        if d.status is not None:
            checks.append(lambda x: x.status == d.status)
        if d.applied_on is not None:
            checks.append(lambda x: x.applied_on == d.applied_on)
        if d.notes is not None:
            checks.append(lambda x: _contains_ignore_case(x.notes, d.notes))
        return _all_of(checks)

    def execute(self, model: ModelManager) -> CommandResult:
        if not self.descriptor.is_any_field_set():
            raise CommandException(MESSAGE_NOT_FILTERED)
        model.update_filtered_internship_list(self.predicate())
        return _home(model, f"Found internships: {len(model.filtered_internships)}")


@dataclass(frozen=True)
class ListCommand(Command):
    COMMAND_WORD = "list"
    USAGE = "list"

    def execute(self, model: ModelManager) -> CommandResult:
        model.update_filtered_internship_list(PREDICATE_SHOW_ALL_INTERNSHIPS)
        return _home(model, "Listed all internships")


@dataclass(frozen=True)
class SelectCommand(Command):
    COMMAND_WORD = "select"
    USAGE = "select INDEX"

    index: int

    def execute(self, model: ModelManager) -> CommandResult:
        target = _resolve_index(model.filtered_internships, self.index, MESSAGE_INVALID_INTERNSHIP_INDEX)
        model.update_selected_internship(target)
        return _show_info(model, f"Selected internship: {target}", target)


@dataclass(frozen=True)
class ClearCommand(Command):
    COMMAND_WORD = "clear"
    USAGE = "clear"

    def execute(self, model: ModelManager) -> CommandResult:
        model.clear()
        return _home(model, "Internship catalogue has been cleared!")


# ---------------------------------------------------------------------------
# Event commands
# ---------------------------------------------------------------------------


def _current_selection(model: ModelManager) -> Internship:
    selected = model.selected_internship
    if selected is None:
        raise CommandException(MESSAGE_NO_SELECTION)
    current = model.find_internship(selected.internship_id)
    if current is None:
        raise CommandException("The selected internship no longer exists. Select another one.")
    return current


def _owner_view(model: ModelManager, feedback: str, event: Event) -> CommandResult:
    """
    Show the internship the event belongs to, together with its events.
    """
    owner = model.find_internship(event.internship_id)
    if owner is None:
        model.update_filtered_event_list(PREDICATE_SHOW_ALL_EVENTS)
        return CommandResult(feedback, ResultType.FIND_EVENT, events=tuple(model.filtered_events))
    return _show_info(model, feedback, owner)


@dataclass(frozen=True)
class EventAddCommand(Command):
    COMMAND_WORD = "add"
    USAGE = "event add na/NAME st/YYYY-MM-DD HH:MM [en/YYYY-MM-DD HH:MM] [de/DESCRIPTION]"

    name: str
    start: datetime
    end: Optional[datetime] = None
    description: Optional[str] = None

    def execute(self, model: ModelManager) -> CommandResult:
        internship = _current_selection(model)
        try:
            event = Event(
                name=self.name,
                start=self.start,
                end=self.end,
                description=self.description,
                internship_id=internship.internship_id,
            )
        except ValueError as exc:
            raise CommandException(str(exc)) from exc

        if model.has_event(event):
            raise CommandException(MESSAGE_DUPLICATE_EVENT)
        model.add_event(event)
        return _show_info(model, f"New event added: {event}", internship)


@dataclass(frozen=True)
class EventDeleteCommand(Command):
    COMMAND_WORD = "delete"
    USAGE = "event delete INDEX"

    index: int

    def execute(self, model: ModelManager) -> CommandResult:
        target = _resolve_index(model.filtered_events, self.index, MESSAGE_INVALID_EVENT_INDEX)
        try:
            model.delete_event(target)
        except EntryNotFoundError as exc:
            raise CommandException(str(exc)) from exc
        return _owner_view(model, f"Deleted event: {target}", target)


@dataclass(frozen=True)
class EventEditCommand(Command):
    COMMAND_WORD = "edit"
    USAGE = "event edit INDEX [na/NAME] [st/YYYY-MM-DD HH:MM] [en/YYYY-MM-DD HH:MM] [de/DESCRIPTION]"

    index: int
    descriptor: EventDescriptor

    def execute(self, model: ModelManager) -> CommandResult:
        if not self.descriptor.is_any_field_set():
            raise CommandException(MESSAGE_NOT_EDITED)
        target = _resolve_index(model.filtered_events, self.index, MESSAGE_INVALID_EVENT_INDEX)
        changes = {k: v for k, v in dataclasses.asdict(self.descriptor).items() if v is not None}
        try:
            edited = dataclasses.replace(target, **changes)
        except ValueError as exc:
            raise CommandException(str(exc)) from exc

        try:
            model.set_event(target, edited)
        except DuplicateEntryError as exc:
            raise CommandException(MESSAGE_DUPLICATE_EVENT) from exc
        except EntryNotFoundError as exc:
            raise CommandException(str(exc)) from exc
        return _owner_view(model, f"Edited event: {edited}", edited)


@dataclass(frozen=True)
class EventFindCommand(Command):
    """
    Show the events matching every given field.

    Timing filter:
    - start and end: the event lies completely between them
    - start only: the event starts at or after it
    - end only: the event lies between now and the end bound
    """

    COMMAND_WORD = "find"
    USAGE = "event find [na/NAME] [st/YYYY-MM-DD HH:MM] [en/YYYY-MM-DD HH:MM]"

    descriptor: EventDescriptor
    clock: Callable[[], datetime] = field(default=datetime.now, compare=False)

    def predicate(self) -> Predicate[Event]:
        d = self.descriptor
        checks: list[Predicate[Event]] = []
        if d.name is not None:
            checks.append(lambda x: _contains_ignore_case(x.name, d.name))
        if d.description is not None:
            checks.append(lambda x: _contains_ignore_case(x.description, d.description))

        if d.start is not None and d.end is not None:
            checks.append(lambda x: x.is_between(d.start, d.end))
        elif d.start is not None:
            checks.append(lambda x: x.is_after_or_equals(d.start))
        elif d.end is not None:
            now = self.clock()
            checks.append(lambda x: x.is_between(now, d.end))
        return _all_of(checks)

    def execute(self, model: ModelManager) -> CommandResult:
        if not self.descriptor.is_any_field_set():
            raise CommandException(MESSAGE_NOT_FILTERED)
        model.update_filtered_event_list(self.predicate())
        events = tuple(model.filtered_events)
        return CommandResult(f"Found events: {len(events)}", ResultType.FIND_EVENT, events=events)


@dataclass(frozen=True)
class EventListCommand(Command):
    COMMAND_WORD = "list"
    USAGE = "event list"

    def execute(self, model: ModelManager) -> CommandResult:
        model.update_filtered_event_list(PREDICATE_SHOW_ALL_EVENTS)
        return CommandResult("Listed all events", ResultType.FIND_EVENT, events=tuple(model.filtered_events))


# ---------------------------------------------------------------------------
# Other commands
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ClashCommand(Command):
    COMMAND_WORD = "clash"
    USAGE = "clash"

    def execute(self, model: ModelManager) -> CommandResult:
        clashes = tuple(find_clashes(model.events))
        if not clashes:
            return CommandResult("No clashes found.", ResultType.CLASH, clashes=())
        return CommandResult(f"Clashes found: {len(clashes)}", ResultType.CLASH, clashes=clashes)


@dataclass(frozen=True)
class ExportCommand(Command):
    """
    Export the events currently shown into an iCalendar file.
    """

    COMMAND_WORD = "export"
    USAGE = "export FILE.ics"

    out_path: Path

    def execute(self, model: ModelManager) -> CommandResult:
        events = model.filtered_events.as_list()
        if not events:
            raise CommandException("No events to export.")
        companies = {i.internship_id: i for i in model.internships}
        try:
            n = export_events_to_ics(events, self.out_path, companies)
        except OSError as exc:
            raise CommandException(f"Could not write {self.out_path}: {exc}") from exc
        return CommandResult(f"Exported {n} events to: {self.out_path}")


@dataclass(frozen=True)
class HelpCommand(Command):
    COMMAND_WORD = "help"
    USAGE = "help"

    def execute(self, model: ModelManager) -> CommandResult:
        lines = ["Commands:"]
        for command in ALL_COMMANDS:
            lines.append(f"  {command.USAGE}")
        return CommandResult("\n".join(lines), ResultType.HELP)


@dataclass(frozen=True)
class ExitCommand(Command):
    COMMAND_WORD = "exit"
    USAGE = "exit"

    def execute(self, model: ModelManager) -> CommandResult:
        return CommandResult("Exiting InternTrack as requested ...", ResultType.EXIT)


ALL_COMMANDS: tuple[type[Command], ...] = (
    AddCommand,
    DeleteCommand,
    EditCommand,
    FindCommand,
    ListCommand,
    SelectCommand,
    ClearCommand,
    EventAddCommand,
    EventDeleteCommand,
    EventEditCommand,
    EventFindCommand,
    EventListCommand,
    ClashCommand,
    ExportCommand,
    HelpCommand,
    ExitCommand,
)

"""
Parsing (command text -> Command).

Command text is a command word, an optional preamble (usually an index) and
prefixed arguments:

    edit 2 s/interview no/Second round
    event add na/Technical interview st/2026-04-02 14:00 en/2026-04-02 15:00

Rules:
- a prefix only counts when it follows whitespace
- a repeated prefix keeps its last value
- event commands start with the extra word 'event'

Anything malformed raises ParseException. Whether the command makes sense
for the current data is checked later, when it is executed.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional

from interntrack.commands import (
    AddCommand,
    ClashCommand,
    ClearCommand,
    Command,
    DeleteCommand,
    EditCommand,
    EventAddCommand,
    EventDeleteCommand,
    EventDescriptor,
    EventEditCommand,
    EventFindCommand,
    EventListCommand,
    ExitCommand,
    ExportCommand,
    FindCommand,
    HelpCommand,
    InternshipDescriptor,
    ListCommand,
    SelectCommand,
)
from interntrack.errors import ParseException
from interntrack.model import Internship, normalize_status, parse_date, parse_datetime


# ---------------------------------------------------------------------------
# Prefixes
# ---------------------------------------------------------------------------

PREFIX_COMPANY = "na/"
PREFIX_ROLE = "ro/"
PREFIX_STATUS = "s/"
PREFIX_DATE = "d/"
PREFIX_NOTES = "no/"

PREFIX_EVENT_NAME = "na/"
PREFIX_EVENT_START = "st/"
PREFIX_EVENT_END = "en/"
PREFIX_EVENT_DESCRIPTION = "de/"

INTERNSHIP_PREFIXES = (PREFIX_COMPANY, PREFIX_ROLE, PREFIX_STATUS, PREFIX_DATE, PREFIX_NOTES)
EVENT_PREFIXES = (PREFIX_EVENT_NAME, PREFIX_EVENT_START, PREFIX_EVENT_END, PREFIX_EVENT_DESCRIPTION)

MESSAGE_INVALID_FORMAT = "Invalid command format!\n{usage}"
MESSAGE_UNKNOWN_COMMAND = "Unknown command: {word!r}. Type 'help' to see all commands."
MESSAGE_INVALID_INDEX = "Index is not a non-zero unsigned integer."


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------


@dataclass
class ArgumentMap:
    preamble: str
    values: Dict[str, str]

    def get(self, prefix: str) -> Optional[str]:
        return self.values.get(prefix)

    def has(self, prefix: str) -> bool:
        return prefix in self.values


def tokenize(args: str, prefixes: Iterable[str]) -> ArgumentMap:
    """
    Split argument text into the preamble and the value of each prefix.
    """
    text = " " + args
    positions: list[tuple[int, str]] = []
    for prefix in set(prefixes):
        start = 0
        while True:
            found = text.find(" " + prefix, start)
            if found == -1:
                break
            positions.append((found + 1, prefix))
            start = found + 1

    positions.sort()

    preamble = text[: positions[0][0]] if positions else text
    values: Dict[str, str] = {}
    for k, (pos, prefix) in enumerate(positions):
        end = positions[k + 1][0] if k + 1 < len(positions) else len(text)
        values[prefix] = text[pos + len(prefix) : end].strip()

    return ArgumentMap(preamble=preamble.strip(), values=values)


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def parse_index(text: str) -> int:
    value = text.strip()
    if not value.isdecimal() or int(value) == 0:
        raise ParseException(MESSAGE_INVALID_INDEX)
    return int(value)


def _required(args: ArgumentMap, prefixes: Iterable[str], usage: str) -> None:
    for prefix in prefixes:
        if not args.has(prefix):
            raise ParseException(MESSAGE_INVALID_FORMAT.format(usage=usage))


def _text(value: Optional[str], label: str) -> Optional[str]:
    if value is None:
        return None
    if not value.strip():
        raise ParseException(f"{label} must not be blank")
    return value.strip()


def _convert(fn, value: Optional[str]):
    """
    Apply a model converter (parse_date, ...) and turn ValueError into ParseException.
    """
    if value is None:
        return None
    try:
        return fn(value)
    except ValueError as exc:
        raise ParseException(str(exc)) from exc


def _index_or_usage(args: ArgumentMap, usage: str) -> int:
    if not args.preamble:
        raise ParseException(MESSAGE_INVALID_FORMAT.format(usage=usage))
    return parse_index(args.preamble)


# ---------------------------------------------------------------------------
# Internship commands
# ---------------------------------------------------------------------------


def _parse_add(rest: str) -> Command:
    args = tokenize(rest, INTERNSHIP_PREFIXES)
    _required(args, (PREFIX_COMPANY, PREFIX_ROLE, PREFIX_STATUS, PREFIX_DATE), AddCommand.USAGE)
    if args.preamble:
        raise ParseException(MESSAGE_INVALID_FORMAT.format(usage=AddCommand.USAGE))
    try:
        internship = Internship(
            company=args.get(PREFIX_COMPANY) or "",
            role=args.get(PREFIX_ROLE) or "",
            status=args.get(PREFIX_STATUS) or "",
            applied_on=parse_date(args.get(PREFIX_DATE) or ""),
            notes=args.get(PREFIX_NOTES),
        )
    except ValueError as exc:
        raise ParseException(str(exc)) from exc
    return AddCommand(internship)


def _internship_descriptor(args: ArgumentMap, allow_blank_notes: bool) -> InternshipDescriptor:
    notes = args.get(PREFIX_NOTES)
    return InternshipDescriptor(
        company=_text(args.get(PREFIX_COMPANY), "Company name"),
        role=_text(args.get(PREFIX_ROLE), "Role"),
        status=_convert(normalize_status, args.get(PREFIX_STATUS)),
        applied_on=_convert(parse_date, args.get(PREFIX_DATE)),
        # edit: an empty no/ clears the notes
        notes=notes if allow_blank_notes and notes is not None else _text(notes, "Notes"),
    )


def _parse_edit(rest: str) -> Command:
    args = tokenize(rest, INTERNSHIP_PREFIXES)
    index = _index_or_usage(args, EditCommand.USAGE)
    return EditCommand(index, _internship_descriptor(args, allow_blank_notes=True))


def _parse_find(rest: str) -> Command:
    args = tokenize(rest, INTERNSHIP_PREFIXES)
    if args.preamble:
        raise ParseException(MESSAGE_INVALID_FORMAT.format(usage=FindCommand.USAGE))
    return FindCommand(_internship_descriptor(args, allow_blank_notes=False))


# ---------------------------------------------------------------------------
# Event commands
# ---------------------------------------------------------------------------


def _parse_event_add(rest: str) -> Command:
    args = tokenize(rest, EVENT_PREFIXES)
    _required(args, (PREFIX_EVENT_NAME, PREFIX_EVENT_START), EventAddCommand.USAGE)
    if args.preamble:
        raise ParseException(MESSAGE_INVALID_FORMAT.format(usage=EventAddCommand.USAGE))
    start = _convert(parse_datetime, args.get(PREFIX_EVENT_START))
    end = _convert(parse_datetime, args.get(PREFIX_EVENT_END))
    if end is not None and start > end:
        raise ParseException("Event start must not be after its end")
    return EventAddCommand(
        name=_text(args.get(PREFIX_EVENT_NAME), "Event name"),
        start=start,
        end=end,
        description=args.get(PREFIX_EVENT_DESCRIPTION) or None,
    )


def _event_descriptor(args: ArgumentMap) -> EventDescriptor:
    return EventDescriptor(
        name=_text(args.get(PREFIX_EVENT_NAME), "Event name"),
        start=_convert(parse_datetime, args.get(PREFIX_EVENT_START)),
        end=_convert(parse_datetime, args.get(PREFIX_EVENT_END)),
        description=args.get(PREFIX_EVENT_DESCRIPTION),
    )


def _parse_event_edit(rest: str) -> Command:
    args = tokenize(rest, EVENT_PREFIXES)
    index = _index_or_usage(args, EventEditCommand.USAGE)
    return EventEditCommand(index, _event_descriptor(args))


def _parse_event_find(rest: str) -> Command:
    args = tokenize(rest, (PREFIX_EVENT_NAME, PREFIX_EVENT_START, PREFIX_EVENT_END))
    if args.preamble:
        raise ParseException(MESSAGE_INVALID_FORMAT.format(usage=EventFindCommand.USAGE))
    descriptor = _event_descriptor(args)
    if descriptor.start is not None and descriptor.end is not None and descriptor.start > descriptor.end:
        raise ParseException("Filter start must not be after its end")
    return EventFindCommand(descriptor)


def _parse_event(rest: str) -> Command:
    words = rest.split(maxsplit=1)
    if not words:
        raise ParseException(MESSAGE_UNKNOWN_COMMAND.format(word="event"))
    sub = words[0].lower()
    sub_rest = words[1] if len(words) > 1 else ""

    if sub == EventAddCommand.COMMAND_WORD:
        return _parse_event_add(sub_rest)
    if sub == EventDeleteCommand.COMMAND_WORD:
        return EventDeleteCommand(_index_or_usage(tokenize(sub_rest, ()), EventDeleteCommand.USAGE))
    if sub == EventEditCommand.COMMAND_WORD:
        return _parse_event_edit(sub_rest)
    if sub == EventFindCommand.COMMAND_WORD:
        return _parse_event_find(sub_rest)
    if sub == EventListCommand.COMMAND_WORD:
        return EventListCommand()

    raise ParseException(MESSAGE_UNKNOWN_COMMAND.format(word=f"event {sub}"))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def parse_command(text: str) -> Command:
    """
    Parse one line of user input into a Command.
    """
    words = (text or "").strip().split(maxsplit=1)
    if not words:
        raise ParseException(MESSAGE_UNKNOWN_COMMAND.format(word=""))

    word = words[0].lower()
    rest = words[1] if len(words) > 1 else ""

    if word == "event":
        return _parse_event(rest)
    if word == AddCommand.COMMAND_WORD:
        return _parse_add(rest)
    if word == DeleteCommand.COMMAND_WORD:
        return DeleteCommand(_index_or_usage(tokenize(rest, ()), DeleteCommand.USAGE))
    if word == EditCommand.COMMAND_WORD:
        return _parse_edit(rest)
    if word == FindCommand.COMMAND_WORD:
        return _parse_find(rest)
    if word == SelectCommand.COMMAND_WORD:
        return SelectCommand(_index_or_usage(tokenize(rest, ()), SelectCommand.USAGE))
    if word == ExportCommand.COMMAND_WORD:
        if not rest.strip():
            raise ParseException(MESSAGE_INVALID_FORMAT.format(usage=ExportCommand.USAGE))
        return ExportCommand(Path(rest.strip()))

    no_arg_commands = {
        ListCommand.COMMAND_WORD: ListCommand,
        ClearCommand.COMMAND_WORD: ClearCommand,
        ClashCommand.COMMAND_WORD: ClashCommand,
        HelpCommand.COMMAND_WORD: HelpCommand,
        ExitCommand.COMMAND_WORD: ExitCommand,
    }
    if word in no_arg_commands:
        return no_arg_commands[word]()

    raise ParseException(MESSAGE_UNKNOWN_COMMAND.format(word=word))

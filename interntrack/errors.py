"""
Exception types shared across the model, command and storage layers.

Two kinds reach the user:
- ParseException: the command text itself is malformed
- CommandException: the command is well-formed but cannot be applied
  to the current model state

The message of either is shown to the user as-is.
"""

from __future__ import annotations


class InternTrackError(Exception):
    """Base class for all application errors."""


class DuplicateEntryError(InternTrackError):
    """Raised by a catalogue when an element would duplicate an existing one."""

    def __init__(self, message: str = "Operation would result in duplicate entries") -> None:
        super().__init__(message)


class EntryNotFoundError(InternTrackError):
    """Raised by a catalogue when the targeted element is not stored."""

    def __init__(self, message: str = "Entry not found in catalogue") -> None:
        super().__init__(message)


class CommandException(InternTrackError):
    pass


class ParseException(InternTrackError):
    pass


class DataLoadingError(InternTrackError):
    """Raised when a data file exists but cannot be read or decoded."""

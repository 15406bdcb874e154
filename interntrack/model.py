"""
Central data model definitions used across the project.

This module defines the canonical structure of Internship and Event objects so that:
- the catalogues, commands, storage and UI layers share the same field names
- duplicate detection is defined once per entity (value equality, not identity)
- invalid values are rejected when an object is built, never later

Both entities are immutable. Editing replaces the stored object with a new one.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M"

STATUSES = ("new", "applied", "assessment", "interview", "offered", "accepted", "rejected")


def parse_date(text: str) -> date:
    """
    Convert 'YYYY-MM-DD' to a date.
    Raises ValueError for invalid formats.
    """
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT).date()
    except ValueError:
        raise ValueError(f"Invalid date {text!r}, expected YYYY-MM-DD") from None


def parse_datetime(text: str) -> datetime:
    """
    Convert 'YYYY-MM-DD HH:MM' to a datetime.
    Raises ValueError for invalid formats.
    """
    try:
        return datetime.strptime(" ".join(text.split()), DATETIME_FORMAT)
    except ValueError:
        raise ValueError(f"Invalid date and time {text!r}, expected YYYY-MM-DD HH:MM") from None


def normalize_status(text: str) -> str:
    status = text.strip().lower()
    if status not in STATUSES:
        raise ValueError(f"Invalid status {text!r}, expected one of: {', '.join(STATUSES)}")
    return status


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Internship:
    """
    Represents one internship application.

    internship_id is assigned once and kept across edits, so events can
    refer to an internship without holding a copy of it.
    """

    company: str
    role: str
    status: str
    applied_on: date
    notes: Optional[str] = None
    internship_id: str = field(default_factory=_new_id, compare=False)

    def __post_init__(self) -> None:
        company = (self.company or "").strip()
        role = (self.role or "").strip()
        if not company:
            raise ValueError("Company name must not be blank")
        if not role:
            raise ValueError("Role must not be blank")
        if not isinstance(self.applied_on, date):
            raise ValueError("Application date must be a date")
        notes = self.notes.strip() if isinstance(self.notes, str) else None
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "company", company)
        object.__setattr__(self, "role", role)
        object.__setattr__(self, "status", normalize_status(self.status or ""))
        object.__setattr__(self, "notes", notes or None)

    def is_same_internship(self, other: Optional[Internship]) -> bool:
        """
        Duplicate check: same company and role (ignoring case), same status
        and the same application date.
        """
        if other is None:
            return False
        return (
            self.company.lower() == other.company.lower()
            and self.role.lower() == other.role.lower()
            and self.status == other.status
            and self.applied_on == other.applied_on
        )

    def __str__(self) -> str:
        text = f"{self.company} | {self.role} | {self.status} | applied {self.applied_on.isoformat()}"
        if self.notes:
            text += f" | {self.notes}"
        return text


@dataclass(frozen=True)
class Event:
    """
    Represents one interview, assessment or deadline of an internship.

    An event without an end is a deadline: a single point in time.
    """

    name: str
    start: datetime
    internship_id: str
    end: Optional[datetime] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        name = (self.name or "").strip()
        if not name:
            raise ValueError("Event name must not be blank")
        if not self.internship_id:
            raise ValueError("Event must belong to an internship")
        if self.end is not None and self.start > self.end:
            raise ValueError("Event start must not be after its end")
        description = self.description.strip() if isinstance(self.description, str) else None
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "description", description or None)

    @property
    def is_deadline(self) -> bool:
        return self.end is None

    @property
    def effective_end(self) -> datetime:
        return self.start if self.end is None else self.end

    def is_same_event(self, other: Optional[Event]) -> bool:
        """
        Duplicate check: same name (ignoring case), same times and the same internship.
        """
        if other is None:
            return False
        return (
            self.name.lower() == other.name.lower()
            and self.start == other.start
            and self.end == other.end
            and self.internship_id == other.internship_id
        )

    def is_between(self, lower: datetime, upper: datetime) -> bool:
        return lower <= self.start and self.effective_end <= upper

    def is_after_or_equals(self, lower: datetime) -> bool:
        return self.start >= lower

    def overlaps(self, other: Event) -> bool:
        # start < other_end AND end > other_start; deadlines have no duration
        if self.is_deadline or other.is_deadline:
            return False
        return self.start < other.effective_end and self.effective_end > other.start

    def __str__(self) -> str:
        when = self.start.strftime(DATETIME_FORMAT)
        if self.end is not None:
            when += " - " + self.end.strftime(DATETIME_FORMAT)
        text = f"{self.name} | {when}"
        if self.description:
            text += f" | {self.description}"
        return text

"""
Persistent storage for the two catalogues.

Each catalogue is one JSON document, written field for field:

    internships.json  {"internships": [{"internship_id": ..., "company": ..., ...}]}
    events.json       {"events": [{"name": ..., "start": "2026-04-02 14:00", ...}]}

Saving overwrites the whole file (last write wins). A missing file loads as an
empty catalogue; a file that exists but cannot be decoded raises
DataLoadingError, so the caller decides whether to start empty.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Generic, Iterable, TypeVar

from interntrack.errors import DataLoadingError
from interntrack.model import DATETIME_FORMAT, Event, Internship, parse_date, parse_datetime

logger = logging.getLogger(__name__)

T = TypeVar("T")


def internship_to_dict(internship: Internship) -> dict[str, Any]:
    return {
        "internship_id": internship.internship_id,
        "company": internship.company,
        "role": internship.role,
        "status": internship.status,
        "applied_on": internship.applied_on.isoformat(),
        "notes": internship.notes,
    }


def internship_from_dict(data: dict[str, Any]) -> Internship:
    return Internship(
        internship_id=str(data["internship_id"]),
        company=str(data["company"]),
        role=str(data["role"]),
        status=str(data["status"]),
        applied_on=parse_date(str(data["applied_on"])),
        notes=data.get("notes"),
    )


def event_to_dict(event: Event) -> dict[str, Any]:
    return {
        "name": event.name,
        "start": event.start.strftime(DATETIME_FORMAT),
        "end": event.end.strftime(DATETIME_FORMAT) if event.end is not None else None,
        "internship_id": event.internship_id,
        "description": event.description,
    }


def event_from_dict(data: dict[str, Any]) -> Event:
    end = data.get("end")
    return Event(
        name=str(data["name"]),
        start=parse_datetime(str(data["start"])),
        end=parse_datetime(str(end)) if end else None,
        internship_id=str(data["internship_id"]),
        description=data.get("description"),
    )


class JsonCatalogueStorage(Generic[T]):
    """
    Loads and saves one catalogue as a JSON document under a single key.
    """

    def __init__(
        self,
        path: str | Path,
        key: str,
        to_dict: Callable[[T], dict[str, Any]],
        from_dict: Callable[[dict[str, Any]], T],
    ) -> None:
        self.path = Path(path)
        self.key = key
        self._to_dict = to_dict
        self._from_dict = from_dict

    def load(self) -> list[T]:
        # First run: file does not exist yet -> empty catalogue
        if not self.path.exists():
            logger.info("Data file %s not found, starting empty", self.path)
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise DataLoadingError(f"Could not read {self.path}: {exc}") from exc

        if not isinstance(data, dict) or not isinstance(data.get(self.key), list):
            raise DataLoadingError(f"{self.path} does not contain a '{self.key}' list")

        items: list[T] = []
        for raw in data[self.key]:
            if not isinstance(raw, dict):
                raise DataLoadingError(f"{self.path}: every entry of '{self.key}' must be an object")
            try:
                items.append(self._from_dict(raw))
            except (KeyError, TypeError, ValueError) as exc:
                raise DataLoadingError(f"{self.path}: invalid entry {raw!r} ({exc})") from exc

        logger.debug("Loaded %d %s from %s", len(items), self.key, self.path)
        return items

    def save(self, items: Iterable[T]) -> None:
        """
        Save all items, creating parent directories if needed.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {self.key: [self._to_dict(item) for item in items]}
        self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.debug("Saved %d %s to %s", len(payload[self.key]), self.key, self.path)


def internship_storage(path: str | Path) -> JsonCatalogueStorage[Internship]:
    return JsonCatalogueStorage(path, "internships", internship_to_dict, internship_from_dict)


def event_storage(path: str | Path) -> JsonCatalogueStorage[Event]:
    return JsonCatalogueStorage(path, "events", event_to_dict, event_from_dict)

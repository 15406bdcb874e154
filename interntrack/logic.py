"""
Logic: the single entry point the UI talks to.

    logic = Logic.from_prefs(load_user_prefs())
    result = logic.execute("find na/Acme")

execute() parses the text, runs the command against the model and then saves
both catalogues. ParseException and CommandException reach the caller
unchanged.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar

from interntrack.catalogue import Catalogue, FilteredView
from interntrack.commands import CommandResult
from interntrack.errors import CommandException, DataLoadingError, DuplicateEntryError
from interntrack.model import Event, Internship
from interntrack.model_manager import ModelManager
from interntrack.parse import parse_command
from interntrack.prefs import UserPrefs, WindowSettings
from interntrack.storage import JsonCatalogueStorage, event_storage, internship_storage

logger = logging.getLogger(__name__)

MESSAGE_SAVE_FAILED = "Could not save data to file: {error}"

T = TypeVar("T")


def _load_catalogue(store: JsonCatalogueStorage[T], is_duplicate: Callable[[T, T], bool]) -> list[T]:
    """
    Load one data file. An unreadable file starts its own catalogue empty.
    """
    try:
        items = store.load()
        Catalogue(is_duplicate, items)
    except (DataLoadingError, DuplicateEntryError) as exc:
        logger.warning("Data file %s is not in the correct format, starting it empty (%s)", store.path, exc)
        return []
    return items


def load_model(
    prefs: UserPrefs,
    internships_store: JsonCatalogueStorage[Internship],
    events_store: JsonCatalogueStorage[Event],
) -> ModelManager:
    """
    Build the model from the data files.

    Each file is loaded on its own: an unreadable file starts only its own
    catalogue empty (with a warning) instead of stopping the application.
    Events whose internship is missing are dropped.
    """
    internships = _load_catalogue(internships_store, Internship.is_same_internship)
    events = _load_catalogue(events_store, Event.is_same_event)

    known = {i.internship_id for i in internships}
    orphans = [ev for ev in events if ev.internship_id not in known]
    if orphans:
        logger.warning("Dropping %d events that belong to no stored internship", len(orphans))
    return ModelManager(internships, [ev for ev in events if ev.internship_id in known], prefs)


class Logic:
    def __init__(
        self,
        model: ModelManager,
        internships_store: JsonCatalogueStorage[Internship],
        events_store: JsonCatalogueStorage[Event],
    ) -> None:
        self.model = model
        self._internships_store = internships_store
        self._events_store = events_store

    @classmethod
    def from_prefs(cls, prefs: UserPrefs) -> Logic:
        internships_store = internship_storage(prefs.internship_catalogue_path)
        events_store = event_storage(prefs.event_catalogue_path)
        model = load_model(prefs, internships_store, events_store)
        return cls(model, internships_store, events_store)

    def execute(self, command_text: str) -> CommandResult:
        """
        Parse and run one command, then persist the catalogues.
        """
        logger.info("[USER COMMAND] %s", command_text)
        command = parse_command(command_text)
        result = command.execute(self.model)

        try:
            self._internships_store.save(self.model.internships)
            self._events_store.save(self.model.events)
        except OSError as exc:
            raise CommandException(MESSAGE_SAVE_FAILED.format(error=exc)) from exc

        logger.debug("Result: %s", result.feedback)
        return result

    @property
    def filtered_internships(self) -> FilteredView[Internship]:
        return self.model.filtered_internships

    @property
    def filtered_events(self) -> FilteredView[Event]:
        return self.model.filtered_events

    @property
    def selected_internship(self) -> Optional[Internship]:
        return self.model.selected_internship

    @property
    def window_settings(self) -> WindowSettings:
        return self.model.window_settings

    def set_window_settings(self, window: WindowSettings) -> None:
        self.model.set_window_settings(window)

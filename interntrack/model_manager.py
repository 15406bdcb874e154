"""
In-memory model of the application.

ModelManager is the only owner of the two catalogues, their filtered views,
the user preferences and the currently selected internship. Commands change
state exclusively through the methods below.

Execution is single-threaded: one command runs to completion before the next.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from interntrack.catalogue import Catalogue, FilteredView, Predicate, show_all
from interntrack.model import Event, Internship
from interntrack.prefs import UserPrefs, WindowSettings

logger = logging.getLogger(__name__)

PREDICATE_SHOW_ALL_INTERNSHIPS: Predicate[Internship] = show_all
PREDICATE_SHOW_ALL_EVENTS: Predicate[Event] = show_all


def events_by_internship(internship: Internship) -> Predicate[Event]:
    """
    Predicate matching the events that belong to one internship.
    """
    internship_id = internship.internship_id
    return lambda ev: ev.internship_id == internship_id


class ModelManager:
    def __init__(
        self,
        internships: Iterable[Internship] = (),
        events: Iterable[Event] = (),
        user_prefs: Optional[UserPrefs] = None,
    ) -> None:
        self._internships: Catalogue[Internship] = Catalogue(Internship.is_same_internship, internships)
        self._events: Catalogue[Event] = Catalogue(Event.is_same_event, events)
        self._user_prefs = UserPrefs()
        if user_prefs is not None:
            self._user_prefs.reset_data(user_prefs)

        self._filtered_internships: FilteredView[Internship] = FilteredView(self._internships)
        self._filtered_events: FilteredView[Event] = FilteredView(self._events)
        self._selected: Optional[Internship] = None

        logger.debug(
            "Initialized model with %d internships, %d events",
            len(self._internships),
            len(self._events),
        )

    # -- user prefs ------------------------------------------------------

    @property
    def user_prefs(self) -> UserPrefs:
        return self._user_prefs

    def set_user_prefs(self, user_prefs: UserPrefs) -> None:
        self._user_prefs.reset_data(user_prefs)

    @property
    def window_settings(self) -> WindowSettings:
        return self._user_prefs.window

    def set_window_settings(self, window: WindowSettings) -> None:
        self._user_prefs.window = window

    @property
    def internship_catalogue_path(self) -> Path:
        return self._user_prefs.internship_catalogue_path

    @property
    def event_catalogue_path(self) -> Path:
        return self._user_prefs.event_catalogue_path

    # -- internships -----------------------------------------------------

    @property
    def internships(self) -> list[Internship]:
        return self._internships.as_list()

    def has_internship(self, internship: Internship) -> bool:
        return self._internships.contains(internship)

    def add_internship(self, internship: Internship) -> None:
        self._internships.add(internship)
        self.update_filtered_internship_list(PREDICATE_SHOW_ALL_INTERNSHIPS)

    def delete_internship(self, internship: Internship) -> None:
        self._internships.remove(internship)

    def set_internship(self, target: Internship, edited: Internship) -> None:
        self._internships.set(target, edited)
        if self._selected is not None and self._selected == target:
            self._selected = edited

    def find_internship(self, internship_id: str) -> Optional[Internship]:
        for internship in self._internships:
            if internship.internship_id == internship_id:
                return internship
        return None

    # -- events ----------------------------------------------------------

    @property
    def events(self) -> list[Event]:
        return self._events.as_list()

    def has_event(self, event: Event) -> bool:
        return self._events.contains(event)

    def add_event(self, event: Event) -> None:
        self._events.add(event)
        self.update_filtered_event_list(PREDICATE_SHOW_ALL_EVENTS)

    def delete_event(self, event: Event) -> None:
        self._events.remove(event)

    def set_event(self, target: Event, edited: Event) -> None:
        self._events.set(target, edited)

    def events_of(self, internship: Internship) -> list[Event]:
        return [ev for ev in self._events if events_by_internship(internship)(ev)]

    def delete_events_of(self, internship: Internship) -> list[Event]:
        """
        Remove all events belonging to internship. Returns the removed events.
        """
        return self._events.remove_if(events_by_internship(internship))

    def clear(self) -> None:
        self._events.reset([])
        self._internships.reset([])
        self._selected = None
        self.update_filtered_internship_list(PREDICATE_SHOW_ALL_INTERNSHIPS)
        self.update_filtered_event_list(PREDICATE_SHOW_ALL_EVENTS)

    # -- filtered views --------------------------------------------------

    @property
    def filtered_internships(self) -> FilteredView[Internship]:
        return self._filtered_internships

    @property
    def filtered_events(self) -> FilteredView[Event]:
        return self._filtered_events

    def update_filtered_internship_list(self, predicate: Predicate[Internship]) -> None:
        self._filtered_internships.set_predicate(predicate)

    def update_filtered_event_list(self, predicate: Predicate[Event]) -> None:
        self._filtered_events.set_predicate(predicate)

    # -- selection -------------------------------------------------------

    @property
    def selected_internship(self) -> Optional[Internship]:
        return self._selected

    def update_selected_internship(self, internship: Optional[Internship]) -> None:
        """
        Select the internship that event commands work on. None clears the selection.
        """
        self._selected = internship
        logger.debug("Selected internship: %s", internship)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModelManager):
            return NotImplemented
        return (
            self._internships == other._internships
            and self._events == other._events
            and self._user_prefs == other._user_prefs
            and self._filtered_internships.as_list() == other._filtered_internships.as_list()
            and self._filtered_events.as_list() == other._filtered_events.as_list()
        )

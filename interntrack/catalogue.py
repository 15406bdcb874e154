"""
Catalogue and filtered view.

A Catalogue is an ordered list of unique entities. Uniqueness is decided by a
duplicate predicate supplied per entity type (e.g. Internship.is_same_internship),
not by object identity.

A FilteredView is a read-only projection of a catalogue through a predicate.
It subscribes to its catalogue, so any read after a mutation already reflects
that mutation without calling set_predicate again.

All operations are plain linear scans; catalogues are small.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterable, Iterator, Optional, TypeVar

from interntrack.errors import DuplicateEntryError, EntryNotFoundError

T = TypeVar("T")

Predicate = Callable[[T], bool]


def show_all(_item: object) -> bool:
    return True


class Catalogue(Generic[T]):
    def __init__(self, is_duplicate: Callable[[T, T], bool], items: Iterable[T] = ()) -> None:
        self._is_duplicate = is_duplicate
        self._items: list[T] = []
        self._listeners: list[Callable[[], None]] = []
        for item in items:
            self.add(item)

    # -- queries ---------------------------------------------------------

    def contains(self, item: T) -> bool:
        """
        True if an element that is a duplicate of item is stored.
        """
        return any(self._is_duplicate(existing, item) for existing in self._items)

    def as_list(self) -> list[T]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Catalogue):
            return NotImplemented
        return self._items == other._items

    # -- mutations -------------------------------------------------------

    def add(self, item: T) -> None:
        if self.contains(item):
            raise DuplicateEntryError()
        self._items.append(item)
        self._notify()

    def remove(self, item: T) -> None:
        index = self._index_of(item)
        if index is None:
            raise EntryNotFoundError()
        del self._items[index]
        self._notify()

    def set(self, target: T, replacement: T) -> None:
        """
        Replace target with replacement at the same position.
        """
        index = self._index_of(target)
        if index is None:
            raise EntryNotFoundError()
        for i, existing in enumerate(self._items):
            if i != index and self._is_duplicate(existing, replacement):
                raise DuplicateEntryError()
        self._items[index] = replacement
        self._notify()

    def remove_if(self, predicate: Predicate[T]) -> list[T]:
        """
        Remove every element matching predicate. Returns the removed elements.
        """
        removed = [x for x in self._items if predicate(x)]
        if removed:
            self._items = [x for x in self._items if not predicate(x)]
            self._notify()
        return removed

    def reset(self, items: Iterable[T]) -> None:
        """
        Replace the whole content. Content is unchanged if items contain duplicates.
        """
        new_items: list[T] = []
        for item in items:
            if any(self._is_duplicate(existing, item) for existing in new_items):
                raise DuplicateEntryError()
            new_items.append(item)
        self._items = new_items
        self._notify()

    # -- observers -------------------------------------------------------

    def subscribe(self, listener: Callable[[], None]) -> None:
        """
        Register a callback fired after every mutation.
        """
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()

    def _index_of(self, item: T) -> Optional[int]:
        for i, existing in enumerate(self._items):
            if existing == item:
                return i
        return None


class FilteredView(Generic[T]):
    """
    Live, read-only projection of a catalogue.

    The projection is cached and dropped whenever the catalogue changes or the
    predicate is replaced; the next read recomputes it over the full catalogue.
    """

    def __init__(self, source: Catalogue[T], predicate: Predicate[T] = show_all) -> None:
        self._source = source
        self._predicate: Predicate[T] = predicate
        self._cache: Optional[list[T]] = None
        source.subscribe(self._invalidate)

    @property
    def predicate(self) -> Predicate[T]:
        return self._predicate

    def set_predicate(self, predicate: Predicate[T]) -> None:
        self._predicate = predicate
        self._cache = [x for x in self._source if predicate(x)]

    def as_list(self) -> list[T]:
        if self._cache is None:
            self._cache = [x for x in self._source if self._predicate(x)]
        return list(self._cache)

    def __len__(self) -> int:
        return len(self.as_list())

    def __getitem__(self, index: int) -> T:
        return self.as_list()[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self.as_list())

    def _invalidate(self) -> None:
        self._cache = None

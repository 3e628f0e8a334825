"""View state: the loaded dogs and the currently selected one."""

from __future__ import annotations

import logging
import threading

from pupfinder.models import Dog
from pupfinder.observable import Observable
from pupfinder.payload import parse_payload_text
from pupfinder.sources import PayloadSource

logger = logging.getLogger(__name__)


class DogsState:
    """Single source of truth for which dogs exist and which one is selected.

    Create one per running application and hand it to whatever renders it.

    ``load()`` is idempotent: the first successful call fetches and parses
    the payload, later calls return the collection already published. Use
    ``reload()`` to fetch again. A failed load raises (``ParseError`` or
    ``PayloadSourceError``), leaves the state untouched and can be retried.
    """

    def __init__(self, source: PayloadSource):
        self.source = source
        # Shared so a selection change and a collection change are serialized
        self._lock = threading.RLock()
        self.dogs: Observable[tuple[Dog, ...]] = Observable((), self._lock)
        self.selected_dog: Observable[Dog | None] = Observable(None, self._lock)
        self.loaded = False
        self.not_found = 0

    # ------------------------------------------------------------------ #
    # Loading
    # ------------------------------------------------------------------ #

    def load(self) -> tuple[Dog, ...]:
        with self._lock:
            if self.loaded:
                return self.dogs.get()
            return self._load()

    def reload(self) -> tuple[Dog, ...]:
        with self._lock:
            return self._load()

    def _load(self) -> tuple[Dog, ...]:
        logger.debug("Loading dogs from %r", self.source)
        dogs = parse_payload_text(self.source.fetch())

        selected = self.selected_dog.get()
        if selected is not None:
            replacement = _find(dogs, selected.id)
            # Never let the selection point at a dog outside the collection
            if replacement != selected:
                self.selected_dog.set(replacement)

        self.dogs.set(dogs)
        self.loaded = True
        logger.info("Loaded %d dogs", len(dogs))
        return dogs

    # ------------------------------------------------------------------ #
    # Selection
    # ------------------------------------------------------------------ #

    def dog_by_id(self, dog_id: int) -> Dog | None:
        return _find(self.dogs.get(), dog_id)

    def select_dog(self, dog_id: int) -> Dog | None:
        """Select the dog with ``dog_id``.

        Returns the selected dog, or None when no dog has that id. A miss
        leaves the current selection alone; it is logged and counted in
        ``not_found`` but never raised.
        """
        with self._lock:
            dog = self.dog_by_id(dog_id)
            if dog is None:
                self.not_found += 1
                logger.warning("No dog with id %s; selection unchanged", dog_id)
                return None
            self.selected_dog.set(dog)
            return dog

    def clear_selection(self) -> None:
        with self._lock:
            if self.selected_dog.get() is not None:
                self.selected_dog.set(None)


def _find(dogs: tuple[Dog, ...], dog_id: int) -> Dog | None:
    for dog in dogs:
        if dog.id == dog_id:
            return dog
    return None

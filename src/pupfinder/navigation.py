"""Two-screen navigation between the dog list and a dog's details."""

from __future__ import annotations

import enum
import logging
from typing import Callable

from pupfinder.state import DogsState

logger = logging.getLogger(__name__)


class Screen(str, enum.Enum):
    LIST = "list"
    DETAILS = "details"


class Navigator:
    def __init__(self, state: DogsState, open_url: Callable[[str], object]):
        self.state = state
        self.open_url = open_url
        self.current = Screen.LIST

    def activate_row(self, dog_id: int) -> bool:
        """Select ``dog_id`` and move to the details screen.

        Stays on the current screen when the id isn't in the collection.
        """
        if self.state.select_dog(dog_id) is None:
            return False
        self.current = Screen.DETAILS
        return True

    def back(self) -> None:
        self.current = Screen.LIST

    def open_adoption_page(self) -> str | None:
        """Hand the selected dog's adoption URL to the external opener as-is."""
        dog = self.state.selected_dog.get()
        if dog is None:
            return None
        logger.debug("Opening adoption page for %s: %s", dog.name, dog.adoption_url)
        self.open_url(dog.adoption_url)
        return dog.adoption_url

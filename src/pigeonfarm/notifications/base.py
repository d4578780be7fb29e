"""Presentation abstractions for showing messages to the user."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from ..models import Message
from ..ui.screens import Screen

logger = logging.getLogger(__name__)

ButtonSelected = Callable[[int], None]
"""Receives the index of the button the user selected."""


class PresentationSurface(ABC):
    """Base class for displaying a message as a modal prompt."""

    @abstractmethod
    def present(self, anchor: Screen, message: Message, on_select: ButtonSelected) -> None:
        """Show ``message`` anchored at ``anchor``.

        ``on_select`` must be called with the button index when the user
        touches a button. Dismissing without a choice calls nothing.
        """


class NullPresentation(PresentationSurface):
    """Surface that displays nothing, used when the host has no UI."""

    def present(self, anchor: Screen, message: Message, on_select: ButtonSelected) -> None:
        logger.debug("Discarding message %s for %s", message.id, anchor.name)


class ConsolePresentation(PresentationSurface):
    """Prints the message and reads the chosen button from stdin."""

    def __init__(self, read_choice: Callable[[str], str] = input) -> None:
        self._read_choice = read_choice

    def present(self, anchor: Screen, message: Message, on_select: ButtonSelected) -> None:
        if message.title:
            print(message.title)
        print(message.text)
        titles = message.button_titles()
        if not titles:
            return
        for index, title in enumerate(titles, start=1):
            print(f"  [{index}] {title}")
        choice = self._read_choice("Choose a button (empty to dismiss): ").strip()
        if choice.isdigit() and 1 <= int(choice) <= len(titles):
            on_select(int(choice) - 1)

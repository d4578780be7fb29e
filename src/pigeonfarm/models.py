"""Domain models used throughout the pigeonfarm client."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

ButtonSpec = Mapping[str, Any]
"""Raw button object as received from the server."""

NO_MESSAGE_ID = -1
"""Sentinel for ``last_id`` meaning no message has been shown yet."""


@dataclass(slots=True, frozen=True)
class Message:
    """Announcement delivered by the message endpoint."""

    id: int
    text: str
    title: Optional[str] = None
    buttons: tuple[ButtonSpec, ...] = field(default_factory=tuple)

    def button_titles(self) -> list[str]:
        """Labels used when rendering the buttons."""

        titles: list[str] = []
        for button in self.buttons:
            label = button.get("title", button.get("label"))
            titles.append("" if label is None else str(label))
        return titles

"""Client for fetching announcements from the message endpoint."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import requests

from ..models import ButtonSpec, Message

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MessageEndpointClient:
    """Handles communication with the message endpoint.

    Every failure mode (transport errors, non-2xx responses, payloads that do
    not describe a message) results in ``None`` rather than an exception, so
    a broken endpoint never disturbs the host application.
    """

    timeout_seconds: float = 10

    def fetch_message(self, url: str) -> Message | None:
        """Fetch and parse the current message published at ``url``."""

        try:
            response = requests.get(url, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.info("Failure loading message from %s: %s", url, exc)
            return None

        # requests.JSONDecodeError is both a RequestException and a ValueError
        try:
            payload = response.json()
        except ValueError:
            logger.info("Received data from %s could not be parsed", url)
            return None

        message = self.parse_message(payload)
        if message is None:
            logger.info("Received data from %s does not describe a message", url)
        return message

    @classmethod
    def parse_message(cls, payload: Any) -> Message | None:
        """Build a ``Message`` from a decoded JSON payload.

        ``id`` and the message text (``message`` or ``text``) are required.
        ``buttons`` is optional but must be a list of objects when present;
        each object is kept exactly as received.
        """

        if not isinstance(payload, Mapping):
            return None

        message_id = cls._extract_id(payload.get("id"))
        if message_id is None:
            return None

        text = payload.get("message", payload.get("text"))
        if not isinstance(text, str):
            return None

        title = payload.get("title")
        if title is not None and not isinstance(title, str):
            title = str(title)

        buttons = cls._extract_buttons(payload.get("buttons"))
        if buttons is None:
            return None

        return Message(id=message_id, text=text, title=title, buttons=buttons)

    @staticmethod
    def _extract_id(value: Any) -> int | None:
        # bool is an int subclass; true/false are not ids
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                return None
        return None

    @staticmethod
    def _extract_buttons(value: Any) -> tuple[ButtonSpec, ...] | None:
        if value is None:
            return ()
        if not isinstance(value, list):
            return None
        if not all(isinstance(button, Mapping) for button in value):
            return None
        return tuple(value)

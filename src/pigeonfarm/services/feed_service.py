"""Service holding the messages published by the development feed."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..api.client import MessageEndpointClient

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "default"


@dataclass(slots=True)
class FeedService:
    """Manages the in-memory message payloads, one per language."""

    messages: dict[str, dict[str, Any]] = field(default_factory=dict)

    def publish(self, payload: dict[str, Any], language: str | None = None) -> None:
        """Publish ``payload`` for ``language`` (or as the fallback message)."""

        if MessageEndpointClient.parse_message(payload) is None:
            raise ValueError("Payload does not describe a message")
        self.messages[(language or DEFAULT_LANGUAGE).lower()] = payload

    def retract(self, language: str | None = None) -> None:
        self.messages.pop((language or DEFAULT_LANGUAGE).lower(), None)

    def message_for(self, language: str | None) -> dict[str, Any] | None:
        """Return the payload for ``language``, falling back to the default one."""

        if language:
            payload = self.messages.get(language.lower())
            if payload is not None:
                return payload
        return self.messages.get(DEFAULT_LANGUAGE)

    def load(self, file_path: Path) -> None:
        """Replace the published messages with the contents of ``file_path``.

        The file holds a JSON object mapping language codes to payloads.
        """

        if not file_path.exists():
            return
        data = json.loads(file_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{file_path} must contain a JSON object")
        self.messages = {}
        for language, payload in data.items():
            self.publish(payload, language)
        logger.info("Loaded %s messages from %s", len(self.messages), file_path)

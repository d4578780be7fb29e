"""Coordinates fetching, de-duplication and presentation of messages."""
from __future__ import annotations

import logging
import threading
import webbrowser
from collections.abc import Callable
from typing import Optional

from ..api.client import MessageEndpointClient
from ..config import ClientConfig
from ..models import ButtonSpec, Message
from ..notifications.base import PresentationSurface
from ..scheduler.dispatch import ImmediateDispatcher, UiDispatcher, start_background
from ..storage.repository import StateRepository
from ..ui.screens import Screen, top_most_screen

logger = logging.getLogger(__name__)

ShowMessageHandler = Callable[[int], None]
ButtonTouchedHandler = Callable[[int, ButtonSpec], None]
ScreenProvider = Callable[[], Optional[Screen]]


class MissingURLError(ValueError):
    """Raised when ``show_message`` is called without a URL template."""


class MessageFetchClient:
    """Downloads the newest message and shows it once.

    ``on_show`` fires with the message id when a popup is presented and
    ``on_button_touched`` fires with the id and the untouched button object
    when the user selects a button.
    """

    def __init__(
        self,
        config: ClientConfig,
        repository: StateRepository,
        surface: PresentationSurface,
        screen_provider: ScreenProvider,
        *,
        endpoint: MessageEndpointClient | None = None,
        dispatcher: UiDispatcher | None = None,
        url_opener: Callable[[str], object] = webbrowser.open,
    ) -> None:
        self.config = config
        self.on_show: ShowMessageHandler | None = None
        self.on_button_touched: ButtonTouchedHandler | None = None
        self._repository = repository
        self._surface = surface
        self._screen_provider = screen_provider
        self._endpoint = endpoint or MessageEndpointClient(timeout_seconds=config.timeout_seconds)
        self._dispatcher = dispatcher or ImmediateDispatcher()
        self._url_opener = url_opener
        self._lock = threading.Lock()
        self._last_id: int | None = None
        self._in_flight: threading.Thread | None = None

    @property
    def url_template(self) -> str:
        return self.config.url_template

    @url_template.setter
    def url_template(self, value: str) -> None:
        self.config.url_template = value

    @property
    def last_id(self) -> int:
        """Id of the last message shown, loaded lazily from the repository."""

        with self._lock:
            if self._last_id is None:
                self._last_id = self._repository.last_id()
            return self._last_id

    def show_message(self) -> threading.Thread | None:
        """Check the endpoint in the background and show a new message.

        Returns the worker thread, or ``None`` when the first-launch rule
        skipped the check. A call made while a check is running returns the
        running worker instead of starting another request.
        """

        if not self.config.url_template:
            raise MissingURLError("No URL was set for the message client")

        if not self._repository.launched_before():
            self._repository.mark_launched()
            if not self.config.show_on_first_launch:
                logger.info("Skipping message because of first launch")
                return None

        with self._lock:
            if self._in_flight is not None and self._in_flight.is_alive():
                logger.debug("Message check already in flight")
                return self._in_flight
            self._in_flight = start_background(self._check_in_background, name="pigeonfarm-fetch")
            return self._in_flight

    def check_for_message(self) -> Message | None:
        """Fetch the message synchronously and present it if it is new.

        Returns the message handed to the UI dispatcher, or ``None`` when
        nothing was shown.
        """

        url = self.config.assembled_url()
        logger.info("Check for new message at url: %s", url)
        message = self._endpoint.fetch_message(url)
        if message is None:
            return None

        with self._lock:
            if self._last_id is None:
                self._last_id = self._repository.last_id()
            if message.id == self._last_id:
                logger.info("Message with id %s already shown", message.id)
                return None
            try:
                self._repository.set_last_id(message.id)
            except OSError as exc:
                logger.warning("Could not store id of message %s: %s", message.id, exc)
                return None
            self._last_id = message.id

        anchor = top_most_screen(self._screen_provider())
        if anchor is None:
            logger.info("No screen available to present message %s", message.id)
            return None

        self._dispatcher.call_soon(lambda: self._present(anchor, message))
        return message

    def _check_in_background(self) -> None:
        try:
            self.check_for_message()
        finally:
            with self._lock:
                if self._in_flight is threading.current_thread():
                    self._in_flight = None

    def _present(self, anchor: Screen, message: Message) -> None:
        def _on_select(index: int) -> None:
            self._button_touched(message, index)

        # surfaces may block in present() until a button is chosen
        if self.on_show is not None:
            self.on_show(message.id)
        self._surface.present(anchor, message, _on_select)

    def _button_touched(self, message: Message, index: int) -> None:
        try:
            button = message.buttons[index]
        except IndexError:
            logger.warning("Message %s has no button at index %s", message.id, index)
            return

        if self.on_button_touched is not None:
            self.on_button_touched(message.id, button)

        if button.get("action") == "url" and button.get("url"):
            logger.info("Opening url %s from message %s", button["url"], message.id)
            self._url_opener(str(button["url"]))

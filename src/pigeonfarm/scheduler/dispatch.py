"""Background fetch threads and hand-off of UI work to the host's UI loop."""
from __future__ import annotations

import logging
import queue
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable

logger = logging.getLogger(__name__)


class UiDispatcher(ABC):
    """Runs callables on the execution context the host uses for UI updates."""

    @abstractmethod
    def call_soon(self, callback: Callable[[], None]) -> None:
        """Schedule ``callback`` on the UI context."""


class ImmediateDispatcher(UiDispatcher):
    """Runs callbacks inline on whichever thread schedules them."""

    def call_soon(self, callback: Callable[[], None]) -> None:
        callback()


class QueueDispatcher(UiDispatcher):
    """Queues callbacks until the host's UI loop drains them."""

    def __init__(self) -> None:
        self._pending: queue.SimpleQueue[Callable[[], None]] = queue.SimpleQueue()

    def call_soon(self, callback: Callable[[], None]) -> None:
        self._pending.put(callback)

    def process_pending(self) -> int:
        """Run all queued callbacks on the calling thread and return how many ran."""

        processed = 0
        while True:
            try:
                callback = self._pending.get_nowait()
            except queue.Empty:
                return processed
            callback()
            processed += 1


def start_background(task: Callable[[], object], name: str) -> threading.Thread:
    """Run ``task`` on a daemon thread and return the started thread."""

    def _run() -> None:
        logger.debug("Running background task %s", name)
        task()

    thread = threading.Thread(target=_run, name=name, daemon=True)
    thread.start()
    return thread

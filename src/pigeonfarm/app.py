"""Application bootstrapper for the pigeonfarm client and development feed."""
from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from .config import DEFAULT_CONFIG, AppConfig
from .notifications.base import ConsolePresentation, PresentationSurface
from .services.message_service import MessageFetchClient, ScreenProvider
from .storage.repository import JsonStateRepository
from .ui.screens import Screen
from .web.app import bootstrap_app

logger = logging.getLogger(__name__)


def create_message_client(
    surface: PresentationSurface,
    screen_provider: ScreenProvider,
    config: AppConfig = DEFAULT_CONFIG,
) -> MessageFetchClient:
    """Create a client whose state is persisted below ``config.data_directory``."""

    config.ensure_data_directories()
    repository = JsonStateRepository(config.state_path)
    return MessageFetchClient(config.client, repository, surface, screen_provider)


def check(argv: Sequence[str] | None = None) -> None:
    """Entrypoint that checks an endpoint once and prints any new message."""

    parser = argparse.ArgumentParser(description="Check a message endpoint once.")
    parser.add_argument("url", help="URL template, may contain __VERSION__ and __LANGUAGE__")
    parser.add_argument("--version", dest="app_version", default=DEFAULT_CONFIG.client.app_version)
    parser.add_argument("--language", default=DEFAULT_CONFIG.client.language)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    config = DEFAULT_CONFIG
    config.client.url_template = args.url
    config.client.app_version = args.app_version
    config.client.language = args.language

    console = Screen(name="console")
    client = create_message_client(ConsolePresentation(), lambda: console, config)
    client.on_show = lambda message_id: logger.info("Showed message %s", message_id)
    client.on_button_touched = lambda message_id, button: logger.info(
        "Button %s touched in message %s", button, message_id
    )
    client.check_for_message()


def run() -> None:
    """Entrypoint used by the CLI to launch the development message feed."""

    logging.basicConfig(level=logging.INFO)
    app, _ = bootstrap_app()

    config = DEFAULT_CONFIG
    app.run(host=config.feed.host, port=config.feed.port, debug=config.environment == "development")


if __name__ == "__main__":  # pragma: no cover - manual execution only
    run()

"""Configuration settings for the pigeonfarm message client."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

VERSION_PLACEHOLDER = "__VERSION__"
LANGUAGE_PLACEHOLDER = "__LANGUAGE__"


@dataclass(slots=True)
class ClientConfig:
    """Settings used when checking the message endpoint."""

    url_template: str = ""
    """Endpoint URL, e.g. ``https://example.com/news.php?version=__VERSION__&language=__LANGUAGE__``."""

    app_version: str = "0.0.0"
    """Substituted for ``__VERSION__``."""

    language: str = "en"
    """Substituted for ``__LANGUAGE__``."""

    timeout_seconds: float = 10
    """Request timeout handed to ``requests``."""

    show_on_first_launch: bool = True
    """Whether a message may be shown on the very first launch of the host app."""

    def assembled_url(self) -> str:
        """Return ``url_template`` with every placeholder replaced."""

        url = self.url_template.replace(VERSION_PLACEHOLDER, self.app_version)
        return url.replace(LANGUAGE_PLACEHOLDER, self.language)


@dataclass(slots=True)
class FeedConfig:
    """Settings for the development message feed."""

    host: str = "127.0.0.1"
    port: int = 5000
    messages_file: str = "messages.json"


@dataclass(slots=True)
class AppConfig:
    """Top-level configuration for the application."""

    environment: Literal["development", "production"] = "development"
    data_directory: Path = field(default_factory=lambda: Path("data"))
    client: ClientConfig = field(default_factory=ClientConfig)
    feed: FeedConfig = field(default_factory=FeedConfig)

    @property
    def state_path(self) -> Path:
        return self.data_directory / "state.json"

    @property
    def messages_path(self) -> Path:
        return self.data_directory / self.feed.messages_file

    def ensure_data_directories(self) -> None:
        """Create data directories required by the application."""

        self.data_directory.mkdir(parents=True, exist_ok=True)


DEFAULT_CONFIG = AppConfig()

"""Runtime configuration for the snippet board client."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace

logger = logging.getLogger("snippetboard")

DEFAULT_API_URL = "https://snippet-api-6hap.onrender.com/api/snippets"


@dataclass(slots=True)
class ClientSettings:
    """Where the snippet collection lives and how the client presents it."""

    api_url: str = DEFAULT_API_URL
    request_timeout: float = 10.0
    highlight_style: str = "monokai"
    web_host: str = "127.0.0.1"
    web_port: int = 8000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ClientSettings":
        def _int_env(name: str, default: int) -> int:
            raw = os.getenv(name)
            if not raw:
                return default
            try:
                return int(raw)
            except ValueError:
                logger.warning("Invalid integer for %s: %s", name, raw)
                return default

        def _float_env(name: str, default: float) -> float:
            raw = os.getenv(name)
            if not raw:
                return default
            try:
                return float(raw)
            except ValueError:
                logger.warning("Invalid number for %s: %s", name, raw)
                return default

        return cls(
            api_url=os.getenv("SNIPPETS_API_URL", DEFAULT_API_URL),
            request_timeout=_float_env("SNIPPETS_API_TIMEOUT", 10.0),
            highlight_style=os.getenv("SNIPPETS_HIGHLIGHT_STYLE", "monokai"),
            web_host=os.getenv("SNIPPETS_WEB_HOST", "127.0.0.1"),
            web_port=_int_env("SNIPPETS_WEB_PORT", 8000),
            log_level=os.getenv("SNIPPETS_LOG_LEVEL", "INFO"),
        )

    def with_overrides(self, **overrides: object) -> "ClientSettings":
        """Copy of the settings with every non-``None`` override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


__all__ = ["ClientSettings", "DEFAULT_API_URL"]

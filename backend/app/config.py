"""
Runtime configuration.
Values come from the process environment, optionally seeded from a .env file.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import httpx
from dotenv import load_dotenv

DEFAULT_PROVIDER_URL = "https://api.mailchannels.net/tx/v1/send"
DEFAULT_PROVIDER_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    """Read-only configuration shared by every request."""

    auth_secret: Optional[str] = None
    provider_url: str = DEFAULT_PROVIDER_URL
    provider_api_key: Optional[str] = None
    provider_timeout: float = DEFAULT_PROVIDER_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build Settings from environment variables.

        AUTH_SECRET           Bearer token expected on POST /email. When unset,
                              every request is rejected with 401.
        MAILCHANNELS_API_URL  Provider send endpoint.
        MAILCHANNELS_API_KEY  Optional provider key, sent as X-Api-Key.
        MAILCHANNELS_TIMEOUT  Outbound call timeout in seconds (default 10).
        LOG_LEVEL             Root log level (default INFO).

        Raises:
            ValueError: if MAILCHANNELS_TIMEOUT is not a positive number,
                MAILCHANNELS_API_URL is not an absolute http(s) URL, or
                LOG_LEVEL is not a standard logging level name
        """
        raw_timeout = os.getenv("MAILCHANNELS_TIMEOUT", "").strip()
        timeout = DEFAULT_PROVIDER_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(
                    f"MAILCHANNELS_TIMEOUT must be a number, got {raw_timeout!r}"
                )
            if timeout <= 0:
                raise ValueError("MAILCHANNELS_TIMEOUT must be greater than zero")

        provider_url = os.getenv("MAILCHANNELS_API_URL", "").strip() or DEFAULT_PROVIDER_URL
        try:
            parsed_url = httpx.URL(provider_url)
        except httpx.InvalidURL as exc:
            raise ValueError(f"MAILCHANNELS_API_URL is not a valid URL: {exc}")
        if parsed_url.scheme not in ("http", "https") or not parsed_url.host:
            raise ValueError(
                f"MAILCHANNELS_API_URL must be an absolute http(s) URL, got {provider_url!r}"
            )

        log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
        # getLevelName maps known names to their numeric level
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {log_level!r}")

        return cls(
            auth_secret=os.getenv("AUTH_SECRET") or None,
            provider_url=provider_url,
            provider_api_key=os.getenv("MAILCHANNELS_API_KEY") or None,
            provider_timeout=timeout,
            log_level=log_level,
        )


@lru_cache
def get_settings() -> Settings:
    """
    Return the process-wide Settings, loading .env on first use.

    Used as a FastAPI dependency so tests can swap it through
    app.dependency_overrides.
    """
    load_dotenv()
    return Settings.from_env()

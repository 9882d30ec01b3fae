"""Runtime settings for tasklist.

Settings come from constructor arguments or ``TASKLIST_*`` environment
variables, resolved by pydantic-settings.
"""

from __future__ import annotations

import functools
from pathlib import Path

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from tasklist.exceptions import ConfigurationError

DEFAULT_CACHE_TTL_SECONDS = 2 * 60 * 60


class Settings(BaseSettings):
    """Process-wide configuration.

    Parameters:
        cache_ttl_seconds: Sliding expiry window for user task cache entries.
            Every hit or write pushes an entry's deadline this far into the
            future.  Defaults to two hours.  Read from ``TASKLIST_CACHE_TTL``.
        store_path: JSON file for the durable task store.  ``None`` selects
            the in-memory store.  Read from ``TASKLIST_STORE_PATH``.
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKLIST_",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    cache_ttl_seconds: float = Field(
        default=DEFAULT_CACHE_TTL_SECONDS,
        gt=0,
        validation_alias=AliasChoices("TASKLIST_CACHE_TTL", "cache_ttl_seconds"),
    )
    store_path: Path | None = None


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the settings for this process, read once from the environment.

    Raises:
        ConfigurationError: If a variable is set but cannot be parsed.
    """
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid tasklist settings: {exc}") from exc

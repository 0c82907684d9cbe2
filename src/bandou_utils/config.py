"""Runtime settings read from the environment.

A ``.env`` file in the working directory is honoured through
python-dotenv; real environment variables always win over it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

LOG_LEVEL_ENV: str = "BANDOU_LOG_LEVEL"
DEFAULT_LOG_LEVEL: str = "WARNING"
VALID_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable snapshot of the runtime configuration."""

    log_level: str = DEFAULT_LOG_LEVEL
    """Level name applied to the ``bandou_utils`` logger by the CLI."""


def _normalise_level(raw: str | None) -> str:
    if raw is None:
        return DEFAULT_LOG_LEVEL
    level = raw.strip().upper()
    # Unknown names fall back rather than abort the CLI.
    return level if level in VALID_LOG_LEVELS else DEFAULT_LOG_LEVEL


def load_settings(*, use_dotenv: bool = True) -> Settings:
    """Build :class:`Settings` from ``os.environ`` (and ``.env``)."""
    if use_dotenv:
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path, override=False)
    return Settings(log_level=_normalise_level(os.getenv(LOG_LEVEL_ENV)))

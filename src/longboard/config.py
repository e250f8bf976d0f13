# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for Longboard."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"longboard/{__version__}"
DEFAULT_CHUNK_SIZE = 64 * 1024


def _optional_float_env(name: str, default: float | None) -> float | None:
    try:
        value = os.getenv(name)
        if value is None:
            return default
        parsed = float(value)
        return parsed if parsed > 0 else None
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """Transport defaults shared by every backend."""

    user_agent: str = DEFAULT_USER_AGENT
    timeout: float | None = None
    follow_redirects: bool = False
    verify_ssl: bool = True
    chunk_size: int = DEFAULT_CHUNK_SIZE

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        chunk_size = _int_env("LONGBOARD_STDIN_CHUNK_SIZE", cls.chunk_size)
        if chunk_size <= 0:
            chunk_size = cls.chunk_size
        return cls(
            user_agent=os.getenv("LONGBOARD_USER_AGENT", cls.user_agent),
            timeout=_optional_float_env("LONGBOARD_HTTP_TIMEOUT", cls.timeout),
            follow_redirects=_bool_env("LONGBOARD_HTTP_REDIRECTS", cls.follow_redirects),
            verify_ssl=_bool_env("LONGBOARD_HTTP_VERIFY_SSL", cls.verify_ssl),
            chunk_size=chunk_size,
        )


@dataclass
class OutputSettings:
    """Terminal rendering defaults."""

    theme: str = "monokai"
    pager: bool = True

    @classmethod
    def from_env(cls) -> "OutputSettings":
        return cls(
            theme=os.getenv("LONGBOARD_THEME", cls.theme) or cls.theme,
            pager=_bool_env("LONGBOARD_PAGER", cls.pager),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_output_settings() -> OutputSettings:
    return OutputSettings.from_env()

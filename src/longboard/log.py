# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for Longboard."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("LONGBOARD_LOG_LEVEL", "WARNING").upper()

_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def level_for_verbosity(verbosity: int, base: str | None = None) -> int:
    """Lower the base level one step per `-v`, never below DEBUG."""
    base_level = getattr(logging, (base or DEFAULT_LOG_LEVEL).upper(), logging.WARNING)
    if verbosity <= 0:
        return base_level
    return min(base_level, _VERBOSITY_LEVELS[min(verbosity, len(_VERBOSITY_LEVELS) - 1)])


def setup_logging(level: str | int | None = None) -> None:
    """Configure standard logging on stderr; stdout belongs to the response."""
    if isinstance(level, int):
        effective_level = level
    else:
        effective_level = getattr(logging, (level or DEFAULT_LOG_LEVEL).upper(), logging.WARNING)
    logging.basicConfig(
        level=effective_level,
        format="%(levelname)s %(name)s: %(message)s",
    )


__all__ = ["level_for_verbosity", "setup_logging"]

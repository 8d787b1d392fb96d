# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for latencyprobe."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("LATENCYPROBE_LOG_LEVEL", "WARNING").upper()

# httpx logs every request at INFO; per-hop detail comes from latencyprobe.prober instead.
HTTP_LIBRARY_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str | None = None) -> int:
    """
    Configure standard logging for CLI use and return the effective level.

    The HTTP library loggers stay at WARNING unless DEBUG is requested.
    """
    effective_level = getattr(logging, (level or DEFAULT_LOG_LEVEL).upper(), logging.WARNING)
    if not isinstance(effective_level, int):
        effective_level = logging.WARNING
    logging.basicConfig(
        level=effective_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    library_level = logging.DEBUG if effective_level <= logging.DEBUG else logging.WARNING
    for name in HTTP_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
    return effective_level


__all__ = ["HTTP_LIBRARY_LOGGERS", "setup_logging"]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for the webhook tester."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("WEBHOOK_TESTER_LOG_LEVEL", "WARNING").upper()

# httpx/httpcore log every request line at INFO, which would echo probe targets.
_TRANSPORT_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str | None = None) -> int:
    """
    Configure standard logging for CLI/server use and return the effective level.

    Transport loggers stay at WARNING unless DEBUG is requested.
    """
    effective_level = getattr(logging, (level or DEFAULT_LOG_LEVEL).upper(), logging.WARNING)
    if not isinstance(effective_level, int):
        effective_level = logging.WARNING
    logging.basicConfig(
        level=effective_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    transport_level = logging.DEBUG if effective_level <= logging.DEBUG else logging.WARNING
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
    return effective_level


__all__ = ["setup_logging"]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for the webhook tester."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .history import HistoryEntry, HistoryStats, utc_timestamp
from .outcome import TestOutcome

__all__ = [
    "Headers",
    "HistoryEntry",
    "HistoryStats",
    "HttpRequest",
    "HttpResponse",
    "TestOutcome",
    "utc_timestamp",
]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Client-side facade: validate, submit to the probe endpoint, record history."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

from .boundary import Boundary, create_boundary
from .config import TesterSettings, load_settings
from .history import HistoryStore
from .models.history import HistoryEntry
from .validator import validate_url

logger = logging.getLogger(__name__)

EMPTY_URL_ERROR = "Please enter a URL"
REJECTED_URL_ERROR = "Invalid URL or blocked for security reasons (no localhost/private IPs)"


@dataclass
class SubmitResult:
    """Either an input error (nothing was sent) or the recorded history entry."""

    entry: HistoryEntry | None = None
    input_error: str | None = None

    @property
    def ok(self) -> bool:
        return self.entry is not None and not self.entry.error


def _int_or_none(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


class WebhookTester:
    """
    Convenience wrapper that wires validation, the probe boundary and history.

    The same validation rules as the server run locally first, so rejected URLs
    never leave the process.
    """

    def __init__(
        self,
        boundary: Boundary | None = None,
        store: HistoryStore | None = None,
        settings: TesterSettings | None = None,
    ):
        self.settings = settings or load_settings()
        self.boundary = boundary or create_boundary(self.settings)
        self.store = store or HistoryStore(self.settings.history_path)
        self.store.load()

    @property
    def history(self) -> list[HistoryEntry]:
        return self.store.entries

    def clear_history(self) -> None:
        self.store.clear()

    async def submit(self, url: str) -> SubmitResult:
        candidate = (url or "").strip()
        if not candidate:
            return SubmitResult(input_error=EMPTY_URL_ERROR)

        if not validate_url(candidate).ok:
            return SubmitResult(input_error=REJECTED_URL_ERROR)

        started = time.monotonic()
        try:
            data = await self.boundary.submit(candidate)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Probe request for %s failed: %s", candidate, exc)
            entry = HistoryEntry.create(candidate, error=str(exc) or "Unknown error occurred")
        else:
            round_trip_ms = int(round((time.monotonic() - started) * 1000))
            latency = _int_or_none(data.get("latency"))
            error = data.get("error")
            entry = HistoryEntry.create(
                candidate,
                status_code=_int_or_none(data.get("statusCode")),
                latency_ms=latency if latency is not None else round_trip_ms,
                error=str(error) if error else None,
            )

        self.store.append(entry)
        return SubmitResult(entry=entry)

    async def aclose(self) -> None:
        await self.boundary.aclose()

    async def __aenter__(self) -> WebhookTester:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()

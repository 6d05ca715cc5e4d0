# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""History entry model."""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


def utc_timestamp() -> str:
    """ISO8601 UTC timestamp with millisecond precision and a trailing Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class HistoryEntry:
    """One recorded probe attempt, successful or not."""

    id: str
    url: str
    status_code: int | None
    latency_ms: int | None
    timestamp: str
    error: str | None = None

    @classmethod
    def create(
        cls,
        url: str,
        *,
        status_code: int | None = None,
        latency_ms: int | None = None,
        error: str | None = None,
    ) -> HistoryEntry:
        return cls(
            id=uuid.uuid4().hex,
            url=url,
            status_code=status_code,
            latency_ms=latency_ms,
            timestamp=utc_timestamp(),
            error=error,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "statusCode": self.status_code,
            "latencyMs": self.latency_ms,
            "timestamp": self.timestamp,
            "error": self.error,
        }

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> HistoryEntry:
        # Older stores wrote the latency under "latency".
        latency = data.get("latencyMs", data.get("latency"))
        error = data.get("error")
        return cls(
            id=str(data.get("id") or uuid.uuid4().hex),
            url=str(data.get("url") or ""),
            status_code=_optional_int(data.get("statusCode")),
            latency_ms=_optional_int(latency),
            timestamp=str(data.get("timestamp") or ""),
            error=str(error) if error else None,
        )


@dataclass(frozen=True)
class HistoryStats:
    """Totals shown under the history list."""

    total: int
    successful: int
    avg_latency_ms: int

    @classmethod
    def from_entries(cls, entries: list[HistoryEntry]) -> HistoryStats:
        successful = sum(1 for e in entries if e.status_code is not None and 200 <= e.status_code < 300)
        # A zero latency is treated as unmeasured.
        latencies = [e.latency_ms for e in entries if e.latency_ms]
        avg = math.floor(sum(latencies) / len(latencies) + 0.5) if latencies else 0
        return cls(total=len(entries), successful=successful, avg_latency_ms=avg)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "successful": self.successful,
            "avgLatencyMs": self.avg_latency_ms,
        }

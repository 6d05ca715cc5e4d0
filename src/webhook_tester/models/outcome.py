# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe outcome model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..errors import ErrorKind


@dataclass(frozen=True)
class TestOutcome:
    """
    Result of a single probe.

    `success` means the target answered with any status code. A failed probe
    always carries an `error_kind` and never a `status_code`.
    """

    __test__ = False  # not a pytest test class

    success: bool
    status_code: int | None = None
    latency_ms: int | None = None
    error_kind: ErrorKind | None = None
    message: str | None = None

    @classmethod
    def responded(cls, status_code: int, latency_ms: int) -> TestOutcome:
        return cls(
            success=True,
            status_code=status_code,
            latency_ms=latency_ms,
            message=f"Webhook responded with {status_code}",
        )

    @classmethod
    def failed(cls, error_kind: ErrorKind, message: str) -> TestOutcome:
        return cls(success=False, error_kind=error_kind, message=message)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"success": self.success}
        if self.status_code is not None:
            data["statusCode"] = self.status_code
        if self.latency_ms is not None:
            data["latencyMs"] = self.latency_ms
        if self.error_kind is not None:
            data["errorKind"] = self.error_kind.value
        if self.message is not None:
            data["message"] = self.message
        return data

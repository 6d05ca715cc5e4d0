# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Server-side probe handler: input checks, validation, probing, response mapping."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..probe.prober import WebhookProber
from ..validator import validate_url

logger = logging.getLogger(__name__)

URL_REQUIRED_ERROR = "URL is required and must be a string"
INTERNAL_ERROR = "Internal server error"


@dataclass
class BoundaryResponse:
    """HTTP status plus JSON body returned by the probe endpoint."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)


class ProbeHandler:
    """
    Turns a `{"url": ...}` request body into exactly one BoundaryResponse.

    Input problems are answered with 400/403 before any network access. Probe
    failures are reported with status 200 and `success: false`. Anything that
    escapes is logged and answered with a 500.
    """

    def __init__(self, prober: WebhookProber | None = None):
        self.prober = prober or WebhookProber()

    async def handle(self, body: Any) -> BoundaryResponse:
        try:
            return await self._handle(body)
        except Exception:  # noqa: BLE001
            logger.exception("Webhook test error")
            return BoundaryResponse(500, {"success": False, "error": INTERNAL_ERROR})

    async def _handle(self, body: Any) -> BoundaryResponse:
        url = body.get("url") if isinstance(body, dict) else None
        if not url or not isinstance(url, str):
            return BoundaryResponse(400, {"error": URL_REQUIRED_ERROR})

        result = validate_url(url)
        if not result.ok:
            logger.info("Rejected probe target (%s)", result.reason.value)
            return BoundaryResponse(result.reason.http_status, {"success": False, "error": result.message})

        outcome = await self.prober.probe(result.parsed)
        if outcome.success:
            return BoundaryResponse(
                200,
                {
                    "success": True,
                    "statusCode": outcome.status_code,
                    "latency": outcome.latency_ms,
                    "message": outcome.message,
                },
            )
        return BoundaryResponse(200, {"success": False, "error": outcome.message})

    async def aclose(self) -> None:
        await self.prober.aclose()

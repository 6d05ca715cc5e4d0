# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single-request webhook prober."""

from __future__ import annotations

import asyncio
import logging
import time

from ..config import TesterSettings, load_settings
from ..errors import (
    ErrorCategory,
    ErrorKind,
    categorize_exception,
    error_category_to_reason,
    error_kind_for_category,
)
from ..http.client import HttpClient, create_default_http_client
from ..http.models import HttpRequest, HttpResponse
from ..models.outcome import TestOutcome
from ..validator import ParsedUrl
from .payload import build_test_payload, encode_payload

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error: Could not reach the URL"


def timeout_message(timeout: float) -> str:
    return f"Request timeout (>{timeout:g}s)"


def _failure(category: ErrorCategory, detail: str | None, timeout: float) -> TestOutcome:
    kind = error_kind_for_category(category)
    if kind == ErrorKind.TIMEOUT:
        return TestOutcome.failed(kind, timeout_message(timeout))
    if kind == ErrorKind.NETWORK:
        return TestOutcome.failed(kind, NETWORK_ERROR_MESSAGE)
    return TestOutcome.failed(kind, f"Request failed: {detail or 'Unknown error occurred'}")


class WebhookProber:
    """
    Sends one JSON test ping to a validated URL and reports how the target answered.

    The whole exchange runs under a single deadline (`settings.timeout`). When it
    expires the in-flight request task is cancelled before the outcome is returned,
    so nothing keeps running after `probe()` resolves. There are no retries.
    """

    def __init__(self, http_client: HttpClient | None = None, settings: TesterSettings | None = None):
        self.settings = settings or load_settings()
        self.http_client = http_client or create_default_http_client(self.settings)

    def build_request(self, url: ParsedUrl) -> HttpRequest:
        return HttpRequest(
            url=url.url,
            method="POST",
            headers={
                "Content-Type": "application/json",
                "User-Agent": self.settings.user_agent,
            },
            body=encode_payload(build_test_payload()),
            timeout=self.settings.timeout,
            allow_redirects=self.settings.allow_redirects,
        )

    async def probe(self, url: ParsedUrl) -> TestOutcome:
        timeout = self.settings.timeout
        request = self.build_request(url)
        started = time.monotonic()

        try:
            response: HttpResponse = await asyncio.wait_for(self.http_client.request(request), timeout=timeout)
        except asyncio.TimeoutError:
            logger.info("Probe to %s exceeded %ss deadline", url.hostname, timeout)
            return _failure(ErrorCategory.TIMEOUT, None, timeout)
        except Exception as exc:  # noqa: BLE001
            category = categorize_exception(exc)
            logger.warning("Probe to %s raised %s: %s", url.hostname, type(exc).__name__, exc)
            return _failure(category, str(exc) or type(exc).__name__, timeout)

        latency_ms = int(round((time.monotonic() - started) * 1000))

        if response.ok and response.status_code is not None:
            logger.debug("Probe to %s answered %s in %sms", url.hostname, response.status_code, latency_ms)
            return TestOutcome.responded(response.status_code, latency_ms)

        category = response.error_category or ErrorCategory.UNKNOWN_ERROR
        logger.info("Probe to %s failed: %s", url.hostname, error_category_to_reason(category))
        return _failure(category, response.error_message, timeout)

    async def aclose(self) -> None:
        close = getattr(self.http_client, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> WebhookProber:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()

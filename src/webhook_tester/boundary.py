# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Ways for the client to reach the probe endpoint."""

from __future__ import annotations

from typing import Any, Protocol

import httpx

from .config import TesterSettings, load_settings
from .server.app import PROBE_PATH
from .server.handler import ProbeHandler


class Boundary(Protocol):
    """Submits a URL to the server-side probe handler and returns its JSON body."""

    async def submit(self, url: str) -> dict[str, Any]: ...

    async def aclose(self) -> None: ...


class RemoteBoundary(Boundary):
    """POSTs to a running probe endpoint over HTTP."""

    def __init__(self, server_url: str, settings: TesterSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_settings()
        self.endpoint = server_url.rstrip("/") + PROBE_PATH
        # The server enforces the probe deadline; leave headroom for the round trip.
        self._client = client or httpx.AsyncClient(timeout=self.settings.timeout + 5.0)

    async def submit(self, url: str) -> dict[str, Any]:
        response = await self._client.post(self.endpoint, json={"url": url})
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected response from {self.endpoint}: {data!r}")
        return data

    async def aclose(self) -> None:
        await self._client.aclose()


class LocalBoundary(Boundary):
    """Runs the probe handler in-process."""

    def __init__(self, handler: ProbeHandler | None = None):
        self.handler = handler or ProbeHandler()

    async def submit(self, url: str) -> dict[str, Any]:
        response = await self.handler.handle({"url": url})
        return response.body

    async def aclose(self) -> None:
        await self.handler.aclose()


def create_boundary(settings: TesterSettings | None = None) -> Boundary:
    """Remote boundary when a server URL is configured, in-process otherwise."""
    from .probe.prober import WebhookProber

    settings = settings or load_settings()
    if settings.server_url:
        return RemoteBoundary(settings.server_url, settings)
    return LocalBoundary(ProbeHandler(WebhookProber(settings=settings)))


__all__ = ["Boundary", "LocalBoundary", "RemoteBoundary", "create_boundary"]

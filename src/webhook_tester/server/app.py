# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""FastAPI application exposing the probe endpoint."""

from __future__ import annotations

import json
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..config import TesterSettings, load_settings
from ..probe.prober import WebhookProber
from ..version import __version__
from .handler import ProbeHandler

PROBE_PATH = "/api/webhook-tester"


def create_app(handler: ProbeHandler | None = None, settings: TesterSettings | None = None) -> FastAPI:
    """Build the ASGI app; the handler's HTTP client is closed on shutdown."""
    probe_handler = handler or ProbeHandler(WebhookProber(settings=settings or load_settings()))

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            await probe_handler.aclose()

    app = FastAPI(title="Webhook Tester", version=__version__, lifespan=lifespan)

    @app.get("/health", response_class=JSONResponse)
    def health():
        return JSONResponse({"ok": True, "ts": time.time()})

    @app.post(PROBE_PATH, response_class=JSONResponse)
    async def probe_webhook(request: Request):
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            body = None
        response = await probe_handler.handle(body)
        return JSONResponse(response.body, status_code=response.status_code)

    return app


__all__ = ["PROBE_PATH", "create_app"]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio

import pytest
from fastapi.testclient import TestClient

from webhook_tester.config import TesterSettings
from webhook_tester.errors import ErrorCategory
from webhook_tester.http import HttpResponse, StubHttpClient
from webhook_tester.probe import WebhookProber
from webhook_tester.server import PROBE_PATH, ProbeHandler, create_app

TARGET = "https://hooks.example.com/in"


def _app(stub: StubHttpClient, settings: TesterSettings | None = None):
    prober = WebhookProber(http_client=stub, settings=settings or TesterSettings())
    return TestClient(create_app(handler=ProbeHandler(prober)))


class ExplodingProber:
    async def probe(self, url):  # noqa: ARG002
        raise RuntimeError("boom")

    async def aclose(self):
        return None


def test_successful_probe_response():
    stub = StubHttpClient({TARGET: HttpResponse(ok=True, status_code=204)})
    resp = _app(stub).post(PROBE_PATH, json={"url": TARGET})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["statusCode"] == 204
    assert isinstance(body["latency"], int)
    assert body["message"] == "Webhook responded with 204"
    assert len(stub.requests) == 1


def test_target_404_is_still_success():
    stub = StubHttpClient({TARGET: HttpResponse(ok=True, status_code=404)})
    body = _app(stub).post(PROBE_PATH, json={"url": TARGET}).json()
    assert body["success"] is True
    assert body["statusCode"] == 404


@pytest.mark.parametrize("payload", [{}, {"url": ""}, {"url": 42}, {"url": None}, ["https://example.com"]])
def test_missing_url_is_400(payload):
    stub = StubHttpClient()
    resp = _app(stub).post(PROBE_PATH, json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"error": "URL is required and must be a string"}
    assert stub.requests == []


def test_unparseable_body_is_400():
    stub = StubHttpClient()
    resp = _app(stub).post(PROBE_PATH, content=b"{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "URL is required and must be a string"


@pytest.mark.parametrize(
    ("url", "status", "error"),
    [
        ("not a url", 400, "Invalid URL format"),
        ("ftp://example.com", 400, "Only HTTP and HTTPS protocols are allowed"),
        ("http://localhost:3000/hook", 403, "Access to internal/private URLs is not allowed"),
        ("http://127.0.0.1.evil/hook", 403, "Access to internal/private URLs is not allowed"),
        ("http://[::1]/hook", 403, "Access to internal/private URLs is not allowed"),
        ("http://10.0.0.1/hook", 403, "Access to internal/private URLs is not allowed"),
        ("http://169.254.169.254/latest/meta-data", 403, "Access to internal/private URLs is not allowed"),
    ],
)
def test_rejected_urls_never_reach_the_network(url, status, error):
    stub = StubHttpClient()
    resp = _app(stub).post(PROBE_PATH, json={"url": url})
    assert resp.status_code == status
    assert resp.json() == {"success": False, "error": error}
    assert stub.requests == []


@pytest.mark.parametrize(
    ("category", "message", "error"),
    [
        (ErrorCategory.TIMEOUT, "timed out", "Request timeout (>10s)"),
        (ErrorCategory.DNS_ERROR, "no such host", "Network error: Could not reach the URL"),
        (ErrorCategory.CONNECTION_ERROR, "refused", "Network error: Could not reach the URL"),
        (ErrorCategory.UNKNOWN_ERROR, "bad header", "Request failed: bad header"),
    ],
)
def test_probe_failures_are_200_with_error(category, message, error):
    stub = StubHttpClient({TARGET: HttpResponse(ok=False, error_message=message, error_category=category)})
    resp = _app(stub).post(PROBE_PATH, json={"url": TARGET})
    assert resp.status_code == 200
    assert resp.json() == {"success": False, "error": error}
    assert len(stub.requests) == 1


def test_uncaught_error_is_500():
    client = TestClient(create_app(handler=ProbeHandler(ExplodingProber())))
    resp = client.post(PROBE_PATH, json={"url": TARGET})
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Internal server error"}


def test_handler_can_be_used_directly():
    stub = StubHttpClient({TARGET: HttpResponse(ok=True, status_code=200)})
    handler = ProbeHandler(WebhookProber(http_client=stub, settings=TesterSettings()))
    response = asyncio.run(handler.handle({"url": TARGET}))
    assert response.status_code == 200
    assert response.body["success"] is True


def test_health_and_shutdown_closes_client():
    stub = StubHttpClient()
    with _app(stub) as client:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["ok"] is True
    assert stub.closed is True

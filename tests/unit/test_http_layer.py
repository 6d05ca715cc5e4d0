# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import ssl

import httpx

from webhook_tester.config import TesterSettings
from webhook_tester.errors import ErrorCategory
from webhook_tester.http import HttpRequest, HttpResponse, HttpxClient, StubHttpClient, create_default_http_client


def _client_with(handler, settings: TesterSettings | None = None) -> HttpxClient:
    return HttpxClient(settings or TesterSettings(), client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def test_httpx_client_reports_status_and_headers():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(503, headers={"X-Test": "1"}, text="unavailable")

    client = _client_with(handler, TesterSettings(user_agent="UA/1.0"))
    request = HttpRequest(url="https://hooks.example.com/in", method="POST", body='{"a":1}', timeout=2.0)
    response = asyncio.run(client.request(request))

    assert response.ok is True
    assert response.status_code == 503
    assert response.headers["x-test"] == "1"
    assert response.url == "https://hooks.example.com/in"
    assert response.error_category is None
    assert len(seen) == 1
    assert seen[0].method == "POST"
    assert seen[0].headers["User-Agent"] == "UA/1.0"
    assert seen[0].content == b'{"a":1}'


def test_httpx_client_keeps_explicit_user_agent():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    client = _client_with(handler, TesterSettings(user_agent="Default/1.0"))
    asyncio.run(client.request(HttpRequest(url="https://example.com", headers={"User-Agent": "Custom/2.0"})))
    assert seen[0].headers["User-Agent"] == "Custom/2.0"


def test_httpx_client_does_not_follow_redirects_by_default():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/start":
            return httpx.Response(302, headers={"Location": "http://127.0.0.1/admin"})
        raise AssertionError("redirect should not be followed")

    client = _client_with(handler)
    response = asyncio.run(client.request(HttpRequest(url="https://example.com/start", method="POST")))
    assert response.ok is True
    assert response.status_code == 302


def test_httpx_client_converts_transport_errors():
    def refused(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    response = asyncio.run(_client_with(refused).request(HttpRequest(url="https://example.com")))
    assert response.ok is False
    assert response.status_code is None
    assert response.error_type == "ConnectError"
    assert response.error_category == ErrorCategory.CONNECTION_ERROR
    assert "connection refused" in response.error_message


def test_httpx_client_classifies_timeouts_and_tls():
    def slow(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    response = asyncio.run(_client_with(slow).request(HttpRequest(url="https://example.com")))
    assert response.error_category == ErrorCategory.TIMEOUT

    def bad_cert(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("certificate verify failed", request=request) from ssl.SSLError("CERTIFICATE_VERIFY_FAILED")

    response = asyncio.run(_client_with(bad_cert).request(HttpRequest(url="https://example.com")))
    assert response.error_category == ErrorCategory.SSL_ERROR


def test_httpx_client_close():
    client = _client_with(lambda request: httpx.Response(200))
    asyncio.run(client.aclose())
    assert client._client.is_closed is True


def test_stub_http_client_records_requests():
    stub = StubHttpClient()
    stub.add("https://a.example", HttpResponse(ok=True, status_code=201))
    hit = asyncio.run(stub.request(HttpRequest(url="https://a.example")))
    miss = asyncio.run(stub.request(HttpRequest(url="https://b.example")))
    assert hit.status_code == 201
    assert miss.ok is False
    assert [r.url for r in stub.requests] == ["https://a.example", "https://b.example"]


def test_create_default_http_client_uses_settings():
    settings = TesterSettings(timeout=3.0, verify_ssl=False)
    client = create_default_http_client(settings)
    try:
        assert isinstance(client, HttpxClient)
        assert client.settings is settings
    finally:
        asyncio.run(client.aclose())


def test_failed_response_carries_only_transport_fields():
    fields = set(HttpResponse.__dataclass_fields__)
    assert fields == {"ok", "status_code", "headers", "url", "error_message", "error_type", "error_category"}
    assert HttpResponse(ok=False, error_category=ErrorCategory.DNS_ERROR).status_code is None

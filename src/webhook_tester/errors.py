# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ErrorKind(str, Enum):
    """Failure kinds reported on a TestOutcome."""

    TIMEOUT = "timeout"
    NETWORK = "network"
    UNKNOWN = "unknown"


_NETWORK_CATEGORIES = {
    ErrorCategory.SSL_ERROR,
    ErrorCategory.CONNECTION_ERROR,
    ErrorCategory.DNS_ERROR,
}


def _root_causes(exc: BaseException) -> list[BaseException]:
    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__ or current.__context__
    return chain


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.

    httpx wraps the socket/ssl failure that caused a ConnectError, so the cause
    chain is inspected to tell DNS and TLS failures apart from refused connections.
    """
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorCategory.TIMEOUT

    for cause in _root_causes(exc):
        if isinstance(cause, (ssl.SSLError, ssl.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(cause, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_kind_for_category(category: ErrorCategory | None) -> ErrorKind:
    """Collapse a transport category into the outcome-level error kind."""
    if category == ErrorCategory.TIMEOUT:
        return ErrorKind.TIMEOUT
    if category in _NETWORK_CATEGORIES:
        return ErrorKind.NETWORK
    return ErrorKind.UNKNOWN


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """Short human-readable reason, used in log lines."""
    mapping = {
        ErrorCategory.TIMEOUT: "Deadline exceeded while waiting for the target",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Unexpected error during probe",
        None: "",
    }
    return mapping.get(category, "Probe failed")


__all__ = [
    "ErrorCategory",
    "ErrorKind",
    "categorize_exception",
    "error_category_to_reason",
    "error_kind_for_category",
]

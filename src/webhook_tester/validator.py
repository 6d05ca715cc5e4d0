# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
URL safety checks applied before any probe is sent.

The checks are purely lexical: the hostname is compared against a blocklist of
loopback names and a set of private-range patterns. Hostnames are never
resolved, so a public name whose DNS record points at a private address is
accepted. Closing that gap requires resolving the host, checking every
resulting address and pinning the connection to it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlsplit

ALLOWED_SCHEMES = frozenset({"http", "https"})

BLOCKED_HOSTS = (
    "localhost",
    "127.0.0.1",
    "0.0.0.0",
    "::1",
    "0:0:0:0:0:0:0:1",
)

PRIVATE_HOST_PATTERNS = (
    re.compile(r"^10\."),
    re.compile(r"^172\.(1[6-9]|2[0-9]|3[0-1])\."),
    re.compile(r"^192\.168\."),
    re.compile(r"^169\.254\."),
    # fc00::/7 unique-local, i.e. every fcXX:/fdXX: prefix
    re.compile(r"^f[cd][0-9a-f]{2}:"),
)

_WHITESPACE_RE = re.compile(r"\s")
# urlsplit silently drops these, so the parsed host would differ from what gets sent.
_STRIPPED_CONTROL_RE = re.compile(r"[\t\r\n]")


class RejectionReason(str, Enum):
    INVALID_FORMAT = "invalid_format"
    UNSUPPORTED_SCHEME = "unsupported_scheme"
    BLOCKED_HOST = "blocked_host"
    PRIVATE_RANGE = "private_range"

    @property
    def message(self) -> str:
        return _REJECTION_MESSAGES[self]

    @property
    def http_status(self) -> int:
        if self in (RejectionReason.BLOCKED_HOST, RejectionReason.PRIVATE_RANGE):
            return 403
        return 400


_REJECTION_MESSAGES = {
    RejectionReason.INVALID_FORMAT: "Invalid URL format",
    RejectionReason.UNSUPPORTED_SCHEME: "Only HTTP and HTTPS protocols are allowed",
    RejectionReason.BLOCKED_HOST: "Access to internal/private URLs is not allowed",
    RejectionReason.PRIVATE_RANGE: "Access to internal/private URLs is not allowed",
}


@dataclass(frozen=True)
class ParsedUrl:
    url: str
    scheme: str
    hostname: str


@dataclass(frozen=True)
class ValidationResult:
    """Either a parsed URL (`ok`) or the first rule it broke."""

    parsed: ParsedUrl | None = None
    reason: RejectionReason | None = None

    @property
    def ok(self) -> bool:
        return self.parsed is not None

    @property
    def message(self) -> str:
        return self.reason.message if self.reason else ""


def _reject(reason: RejectionReason) -> ValidationResult:
    return ValidationResult(reason=reason)


def is_blocked_host(hostname: str) -> bool:
    """True when the host equals a blocked name or starts with one followed by a dot."""
    host = hostname.lower()
    return any(host == blocked or host.startswith(blocked + ".") for blocked in BLOCKED_HOSTS)


def is_private_host(hostname: str) -> bool:
    host = hostname.lower()
    return any(pattern.search(host) for pattern in PRIVATE_HOST_PATTERNS)


def validate_url(url: str) -> ValidationResult:
    """
    Validate an untrusted URL string.

    Rules run in order and the first failure wins: absolute-URL parsing, scheme,
    blocked hosts, private ranges. No network access happens here.
    """
    if not isinstance(url, str):
        return _reject(RejectionReason.INVALID_FORMAT)
    candidate = url.strip()
    if not candidate or _STRIPPED_CONTROL_RE.search(candidate):
        return _reject(RejectionReason.INVALID_FORMAT)

    try:
        parts = urlsplit(candidate)
        # Accessing .port validates it (non-numeric or out of range raises).
        _ = parts.port
    except ValueError:
        return _reject(RejectionReason.INVALID_FORMAT)

    scheme = parts.scheme.lower()
    if not scheme:
        return _reject(RejectionReason.INVALID_FORMAT)

    hostname = parts.hostname or ""
    if scheme in ALLOWED_SCHEMES and (not hostname or _WHITESPACE_RE.search(hostname)):
        return _reject(RejectionReason.INVALID_FORMAT)

    if scheme not in ALLOWED_SCHEMES:
        return _reject(RejectionReason.UNSUPPORTED_SCHEME)

    if is_blocked_host(hostname):
        return _reject(RejectionReason.BLOCKED_HOST)

    if is_private_host(hostname):
        return _reject(RejectionReason.PRIVATE_RANGE)

    return ValidationResult(parsed=ParsedUrl(url=candidate, scheme=scheme, hostname=hostname))


__all__ = [
    "ALLOWED_SCHEMES",
    "BLOCKED_HOSTS",
    "PRIVATE_HOST_PATTERNS",
    "ParsedUrl",
    "RejectionReason",
    "ValidationResult",
    "is_blocked_host",
    "is_private_host",
    "validate_url",
]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Webhook tester package entrypoint.

Validates a candidate webhook URL against a loopback/private-range blocklist,
sends it a single JSON test ping under a hard deadline, and keeps a bounded,
newest-first history of results. HTTP behavior is abstracted behind an
injectable async client interface, and domain objects are typed dataclasses.
"""

from .boundary import Boundary, LocalBoundary, RemoteBoundary, create_boundary
from .config import TesterSettings, load_settings
from .errors import ErrorCategory, ErrorKind
from .history import HistoryStore
from .http import HttpClient, HttpRequest, HttpResponse, HttpxClient, create_default_http_client
from .log import setup_logging
from .models import HistoryEntry, TestOutcome
from .probe import WebhookProber
from .runtime import SubmitResult, WebhookTester
from .server import ProbeHandler, create_app
from .validator import ParsedUrl, RejectionReason, ValidationResult, validate_url
from .version import __version__

__all__ = [
    "Boundary",
    "ErrorCategory",
    "ErrorKind",
    "HistoryEntry",
    "HistoryStore",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "LocalBoundary",
    "ParsedUrl",
    "ProbeHandler",
    "RejectionReason",
    "RemoteBoundary",
    "SubmitResult",
    "TestOutcome",
    "TesterSettings",
    "ValidationResult",
    "WebhookProber",
    "WebhookTester",
    "create_app",
    "create_boundary",
    "create_default_http_client",
    "load_settings",
    "setup_logging",
    "validate_url",
    "__version__",
]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe exports."""

from .payload import build_test_payload, generate_test_id
from .prober import NETWORK_ERROR_MESSAGE, WebhookProber, timeout_message

__all__ = [
    "NETWORK_ERROR_MESSAGE",
    "WebhookProber",
    "build_test_payload",
    "generate_test_id",
    "timeout_message",
]

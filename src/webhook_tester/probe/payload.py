# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Test ping payload sent to probed webhooks."""

import json
import secrets
import string
from typing import Any

from ..models.history import utc_timestamp

PAYLOAD_EVENT = "test_ping"
PAYLOAD_SOURCE = "webhook_tester"
_TEST_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_test_id(length: int = 6) -> str:
    """Short random alphanumeric token identifying one ping."""
    return "".join(secrets.choice(_TEST_ID_ALPHABET) for _ in range(max(1, int(length))))


def build_test_payload() -> dict[str, Any]:
    return {
        "event": PAYLOAD_EVENT,
        "timestamp": utc_timestamp(),
        "source": PAYLOAD_SOURCE,
        "test_id": generate_test_id(),
    }


def encode_payload(payload: dict[str, Any]) -> str:
    return json.dumps(payload, separators=(",", ":"))


__all__ = ["PAYLOAD_EVENT", "PAYLOAD_SOURCE", "build_test_payload", "encode_payload", "generate_test_id"]

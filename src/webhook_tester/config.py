# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for the webhook tester."""

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_USER_AGENT = "WebhookTester/1.0"
DEFAULT_TIMEOUT = 10.0
HISTORY_LIMIT = 20
HISTORY_KEY = "webhook-tests"


def _default_history_path() -> Path:
    return Path.home() / ".webhook_tester" / "history.json"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _path_env(name: str, default: Path) -> Path:
    value = os.getenv(name)
    if not value or not value.strip():
        return default
    return Path(value.strip()).expanduser()


def _optional_str_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass
class TesterSettings:
    """Probe, boundary and history defaults."""

    __test__ = False  # not a pytest test class

    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = False
    verify_ssl: bool = True
    history_path: Path = field(default_factory=_default_history_path)
    server_url: str | None = None

    @classmethod
    def from_env(cls) -> "TesterSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("WEBHOOK_TESTER_TIMEOUT", DEFAULT_TIMEOUT)
        if timeout <= 0:
            timeout = DEFAULT_TIMEOUT
        return cls(
            timeout=timeout,
            user_agent=os.getenv("WEBHOOK_TESTER_USER_AGENT", DEFAULT_USER_AGENT),
            allow_redirects=_bool_env("WEBHOOK_TESTER_REDIRECTS", False),
            verify_ssl=_bool_env("WEBHOOK_TESTER_VERIFY_SSL", True),
            history_path=_path_env("WEBHOOK_TESTER_HISTORY_FILE", _default_history_path()),
            server_url=_optional_str_env("WEBHOOK_TESTER_SERVER_URL"),
        )


def load_settings() -> TesterSettings:
    """Load tester settings from environment with sensible defaults."""
    return TesterSettings.from_env()

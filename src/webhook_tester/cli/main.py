# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Webhook tester CLI."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from ..config import TesterSettings, load_settings
from ..history import HistoryStore
from ..log import setup_logging
from ..models.history import HistoryEntry
from ..runtime import WebhookTester


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send a test ping to a webhook URL and keep a local history of results")
    parser.add_argument(
        "--history-file",
        type=Path,
        default=None,
        help="History JSON file (default: $WEBHOOK_TESTER_HISTORY_FILE or ~/.webhook_tester/history.json)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: $WEBHOOK_TESTER_LOG_LEVEL or WARNING)")
    commands = parser.add_subparsers(dest="command", required=True)

    test = commands.add_parser("test", help="Probe a webhook URL")
    test.add_argument("url", help="Target URL to probe")
    test.add_argument("--json", action="store_true", help="Output JSON instead of a human-friendly summary")
    test.add_argument(
        "--server",
        default=None,
        help="Base URL of a running probe server (default: $WEBHOOK_TESTER_SERVER_URL, or probe in-process)",
    )
    test.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )

    history = commands.add_parser("history", help="Show recorded probes, newest first")
    history.add_argument("--json", action="store_true", help="Output JSON")

    commands.add_parser("clear", help="Delete the recorded history")
    return parser


def _print_json(data: Any) -> None:
    json.dump(data, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _format_entry(entry: HistoryEntry) -> str:
    status = str(entry.status_code) if entry.status_code is not None else "---"
    latency = f"{entry.latency_ms}ms" if entry.latency_ms is not None else "-"
    line = f"{entry.timestamp}  {status:>3}  {latency:>8}  {entry.url}"
    if entry.error:
        line += f"  ({entry.error})"
    return line


def _pretty_print(entry: HistoryEntry) -> None:
    if entry.error:
        print(f"[webhook-tester] FAILED: {entry.error}")
    else:
        print(f"[webhook-tester] Webhook responded with {entry.status_code}")
    print(f"URL: {entry.url}")
    if entry.latency_ms is not None:
        print(f"Latency: {entry.latency_ms}ms")


async def _run_test(args: argparse.Namespace, settings: TesterSettings) -> int:
    async with WebhookTester(settings=settings) as tester:
        result = await tester.submit(args.url)

    if result.input_error:
        print(f"error: {result.input_error}", file=sys.stderr)
        return 2

    entry = result.entry
    if args.json:
        _print_json(entry.to_dict())
    else:
        _pretty_print(entry)
    return 0 if result.ok else 1


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings = load_settings()
    if args.history_file is not None:
        settings.history_path = args.history_file

    if args.command == "test":
        if args.server:
            settings.server_url = args.server
        if args.ignore_ssl_errors:
            settings.verify_ssl = False
        return asyncio.run(_run_test(args, settings))

    store = HistoryStore(settings.history_path)
    if args.command == "clear":
        store.clear()
        print("History cleared")
        return 0

    entries = store.load()
    stats = store.summary()
    if args.json:
        _print_json({"entries": [entry.to_dict() for entry in entries], "summary": stats.to_dict()})
    elif not entries:
        print("No tests yet")
    else:
        for entry in entries:
            print(_format_entry(entry))
        print()
        print(f"Total tests: {stats.total}  Successful: {stats.successful}  Avg latency: {stats.avg_latency_ms}ms")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

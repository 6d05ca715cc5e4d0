# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bounded, newest-first probe history persisted to a local JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..config import HISTORY_KEY, HISTORY_LIMIT
from ..models.history import HistoryEntry, HistoryStats

logger = logging.getLogger(__name__)


class HistoryStore:
    """
    In-memory history list mirrored to a JSON document under a fixed key.

    The document may hold other keys; only `key` is read, rewritten on every
    change and removed on `clear()`. The file itself is deleted once empty.
    """

    def __init__(self, path: Path | str, *, capacity: int = HISTORY_LIMIT, key: str = HISTORY_KEY):
        self.path = Path(path)
        self.capacity = max(1, int(capacity))
        self.key = key
        self._entries: list[HistoryEntry] = []

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def summary(self) -> HistoryStats:
        return HistoryStats.from_entries(self._entries)

    def load(self) -> list[HistoryEntry]:
        """Replace the in-memory list with the persisted one (empty when absent)."""
        raw = self._read_document().get(self.key)
        entries: list[HistoryEntry] = []
        if isinstance(raw, list):
            entries = [HistoryEntry.from_mapping(item) for item in raw if isinstance(item, dict)]
        elif raw is not None:
            logger.warning("Ignoring malformed history under %r in %s", self.key, self.path)
        self._entries = entries[: self.capacity]
        return self.entries

    def append(self, entry: HistoryEntry) -> list[HistoryEntry]:
        """Prepend `entry`, drop the oldest beyond capacity, persist."""
        self._entries = [entry, *self._entries][: self.capacity]
        self._persist()
        return self.entries

    def clear(self) -> None:
        self._entries = []
        document = self._read_document()
        if self.key not in document:
            return
        document.pop(self.key)
        if document:
            self._write_document(document)
        else:
            self.path.unlink(missing_ok=True)

    def _persist(self) -> None:
        document = self._read_document()
        document[self.key] = [entry.to_dict() for entry in self._entries]
        self._write_document(document)

    def _read_document(self) -> dict[str, Any]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            logger.warning("History file %s is not valid JSON; starting empty", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write_document(self, document: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)

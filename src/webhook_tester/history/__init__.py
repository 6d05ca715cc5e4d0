# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from .store import HistoryStore

__all__ = ["HistoryStore"]

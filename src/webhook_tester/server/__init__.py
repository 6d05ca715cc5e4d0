# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe endpoint exports."""

from .app import PROBE_PATH, create_app
from .handler import BoundaryResponse, ProbeHandler

__all__ = ["BoundaryResponse", "PROBE_PATH", "ProbeHandler", "create_app"]

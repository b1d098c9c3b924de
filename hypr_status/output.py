# Copyright 2025 hypr-status contributors
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# This file was created or modified with the assistance of an AI (Large Language Model).
# Review required for correctness, security, and licensing.
"""JSON rendering for snapshots."""

from __future__ import annotations

import json
import sys
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any


def snapshot_to_data(snapshot: Any) -> Any:
    """Convert a snapshot (or a list of snapshots) into JSON-ready data."""

    if is_dataclass(snapshot) and not isinstance(snapshot, type):
        return asdict(snapshot)
    if isinstance(snapshot, (list, tuple)):
        return [snapshot_to_data(item) for item in snapshot]
    return snapshot


def render_snapshot_json(snapshot: Any) -> str:
    """Render a snapshot as indented JSON text."""

    return json.dumps(snapshot_to_data(snapshot), indent=2, ensure_ascii=False) + "\n"


def write_snapshot_json(path: str | Path | None, snapshot: Any) -> None:
    """Write a snapshot as JSON to ``path``, or to stdout when no path is given."""

    payload = render_snapshot_json(snapshot)
    if path is None:
        sys.stdout.write(payload)
        return
    with Path(path).open("w", encoding="utf-8") as handle:
        handle.write(payload)

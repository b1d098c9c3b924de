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
"""Runtime configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class PanelConfig:
    """Filesystem roots and tuning knobs shared by all queries."""

    sys_net_dir: Path = Path("/sys/class/net")
    proc_dir: Path = Path("/proc")
    os_release_path: Path = Path("/etc/os-release")
    scan_settle_seconds: float = 2.0
    enrichment_workers: int = 4


DEFAULT_CONFIG = PanelConfig()

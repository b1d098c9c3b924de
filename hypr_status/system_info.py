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
"""System overview assembled from /proc, /etc/os-release, psutil and a few tools.

Every field is produced by its own extractor. An extractor that cannot read
its source, or whose tool is missing, yields ``UNKNOWN_VALUE`` for that field
only; building the snapshot itself never fails.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Callable, Mapping, TypeVar

import psutil

from hypr_status import runner
from hypr_status.config import DEFAULT_CONFIG, PanelConfig
from hypr_status.errors import PanelError
from hypr_status.models import UNKNOWN_VALUE, SystemInfo

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

GPU_CLASS_MARKERS = ("VGA compatible controller", "3D controller", "Display controller")
_VERSION_PATTERN = re.compile(r"\d+(?:\.\d+)+")
_BYTES_PER_GB = 1024**3
ROOT_MOUNT = "/"


def _field(name: str, extractor: Callable[[], T | None], default: T) -> T:
    """Run one extractor, substituting ``default`` on failure or empty output."""

    try:
        value = extractor()
    except (OSError, ValueError, IndexError, PanelError, psutil.Error) as exc:
        _LOGGER.debug("System info field %s unavailable: %s", name, exc)
        return default
    if not value:
        _LOGGER.debug("System info field %s is empty", name)
        return default
    return value


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def parse_os_release(text: str) -> str | None:
    """Return PRETTY_NAME (or NAME) from an os-release file."""

    values: dict[str, str] = {}
    for line in text.splitlines():
        key, separator, value = line.partition("=")
        if separator:
            values[key.strip()] = value.strip().strip('"').strip("'")
    return values.get("PRETTY_NAME") or values.get("NAME")


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_uptime(seconds: float) -> str:
    """Render seconds as ``2 days, 3 hours, 14 mins``; zero units are left out."""

    minutes_total = int(seconds) // 60
    days, remainder = divmod(minutes_total, 24 * 60)
    hours, minutes = divmod(remainder, 60)
    parts = []
    if days:
        parts.append(_plural(days, "day"))
    if hours:
        parts.append(_plural(hours, "hour"))
    if minutes or not parts:
        parts.append(_plural(minutes, "min"))
    return ", ".join(parts)


def parse_uptime(text: str) -> str:
    return format_uptime(float(text.split()[0]))


def _gigabytes(size: int) -> str:
    return f"{size / _BYTES_PER_GB:.1f} GB"


def memory_usage() -> tuple[str, str]:
    """Return (used, total) RAM, counting reclaimable memory as free."""

    memory = psutil.virtual_memory()
    return _gigabytes(memory.total - memory.available), _gigabytes(memory.total)


def disk_usage(path: str = ROOT_MOUNT) -> tuple[str, str]:
    """Return (used, total) space of the filesystem holding ``path``."""

    usage = psutil.disk_usage(path)
    return _gigabytes(usage.used), _gigabytes(usage.total)


def parse_cpuinfo(text: str) -> str | None:
    """Return the first ``model name`` entry of /proc/cpuinfo."""

    for line in text.splitlines():
        key, separator, value = line.partition(":")
        if separator and key.strip() == "model name":
            return " ".join(value.split())
    return None


def parse_lspci_gpus(text: str) -> tuple[str, ...]:
    """Pick display controllers out of ``lspci`` output."""

    gpus: list[str] = []
    for line in text.splitlines():
        for marker in GPU_CLASS_MARKERS:
            if marker in line:
                name = line.split(marker, 1)[1].lstrip(": ").strip()
                if name:
                    gpus.append(name)
                break
    return tuple(gpus)


def parse_compositor_version(text: str) -> str | None:
    """Return ``Hyprland <version>`` from the first line of ``hyprctl version``."""

    lines = text.strip().splitlines()
    if not lines:
        return None
    first = lines[0].strip()
    match = _VERSION_PATTERN.search(first)
    if match:
        return f"Hyprland {match.group(0)}"
    return first


def _tool_output(command: list[str]) -> str:
    runner.require_command(command[0])
    return runner.check_output(command, stage=command[0])


def _shell(environ: Mapping[str, str]) -> str | None:
    path = environ.get("SHELL", "").strip()
    if not path:
        return None
    name = os.path.basename(path)
    try:
        output = runner.check_output([path, "--version"], stage=name)
    except PanelError as exc:
        _LOGGER.debug("Shell version unavailable: %s", exc)
        return name
    first_line = output.strip().splitlines()[0] if output.strip() else ""
    match = _VERSION_PATTERN.search(first_line)
    return f"{name} {match.group(0)}" if match else name


def get_system_info(
    config: PanelConfig | None = None,
    environ: Mapping[str, str] | None = None,
) -> SystemInfo:
    """Collect the system overview shown on the About page."""

    config = config or DEFAULT_CONFIG
    environ = os.environ if environ is None else environ
    kernel_dir = config.proc_dir / "sys" / "kernel"
    unknown_pair = (UNKNOWN_VALUE, UNKNOWN_VALUE)

    ram_used, ram_total = _field("ram", memory_usage, unknown_pair)
    disk_used, disk_total = _field("disk", disk_usage, unknown_pair)
    return SystemInfo(
        os_name=_field("os", lambda: parse_os_release(_read(config.os_release_path)), UNKNOWN_VALUE),
        hostname=_field("hostname", lambda: _read(kernel_dir / "hostname").strip(), UNKNOWN_VALUE),
        kernel=_field("kernel", lambda: _read(kernel_dir / "osrelease").strip(), UNKNOWN_VALUE),
        uptime=_field("uptime", lambda: parse_uptime(_read(config.proc_dir / "uptime")), UNKNOWN_VALUE),
        shell=_field("shell", lambda: _shell(environ), UNKNOWN_VALUE),
        compositor_version=_field(
            "compositor",
            lambda: parse_compositor_version(_tool_output(["hyprctl", "version"])),
            UNKNOWN_VALUE,
        ),
        gpus=_field("gpus", lambda: parse_lspci_gpus(_tool_output(["lspci"])), ()),
        ram_used=ram_used,
        ram_total=ram_total,
        disk_used=disk_used,
        disk_total=disk_total,
        cpu=_field("cpu", lambda: parse_cpuinfo(_read(config.proc_dir / "cpuinfo")), UNKNOWN_VALUE),
    )

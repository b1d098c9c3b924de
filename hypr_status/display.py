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
"""Monitor snapshot via ``hyprctl monitors``."""

from __future__ import annotations

import logging
import math
import re
from typing import Iterable

from hypr_status import runner
from hypr_status.errors import ToolFailureError
from hypr_status.lines import strip_decoration
from hypr_status.models import UNKNOWN_VALUE, DisplayMode, Monitor
from hypr_status.normalize import parse_float, parse_int

_LOGGER = logging.getLogger(__name__)

HYPRCTL = "hyprctl"
HYPRCTL_HINT = "Hyprland must be installed and running."

_HEADER_PATTERN = re.compile(r"^Monitor\s+(?P<name>\S+)\s+\(ID\s+(?P<id>-?\d+)\):")
_ACTIVE_MODE_PATTERN = re.compile(
    r"^(?P<width>\d+)x(?P<height>\d+)@(?P<rate>[\d.]+)\s+at\s+(?P<x>-?\d+)x(?P<y>-?\d+)"
)
_WORKSPACE_PATTERN = re.compile(r"^(?P<id>-?\d+)\s*\((?P<name>.*)\)$")
_DIMENSION_PATTERN = re.compile(r"\d+", re.ASCII)

TRANSFORMS = {
    "0": "Normal",
    "1": "Rotate90",
    "2": "Rotate180",
    "3": "Rotate270",
    "4": "Flipped",
    "5": "FlippedRotate90",
    "6": "FlippedRotate180",
    "7": "FlippedRotate270",
}


def parse_mode_token(token: str) -> DisplayMode | None:
    """Parse ``<width>x<height>@<rate>Hz``; None if any part is malformed."""

    resolution, separator, rate = token.partition("@")
    if not separator or not rate.endswith("Hz"):
        return None
    width, separator, height = resolution.partition("x")
    if not separator:
        return None
    if not _DIMENSION_PATTERN.fullmatch(width) or not _DIMENSION_PATTERN.fullmatch(height):
        return None
    try:
        refresh_rate = float(rate[: -len("Hz")])
    except ValueError:
        return None
    if not math.isfinite(refresh_rate) or refresh_rate < 0:
        return None
    return DisplayMode(width=int(width), height=int(height), refresh_rate=refresh_rate)


def parse_display_modes(text: str) -> list[DisplayMode]:
    """Parse a whitespace-separated mode list, dropping malformed tokens."""

    modes: list[DisplayMode] = []
    for token in text.split():
        mode = parse_mode_token(token)
        if mode is None:
            _LOGGER.debug("Skipping malformed display mode: %r", token)
            continue
        modes.append(mode)
    return modes


def transform_name(raw: str) -> str:
    """Map a wl_output transform number to its name; unknown values pass through."""

    value = raw.strip()
    return TRANSFORMS.get(value, value or UNKNOWN_VALUE)


def _build_monitor(header: re.Match[str], body: list[str]) -> Monitor:
    fields: dict[str, str] = {}
    active: re.Match[str] | None = None
    for content in body:
        if active is None:
            active = _ACTIVE_MODE_PATTERN.match(content)
            if active is not None:
                continue
        key, separator, value = content.partition(":")
        if separator:
            fields.setdefault(key.strip(), value.strip())

    workspace = _WORKSPACE_PATTERN.match(fields.get("active workspace", ""))
    return Monitor(
        id=int(header.group("id")),
        name=header.group("name"),
        description=fields.get("description") or UNKNOWN_VALUE,
        width=int(active.group("width")) if active else 0,
        height=int(active.group("height")) if active else 0,
        refresh_rate=parse_float(active.group("rate")) if active else 0.0,
        x=int(active.group("x")) if active else 0,
        y=int(active.group("y")) if active else 0,
        scale=parse_float(fields.get("scale"), 1.0),
        transform=transform_name(fields.get("transform", "")),
        active_workspace_id=parse_int(workspace.group("id")) if workspace else 0,
        active_workspace_name=workspace.group("name") if workspace else UNKNOWN_VALUE,
        available_modes=tuple(parse_display_modes(fields.get("availableModes", ""))),
    )


def parse_monitors(lines: Iterable[str]) -> list[Monitor]:
    """Group report lines under their ``Monitor`` header and build records."""

    monitors: list[Monitor] = []
    header: re.Match[str] | None = None
    body: list[str] = []
    for line in lines:
        content = strip_decoration(line)
        if not content:
            continue
        match = _HEADER_PATTERN.match(content)
        if match:
            if header is not None:
                monitors.append(_build_monitor(header, body))
            header, body = match, []
            continue
        if header is None:
            _LOGGER.debug("Skipping line outside monitor block: %r", line)
            continue
        body.append(content)
    if header is not None:
        monitors.append(_build_monitor(header, body))
    return monitors


def get_monitors() -> list[Monitor]:
    """Return all outputs known to the compositor, in report order."""

    runner.require_command(HYPRCTL, HYPRCTL_HINT)
    output = runner.check_output([HYPRCTL, "monitors"], stage="hyprctl monitors")
    monitors = parse_monitors(output.splitlines())
    if not monitors and output.strip():
        raise ToolFailureError("hyprctl monitors", output)
    return monitors


def apply_monitor_settings(
    name: str,
    width: int,
    height: int,
    refresh_rate: float,
    x: int,
    y: int,
    scale: float,
) -> None:
    """Apply a monitor rule at runtime through ``hyprctl keyword monitor``."""

    if not name or "," in name:
        raise ValueError(f"invalid monitor name: {name!r}")
    if width <= 0 or height <= 0 or refresh_rate <= 0 or scale <= 0:
        raise ValueError("width, height, refresh rate and scale must be positive")
    rule = f"{name},{width}x{height}@{refresh_rate:g},{x}x{y},{scale:g}"
    runner.require_command(HYPRCTL, HYPRCTL_HINT)
    result = runner.run_command([HYPRCTL, "keyword", "monitor", rule])
    reply = result.stdout.strip()
    if not result.ok or reply != "ok":
        raise ToolFailureError("hyprctl keyword monitor", result.diagnostic, result.returncode)
    _LOGGER.info("Applied monitor rule %s", rule)

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
"""Tests for hyprctl monitor parsing."""

import pytest
from conftest import FakeCommands

from hypr_status.display import (
    apply_monitor_settings,
    get_monitors,
    parse_display_modes,
    parse_mode_token,
    parse_monitors,
    transform_name,
)
from hypr_status.errors import ToolFailureError
from hypr_status.models import DisplayMode

HYPRCTL_MONITORS = """\
Monitor eDP-1 (ID 0):
\t1920x1080@60.00100 at 0x0
\tdescription: Chimei Innolux Corporation 0x1521
\tmake: Chimei Innolux Corporation
\tmodel: 0x1521
\tserial: 
\tactive workspace: 1 (1)
\tspecial workspace: 0 ()
\treserved: 0 43 0 0
\tscale: 1.25
\ttransform: 0
\tfocused: yes
\tdpmsStatus: 1
\tvrr: false
\tavailableModes: 1920x1080@60.00Hz 1920x1080@48.00Hz

Monitor HDMI-A-1 (ID 1):
\t2560x1440@143.91200 at 1920x0
\tdescription: Dell Inc. DELL S2721DGF
\tactive workspace: 5 (web)
\tscale: 1.00
\ttransform: 1
\tavailableModes: 2560x1440@143.91Hz 2560x1440@59.95Hz bogus

"""


def test_parse_display_modes_drops_malformed_tokens() -> None:
    modes = parse_display_modes("1920x1080@60.00Hz bogus 2560x1440@75Hz")

    assert modes == [DisplayMode(1920, 1080, 60.0), DisplayMode(2560, 1440, 75.0)]


@pytest.mark.parametrize(
    "token",
    [
        "bogus",
        "axb@60Hz",
        "1920x1080@fastHz",
        "1920x1080@60",
        "1920@60Hz",
        "-1x5@60Hz",
        "1x1@nanHz",
        "²x1@60Hz",
        "1920x١٠٨٠@60Hz",
    ],
)
def test_parse_mode_token_rejects(token: str) -> None:
    assert parse_mode_token(token) is None


def test_parse_display_modes_skips_non_ascii_digits() -> None:
    modes = parse_display_modes("1920x1080@60.00Hz ²x1@60Hz 2560x1440@75Hz")

    assert modes == [DisplayMode(1920, 1080, 60.0), DisplayMode(2560, 1440, 75.0)]


def test_parse_monitors_survives_malformed_mode_token() -> None:
    report = ["Monitor DP-1 (ID 2):", "\tavailableModes: 2560x1440@144.00Hz ²x1@60Hz"]

    monitors = parse_monitors(report)

    assert monitors[0].available_modes == (DisplayMode(2560, 1440, 144.0),)


def test_parse_display_modes_empty() -> None:
    assert parse_display_modes("") == []


def test_transform_name() -> None:
    assert transform_name("0") == "Normal"
    assert transform_name("5") == "FlippedRotate90"
    assert transform_name("9") == "9"
    assert transform_name("") == "Unknown"


def test_parse_monitors() -> None:
    monitors = parse_monitors(HYPRCTL_MONITORS.splitlines())

    assert [monitor.name for monitor in monitors] == ["eDP-1", "HDMI-A-1"]
    laptop, external = monitors
    assert (laptop.id, laptop.width, laptop.height) == (0, 1920, 1080)
    assert laptop.refresh_rate == pytest.approx(60.001)
    assert laptop.description == "Chimei Innolux Corporation 0x1521"
    assert laptop.scale == 1.25
    assert laptop.transform == "Normal"
    assert (laptop.active_workspace_id, laptop.active_workspace_name) == (1, "1")
    assert len(laptop.available_modes) == 2
    assert (external.x, external.y) == (1920, 0)
    assert external.transform == "Rotate90"
    assert external.active_workspace_name == "web"
    assert external.available_modes == (
        DisplayMode(2560, 1440, 143.91),
        DisplayMode(2560, 1440, 59.95),
    )


def test_parse_monitors_missing_fields_default() -> None:
    monitors = parse_monitors(["stray line", "Monitor DP-2 (ID 3):", "\tdisabled: true"])

    assert len(monitors) == 1
    monitor = monitors[0]
    assert (monitor.width, monitor.height, monitor.refresh_rate) == (0, 0, 0.0)
    assert monitor.scale == 1.0
    assert monitor.description == "Unknown"
    assert monitor.active_workspace_name == "Unknown"
    assert monitor.available_modes == ()


def test_get_monitors(fake_commands: FakeCommands) -> None:
    fake_commands.add(["hyprctl", "monitors"], stdout=HYPRCTL_MONITORS)

    assert len(get_monitors()) == 2


def test_get_monitors_rejects_unexpected_output(fake_commands: FakeCommands) -> None:
    fake_commands.add(
        ["hyprctl", "monitors"],
        stdout="HYPRLAND_INSTANCE_SIGNATURE not set! (is hyprland running?)\n",
    )

    with pytest.raises(ToolFailureError, match="is hyprland running"):
        get_monitors()


def test_apply_monitor_settings(fake_commands: FakeCommands) -> None:
    fake_commands.add(["hyprctl", "keyword", "monitor", "DP-1,2560x1440@144,0x0,1"], stdout="ok\n")

    apply_monitor_settings("DP-1", 2560, 1440, 144.0, 0, 0, 1.0)

    assert fake_commands.calls == [("hyprctl", "keyword", "monitor", "DP-1,2560x1440@144,0x0,1")]


def test_apply_monitor_settings_error_reply(fake_commands: FakeCommands) -> None:
    fake_commands.add(
        ["hyprctl", "keyword", "monitor", "DP-1,1920x1080@60,0x0,1.5"],
        stdout="invalid scale\n",
    )

    with pytest.raises(ToolFailureError, match="invalid scale"):
        apply_monitor_settings("DP-1", 1920, 1080, 60.0, 0, 0, 1.5)


def test_apply_monitor_settings_validates() -> None:
    with pytest.raises(ValueError):
        apply_monitor_settings("DP-1,evil", 1920, 1080, 60.0, 0, 0, 1.0)
    with pytest.raises(ValueError):
        apply_monitor_settings("DP-1", 0, 1080, 60.0, 0, 0, 1.0)

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
"""Data models for hypr-status snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

UNKNOWN_VALUE = "Unknown"

SINK = "sink"
SOURCE = "source"

STATE_UP = "up"
STATE_DOWN = "down"
STATE_UNKNOWN = "unknown"

INTERFACE_WIFI = "WiFi"
INTERFACE_ETHERNET = "Ethernet"
INTERFACE_BRIDGE = "Bridge"
INTERFACE_VIRTUAL = "Virtual"
INTERFACE_OTHER = "Other"

SECURITY_OPEN = "Open"
SECURITY_WEP = "WEP"
SECURITY_WPA = "WPA"
SECURITY_WPA2 = "WPA2"
SECURITY_WPA3 = "WPA3"


@dataclass(frozen=True)
class AudioDevice:
    """Audio sink or source as listed by ``wpctl status``."""

    id: int
    name: str
    description: str
    device_type: str
    volume: float = 0.0
    muted: bool = False
    is_default: bool = False


@dataclass(frozen=True)
class AudioStream:
    """Per-application playback or capture stream."""

    id: int
    app_name: str
    media_name: str | None = None
    volume: float = 0.0
    muted: bool = False


@dataclass(frozen=True)
class AudioState:
    """Audio snapshot grouped by section."""

    sinks: Sequence[AudioDevice] = field(default_factory=tuple)
    sources: Sequence[AudioDevice] = field(default_factory=tuple)
    streams: Sequence[AudioStream] = field(default_factory=tuple)


@dataclass(frozen=True)
class NetworkInterface:
    """Network interface read from sysfs and ``ip addr``."""

    name: str
    state: str
    mac_address: str
    ip_addresses: Sequence[str]
    interface_type: str
    mtu: int
    rx_bytes: int
    tx_bytes: int
    ssid: str | None = None


@dataclass(frozen=True)
class WifiNetwork:
    """Single Wi-Fi scan result."""

    ssid: str
    signal_strength: int
    security: str
    connected: bool
    bssid: str
    frequency: str


@dataclass(frozen=True)
class DisplayMode:
    """Mode advertised by an output."""

    width: int
    height: int
    refresh_rate: float


@dataclass(frozen=True)
class Monitor:
    """Compositor output as reported by ``hyprctl monitors``."""

    id: int
    name: str
    description: str
    width: int
    height: int
    refresh_rate: float
    x: int
    y: int
    scale: float
    transform: str
    active_workspace_id: int
    active_workspace_name: str
    available_modes: Sequence[DisplayMode] = field(default_factory=tuple)


@dataclass(frozen=True)
class SystemInfo:
    """Flat system overview; every field falls back to ``UNKNOWN_VALUE``."""

    os_name: str = UNKNOWN_VALUE
    hostname: str = UNKNOWN_VALUE
    kernel: str = UNKNOWN_VALUE
    uptime: str = UNKNOWN_VALUE
    shell: str = UNKNOWN_VALUE
    compositor_version: str = UNKNOWN_VALUE
    gpus: Sequence[str] = field(default_factory=tuple)
    ram_used: str = UNKNOWN_VALUE
    ram_total: str = UNKNOWN_VALUE
    disk_used: str = UNKNOWN_VALUE
    disk_total: str = UNKNOWN_VALUE
    cpu: str = UNKNOWN_VALUE

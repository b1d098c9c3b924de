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
"""Wi-Fi scan results via NetworkManager's nmcli."""

from __future__ import annotations

import logging
import time
from typing import Iterable

from hypr_status import runner
from hypr_status.config import DEFAULT_CONFIG, PanelConfig
from hypr_status.models import WifiNetwork
from hypr_status.normalize import classify_security, parse_int

_LOGGER = logging.getLogger(__name__)

NMCLI = "nmcli"
NMCLI_HINT = "Please install NetworkManager to scan Wi-Fi networks."
SCAN_FIELDS = "IN-USE,SSID,SIGNAL,SECURITY,BSSID,FREQ"
MIN_FIELDS = 6
IN_USE_MARKER = "*"


def split_terse_fields(line: str) -> list[str]:
    """Split an ``nmcli -t`` line on unescaped colons."""

    fields: list[str] = []
    current: list[str] = []
    escaped = False
    for char in line:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == ":":
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))
    return fields


def parse_wifi_line(line: str) -> WifiNetwork | None:
    """Parse one ``in-use:ssid:signal:security:bssid:freq`` record."""

    fields = split_terse_fields(line)
    if len(fields) < MIN_FIELDS:
        _LOGGER.debug("Skipping short scan record: %r", line)
        return None
    in_use, ssid, signal, security, bssid, frequency = fields[:MIN_FIELDS]
    if not ssid.strip():
        return None
    return WifiNetwork(
        ssid=ssid,
        signal_strength=parse_int(signal),
        security=classify_security(security),
        connected=in_use.strip() == IN_USE_MARKER,
        bssid=bssid.strip(),
        frequency=frequency.strip(),
    )


def deduplicate_networks(networks: Iterable[WifiNetwork]) -> list[WifiNetwork]:
    """Keep the first record seen for every SSID."""

    seen: set[str] = set()
    unique: list[WifiNetwork] = []
    for network in networks:
        if network.ssid in seen:
            continue
        seen.add(network.ssid)
        unique.append(network)
    return unique


def sort_networks(networks: Iterable[WifiNetwork]) -> list[WifiNetwork]:
    """Connected network first, the rest by descending signal."""

    return sorted(networks, key=lambda item: (not item.connected, -item.signal_strength))


def parse_wifi_scan(text: str) -> list[WifiNetwork]:
    """Parse, deduplicate and order a terse scan listing."""

    parsed = [parse_wifi_line(line) for line in text.splitlines() if line.strip()]
    networks = deduplicate_networks(network for network in parsed if network is not None)
    return sort_networks(networks)


def _rescan(settle_seconds: float) -> None:
    result = runner.run_command([NMCLI, "device", "wifi", "rescan"])
    if not result.ok:
        _LOGGER.warning("Wi-Fi rescan failed, using cached results: %s", result.diagnostic)
        return
    time.sleep(settle_seconds)


def scan_wifi_networks(rescan: bool = True, config: PanelConfig | None = None) -> list[WifiNetwork]:
    """Return visible Wi-Fi networks, optionally after a fresh rescan."""

    config = config or DEFAULT_CONFIG
    runner.require_command(NMCLI, NMCLI_HINT)
    if rescan:
        _rescan(config.scan_settle_seconds)
    output = runner.check_output(
        [NMCLI, "-t", "-f", SCAN_FIELDS, "device", "wifi", "list"], stage="nmcli device wifi list"
    )
    networks = parse_wifi_scan(output)
    _LOGGER.debug("Scan returned %s networks", len(networks))
    return networks

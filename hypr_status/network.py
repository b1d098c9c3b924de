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
"""Network interface snapshot from sysfs, ``ip`` and the SSID tools."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from hypr_status import runner
from hypr_status.config import DEFAULT_CONFIG, PanelConfig
from hypr_status.errors import PanelError, ToolFailureError
from hypr_status.models import (
    INTERFACE_WIFI,
    STATE_UNKNOWN,
    STATE_UP,
    UNKNOWN_VALUE,
    NetworkInterface,
)
from hypr_status.normalize import (
    classify_interface_type,
    first_successful,
    normalize_operstate,
    parse_int,
)

_LOGGER = logging.getLogger(__name__)

LOOPBACK = "lo"
LINK_LOCAL_PREFIX = "fe80"


def _read_sys_value(path: Path) -> str | None:
    """Read a single-value sysfs file; None if it cannot be read."""

    try:
        return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as exc:
        _LOGGER.debug("Cannot read %s: %s", path, exc)
        return None


def list_interface_names(sys_net_dir: Path) -> list[str]:
    """List interface names, excluding loopback."""

    try:
        entries = sorted(entry.name for entry in sys_net_dir.iterdir())
    except OSError as exc:
        raise ToolFailureError(f"read {sys_net_dir}", str(exc)) from exc
    return [name for name in entries if name != LOOPBACK]


def parse_ip_addresses(text: str) -> list[str]:
    """Extract IPv4 and global IPv6 addresses from ``ip addr show`` output."""

    addresses: list[str] = []
    for line in text.splitlines():
        tokens = line.split()
        if len(tokens) < 2 or tokens[0] not in ("inet", "inet6"):
            continue
        address = tokens[1].split("/", 1)[0]
        if tokens[0] == "inet6" and address.lower().startswith(LINK_LOCAL_PREFIX):
            continue
        addresses.append(address)
    return addresses


def get_ip_addresses(name: str) -> list[str]:
    """Return the addresses of one interface; empty on any failure."""

    try:
        result = runner.run_command(["ip", "addr", "show", name])
    except PanelError as exc:
        _LOGGER.debug("ip addr show %s failed: %s", name, exc)
        return []
    if not result.ok:
        _LOGGER.debug("ip addr show %s failed: %s", name, result.diagnostic)
        return []
    return parse_ip_addresses(result.stdout)


def _unescape_terse(value: str) -> str:
    return value.replace("\\:", ":").replace("\\\\", "\\")


def _ssid_from_network_manager() -> str | None:
    runner.require_command("nmcli")
    output = runner.check_output(
        ["nmcli", "-t", "-f", "ACTIVE,SSID", "device", "wifi"], stage="nmcli device wifi"
    )
    for line in output.splitlines():
        if line.startswith("yes:"):
            return _unescape_terse(line[len("yes:") :]).strip() or None
    return None


def _ssid_from_iwgetid(name: str) -> str | None:
    runner.require_command("iwgetid")
    output = runner.check_output(["iwgetid", "-r", name], stage="iwgetid")
    return output.strip() or None


def _ssid_from_iw(name: str) -> str | None:
    runner.require_command("iw")
    output = runner.check_output(["iw", "dev", name, "link"], stage="iw link")
    for line in output.splitlines():
        stripped = line.strip()
        if stripped.startswith("SSID:"):
            return stripped[len("SSID:") :].strip() or None
    return None


def get_ssid(name: str) -> str | None:
    """Resolve the connected SSID of a wireless interface.

    NetworkManager is asked first, then ``iwgetid`` and finally ``iw``; the
    first non-empty answer wins.
    """

    return first_successful(
        [
            _ssid_from_network_manager,
            lambda: _ssid_from_iwgetid(name),
            lambda: _ssid_from_iw(name),
        ]
    )


def read_interface(sys_net_dir: Path, name: str, with_addresses: bool = True) -> NetworkInterface:
    """Build one interface record; unreadable fields fall back to sentinels."""

    base = sys_net_dir / name
    operstate = _read_sys_value(base / "operstate")
    state = normalize_operstate(operstate) if operstate is not None else STATE_UNKNOWN
    interface_type = classify_interface_type(name)
    return NetworkInterface(
        name=name,
        state=state,
        mac_address=_read_sys_value(base / "address") or UNKNOWN_VALUE,
        ip_addresses=tuple(get_ip_addresses(name)) if with_addresses else (),
        interface_type=interface_type,
        mtu=parse_int(_read_sys_value(base / "mtu")),
        rx_bytes=parse_int(_read_sys_value(base / "statistics" / "rx_bytes")),
        tx_bytes=parse_int(_read_sys_value(base / "statistics" / "tx_bytes")),
        ssid=get_ssid(name) if interface_type == INTERFACE_WIFI else None,
    )


def sort_interfaces(interfaces: Iterable[NetworkInterface]) -> list[NetworkInterface]:
    """Order interfaces up-first, then by name."""

    return sorted(interfaces, key=lambda item: (item.state != STATE_UP, item.name))


def get_network_info(config: PanelConfig | None = None) -> list[NetworkInterface]:
    """Return all non-loopback interfaces in display order."""

    config = config or DEFAULT_CONFIG
    names = list_interface_names(config.sys_net_dir)
    with_addresses = runner.command_exists("ip")
    if not with_addresses:
        _LOGGER.warning("ip command not found; interface addresses unavailable")
    interfaces = [read_interface(config.sys_net_dir, name, with_addresses) for name in names]
    _LOGGER.debug("Found %s interfaces", len(interfaces))
    return sort_interfaces(interfaces)

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
"""Normalization utilities: ordered rule tables and value coercion."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence, TypeVar

from hypr_status.errors import PanelError
from hypr_status.models import (
    INTERFACE_BRIDGE,
    INTERFACE_ETHERNET,
    INTERFACE_OTHER,
    INTERFACE_VIRTUAL,
    INTERFACE_WIFI,
    SECURITY_OPEN,
    SECURITY_WEP,
    SECURITY_WPA,
    SECURITY_WPA2,
    SECURITY_WPA3,
    STATE_DOWN,
    STATE_UNKNOWN,
    STATE_UP,
)

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

_INTERFACE_PREFIXES: tuple[tuple[str, str], ...] = (
    ("wl", INTERFACE_WIFI),
    ("en", INTERFACE_ETHERNET),
    ("eth", INTERFACE_ETHERNET),
    ("br", INTERFACE_BRIDGE),
    ("veth", INTERFACE_VIRTUAL),
    ("virbr", INTERFACE_VIRTUAL),
    ("docker", INTERFACE_VIRTUAL),
    ("vnet", INTERFACE_VIRTUAL),
    ("tun", INTERFACE_VIRTUAL),
    ("tap", INTERFACE_VIRTUAL),
)

# Checked in order; "WPA" is a substring of the stronger schemes.
_SECURITY_MARKERS: tuple[tuple[str, str], ...] = (
    ("WPA3", SECURITY_WPA3),
    ("WPA2", SECURITY_WPA2),
    ("WPA", SECURITY_WPA),
    ("WEP", SECURITY_WEP),
)

_STATE_MAP = {
    "up": STATE_UP,
    "down": STATE_DOWN,
    "lowerlayerdown": STATE_DOWN,
    "notpresent": STATE_DOWN,
}


def first_successful(strategies: Iterable[Callable[[], T | None]]) -> T | None:
    """Return the first non-empty value produced by a strategy.

    Strategies are tried lazily in order. A strategy signalling a panel error
    (tool missing or failing) counts as having produced nothing.
    """

    for strategy in strategies:
        try:
            value = strategy()
        except PanelError as exc:
            _LOGGER.debug("Strategy %s failed: %s", getattr(strategy, "__name__", strategy), exc)
            continue
        if value:
            return value
    return None


def first_match(
    value: str,
    rules: Sequence[tuple[Callable[[str], bool], str]],
    default: str,
) -> str:
    """Apply an ordered rule table; the first predicate that holds wins."""

    matched = first_successful(
        (lambda predicate=predicate, label=label: label if predicate(value) else None)
        for predicate, label in rules
    )
    return matched if matched is not None else default


def classify_interface_type(name: str) -> str:
    """Classify an interface by its name prefix."""

    rules = [
        (lambda candidate, prefix=prefix: candidate.startswith(prefix), label)
        for prefix, label in _INTERFACE_PREFIXES
    ]
    return first_match(name, rules, INTERFACE_OTHER)


def classify_security(raw: str) -> str:
    """Normalize nmcli security text to a single scheme name."""

    cleaned = raw.strip()
    if cleaned in ("", "--"):
        return SECURITY_OPEN
    upper = cleaned.upper()
    rules = [
        (lambda candidate, marker=marker: marker in candidate, label)
        for marker, label in _SECURITY_MARKERS
    ]
    matched = first_match(upper, rules, "")
    return matched or cleaned


def normalize_operstate(raw: str) -> str:
    """Collapse a sysfs operstate into up, down or unknown."""

    return _STATE_MAP.get(raw.strip().lower(), STATE_UNKNOWN)


def parse_int(raw: str | None, default: int = 0) -> int:
    """Parse an integer, returning ``default`` on any failure."""

    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def parse_float(raw: str | None, default: float = 0.0) -> float:
    """Parse a float, returning ``default`` on any failure."""

    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default

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
"""Tests for rule tables and value coercion."""

import pytest

from hypr_status.errors import ToolFailureError, ToolUnavailableError
from hypr_status.normalize import (
    classify_interface_type,
    classify_security,
    first_match,
    first_successful,
    normalize_operstate,
    parse_float,
    parse_int,
)


def test_first_successful_returns_first_non_empty() -> None:
    calls: list[str] = []

    def empty() -> str | None:
        calls.append("empty")
        return ""

    def missing() -> str | None:
        calls.append("missing")
        raise ToolUnavailableError("iwgetid")

    def found() -> str | None:
        calls.append("found")
        return "value"

    def never() -> str | None:
        calls.append("never")
        return "late"

    assert first_successful([empty, missing, found, never]) == "value"
    assert calls == ["empty", "missing", "found"]


def test_first_successful_all_failing_returns_none() -> None:
    def failing() -> str | None:
        raise ToolFailureError("iw", "no link", 1)

    assert first_successful([failing, lambda: None]) is None


def test_first_successful_propagates_unrelated_errors() -> None:
    def broken() -> str | None:
        raise KeyError("bug")

    with pytest.raises(KeyError):
        first_successful([broken])


def test_first_match_uses_rule_order() -> None:
    rules = [(lambda value: "a" in value, "first"), (lambda value: "ab" in value, "second")]

    assert first_match("abc", rules, "none") == "first"
    assert first_match("xyz", rules, "none") == "none"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("wlan0", "WiFi"),
        ("wlp3s0", "WiFi"),
        ("enp0s31f6", "Ethernet"),
        ("eth0", "Ethernet"),
        ("br0", "Bridge"),
        ("br-5f1c2a", "Bridge"),
        ("veth1a2b", "Virtual"),
        ("virbr0", "Virtual"),
        ("docker0", "Virtual"),
        ("tun0", "Virtual"),
        ("wwan0", "Other"),
        ("tailscale0", "Other"),
    ],
)
def test_classify_interface_type(name: str, expected: str) -> None:
    assert classify_interface_type(name) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("WPA3", "WPA3"),
        ("WPA2 WPA3", "WPA3"),
        ("WPA1 WPA2", "WPA2"),
        ("WPA1", "WPA"),
        ("WEP", "WEP"),
        ("", "Open"),
        ("--", "Open"),
        ("802.1X", "802.1X"),
    ],
)
def test_classify_security(raw: str, expected: str) -> None:
    assert classify_security(raw) == expected


def test_normalize_operstate() -> None:
    assert normalize_operstate("up\n") == "up"
    assert normalize_operstate("lowerlayerdown") == "down"
    assert normalize_operstate("dormant") == "unknown"


def test_parse_number_defaults() -> None:
    assert parse_int(" 1500 ") == 1500
    assert parse_int("n/a") == 0
    assert parse_int(None, -1) == -1
    assert parse_float("0.45") == 0.45
    assert parse_float("loud") == 0.0

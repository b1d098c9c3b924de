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
"""Tests for the process invoker."""

import sys

import pytest

from hypr_status import runner
from hypr_status.errors import ToolFailureError, ToolUnavailableError


def test_run_command_captures_output() -> None:
    result = runner.run_command([sys.executable, "-c", "print('hello')"])

    assert result.ok
    assert result.stdout.strip() == "hello"


def test_run_command_returns_non_zero_exit() -> None:
    result = runner.run_command(
        [sys.executable, "-c", "import sys; sys.stderr.write('boom\\n'); sys.exit(4)"]
    )

    assert result.returncode == 4
    assert result.diagnostic == "boom"


def test_run_command_missing_binary() -> None:
    with pytest.raises(ToolUnavailableError, match="definitely-not-a-tool not found"):
        runner.run_command(["definitely-not-a-tool"])


def test_check_output_raises_on_failure() -> None:
    with pytest.raises(ToolFailureError) as excinfo:
        runner.check_output([sys.executable, "-c", "import sys; sys.exit(3)"], stage="probe")

    assert excinfo.value.returncode == 3
    assert "probe failed (exit 3)" in str(excinfo.value)


def test_command_exists() -> None:
    assert runner.command_exists(sys.executable)
    assert not runner.command_exists("definitely-not-a-tool")


def test_require_command_includes_hint() -> None:
    with pytest.raises(ToolUnavailableError, match="install it"):
        runner.require_command("definitely-not-a-tool", hint="install it")

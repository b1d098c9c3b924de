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
"""Shared fixtures: a scripted replacement for the process invoker."""

from __future__ import annotations

from typing import Sequence

import pytest

from hypr_status import runner
from hypr_status.errors import ToolUnavailableError
from hypr_status.runner import CommandResult


class FakeCommands:
    """Answer commands from a table instead of spawning processes."""

    def __init__(self) -> None:
        self.responses: dict[tuple[str, ...], CommandResult] = {}
        self.missing: set[str] = set()
        self.calls: list[tuple[str, ...]] = []

    def add(
        self,
        command: Sequence[str],
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> None:
        self.responses[tuple(command)] = CommandResult(stdout, stderr, returncode)

    def run(self, command: Sequence[str]) -> CommandResult:
        key = tuple(command)
        self.calls.append(key)
        if key[0] in self.missing:
            raise ToolUnavailableError(key[0])
        response = self.responses.get(key)
        if response is None:
            return CommandResult("", f"unexpected command: {' '.join(key)}", 127)
        return response

    def exists(self, command: str) -> bool:
        return command not in self.missing


@pytest.fixture
def fake_commands(monkeypatch: pytest.MonkeyPatch) -> FakeCommands:
    fake = FakeCommands()
    monkeypatch.setattr(runner, "run_command", fake.run)
    monkeypatch.setattr(runner, "command_exists", fake.exists)
    return fake

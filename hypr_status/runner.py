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
"""External command invocation."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from hypr_status.errors import ToolFailureError, ToolUnavailableError

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Captured output of a finished command."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def diagnostic(self) -> str:
        """Return the most useful error text, preferring stderr."""

        return (self.stderr or self.stdout).strip()


def command_exists(command: str) -> bool:
    """Check if a command exists on PATH."""

    return Path(command).is_file() or bool(shutil.which(command))


def require_command(command: str, hint: str | None = None) -> None:
    """Raise ToolUnavailableError unless the command is installed."""

    if not command_exists(command):
        _LOGGER.debug("Required command missing: %s", command)
        raise ToolUnavailableError(command, hint)


def run_command(command: Sequence[str]) -> CommandResult:
    """Run a command to completion and capture its output.

    Spawn failures are translated into the panel error taxonomy; a non-zero
    exit status is returned to the caller, which decides whether it is fatal.
    """

    argv = list(command)
    _LOGGER.debug("Running: %s", " ".join(argv))
    try:
        result = subprocess.run(
            argv,
            check=False,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as exc:
        raise ToolUnavailableError(argv[0]) from exc
    except OSError as exc:
        raise ToolFailureError(argv[0], str(exc)) from exc

    if result.returncode != 0:
        _LOGGER.debug("%s exited with %s", argv[0], result.returncode)
    return CommandResult(result.stdout, result.stderr, result.returncode)


def check_output(command: Sequence[str], stage: str | None = None) -> str:
    """Run a command and return stdout, raising ToolFailureError on non-zero exit."""

    result = run_command(command)
    if not result.ok:
        raise ToolFailureError(stage or " ".join(command[:2]), result.diagnostic, result.returncode)
    return result.stdout

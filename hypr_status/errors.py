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
"""Error types raised by hypr-status queries."""

from __future__ import annotations


class PanelError(RuntimeError):
    """Base class for query failures surfaced to the caller."""


class ToolUnavailableError(PanelError):
    """A required external command is not installed."""

    def __init__(self, tool: str, hint: str | None = None) -> None:
        message = f"{tool} not found"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(message)
        self.tool = tool


class ToolFailureError(PanelError):
    """An external command ran but failed or produced unusable output."""

    def __init__(self, tool: str, detail: str, returncode: int | None = None) -> None:
        detail = detail.strip() or "<empty>"
        if returncode is None:
            message = f"{tool} failed: {detail}"
        else:
            message = f"{tool} failed (exit {returncode}): {detail}"
        super().__init__(message)
        self.tool = tool
        self.detail = detail
        self.returncode = returncode

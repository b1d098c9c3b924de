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
"""Line classification and section tracking for indented tree reports.

Reports such as ``wpctl status`` delimit their structure only through
indentation and box-drawing glyphs. Parsing is split in two steps: the
classifier strips decoration from a single line, and the section state
machine decides which record parser (if any) a line belongs to. The state
is an immutable value threaded through ``advance`` so that single lines can
be tested without building a whole report.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Hashable, Iterable, Iterator

DECORATION_CHARS = " \t│├└─"


def strip_decoration(line: str, chars: str = DECORATION_CHARS) -> str:
    """Return the content of a line without tree glyphs and surrounding whitespace."""

    return line.lstrip(chars).strip()


def is_noise(line: str, chars: str = DECORATION_CHARS) -> bool:
    """True if nothing but decoration remains after stripping."""

    return not strip_decoration(line, chars)


class LineKind(Enum):
    """Classification of a single report line against a grammar."""

    BLOCK_ENTER = "block_enter"
    BLOCK_EXIT = "block_exit"
    SECTION = "section"
    SECTION_RESET = "section_reset"
    RECORD = "record"
    NOISE = "noise"


@dataclass(frozen=True)
class SectionGrammar:
    """Keywords that give a report its structure.

    ``block_keyword`` opens the block of interest and ``sibling_keywords``
    close it. ``markers`` map a subsection marker (matched anywhere in the
    line) to a section tag; ``reset_markers`` clear the current section
    without leaving the block.
    """

    block_keyword: str
    sibling_keywords: tuple[str, ...]
    markers: tuple[tuple[str, Hashable], ...]
    reset_markers: tuple[str, ...] = ()


@dataclass(frozen=True)
class SectionState:
    """Position of the walker inside a report."""

    in_block: bool = False
    section: Hashable | None = None


def classify_line(line: str, grammar: SectionGrammar) -> tuple[LineKind, Hashable | None]:
    """Classify one raw line; returns the kind and, for sections, the tag."""

    if is_noise(line):
        return LineKind.NOISE, None
    content = strip_decoration(line)
    if content.startswith(grammar.block_keyword):
        return LineKind.BLOCK_ENTER, None
    if any(content.startswith(keyword) for keyword in grammar.sibling_keywords):
        return LineKind.BLOCK_EXIT, None
    for marker, tag in grammar.markers:
        if marker in line:
            return LineKind.SECTION, tag
    if any(marker in line for marker in grammar.reset_markers):
        return LineKind.SECTION_RESET, None
    return LineKind.RECORD, None


def advance(
    state: SectionState, line: str, grammar: SectionGrammar
) -> tuple[SectionState, str | None]:
    """Consume one line and return the next state plus the line to dispatch.

    The dispatched line is ``None`` for control lines, noise, and record lines
    that arrive while no section is active.
    """

    kind, tag = classify_line(line, grammar)
    if kind is LineKind.BLOCK_ENTER:
        return SectionState(in_block=True, section=None), None
    if kind is LineKind.BLOCK_EXIT:
        return SectionState(), None
    if not state.in_block or kind is LineKind.NOISE:
        return state, None
    if kind is LineKind.SECTION:
        return SectionState(in_block=True, section=tag), None
    if kind is LineKind.SECTION_RESET:
        return SectionState(in_block=True, section=None), None
    if state.section is None:
        return state, None
    return state, line


def walk_sections(
    lines: Iterable[str], grammar: SectionGrammar
) -> Iterator[tuple[Hashable, str]]:
    """Yield ``(section, line)`` for every record line inside the block."""

    state = SectionState()
    for line in lines:
        state, record = advance(state, line, grammar)
        if record is not None:
            yield state.section, record

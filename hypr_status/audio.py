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
"""Audio state via WirePlumber's wpctl."""

from __future__ import annotations

import logging
import math
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from enum import Enum
from typing import Iterable, TypeVar

from hypr_status import runner
from hypr_status.config import DEFAULT_CONFIG, PanelConfig
from hypr_status.errors import PanelError, ToolFailureError
from hypr_status.lines import SectionGrammar, strip_decoration, walk_sections
from hypr_status.models import SINK, SOURCE, AudioDevice, AudioState, AudioStream
from hypr_status.normalize import parse_float

_LOGGER = logging.getLogger(__name__)

WPCTL = "wpctl"
WPCTL_HINT = "Please install WirePlumber to manage audio."
MAX_VOLUME = 1.5
DEFAULT_MARKER = "*"
MUTED_MARKER = "[MUTED]"

R = TypeVar("R", AudioDevice, AudioStream)


class AudioSection(Enum):
    """Subsections of the Audio block that carry records."""

    SINKS = "sinks"
    SOURCES = "sources"
    STREAMS = "streams"


AUDIO_GRAMMAR = SectionGrammar(
    block_keyword="Audio",
    sibling_keywords=("Video", "Settings"),
    markers=(
        ("Sinks:", AudioSection.SINKS),
        ("Sources:", AudioSection.SOURCES),
        ("Streams:", AudioSection.STREAMS),
    ),
    reset_markers=("Devices:", "Filters:"),
)

_RECORD_PATTERN = re.compile(r"^(?P<id>\d+)\.\s*(?P<rest>.*)$")
_INLINE_VOLUME_PATTERN = re.compile(r"\[vol:\s*(?P<volume>[^\]\s]*)(?P<muted>\s+MUTED)?\s*\]")


def _split_record(content: str) -> tuple[int, str] | None:
    """Split ``<id>. <rest>`` into its parts."""

    match = _RECORD_PATTERN.match(content)
    if not match:
        return None
    return int(match.group("id")), match.group("rest").strip()


def _clean_volume(volume: float) -> float:
    if math.isnan(volume) or volume < 0:
        return 0.0
    return volume


def _inline_volume(rest: str) -> tuple[str, float, bool]:
    """Cut the ``[vol: x]`` annotation off a description."""

    match = _INLINE_VOLUME_PATTERN.search(rest)
    if not match:
        return rest.strip(), 0.0, False
    description = rest[: match.start()].strip()
    volume = _clean_volume(parse_float(match.group("volume")))
    return description, volume, bool(match.group("muted"))


def parse_device_line(line: str, device_type: str) -> AudioDevice | None:
    """Parse a sink or source line such as ``*   53. Speakers  [vol: 0.30]``.

    The inline volume becomes the parse-time value; ``enrich_volumes``
    replaces it with the ``wpctl get-volume`` reading when that succeeds.
    """

    content = strip_decoration(line)
    is_default = content.startswith(DEFAULT_MARKER)
    content = content.lstrip(DEFAULT_MARKER + " ")
    record = _split_record(content)
    if record is None:
        _LOGGER.debug("Skipping unparseable %s line: %r", device_type, line)
        return None
    node_id, rest = record
    description, volume, muted = _inline_volume(rest)
    return AudioDevice(
        id=node_id,
        name=description,
        description=description,
        device_type=device_type,
        volume=volume,
        muted=muted,
        is_default=is_default,
    )


def parse_stream_line(line: str) -> AudioStream | None:
    """Parse a stream line such as ``64. firefox: AudioStream [vol: 0.50]``."""

    content = strip_decoration(line).lstrip(DEFAULT_MARKER + " ")
    record = _split_record(content)
    if record is None:
        _LOGGER.debug("Skipping unparseable stream line: %r", line)
        return None
    node_id, rest = record
    _, volume, muted = _inline_volume(rest)
    if ":" in rest:
        app_part, media_part = rest.split(":", 1)
        app_name = app_part.strip()
        media_name = media_part.split("[", 1)[0].strip() or None
    else:
        app_name = rest.split("[", 1)[0].strip()
        media_name = None
    return AudioStream(
        id=node_id,
        app_name=app_name,
        media_name=media_name,
        volume=volume,
        muted=muted,
    )


def parse_audio_status(text: str) -> AudioState:
    """Parse ``wpctl status`` output without querying volumes."""

    sinks: list[AudioDevice] = []
    sources: list[AudioDevice] = []
    streams: list[AudioStream] = []
    for section, line in walk_sections(text.splitlines(), AUDIO_GRAMMAR):
        if section is AudioSection.SINKS:
            device = parse_device_line(line, SINK)
            if device is not None:
                sinks.append(device)
        elif section is AudioSection.SOURCES:
            device = parse_device_line(line, SOURCE)
            if device is not None:
                sources.append(device)
        elif section is AudioSection.STREAMS:
            stream = parse_stream_line(line)
            if stream is not None:
                streams.append(stream)
    return AudioState(sinks=tuple(sinks), sources=tuple(sources), streams=tuple(streams))


def parse_volume_output(text: str) -> tuple[float, bool]:
    """Parse ``Volume: 0.45 [MUTED]`` into volume and mute flag."""

    muted = MUTED_MARKER in text
    tokens = text.split()
    volume = parse_float(tokens[1]) if len(tokens) > 1 else 0.0
    return _clean_volume(volume), muted


def get_node_volume(node_id: int) -> tuple[float, bool]:
    """Query the current volume and mute state of a node."""

    output = runner.check_output([WPCTL, "get-volume", str(node_id)], stage="wpctl get-volume")
    return parse_volume_output(output)


def _enrich_one(record: R) -> R:
    try:
        volume, muted = get_node_volume(record.id)
    except PanelError as exc:
        _LOGGER.debug("Keeping parse-time volume for node %s: %s", record.id, exc)
        return record
    return replace(record, volume=volume, muted=muted)


def enrich_volumes(records: Iterable[R], workers: int = 1) -> list[R]:
    """Fill in volume and mute state with one ``wpctl get-volume`` per record.

    Failures are absorbed per record. Output order matches input order.
    """

    items = list(records)
    if workers <= 1 or len(items) <= 1:
        return [_enrich_one(item) for item in items]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(_enrich_one, items))


def get_audio_state(config: PanelConfig | None = None) -> AudioState:
    """Return sinks, sources and streams with their current volumes."""

    config = config or DEFAULT_CONFIG
    runner.require_command(WPCTL, WPCTL_HINT)
    output = runner.check_output([WPCTL, "status"], stage="wpctl status")
    parsed = parse_audio_status(output)

    records: list[AudioDevice | AudioStream] = [*parsed.sinks, *parsed.sources, *parsed.streams]
    enriched = enrich_volumes(records, config.enrichment_workers)
    sink_count = len(parsed.sinks)
    source_end = sink_count + len(parsed.sources)
    _LOGGER.debug(
        "Audio state: %s sinks, %s sources, %s streams",
        sink_count,
        len(parsed.sources),
        len(parsed.streams),
    )
    return AudioState(
        sinks=tuple(enriched[:sink_count]),
        sources=tuple(enriched[sink_count:source_end]),
        streams=tuple(enriched[source_end:]),
    )


def _validate_node_id(node_id: int) -> None:
    if node_id < 0:
        raise ValueError(f"invalid node id: {node_id}")


def _run_wpctl(args: list[str], action: str) -> None:
    runner.require_command(WPCTL, WPCTL_HINT)
    result = runner.run_command([WPCTL, *args])
    if not result.ok:
        raise ToolFailureError(f"wpctl {action}", result.diagnostic, result.returncode)


def set_volume(node_id: int, volume: float) -> float:
    """Set a node's volume, clamped to 0.0-1.5; returns the applied value."""

    _validate_node_id(node_id)
    if math.isnan(volume):
        raise ValueError("volume must be a number")
    applied = min(max(volume, 0.0), MAX_VOLUME)
    _run_wpctl(["set-volume", str(node_id), f"{applied:.2f}"], "set-volume")
    return applied


def set_mute(node_id: int, muted: bool) -> None:
    """Mute or unmute a node."""

    _validate_node_id(node_id)
    _run_wpctl(["set-mute", str(node_id), "1" if muted else "0"], "set-mute")


def set_default_device(node_id: int) -> None:
    """Make a sink or source the default."""

    _validate_node_id(node_id)
    _run_wpctl(["set-default", str(node_id)], "set-default")

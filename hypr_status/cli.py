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
"""CLI entrypoint."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Callable, Sequence

from hypr_status import audio, display, network, runner, system_info, wifi
from hypr_status.config import DEFAULT_CONFIG, PanelConfig
from hypr_status.errors import PanelError
from hypr_status.output import write_snapshot_json

_LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""

    parser = argparse.ArgumentParser(description="hypr-status")
    parser.add_argument("--out", default=None, help="write JSON to this path instead of stdout")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["INFO", "DEBUG", "WARN"],
        help="log level",
    )
    parser.add_argument(
        "--sys-net-dir",
        default=str(DEFAULT_CONFIG.sys_net_dir),
        help="network interface directory",
    )
    parser.add_argument("--proc-dir", default=str(DEFAULT_CONFIG.proc_dir), help="procfs root")
    parser.add_argument(
        "--scan-settle",
        type=float,
        default=DEFAULT_CONFIG.scan_settle_seconds,
        help="seconds to wait after a Wi-Fi rescan",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_CONFIG.enrichment_workers,
        help="parallel volume queries (1 disables parallelism)",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("audio", help="sinks, sources and streams")
    commands.add_parser("network", help="network interfaces")
    wifi_parser = commands.add_parser("wifi", help="Wi-Fi scan results")
    wifi_parser.add_argument(
        "--no-rescan",
        action="store_true",
        help="read cached scan results without triggering a rescan",
    )
    commands.add_parser("monitors", help="compositor outputs")
    commands.add_parser("system", help="system overview")

    volume_parser = commands.add_parser("set-volume", help="set node volume (0.0-1.5)")
    volume_parser.add_argument("node_id", type=int)
    volume_parser.add_argument("volume", type=float)

    mute_parser = commands.add_parser("set-mute", help="mute or unmute a node")
    mute_parser.add_argument("node_id", type=int)
    mute_parser.add_argument("state", choices=["on", "off"])

    default_parser = commands.add_parser("set-default", help="make a node the default")
    default_parser.add_argument("node_id", type=int)

    monitor_parser = commands.add_parser("apply-monitor", help="apply a monitor rule")
    monitor_parser.add_argument("name", help="output name, e.g. DP-1")
    monitor_parser.add_argument("mode", help="<width>x<height>@<rate>")
    monitor_parser.add_argument("position", help="<x>x<y>")
    monitor_parser.add_argument("scale", type=float)

    tool_parser = commands.add_parser("tool-exists", help="check whether a command is installed")
    tool_parser.add_argument("name")
    return parser


def configure_logging(level: str) -> None:
    """Configure logging."""

    logging.basicConfig(level=getattr(logging, level), format="%(levelname)s %(message)s")


def build_config(args: argparse.Namespace) -> PanelConfig:
    """Map CLI flags onto a PanelConfig."""

    if args.workers < 1:
        raise ValueError("--workers must be at least 1")
    if args.scan_settle < 0:
        raise ValueError("--scan-settle must not be negative")
    return PanelConfig(
        sys_net_dir=Path(args.sys_net_dir),
        proc_dir=Path(args.proc_dir),
        os_release_path=DEFAULT_CONFIG.os_release_path,
        scan_settle_seconds=args.scan_settle,
        enrichment_workers=args.workers,
    )


def _parse_position(raw: str) -> tuple[int, int]:
    x_raw, separator, y_raw = raw.partition("x")
    if not separator:
        raise ValueError(f"invalid position: {raw!r}")
    return int(x_raw), int(y_raw)


def _apply_monitor(args: argparse.Namespace) -> dict[str, Any]:
    token = args.mode if args.mode.endswith("Hz") else f"{args.mode}Hz"
    mode = display.parse_mode_token(token)
    if mode is None:
        raise ValueError(f"invalid mode: {args.mode!r}")
    x, y = _parse_position(args.position)
    display.apply_monitor_settings(
        args.name, mode.width, mode.height, mode.refresh_rate, x, y, args.scale
    )
    return {"name": args.name, "applied": True}


def _set_volume(args: argparse.Namespace) -> dict[str, Any]:
    applied = audio.set_volume(args.node_id, args.volume)
    return {"node_id": args.node_id, "volume": applied}


def _set_mute(args: argparse.Namespace) -> dict[str, Any]:
    muted = args.state == "on"
    audio.set_mute(args.node_id, muted)
    return {"node_id": args.node_id, "muted": muted}


def _set_default(args: argparse.Namespace) -> dict[str, Any]:
    audio.set_default_device(args.node_id)
    return {"node_id": args.node_id, "default": True}


def dispatch(args: argparse.Namespace, config: PanelConfig) -> Any:
    """Run the selected subcommand and return its result."""

    handlers: dict[str, Callable[[], Any]] = {
        "audio": lambda: audio.get_audio_state(config),
        "network": lambda: network.get_network_info(config),
        "wifi": lambda: wifi.scan_wifi_networks(rescan=not args.no_rescan, config=config),
        "monitors": display.get_monitors,
        "system": lambda: system_info.get_system_info(config),
        "set-volume": lambda: _set_volume(args),
        "set-mute": lambda: _set_mute(args),
        "set-default": lambda: _set_default(args),
        "apply-monitor": lambda: _apply_monitor(args),
        "tool-exists": lambda: {"name": args.name, "exists": runner.command_exists(args.name)},
    }
    return handlers[args.command]()


def main(argv: Sequence[str] | None = None) -> int:
    """Run hypr-status."""

    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = build_config(args)
        result = dispatch(args, config)
    except ValueError as exc:
        _LOGGER.error("Invalid input: %s", exc)
        return 3
    except PanelError as exc:
        _LOGGER.error("%s", exc)
        return 2

    write_snapshot_json(args.out, result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# nicpower/cli/args/groups.py
from __future__ import annotations

import argparse

from ...devices.models import DEFAULT_TARGET, NETWORK_ADAPTER_CLASS_PATH
from ...registry import SystemKey
from ...registry.encoding import check_u32


def u32_arg(s: str) -> int:
    """argparse type: decimal or 0x-prefixed unsigned 32-bit integer."""
    try:
        return check_u32(int(str(s), 0))
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an unsigned 32-bit integer: {s!r}")


def _add_global_config_logging(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # Global config/logging (two-phase parse relies on these)
    # ------------------------------------------------------------------
    from ... import __version__

    p.add_argument(
        "--config",
        action="append",
        default=[],
        help="YAML/JSON config file, directory or glob (repeatable; later overrides earlier).",
    )
    p.add_argument("--dump-config", action="store_true", help="Print merged config and exit.")
    p.add_argument("--dump-args", action="store_true", help="Print final parsed args and exit.")
    p.add_argument("--version", action="version", version=__version__)
    p.add_argument("-v", "--verbose", action="count", default=0, help="Verbosity: -v, -vv, -vvv")
    p.add_argument("-q", "--quiet", action="count", default=0, help="Less output: -q warnings, -qq errors")
    p.add_argument("--log-file", dest="log_file", default=None, help="Write logs to file.")
    p.add_argument("--json-logs", dest="json_logs", action="store_true", help="Emit logs as NDJSON on stderr.")


def _add_registry_location(p: argparse.ArgumentParser) -> None:
    g = p.add_argument_group("registry location")
    g.add_argument(
        "--root",
        default=SystemKey.LOCAL_MACHINE.canonical_name,
        help="Registry root (" + ", ".join(sk.canonical_name for sk in SystemKey) + " or short forms like HKLM).",
    )
    g.add_argument(
        "--class-path",
        dest="class_path",
        default=NETWORK_ADAPTER_CLASS_PATH,
        help="Device class key below --root; each direct child is one adapter instance.",
    )


def _add_power_targets(p: argparse.ArgumentParser) -> None:
    g = p.add_argument_group("target power settings (written as 4-byte little-endian REG_BINARY)")
    g.add_argument(
        "--conservation-idle-time",
        dest="conservation_idle_time",
        type=u32_arg,
        default=DEFAULT_TARGET.conservation_idle_time,
        help="ConservationIdleTime value.",
    )
    g.add_argument(
        "--performance-idle-time",
        dest="performance_idle_time",
        type=u32_arg,
        default=DEFAULT_TARGET.performance_idle_time,
        help="PerformanceIdleTime value.",
    )
    g.add_argument(
        "--idle-power-state",
        dest="idle_power_state",
        type=u32_arg,
        default=DEFAULT_TARGET.idle_power_state,
        help="IdlePowerState value.",
    )


def _add_operation_flags(p: argparse.ArgumentParser) -> None:
    g = p.add_argument_group("operation")
    g.add_argument("--list", dest="list", action="store_true", help="Only list adapter instances; never write.")
    g.add_argument("--json", dest="json", action="store_true", help="With --list: print instances as JSON on stdout.")
    g.add_argument("--select", dest="select", type=int, default=None, help="Instance number to tune (skips the prompt).")
    g.add_argument("-y", "--yes", dest="yes", action="store_true", help="Do not ask for confirmation before writing.")
    g.add_argument("--dry-run", dest="dry_run", action="store_true", help="Show what would be written; write nothing.")

# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# nicpower/cli/args/validators.py
from __future__ import annotations

import argparse
from typing import Any, Dict

from ...core.exceptions import Fatal
from ...registry import SystemKey
from ...registry.encoding import check_u32

_TARGET_KEYS = ("conservation_idle_time", "performance_idle_time", "idle_power_state")


def _validate_root(args: argparse.Namespace) -> None:
    try:
        args.root = SystemKey.from_name(str(args.root)).canonical_name
    except ValueError as e:
        raise Fatal(2, f"--root: {e}")


def _validate_targets(args: argparse.Namespace) -> None:
    # Config values bypass argparse `type=`; normalize them here.
    for key in _TARGET_KEYS:
        raw = getattr(args, key)
        try:
            value = int(raw, 0) if isinstance(raw, str) else int(raw)
            setattr(args, key, check_u32(value))
        except (TypeError, ValueError):
            raise Fatal(2, f"--{key.replace('_', '-')}: not an unsigned 32-bit integer: {raw!r}")


def _validate_operation(args: argparse.Namespace) -> None:
    if args.select is not None:
        try:
            args.select = int(args.select)
        except (TypeError, ValueError):
            raise Fatal(2, f"--select: not an integer: {args.select!r}")
        if args.select < 0:
            raise Fatal(2, f"--select must be >= 0 (got {args.select})")
    if args.json and not args.list:
        raise Fatal(2, "--json is only valid together with --list")
    if not str(args.class_path or "").strip():
        raise Fatal(2, "--class-path must not be empty")


def validate_args(args: argparse.Namespace, conf: Dict[str, Any]) -> None:
    _validate_root(args)
    _validate_targets(args)
    _validate_operation(args)

# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# nicpower/cli/args/__init__.py
"""
Argument parsing for the nicpower CLI.
"""
from __future__ import annotations

from .builder import HelpFormatter
from .groups import u32_arg
from .parser import build_parser, parse_args_with_config
from .validators import validate_args

__all__ = [
    "HelpFormatter",
    "build_parser",
    "parse_args_with_config",
    "u32_arg",
    "validate_args",
]

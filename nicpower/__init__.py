# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# nicpower/__init__.py
"""
nicpower - network adapter power settings tuner for Windows

Scans the network-adapter device class in the Windows Registry, shows the
driver metadata and power-management tunables of every adapter instance and
rewrites the tunables of a selected instance.

Usage as a library:

    from nicpower import Key, LocalMachine

    with Key(LocalMachine, r"SYSTEM\\CurrentControlSet\\Control\\Class") as k:
        if k.valid:
            count = k.get_subkeys_count().value_or(0)
"""

__version__ = "0.1.0"

from .registry import Key, LocalMachine, RegError, Result, SystemKey
from .devices import MediaInfo, PowerSettings, scan_media_instances

__all__ = [
    "__version__",

    # Registry core
    "Key",
    "LocalMachine",
    "RegError",
    "Result",
    "SystemKey",

    # Device model
    "MediaInfo",
    "PowerSettings",
    "scan_media_instances",
]

# SPDX-License-Identifier: LGPL-3.0-or-later
# nicpower/devices/__init__.py
from .discovery import scan_media_instances
from .models import (
    DEFAULT_TARGET,
    NETWORK_ADAPTER_CLASS_PATH,
    DriverInfo,
    MediaInfo,
    PowerSettings,
)
from .tuning import WriteReport, apply_power_settings

__all__ = [
    "DEFAULT_TARGET",
    "NETWORK_ADAPTER_CLASS_PATH",
    "DriverInfo",
    "MediaInfo",
    "PowerSettings",
    "WriteReport",
    "apply_power_settings",
    "scan_media_instances",
]

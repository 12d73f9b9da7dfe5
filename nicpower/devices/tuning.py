# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# nicpower/devices/tuning.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from ..core.logger import Log
from ..registry import RegError
from ..registry.encoding import u32_to_bytes
from .models import MediaInfo, PowerSettings


@dataclass
class WriteReport:
    written: List[str] = field(default_factory=list)
    failed: List[Tuple[str, RegError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def apply_power_settings(logger: logging.Logger, mi: MediaInfo, target: PowerSettings) -> WriteReport:
    """
    Write every target value to the instance's PowerSettings key as a
    4-byte little-endian REG_BINARY. Values are written independently: a
    failure is reported and the remaining values are still written.
    """
    Log.step(logger, f"Writing power settings of #{mi.id} to {mi.ps_key.path}")
    report = WriteReport()
    for name, value in target.items():
        res = mi.ps_key.write_binary(name, u32_to_bytes(value))
        if res.ok:
            logger.debug("Wrote %s\\%s = %#010x", mi.ps_key.path, name, value)
            report.written.append(name)
        else:
            Log.fail(logger, str(res.error), status=res.error.code)
            report.failed.append((name, res.error))
    if report.ok:
        Log.ok(logger, f"Updated {len(report.written)} values")
    return report

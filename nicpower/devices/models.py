# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# nicpower/devices/models.py
"""
Network adapter instance model.

Every direct child of the network-adapter device class key is one adapter
instance ("0000", "0001", ...). Driver metadata lives on the instance key;
the idle power tunables live on its PowerSettings child.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Sequence, Tuple

from ..registry import Key
from ..registry.encoding import check_u32, format_u32

NETWORK_ADAPTER_CLASS_GUID = "{4d36e96c-e325-11ce-bfc1-08002be10318}"
NETWORK_ADAPTER_CLASS_PATH = "SYSTEM\\CurrentControlSet\\Control\\Class\\" + NETWORK_ADAPTER_CLASS_GUID
POWER_SETTINGS_SUBKEY = "PowerSettings"


@dataclass(frozen=True)
class DriverInfo:
    desc: str
    version: str
    date: str
    provider_name: str

    VALUE_NAMES: ClassVar[Tuple[str, ...]] = ("DriverDesc", "DriverVersion", "DriverDate", "ProviderName")

    @classmethod
    def from_values(cls, values: Sequence[str]) -> "DriverInfo":
        desc, version, date, provider_name = values
        return cls(desc=desc, version=version, date=date, provider_name=provider_name)

    def to_dict(self) -> Dict[str, str]:
        return dict(zip(self.VALUE_NAMES, (self.desc, self.version, self.date, self.provider_name)))


@dataclass(frozen=True)
class PowerSettings:
    conservation_idle_time: int
    performance_idle_time: int
    idle_power_state: int

    VALUE_NAMES: ClassVar[Tuple[str, ...]] = ("ConservationIdleTime", "PerformanceIdleTime", "IdlePowerState")
    LABELS: ClassVar[Tuple[str, ...]] = ("Conservation Idle Time", "Performance Idle Time", "Idle Power State")

    def __post_init__(self) -> None:
        for v in self.values():
            check_u32(v)

    @classmethod
    def from_values(cls, values: Sequence[int]) -> "PowerSettings":
        cons, perf, state = values
        return cls(conservation_idle_time=cons, performance_idle_time=perf, idle_power_state=state)

    def values(self) -> Tuple[int, int, int]:
        return (self.conservation_idle_time, self.performance_idle_time, self.idle_power_state)

    def items(self) -> Tuple[Tuple[str, int], ...]:
        return tuple(zip(self.VALUE_NAMES, self.values()))

    def lines(self) -> Tuple[str, ...]:
        width = max(len(label) for label in self.LABELS)
        return tuple(f"{label:>{width}} = {format_u32(v)}" for label, v in zip(self.LABELS, self.values()))

    def diff_lines(self, target: "PowerSettings") -> Tuple[str, ...]:
        width = max(len(label) for label in self.LABELS)
        return tuple(
            f"{label:>{width}} = {format_u32(old)} -> {format_u32(new)}"
            for label, old, new in zip(self.LABELS, self.values(), target.values())
        )

    def to_dict(self) -> Dict[str, int]:
        return dict(self.items())


DEFAULT_TARGET = PowerSettings(
    conservation_idle_time=0xFFFFFFFF,
    performance_idle_time=0xFFFFFFFF,
    idle_power_state=0x3,
)


@dataclass
class MediaInfo:
    """One adapter instance; owns its open instance and PowerSettings keys."""
    id: int
    main_key: Key
    ps_key: Key
    driver: DriverInfo
    power: PowerSettings

    def description(self) -> str:
        d = self.driver
        return (
            f"#{self.id} {d.desc} | version: {d.version} | date: {d.date} | provider name: {d.provider_name}\n"
            f"(registry key path: {self.main_key.path})"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "path": self.main_key.path,
            "driver": self.driver.to_dict(),
            "power_settings": self.power.to_dict(),
        }

    def close(self) -> None:
        self.ps_key.close()
        self.main_key.close()

# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import pytest

from fakes.adapters import CLASS_PATH
from nicpower.devices import DEFAULT_TARGET, DriverInfo, MediaInfo, PowerSettings
from nicpower.registry import Key, LocalMachine


@pytest.mark.unit
class TestPowerSettings:
    def test_default_target(self):
        assert DEFAULT_TARGET.values() == (0xFFFFFFFF, 0xFFFFFFFF, 0x3)

    def test_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            PowerSettings(0, 0, -1)

    def test_lines(self):
        lines = PowerSettings(0x3C, 0x0A, 0x3).lines()

        assert lines == (
            "Conservation Idle Time = 0x0000003c",
            " Performance Idle Time = 0x0000000a",
            "      Idle Power State = 0x00000003",
        )

    def test_diff_lines(self):
        lines = PowerSettings(0x3C, 0x0A, 0x3).diff_lines(DEFAULT_TARGET)

        assert lines[0] == "Conservation Idle Time = 0x0000003c -> 0xffffffff"
        assert lines[2].endswith("0x00000003 -> 0x00000003")

    def test_to_dict_uses_registry_names(self):
        assert PowerSettings(1, 2, 3).to_dict() == {
            "ConservationIdleTime": 1,
            "PerformanceIdleTime": 2,
            "IdlePowerState": 3,
        }


@pytest.mark.unit
def test_media_description(adapters):
    main_key = Key(LocalMachine, CLASS_PATH.split("\\", 1)[1] + "\\0000")
    ps_key = Key(main_key, "PowerSettings")
    mi = MediaInfo(
        id=0,
        main_key=main_key.take(),
        ps_key=ps_key.take(),
        driver=DriverInfo.from_values(["Intel(R) Ethernet", "12.19.1.37", "6-23-2021", "Intel"]),
        power=PowerSettings(0x3C, 0x0A, 0x3),
    )

    assert mi.description() == (
        "#0 Intel(R) Ethernet | version: 12.19.1.37 | date: 6-23-2021 | provider name: Intel\n"
        f"(registry key path: {CLASS_PATH}\\0000)"
    )
    assert mi.to_dict()["driver"]["DriverDesc"] == "Intel(R) Ethernet"
    assert mi.to_dict()["power_settings"]["IdlePowerState"] == 3

    mi.close()
    assert adapters.live_handles == []

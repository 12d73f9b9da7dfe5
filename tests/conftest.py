# SPDX-License-Identifier: LGPL-3.0-or-later
import argparse
import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

_THIS_DIR = Path(__file__).resolve().parent
_REPO_ROOT = _THIS_DIR.parent

for p in (_REPO_ROOT, _THIS_DIR):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from fakes.adapters import CLASS_PATH, add_adapter  # noqa: E402
from fakes.fake_registry import FakeRegistry  # noqa: E402
from nicpower.registry import use_backend  # noqa: E402


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without OS registry access")


@pytest.fixture
def fake_registry():
    reg = FakeRegistry()
    with use_backend(reg):
        yield reg


@pytest.fixture
def adapters(fake_registry):
    """Class key with two complete adapter instances (DWORD and REG_BINARY power values)."""
    fake_registry.add_key(CLASS_PATH)
    add_adapter(fake_registry, "0000", desc="Intel(R) Ethernet Connection")
    add_adapter(
        fake_registry,
        "0001",
        desc="Realtek PCIe GbE Family Controller",
        power=(0xFFFFFFFF, 0xFFFFFFFF, 0x3),
        binary=True,
    )
    return fake_registry


@pytest.fixture
def make_args():
    """Namespace shaped like a parsed and validated command line."""
    from nicpower.devices import DEFAULT_TARGET, NETWORK_ADAPTER_CLASS_PATH

    def _make(**over):
        ns = argparse.Namespace(
            root="HKEY_LOCAL_MACHINE",
            class_path=NETWORK_ADAPTER_CLASS_PATH,
            conservation_idle_time=DEFAULT_TARGET.conservation_idle_time,
            performance_idle_time=DEFAULT_TARGET.performance_idle_time,
            idle_power_state=DEFAULT_TARGET.idle_power_state,
            list=False,
            json=False,
            select=None,
            yes=False,
            dry_run=False,
            verbose=0,
        )
        for k, v in over.items():
            setattr(ns, k, v)
        return ns

    return _make


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200, highlight=False, soft_wrap=True)

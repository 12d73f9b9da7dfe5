# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exit codes of the top-level entry point."""
from __future__ import annotations

import json

import pytest

import nicpower.__main__ as entry
from fakes.adapters import CLASS_PATH


@pytest.fixture(autouse=True)
def _no_stdin(monkeypatch):
    def _eof(*_a, **_kw):
        raise EOFError

    monkeypatch.setattr("builtins.input", _eof)


@pytest.mark.unit
class TestRun:
    def test_list(self, adapters, capsys):
        assert entry.run(["--list", "-q"]) == 0

        out = capsys.readouterr().out
        assert "Found 2 media instances:" in out
        assert "Realtek PCIe GbE Family Controller" in out

    def test_list_json(self, adapters, capsys):
        assert entry.run(["--list", "--json", "-q"]) == 0

        assert len(json.loads(capsys.readouterr().out)) == 2

    def test_tune_non_interactive(self, adapters):
        assert entry.run(["--select", "1", "--yes", "-q", "--idle-power-state", "2"]) == 0

        assert adapters.get_value(CLASS_PATH + "\\0001\\PowerSettings", "IdlePowerState")[0] == b"\x02\x00\x00\x00"

    def test_no_media_exits_zero(self, fake_registry, capsys):
        fake_registry.add_key(CLASS_PATH)

        assert entry.run(["--list"]) == 0
        assert "No media instances found!" in capsys.readouterr().err

    def test_missing_class_key_exits_one(self, fake_registry, capsys):
        assert entry.run(["--list"]) == 1

        err = capsys.readouterr().err
        assert err.count("Could not open a key") == 1

    def test_subkey_count_failure_exits_one(self, adapters):
        adapters.fail_on("query_subkey_count", 5)

        assert entry.run(["--list", "-q"]) == 1

    def test_usage_error_exits_two(self, fake_registry, capsys):
        assert entry.run(["--json"]) == 2

        assert "--json is only valid together with --list" in capsys.readouterr().err

    def test_select_out_of_range_exits_two(self, adapters):
        assert entry.run(["--select", "9", "-y", "-q"]) == 2

    def test_eof_at_prompt_exits_one(self, adapters, monkeypatch):
        def _eof(self, *_a, **_kw):
            raise EOFError

        monkeypatch.setattr("rich.console.Console.input", _eof)

        assert entry.run(["-q"]) == 1

    def test_ctrl_c_exits_130(self, adapters, monkeypatch):
        def _interrupt(self):
            raise KeyboardInterrupt

        monkeypatch.setattr(entry.InventoryMode, "run", _interrupt)

        assert entry.run(["--list", "-q"]) == 130

    def test_unexpected_error_exits_one(self, adapters, monkeypatch):
        def _boom(self):
            raise RuntimeError("boom")

        monkeypatch.setattr(entry.TuneMode, "run", _boom)

        assert entry.run(["-q"]) == 1

    def test_main_raises_system_exit(self, adapters, monkeypatch):
        monkeypatch.setattr("sys.argv", ["nicpower", "--list", "-q"])

        with pytest.raises(SystemExit) as ei:
            entry.main()

        assert ei.value.code == 0

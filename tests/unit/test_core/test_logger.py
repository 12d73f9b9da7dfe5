# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import json
import logging

import pytest

from nicpower.core.logger import TRACE, EmojiFormatter, JsonFormatter, Log, c


def _record(msg="Could not open a key '%s'", args=("X",), level=logging.ERROR, **extra):
    rec = logging.LogRecord("nicpower", level, __file__, 10, msg, args, None)
    for k, v in extra.items():
        setattr(rec, k, v)
    return rec


@pytest.mark.unit
class TestLevels:
    @pytest.mark.parametrize(
        "verbose,quiet,level",
        [(0, 0, logging.INFO), (1, 0, logging.INFO), (2, 0, logging.DEBUG), (3, 0, TRACE),
         (0, 1, logging.WARNING), (3, 2, logging.ERROR)],
    )
    def test_flags(self, verbose, quiet, level):
        assert Log._level_from_flags(verbose, quiet) == level

    def test_trace_method(self):
        assert logging.getLevelName(TRACE) == "TRACE"
        assert callable(getattr(logging.getLogger("test.trace"), "trace"))


@pytest.mark.unit
class TestFormatters:
    def test_emoji_plain(self):
        fmt = EmojiFormatter(color=False)

        line = fmt.format(_record(ctx={"index": 3}))

        assert "ERROR" in line
        assert line.endswith("Could not open a key 'X' index=3")

    def test_json(self):
        obj = json.loads(JsonFormatter().format(_record(ctx={"status": 5})))

        assert obj["level"] == "ERROR"
        assert obj["msg"] == "Could not open a key 'X'"
        assert obj["ctx"] == {"status": "5"}

    def test_c_disabled(self):
        assert c("text", "red", enable=False) == "text"
        assert c("text", None) == "text"


@pytest.mark.unit
class TestSetupAndBind:
    def test_setup_replaces_handlers(self, tmp_path):
        log_file = tmp_path / "logs" / "nicpower.log"

        Log.setup(0, None, logger_name="test.setup")
        logger = Log.setup(2, str(log_file), logger_name="test.setup")
        logger.debug("hello file")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        assert not logger.propagate
        for h in logger.handlers:
            h.flush()
        assert "hello file" in log_file.read_text(encoding="utf-8")
        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()

    def test_bound_context_is_merged(self, caplog):
        caplog.set_level(logging.INFO, logger="test.bind")
        log = Log.bind(logging.getLogger("test.bind"), index=1).bind(path="P")

        log.info("msg", extra={"ctx": {"status": 2}})

        assert caplog.records[-1].ctx == {"index": 1, "path": "P", "status": 2}


@pytest.mark.unit
def test_detailed_lines_carry_source():
    line = EmojiFormatter(color=False, detailed=True).format(_record(level=logging.INFO))

    assert "INFO" in line
    assert f"{_record().module}:10" in line

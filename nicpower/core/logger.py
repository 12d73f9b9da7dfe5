# SPDX-License-Identifier: LGPL-3.0-or-later
# nicpower/core/logger.py
"""
Logging for nicpower.

stderr gets one emoji-tagged line per record (colored on a terminal) or
NDJSON with --json-logs. --log-file adds an uncolored copy with source
locations. Structured context travels in `record.ctx` (see Log.bind).
"""
from __future__ import annotations

import datetime as _dt
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Tuple

from termcolor import colored

TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def _trace(self: logging.Logger, msg: str, *args: Any, **kwargs: Any) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, msg, args, **kwargs)


if not hasattr(logging.Logger, "trace"):
    logging.Logger.trace = _trace  # type: ignore[attr-defined]

# level name -> (emoji, termcolor color)
_LEVELS = {
    "TRACE": ("🧬", "cyan"),
    "DEBUG": ("🔍", "blue"),
    "INFO": ("✅", "green"),
    "WARNING": ("⚠️", "yellow"),
    "ERROR": ("💥", "red"),
    "CRITICAL": ("🧨", "red"),
}


def c(text: str, color: Optional[str] = None, attrs: Optional[List[str]] = None, *, enable: bool = True) -> str:
    """termcolor wrapper that can be switched off."""
    if not (enable and color):
        return text
    return colored(text, color, attrs=attrs or [])


def _ctx_of(record: logging.LogRecord) -> Dict[str, Any]:
    return dict(getattr(record, "ctx", None) or {})


def _short(v: Any, limit: int = 200) -> str:
    s = str(v).replace("\n", "\\n")
    return s if len(s) <= limit else s[: limit - 1] + "…"


class ContextLoggerAdapter(logging.LoggerAdapter):
    """
    Adapter holding a context dict; `extra={"ctx": {...}}` at a call site is
    merged over it.

        log = Log.bind(logger, index=3)
        log.error("Could not open a key '%s'", path, extra={"ctx": {"status": 2}})
    """

    def __init__(self, logger: logging.Logger, ctx: Optional[Mapping[str, Any]] = None):
        super().__init__(logger, {"ctx": dict(ctx or {})})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["ctx"] = {**self.extra["ctx"], **(extra.get("ctx") or {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def bind(self, **ctx: Any) -> "ContextLoggerAdapter":
        return ContextLoggerAdapter(self.logger, {**self.extra["ctx"], **ctx})


class EmojiFormatter(logging.Formatter):
    """`HH:MM:SS 💥 ERROR    message k=v ...` with optional pid and module:line."""

    def __init__(self, *, color: bool = True, detailed: bool = False):
        super().__init__()
        self.color = color
        self.detailed = detailed

    def format(self, record: logging.LogRecord) -> str:
        emoji, color = _LEVELS.get(record.levelname, ("•", None))
        use_color = self.color and sys.stderr.isatty()

        when = _dt.datetime.fromtimestamp(record.created)
        stamp = when.strftime("%H:%M:%S.%f")[:-3] if self.detailed else when.strftime("%H:%M:%S")
        level = c(f"{record.levelname:<8}", color, enable=use_color)
        msg = record.getMessage()
        if record.levelno >= logging.WARNING:
            msg = c(msg, color, ["bold"], enable=use_color)

        where = f" [pid={os.getpid()} {record.name} {record.module}:{record.lineno}]" if self.detailed else ""
        ctx = "".join(f" {k}={_short(v)}" for k, v in sorted(_ctx_of(record).items()))

        line = f"{stamp} {emoji} {level}{where} {msg}{ctx}"
        if record.exc_info:
            tb = "\n".join("  " + ln for ln in self.formatException(record.exc_info).splitlines())
            line += "\n" + c(tb, "red", enable=use_color)
        return line


class JsonFormatter(logging.Formatter):
    """One JSON object per record (NDJSON)."""

    def format(self, record: logging.LogRecord) -> str:
        obj: Dict[str, Any] = {
            "ts": _dt.datetime.fromtimestamp(record.created, tz=_dt.timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "module": record.module,
            "lineno": record.lineno,
        }
        ctx = _ctx_of(record)
        if ctx:
            obj["ctx"] = {str(k): _short(v) for k, v in ctx.items()}
        if record.exc_info:
            obj["traceback"] = self.formatException(record.exc_info)
        return json.dumps(obj, ensure_ascii=False)


class Log:
    @staticmethod
    def _level_from_flags(verbose: int, quiet: int) -> int:
        """-qq ERROR, -q WARNING, default/-v INFO, -vv DEBUG, -vvv TRACE; quiet wins."""
        if quiet:
            return logging.ERROR if quiet >= 2 else logging.WARNING
        return {0: logging.INFO, 1: logging.INFO, 2: logging.DEBUG}.get(verbose, TRACE)

    @staticmethod
    def bind(logger: logging.Logger, **ctx: Any) -> ContextLoggerAdapter:
        return ContextLoggerAdapter(logger, ctx)

    @staticmethod
    def step(logger: logging.Logger, msg: str, **ctx: Any) -> None:
        logger.info("➡️  %s", msg, extra={"ctx": ctx})

    @staticmethod
    def ok(logger: logging.Logger, msg: str, **ctx: Any) -> None:
        logger.info("✅ %s", msg, extra={"ctx": ctx})

    @staticmethod
    def fail(logger: logging.Logger, msg: str, **ctx: Any) -> None:
        logger.error("💥 %s", msg, extra={"ctx": ctx})

    @staticmethod
    def setup(
        verbose: int = 0,
        log_file: Optional[str] = None,
        *,
        quiet: int = 0,
        json_logs: bool = False,
        logger_name: str = "nicpower",
    ) -> logging.Logger:
        """(Re)configure the project logger; safe to call more than once."""
        logger = logging.getLogger(logger_name)
        logger.propagate = False
        level = Log._level_from_flags(verbose, quiet)
        logger.setLevel(level)

        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()

        handlers: List[logging.Handler] = []
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(JsonFormatter() if json_logs else EmojiFormatter(detailed=verbose >= 3))
        handlers.append(console)

        if log_file:
            path = Path(log_file).expanduser()
            path.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(path, encoding="utf-8")
            fh.setFormatter(JsonFormatter() if json_logs else EmojiFormatter(color=False, detailed=True))
            handlers.append(fh)

        for h in handlers:
            h.setLevel(level)
            logger.addHandler(h)

        logger.debug("Logging at %s", logging.getLevelName(level))
        return logger

# SPDX-License-Identifier: LGPL-3.0-or-later
# nicpower/core/exceptions.py
"""
Exception hierarchy for nicpower.

`code` doubles as the process exit status, so it is kept inside 0..255.
`context` carries small key/value facts (OS status, "logged" marker) that
the CLI may show with -v.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


def _exit_code(code: Any) -> int:
    try:
        n = int(code)
    except (TypeError, ValueError):
        return 1
    if n < 0:
        return 1
    return min(n, 255)


def _squash(text: str, limit: int = 400) -> str:
    flat = " ".join((text or "").split())
    return flat if len(flat) <= limit else flat[: limit - 3] + "..."


@dataclass(eq=False)
class NicPowerError(Exception):
    code: int = 1
    msg: str = "error"
    cause: Optional[BaseException] = None
    context: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        self.code = _exit_code(self.code)
        self.msg = _squash(self.msg) or type(self).__name__
        self.context = dict(self.context or {})
        super().__init__(self.msg)

    def user_message(self, *, include_context: bool = False, include_cause: bool = False) -> str:
        text = self.msg
        shown = {k: v for k, v in self.context.items() if k != "logged"}
        if include_context and shown:
            text += " [" + ", ".join(f"{k}={shown[k]!r}" for k in sorted(shown)) + "]"
        if include_cause and self.cause is not None:
            text += f" (cause: {type(self.cause).__name__}: {_squash(str(self.cause))})"
        return text

    def __str__(self) -> str:
        return self.msg


class Fatal(NicPowerError):
    """Aborts the run; the entry point exits with `code`."""


class RegistryError(NicPowerError):
    """Raised by Result.value/unwrap() on a failed registry operation."""


def wrap_fatal(msg: str, exc: Optional[BaseException] = None, code: int = 1, **context: Any) -> Fatal:
    return Fatal(code=code, msg=msg, cause=exc, context=context)


def format_exception_for_cli(e: BaseException, *, verbose: int = 0) -> str:
    """One line for stderr: -v adds context, -vv adds the cause."""
    if isinstance(e, NicPowerError):
        return e.user_message(include_context=verbose >= 1, include_cause=verbose >= 2)
    text = _squash(str(e))
    if verbose >= 2 or not text:
        return f"{type(e).__name__}: {text}" if text else type(e).__name__
    return text

# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# nicpower/registry/backend.py
"""
OS access layer underneath `Key`.

A backend performs the raw registry calls and raises OSError on failure
(winreg semantics). `Key` turns those into `RegError` results. The default
backend wraps the Windows `winreg` module; tests install an in-memory one.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Generator, Optional, Protocol, Tuple

from ..core.exceptions import wrap_fatal

logger = logging.getLogger("nicpower.registry")

Handle = Any


class RegistryBackend(Protocol):
    def open_key(self, handle: Handle, subkey: str) -> Handle:
        """Open (never create) `subkey` below `handle` with read+write access."""
        ...

    def close_key(self, handle: Handle) -> None:
        ...

    def query_subkey_count(self, handle: Handle) -> int:
        ...

    def enum_key(self, handle: Handle, index: int) -> str:
        ...

    def query_value(self, handle: Handle, name: str) -> Tuple[Any, int]:
        """Return (data, REG_* type) like winreg.QueryValueEx; REG_EXPAND_SZ data comes back expanded."""
        ...

    def set_value(self, handle: Handle, subkey: str, name: str, reg_type: int, data: Any) -> None:
        """Set a value below `handle`, or below its child `subkey` (created if absent) when non-empty."""
        ...


class WinregBackend:
    """RegistryBackend on top of the Windows `winreg` module."""

    def __init__(self, module: Any = None):
        if module is None:
            try:
                import winreg as module  # type: ignore[no-redef]
            except ImportError as e:
                raise wrap_fatal("Windows registry access is only available on Windows (no winreg module)", e, code=2)
        self._w = module

    def open_key(self, handle: Handle, subkey: str) -> Handle:
        w = self._w
        return w.OpenKeyEx(handle, subkey, 0, w.KEY_READ | w.KEY_WRITE)

    def close_key(self, handle: Handle) -> None:
        self._w.CloseKey(handle)

    def query_subkey_count(self, handle: Handle) -> int:
        subkeys, _values, _mtime = self._w.QueryInfoKey(handle)
        return int(subkeys)

    def enum_key(self, handle: Handle, index: int) -> str:
        return self._w.EnumKey(handle, index)

    def query_value(self, handle: Handle, name: str) -> Tuple[Any, int]:
        w = self._w
        data, reg_type = w.QueryValueEx(handle, name)
        if reg_type == w.REG_EXPAND_SZ and isinstance(data, str):
            data = w.ExpandEnvironmentStrings(data)
        return data, int(reg_type)

    def set_value(self, handle: Handle, subkey: str, name: str, reg_type: int, data: Any) -> None:
        w = self._w
        if not subkey:
            w.SetValueEx(handle, name, 0, reg_type, data)
            return

        sub = w.CreateKeyEx(handle, subkey, 0, w.KEY_WRITE)
        try:
            w.SetValueEx(sub, name, 0, reg_type, data)
        finally:
            w.CloseKey(sub)


# ---------------------------------------------------------------------------
# Process-wide backend selection
# ---------------------------------------------------------------------------

_current: Optional[RegistryBackend] = None


def current_backend() -> RegistryBackend:
    """Backend used by keys that were not given one explicitly (winreg by default)."""
    global _current
    if _current is None:
        _current = WinregBackend()
        logger.debug("Registry backend: %s", type(_current).__name__)
    return _current


def set_backend(backend: Optional[RegistryBackend]) -> Optional[RegistryBackend]:
    """Install `backend` (None restores the lazy winreg default); returns the previous one."""
    global _current
    prev = _current
    _current = backend
    return prev


@contextmanager
def use_backend(backend: RegistryBackend) -> Generator[RegistryBackend, None, None]:
    prev = set_backend(backend)
    try:
        yield backend
    finally:
        set_backend(prev)

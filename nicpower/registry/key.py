# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# nicpower/registry/key.py
"""
Owning wrapper around one open registry key.

Ownership rules:
  - Well-known roots (LocalMachine, ...) are never owned and never closed.
  - Key(parent, name) owns the handle it opened until close(), destruction,
    or a move (take()/assign()) hands it to another Key.
  - Keys cannot be copied.

All operations return a Result; OS failures never raise.
"""
from __future__ import annotations

import enum
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .backend import Handle, RegistryBackend, current_backend
from .encoding import (
    REG_BINARY,
    REG_DWORD,
    REG_EXPAND_SZ,
    REG_SZ,
    check_u32,
    decode_reg_sz,
    type_name,
    u32_from_bytes,
)
from .errors import (
    ERROR_INVALID_HANDLE,
    ERROR_UNSUPPORTED_TYPE,
    NO_ERROR,
    RegError,
    Result,
    os_detail,
)

logger = logging.getLogger("nicpower.registry")

INVALID_HANDLE: Handle = None
PATH_SEP = "\\"

MULTIPLE_VALUES_PREFIX = "Failed to get multiple values"


class SystemKey(enum.Enum):
    """Predefined registry roots: (HKEY value, canonical name, short name)."""

    CLASSES_ROOT = (0x80000000, "HKEY_CLASSES_ROOT", "HKCR")
    CURRENT_USER = (0x80000001, "HKEY_CURRENT_USER", "HKCU")
    LOCAL_MACHINE = (0x80000002, "HKEY_LOCAL_MACHINE", "HKLM")
    USERS = (0x80000003, "HKEY_USERS", "HKU")
    CURRENT_CONFIG = (0x80000005, "HKEY_CURRENT_CONFIG", "HKCC")

    @property
    def hkey(self) -> int:
        return self.value[0]

    @property
    def canonical_name(self) -> str:
        return self.value[1]

    @property
    def short_name(self) -> str:
        return self.value[2]

    @classmethod
    def from_name(cls, name: str) -> "SystemKey":
        n = (name or "").strip().upper()
        for sk in cls:
            if n in (sk.canonical_name, sk.short_name, sk.name):
                return sk
        raise ValueError(f"unknown registry root: {name!r}")


def _join(parent_path: str, subkey_name: str) -> str:
    if not subkey_name:
        return parent_path
    return parent_path + PATH_SEP + subkey_name


class Key:
    __slots__ = ("_handle", "_owned", "_system", "_path", "_error", "_backend")

    def __init__(self, parent: "Key", subkey_name: str = "", *, backend: Optional[RegistryBackend] = None):
        """
        Open `subkey_name` below `parent` with read+write access.

        Never raises for OS failures: check `valid` and read `error` instead.
        An empty name below a well-known root aliases the root itself.
        """
        if not isinstance(parent, Key):
            raise TypeError(f"parent must be a Key, got {type(parent).__name__}")

        self._handle: Handle = INVALID_HANDLE
        self._owned = False
        self._system = False
        self._path = _join(parent._path, subkey_name)
        self._error = NO_ERROR
        self._backend = backend if backend is not None else parent._backend

        if not subkey_name and parent._system and parent.valid:
            self._handle = parent._handle
            self._system = True
            return

        message = f"Failed to open key '{self._path}'"
        if not parent.valid:
            self._error = RegError.status(ERROR_INVALID_HANDLE, message)
            logger.debug("%s: parent key is not open", message)
            return

        api = self._api()
        self._backend = api
        try:
            self._handle = api.open_key(parent._handle, subkey_name)
        except OSError as e:
            self._error = RegError.from_os_error(e, message)
            logger.debug("%s: %s", message, self._error.detail)
            return

        self._owned = True
        logger.debug("Opened key %s", self._path)

    @classmethod
    def from_system(cls, sk: SystemKey, *, backend: Optional[RegistryBackend] = None) -> "Key":
        """Non-owned key for a predefined root. Client code uses the module constants instead."""
        if not isinstance(sk, SystemKey):
            raise ValueError(f"unknown registry root selector: {sk!r}")
        k = cls.__new__(cls)
        k._handle = sk.hkey
        k._owned = False
        k._system = True
        k._path = sk.canonical_name
        k._error = NO_ERROR
        k._backend = backend
        return k

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def valid(self) -> bool:
        return self._handle is not INVALID_HANDLE

    @property
    def path(self) -> str:
        return self._path

    @property
    def owned(self) -> bool:
        return self._owned

    @property
    def is_system(self) -> bool:
        return self._system and self.valid

    @property
    def handle(self) -> Handle:
        return self._handle

    @property
    def error(self) -> RegError:
        """Why opening failed ("no error" for valid keys)."""
        return self._error

    def __repr__(self) -> str:
        state = "valid" if self.valid else "invalid"
        if self._owned:
            state += " owned"
        elif self._system and self.valid:
            state += " system"
        return f"<Key {self._path!r} {state}>"

    # ------------------------------------------------------------------
    # Lifetime / ownership
    # ------------------------------------------------------------------

    def _api(self) -> RegistryBackend:
        return self._backend if self._backend is not None else current_backend()

    def _release(self) -> Result[None]:
        if not (self._owned and self.valid):
            return Result.success(None)

        handle = self._handle
        self._handle = INVALID_HANDLE
        self._owned = False
        try:
            self._api().close_key(handle)
        except OSError as e:
            return Result.failure(RegError.from_os_error(e, f"Failed to close key '{self._path}'"))
        logger.debug("Closed key %s", self._path)
        return Result.success(None)

    def close(self) -> Result[None]:
        """
        Release the handle if this key owns it. Afterwards the key is invalid.
        No-op for roots, aliases, invalid and already closed keys.
        """
        res = self._release()
        if not res.ok:
            logger.warning("%s", res.error)
        return res

    def _is_root(self) -> bool:
        return any(self is r for r in ROOTS.values())

    def _copy_state_to(self, dst: "Key") -> None:
        dst._handle = self._handle
        dst._owned = self._owned
        dst._system = self._system
        dst._path = self._path
        dst._error = self._error
        dst._backend = self._backend

    def _give_up(self) -> None:
        # Predefined root handles are shared, never owned; only owned handles move out.
        if self._system and not self._owned:
            return
        self._handle = INVALID_HANDLE
        self._owned = False

    def take(self) -> "Key":
        """
        Move: return a new Key holding this key's handle and ownership; this key
        becomes invalid. Taking from a root or root alias yields another alias
        and leaves the source untouched.
        """
        moved = Key.__new__(Key)
        self._copy_state_to(moved)
        self._give_up()
        return moved

    def assign(self, other: "Key") -> "Key":
        """Move-assign: close what this key owns, then take over `other`'s handle and ownership."""
        if other is self:
            return self
        if not isinstance(other, Key):
            raise TypeError(f"can only assign a Key, got {type(other).__name__}")
        if self._is_root():
            raise TypeError(f"well-known root {self._path} cannot be reassigned")

        self.close()
        other._copy_state_to(self)
        other._give_up()
        return self

    def __enter__(self) -> "Key":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def __del__(self) -> None:
        if getattr(self, "_owned", False) and getattr(self, "_handle", INVALID_HANDLE) is not INVALID_HANDLE:
            try:
                self._release()
            except Exception:
                pass

    def __copy__(self) -> "Key":
        raise TypeError("registry keys cannot be copied; use take() to move ownership")

    def __deepcopy__(self, memo: Dict[int, Any]) -> "Key":
        raise TypeError("registry keys cannot be copied; use take() to move ownership")

    def __reduce_ex__(self, protocol: Any) -> Any:
        raise TypeError("registry keys cannot be pickled")

    # ------------------------------------------------------------------
    # Backend call helper
    # ------------------------------------------------------------------

    def _call(self, message: str, op: str, *args: Any) -> Result[Any]:
        if not self.valid:
            return Result.failure(RegError.status(ERROR_INVALID_HANDLE, message))
        try:
            return Result.success(getattr(self._api(), op)(self._handle, *args))
        except OSError as e:
            return Result.failure(RegError.from_os_error(e, message))

    # ------------------------------------------------------------------
    # Subkeys
    # ------------------------------------------------------------------

    def get_subkeys_count(self) -> Result[int]:
        return self._call("Failed to get subkeys count", "query_subkey_count")

    def enum_subkey_names(self, index: int) -> Result[str]:
        """Name of the child at zero-based `index`; ERROR_NO_MORE_ITEMS past the end."""
        return self._call(f"Failed to get subkey name with index '{index}'", "enum_key", int(index))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _unsupported(self, message: str, reg_type: int) -> Result[Any]:
        return Result.failure(
            RegError(
                code=ERROR_UNSUPPORTED_TYPE,
                message=message,
                detail=os_detail(ERROR_UNSUPPORTED_TYPE, f"unexpected value type {type_name(reg_type)}"),
            )
        )

    def read_u32(self, name: str) -> Result[int]:
        # REG_BINARY of exactly 4 bytes is accepted as well (little-endian),
        # which is how the power settings get written back.
        message = f"Failed to read value '{name}'"
        res = self._call(message, "query_value", name)
        if not res.ok:
            return res
        data, reg_type = res.value
        if reg_type == REG_DWORD:
            return Result.success(int(data))
        if reg_type == REG_BINARY and isinstance(data, (bytes, bytearray)) and len(data) == 4:
            return Result.success(u32_from_bytes(data))
        return self._unsupported(message, reg_type)

    def read_string(self, name: str) -> Result[str]:
        """REG_SZ or REG_EXPAND_SZ (expanded by the backend), trailing NULs dropped."""
        message = f"Failed to read value '{name}'"
        res = self._call(message, "query_value", name)
        if not res.ok:
            return res
        data, reg_type = res.value
        if reg_type in (REG_SZ, REG_EXPAND_SZ):
            return Result.success(decode_reg_sz(data))
        return self._unsupported(message, reg_type)

    def _read_many(self, names: Iterable[str], read_one: Callable[[str], Result[Any]]) -> Result[List[Any]]:
        values: List[Any] = []
        for name in names:
            res = read_one(name)
            if not res.ok:
                return Result.failure(res.error.wrap(MULTIPLE_VALUES_PREFIX))
            values.append(res.value)
        return Result.success(values)

    def read_u32_values(self, names: Iterable[str]) -> Result[List[int]]:
        """Read every name in order; the first failure is returned and nothing else."""
        return self._read_many(names, self.read_u32)

    def read_string_values(self, names: Iterable[str]) -> Result[List[str]]:
        return self._read_many(names, self.read_string)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _set(self, subkey_name: str, name: str, reg_type: int, data: Any) -> Result[None]:
        target = _join(subkey_name, name) if subkey_name else name
        return self._call(f"Failed to write value '{target}'", "set_value", subkey_name, name, reg_type, data)

    def write_u32(self, name: str, value: int) -> Result[None]:
        return self.write_subkey_u32("", name, value)

    def write_binary(self, name: str, data: Union[bytes, bytearray, memoryview]) -> Result[None]:
        return self.write_subkey_binary("", name, data)

    def write_subkey_u32(self, subkey_name: str, name: str, value: int) -> Result[None]:
        """Write a REG_DWORD into child `subkey_name` (created if missing; "" means this key)."""
        return self._set(subkey_name, name, REG_DWORD, check_u32(value))

    def write_subkey_binary(self, subkey_name: str, name: str, data: Union[bytes, bytearray, memoryview]) -> Result[None]:
        return self._set(subkey_name, name, REG_BINARY, bytes(data))


# ---------------------------------------------------------------------------
# Well-known roots (process-wide; must outlive every Key opened below them)
# ---------------------------------------------------------------------------

ROOTS: Dict[SystemKey, Key] = {sk: Key.from_system(sk) for sk in SystemKey}

ClassesRoot = ROOTS[SystemKey.CLASSES_ROOT]
CurrentUser = ROOTS[SystemKey.CURRENT_USER]
LocalMachine = ROOTS[SystemKey.LOCAL_MACHINE]
Users = ROOTS[SystemKey.USERS]
CurrentConfig = ROOTS[SystemKey.CURRENT_CONFIG]


def root_key(name: str) -> Key:
    """Well-known root by name ("HKEY_LOCAL_MACHINE", "HKLM", ...); ValueError if unknown."""
    return ROOTS[SystemKey.from_name(name)]

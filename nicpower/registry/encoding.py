# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
"""
Registry value types and encoding helpers.

Provides:
- Registry value type constants (REG_SZ, REG_DWORD, ...)
- DWORD <-> 4-byte little-endian conversion
- REG_SZ decoding
- Display formatting for 32-bit values
"""
from __future__ import annotations

from typing import Union

# ---------------------------------------------------------------------------
# Value types (winnt.h numbering, same as winreg.REG_*)
# ---------------------------------------------------------------------------

REG_NONE = 0
REG_SZ = 1
REG_EXPAND_SZ = 2
REG_BINARY = 3
REG_DWORD = 4

U32_MAX = 0xFFFFFFFF

_TYPE_NAMES = {
    REG_NONE: "REG_NONE",
    REG_SZ: "REG_SZ",
    REG_EXPAND_SZ: "REG_EXPAND_SZ",
    REG_BINARY: "REG_BINARY",
    REG_DWORD: "REG_DWORD",
}


def type_name(t: int) -> str:
    return _TYPE_NAMES.get(int(t), f"REG_TYPE_{int(t)}")


# ---------------------------------------------------------------------------
# DWORD encoding
# ---------------------------------------------------------------------------


def check_u32(v: int) -> int:
    """Return v as int, raising ValueError if it does not fit in 32 unsigned bits."""
    iv = int(v)
    if iv < 0 or iv > U32_MAX:
        raise ValueError(f"value out of u32 range: {v!r}")
    return iv


def u32_to_bytes(v: int) -> bytes:
    """Encode as REG_DWORD payload (4 bytes, little-endian)."""
    return check_u32(v).to_bytes(4, "little", signed=False)


def u32_from_bytes(raw: Union[bytes, bytearray]) -> int:
    if len(raw) != 4:
        raise ValueError(f"expected 4 bytes for a 32-bit value, got {len(raw)}")
    return int.from_bytes(bytes(raw), "little", signed=False)


# ---------------------------------------------------------------------------
# String decoding
# ---------------------------------------------------------------------------


def decode_reg_sz(raw: Union[str, bytes, bytearray]) -> str:
    """Decode REG_SZ data (str from winreg, or raw UTF-16LE bytes) and drop trailing NULs."""
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw).decode("utf-16le", errors="replace").rstrip("\x00")
    return str(raw).rstrip("\x00")


def format_u32(v: int) -> str:
    """0x-prefixed, zero padded to eight hex digits."""
    return f"{int(v):#010x}"

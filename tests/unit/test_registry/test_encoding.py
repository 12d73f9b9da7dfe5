# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import pytest

from nicpower.registry.encoding import (
    REG_BINARY,
    REG_DWORD,
    U32_MAX,
    check_u32,
    decode_reg_sz,
    format_u32,
    type_name,
    u32_from_bytes,
    u32_to_bytes,
)


@pytest.mark.unit
class TestDwordEncoding:
    def test_little_endian(self):
        assert u32_to_bytes(3) == b"\x03\x00\x00\x00"
        assert u32_to_bytes(0x12345678) == b"\x78\x56\x34\x12"
        assert u32_to_bytes(U32_MAX) == b"\xff\xff\xff\xff"

    def test_decode(self):
        assert u32_from_bytes(bytearray(b"\x3c\x00\x00\x00")) == 0x3C

    @pytest.mark.parametrize("raw", [b"", b"\x01\x02\x03", b"\x00" * 8])
    def test_decode_requires_four_bytes(self, raw):
        with pytest.raises(ValueError):
            u32_from_bytes(raw)

    @pytest.mark.parametrize("v", [-1, U32_MAX + 1])
    def test_out_of_range(self, v):
        with pytest.raises(ValueError):
            check_u32(v)


@pytest.mark.unit
def test_decode_reg_sz():
    assert decode_reg_sz("Intel\x00") == "Intel"
    assert decode_reg_sz("Intel".encode("utf-16le") + b"\x00\x00") == "Intel"


@pytest.mark.unit
def test_decode_reg_sz_marks_broken_utf16():
    assert decode_reg_sz("Intel".encode("utf-16le") + b"\x41") == "Intel\ufffd"


@pytest.mark.unit
def test_format_and_names():
    assert format_u32(0x3) == "0x00000003"
    assert format_u32(U32_MAX) == "0xffffffff"
    assert type_name(REG_DWORD) == "REG_DWORD"
    assert type_name(REG_BINARY) == "REG_BINARY"
    assert type_name(7) == "REG_TYPE_7"

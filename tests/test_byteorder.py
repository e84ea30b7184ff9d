import struct

import pytest

from gsfselect.byteorder import (
    read16le,
    read32le,
    swap16,
    swap32,
    write16le,
    write32le,
)


def test_swap16_worked_example():
    assert swap16(0x1234) == 0x3412


def test_swap32_worked_example():
    assert swap32(0x12345678) == 0x78563412


@pytest.mark.parametrize("value", [0, 1, 0x00FF, 0xFF00, 0xBEEF, 0xFFFF])
def test_swap16_is_an_involution(value):
    assert swap16(swap16(value)) == value


@pytest.mark.parametrize("value", [0, 1, 0xFF, 0xDEADBEEF, 0x80000000, 0xFFFFFFFF])
def test_swap32_is_an_involution(value):
    assert swap32(swap32(value)) == value


def test_swap32_matches_byte_reversal():
    value = 0xCAFEBABE
    reversed_bytes = value.to_bytes(4, "big")[::-1]
    assert swap32(value) == int.from_bytes(reversed_bytes, "big")


def test_read16le_reads_low_byte_first():
    assert read16le(b"\x34\x12") == 0x1234


def test_read32le_at_offset():
    data = b"\x00\x00\x78\x56\x34\x12"
    assert read32le(data, 2) == 0x12345678


def test_write_then_read_round_trip():
    buf = bytearray(8)
    write16le(buf, 1, 0xABCD)
    write32le(buf, 4, 0x01020304)
    assert read16le(buf, 1) == 0xABCD
    assert read32le(buf, 4) == 0x01020304
    assert buf[4:8] == bytes([4, 3, 2, 1])


def test_write_truncates_to_width():
    buf = bytearray(2)
    write16le(buf, 0, 0x12345)
    assert read16le(buf) == 0x2345


def test_read_past_end_raises():
    with pytest.raises(struct.error):
        read32le(b"\x01\x02\x03", 0)
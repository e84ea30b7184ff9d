"""Little-endian access to byte buffers and byte swapping of 16/32-bit values."""

from __future__ import annotations

import struct

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")


def swap16(value: int) -> int:
    """Swap the two bytes of a 16-bit value."""
    value &= 0xFFFF
    return ((value << 8) | (value >> 8)) & 0xFFFF


def swap32(value: int) -> int:
    """Reverse the four bytes of a 32-bit value."""
    value &= 0xFFFFFFFF
    return (
        ((value << 24) & 0xFF000000)
        | ((value << 8) & 0x00FF0000)
        | ((value >> 8) & 0x0000FF00)
        | (value >> 24)
    )


def read16le(buffer, offset: int = 0) -> int:
    """Read an unsigned little-endian 16-bit value at ``offset``."""
    return _U16.unpack_from(buffer, offset)[0]


def read32le(buffer, offset: int = 0) -> int:
    """Read an unsigned little-endian 32-bit value at ``offset``."""
    return _U32.unpack_from(buffer, offset)[0]


def write16le(buffer, offset: int, value: int) -> None:
    """Store the low 16 bits of ``value`` little-endian at ``offset``."""
    _U16.pack_into(buffer, offset, value & 0xFFFF)


def write32le(buffer, offset: int, value: int) -> None:
    """Store the low 32 bits of ``value`` little-endian at ``offset``."""
    _U32.pack_into(buffer, offset, value & 0xFFFFFFFF)
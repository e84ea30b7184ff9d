"""Emulated GBA address space: region-dispatched reads and word writes."""

from __future__ import annotations

from typing import Callable, Optional

from .byteorder import read16le, read32le, write32le

_MASK32 = 0xFFFFFFFF

_BIOS_MASK = 0x3FFF
_IO_MASK = 0x3FF
_ROM_MASK = 0x1FFFFFF


class MemoryMap:
    """The GBA memory regions and the CPU-visible read and write rules.

    Reads from unmapped or protected areas return the value found at the
    program counter (``pc``), following the CPU state in ``arm_state``.
    ROM reads past ``loaded_size`` return all ones.  Word writes to the I/O
    area go through ``io_write(offset, halfword)``.
    """

    def __init__(
        self,
        rom: bytes = b"",
        io_write: Optional[Callable[[int, int], None]] = None,
    ) -> None:
        self.bios = bytearray(0x4000)
        self.bios_protected = bytearray(4)
        self.work_ram = bytearray(0x40000)
        self.internal_ram = bytearray(0x8000)
        self.io = bytearray(0x400)
        self.io_readable = bytearray(0x400)
        self.palette = bytearray(0x400)
        self.vram = bytearray(0x20000)
        self.oam = bytearray(0x400)
        self.loaded_size = len(rom)
        # A few bytes of slack so a read at exactly ``loaded_size`` stays in range.
        self.rom = bytes(rom) + bytes(4)
        self.io_write = io_write if io_write is not None else self._store_io
        self.pc = 0
        self.arm_state = True
        self.dma_hack = False
        self.dma_count = 0
        self.dma_last = 0

    # -- helpers ---------------------------------------------------------

    def _plain(self, region: int):
        return {
            2: (self.work_ram, 0x3FFFF),
            3: (self.internal_ram, 0x7FFF),
            5: (self.palette, 0x3FF),
            6: (self.vram, 0x1FFFF),
            7: (self.oam, 0x3FF),
        }.get(region)

    def _store_io(self, offset: int, value: int) -> None:
        self.io[offset : offset + 2] = (value & 0xFFFF).to_bytes(2, "little")

    def _quick(self, address: int, size: int) -> int:
        address &= _MASK32
        region = address >> 24
        if region == 0:
            buffer, mask = self.bios, _BIOS_MASK
        elif region == 4:
            buffer, mask = self.io, _IO_MASK
        elif 8 <= region <= 12:
            buffer, mask = self.rom, _ROM_MASK
        else:
            plain = self._plain(region)
            if plain is None:
                return 0
            buffer, mask = plain
        offset = address & mask
        chunk = bytes(buffer[offset : offset + size])
        return int.from_bytes(chunk.ljust(size, b"\0"), "little")

    def _bios_locked(self) -> bool:
        return bool((self.pc & _MASK32) >> 24)

    def _open_bus32(self) -> int:
        if self.arm_state:
            return self._quick(self.pc, 4)
        half = self._quick(self.pc, 2)
        return (half | (half << 16)) & _MASK32

    def _open_bus16(self, address: int) -> int:
        if self.dma_hack and self.dma_count:
            return self.dma_last & 0xFFFF
        if self.arm_state:
            return self._quick(self.pc + (address & 2), 2)
        return self._quick(self.pc, 2)

    def _open_bus8(self, address: int) -> int:
        return self._quick(self.pc + (address & (3 if self.arm_state else 1)), 1)

    # -- reads -----------------------------------------------------------

    def read32(self, address: int) -> int:
        """Read a word; unaligned addresses rotate the aligned word right."""
        address &= _MASK32
        region = address >> 24
        plain = self._plain(region)
        if plain is not None:
            buffer, mask = plain
            value = read32le(buffer, address & mask & ~3)
        elif region == 0:
            if not self._bios_locked():
                value = read32le(self.bios, address & 0x3FFC)
            elif address < 0x4000:
                value = read32le(self.bios_protected)
            else:
                value = self._open_bus32()
        elif region == 4:
            offset = address & 0x3FC
            if address < 0x4000400 and self.io_readable[offset]:
                if self.io_readable[offset + 2]:
                    value = read32le(self.io, offset)
                else:
                    value = read16le(self.io, offset)
            else:
                value = self._open_bus32()
        elif 8 <= region <= 12:
            offset = address & 0x1FFFFFC
            value = _MASK32 if offset > self.loaded_size else read32le(self.rom, offset)
        else:
            value = self._open_bus32()

        shift = (address & 3) << 3
        if shift:
            value = ((value >> shift) | (value << (32 - shift))) & _MASK32
        return value

    def read16(self, address: int) -> int:
        """Read a halfword; an odd address rotates it right by eight bits."""
        address &= _MASK32
        region = address >> 24
        plain = self._plain(region)
        if plain is not None:
            buffer, mask = plain
            value = read16le(buffer, address & mask & ~1)
        elif region == 0:
            if not self._bios_locked():
                value = read16le(self.bios, address & 0x3FFE)
            elif address < 0x4000:
                value = read16le(self.bios_protected, address & 2)
            else:
                value = self._open_bus16(address)
        elif region == 4:
            offset = address & 0x3FE
            if address < 0x4000400 and self.io_readable[offset]:
                value = read16le(self.io, offset)
            else:
                value = self._open_bus16(address)
        elif 8 <= region <= 12:
            offset = address & 0x1FFFFFE
            value = 0xFFFF if offset > self.loaded_size else read16le(self.rom, offset)
        else:
            value = self._open_bus16(address)

        if address & 1:
            value = ((value >> 8) | (value << 24)) & _MASK32
        return value

    def read16_signed(self, address: int) -> int:
        """Read a halfword as a signed value; odd addresses load a signed byte."""
        value = self.read16(address) & 0xFFFF
        if address & 1:
            value &= 0xFF
            if value & 0x80:
                value |= 0xFF00
        return value - 0x10000 if value & 0x8000 else value

    def read8(self, address: int) -> int:
        """Read a byte."""
        address &= _MASK32
        region = address >> 24
        plain = self._plain(region)
        if plain is not None:
            buffer, mask = plain
            return buffer[address & mask]
        if region == 0:
            if not self._bios_locked():
                return self.bios[address & _BIOS_MASK]
            if address < 0x4000:
                return self.bios_protected[address & 3]
            return self._open_bus8(address)
        if region == 4:
            offset = address & _IO_MASK
            if address < 0x4000400 and self.io_readable[offset]:
                return self.io[offset]
            return self._open_bus8(address)
        if 8 <= region <= 12:
            offset = address & _ROM_MASK
            return 0xFF if offset > self.loaded_size else self.rom[offset]
        return self._open_bus8(address)

    # -- writes ----------------------------------------------------------

    def write32(self, address: int, value: int) -> None:
        """Write a word; writes to read-only or unmapped areas are ignored."""
        address &= _MASK32
        value &= _MASK32
        region = address >> 24
        if region == 4:
            offset = address & 0x3FC
            self.io_write(offset, value & 0xFFFF)
            self.io_write(offset + 2, value >> 16)
        elif region == 6:
            mask = 0x17FFC if address & 0x10000 else 0x1FFFC
            write32le(self.vram, address & mask, value)
        elif region in (2, 3, 5, 7):
            buffer, mask = self._plain(region)
            write32le(buffer, address & mask & ~3, value)
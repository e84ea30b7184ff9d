"""Weighted pixel blending and colour difference tests for 15, 16 and 32-bit pixels."""

from __future__ import annotations

from typing import Sequence

_MASKS = {
    15: (0x7C1F, 0x03E0),
    16: (0xF81F, 0x07E0),
    32: (0xFF00FF, 0x00FF00),
}

_Y_LIMIT = 0x30 * 4
_U_LIMIT = 0x07 * 4
_V_LIMIT = 0x06 * 8


def _blend(mask1: int, mask2: int, weights: Sequence[int], pixels: Sequence[int]) -> int:
    if len(weights) != len(pixels):
        raise ValueError("weights and pixels must have the same length")
    total = sum(weights)
    if not weights or total <= 0:
        raise ValueError("weights must sum to a positive value")
    part1 = sum(w * (p & mask1) for w, p in zip(weights, pixels)) // total
    part2 = sum(w * (p & mask2) for w, p in zip(weights, pixels)) // total
    return (part1 & mask1) | (part2 & mask2)


def _exceeds_limits(r: int, g: int, b: int) -> bool:
    y = r + g + b
    u = r - b
    v = -r + 2 * g - b
    return abs(y) > _Y_LIMIT or abs(u) > _U_LIMIT or abs(v) > _V_LIMIT


def blend32(weights: Sequence[int], pixels: Sequence[int]) -> int:
    """Blend 32-bit RGB pixels by integer weights; the divisor is the weight sum."""
    return _blend(*_MASKS[32], weights, pixels)


def diff32(p1: int, p2: int) -> bool:
    """Tell whether two 32-bit RGB pixels differ noticeably in YUV space."""
    if (p1 & 0xF8F8F8) == (p2 & 0xF8F8F8):
        return False
    b = (p1 & 0xFF) - (p2 & 0xFF)
    g = ((p1 & 0xFF00) - (p2 & 0xFF00)) >> 8
    r = ((p1 & 0xFF0000) - (p2 & 0xFF0000)) >> 16
    return _exceeds_limits(r, g, b)


class Interpolator:
    """Pixel blending and difference tests for one pixel format."""

    def __init__(self, bits_per_pixel: int) -> None:
        if bits_per_pixel not in _MASKS:
            raise ValueError(f"unsupported pixel depth: {bits_per_pixel}")
        self.bits_per_pixel = bits_per_pixel
        self.masks = _MASKS[bits_per_pixel]

    def blend(self, weights: Sequence[int], pixels: Sequence[int]) -> int:
        """Blend pixels by integer weights; the divisor is the weight sum."""
        return _blend(*self.masks, weights, pixels)

    def diff(self, p1: int, p2: int) -> bool:
        """Tell whether two pixels differ noticeably in YUV space."""
        if self.bits_per_pixel == 32:
            return diff32(p1, p2)
        p1 &= 0xFFFF
        p2 &= 0xFFFF
        if p1 == p2:
            return False
        b = ((p1 & 0x1F) - (p2 & 0x1F)) << 3
        if self.bits_per_pixel == 16:
            g = ((p1 & 0x7E0) - (p2 & 0x7E0)) >> 3
            r = ((p1 & 0xF800) - (p2 & 0xF800)) >> 8
        else:
            g = ((p1 & 0x3E0) - (p2 & 0x3E0)) >> 2
            r = ((p1 & 0x7C00) - (p2 & 0x7C00)) >> 7
        return _exceeds_limits(r, g, b)
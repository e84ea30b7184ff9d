"""Handheld device controls: battery level, backlight and framebuffer blanking."""

from __future__ import annotations

import array
import fcntl
import os
import re
from pathlib import Path

BATTERY_PATH = (
    "/sys/devices/platform/soc/7081400.s_twi/i2c-6/6-0034/"
    "axp2202-bat-power-supply.0/power_supply/axp2202-battery/capacity"
)
DISPLAY_DEVICE = "/dev/disp"
FB_BLANK_PATH = "/sys/class/graphics/fb0/blank"

DISP_LCD_SET_BRIGHTNESS = 0x102
DISP_LCD_GET_BRIGHTNESS = 0x103
DEFAULT_BRIGHTNESS = 72

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def read_battery_percent(path: str | Path = BATTERY_PATH) -> int | None:
    """Battery charge in percent clamped to 0..100, or ``None`` if unreadable."""
    try:
        text = Path(path).read_text(encoding="ascii", errors="replace")
    except OSError:
        return None
    match = _LEADING_INT.match(text)
    if not match:
        return None
    return max(0, min(100, int(match.group(1))))


def get_brightness(device: str | Path = DISPLAY_DEVICE) -> int:
    """Current backlight level; the default level when unknown or not positive."""
    value = DEFAULT_BRIGHTNESS
    try:
        fd = os.open(device, os.O_RDWR)
    except OSError:
        return DEFAULT_BRIGHTNESS
    try:
        params = array.array("L", [0, 0, 0, 0])
        try:
            fcntl.ioctl(fd, DISP_LCD_GET_BRIGHTNESS, params, True)
            value = int(params[1])
        except OSError:
            pass
    finally:
        os.close(fd)
    return value if value > 0 else DEFAULT_BRIGHTNESS


def set_brightness(value: int, device: str | Path = DISPLAY_DEVICE) -> None:
    """Set the backlight level; failures are ignored."""
    try:
        fd = os.open(device, os.O_RDWR)
    except OSError:
        return
    try:
        params = array.array("L", [0, max(0, int(value)), 0, 0])
        try:
            fcntl.ioctl(fd, DISP_LCD_SET_BRIGHTNESS, params, True)
        except OSError:
            pass
    finally:
        os.close(fd)


def set_fb_blank(value: int, path: str | Path = FB_BLANK_PATH) -> None:
    """Write a framebuffer blank level (0 shows the image, 4 powers it down)."""
    try:
        with open(path, "w", encoding="ascii") as handle:
            handle.write(f"{int(value)}\n")
    except OSError:
        pass
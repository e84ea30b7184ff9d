"""Full-screen front end: draws the browser and playback screens and runs the loop."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Optional, Sequence

import pygame

from .device import get_brightness, read_battery_percent, set_brightness, set_fb_blank
from .library import TrackMetadata, parse_time_string
from .player import PlayerProcess
from .selector import MUSIC_ROOT, Button, LoopMode, Mode, Selector
from .state import APP_DIR, load_state, save_state, state_file_path

SCREEN_WIDTH = 1024
SCREEN_HEIGHT = 768
FONT_SIZE = 40
SCROLL_SPEED = 20
SCROLL_DELAY = 4000
BATTERY_INTERVAL_MS = 1000
FRAME_DELAY_MS = 16
TRIGGER_LEFT_AXIS = 4
TRIGGER_RIGHT_AXIS = 5

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
YELLOW = (255, 255, 0)
CYAN = (0, 255, 255)
GREEN = (0, 255, 0)
ORANGE = (255, 165, 0)
RED = (255, 0, 0)
DIM = (120, 100, 0)

LABELS = ("Game:", "Title:", "Artist:", "Length:", "Elapsed:", "Year:", "GSF By:", "Copyright:")


def _display_seconds(meta: TrackMetadata, loop_mode: LoopMode) -> int:
    length = parse_time_string(meta.length)
    fade = parse_time_string(meta.fade) or 10
    return length if loop_mode is LoopMode.ONE else length + fade


def _clock_text(seconds: int) -> str:
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


class Renderer:
    """Draws the selector's list and playback screens onto a surface."""

    def __init__(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        self.screen = screen
        self.font = font
        self.battery = 0
        self._scroll_start: dict[str, int] = {}
        self._epoch: Optional[int] = None

    def _text(self, text: str, x: int, y: int, color) -> None:
        if text:
            self.screen.blit(self.font.render(text, True, color), (x, y))

    def _scrolling(self, key: str, text: str, x: int, y: int, max_width: int, color) -> None:
        text_w, text_h = self.font.size(text)
        if text_w > max_width:
            now = pygame.time.get_ticks()
            start = self._scroll_start.setdefault(key, now)
            elapsed = now - start
            if elapsed > SCROLL_DELAY:
                gap = self.screen.get_width() // 3
                distance = text_w + max_width + gap
                shift = ((elapsed - SCROLL_DELAY) * SCROLL_SPEED // 1000) % distance
                render_x = x - shift
                surface = self.font.render(text, True, color)
                previous = self.screen.get_clip()
                self.screen.set_clip(pygame.Rect(x, y, max_width, text_h))
                self.screen.blit(surface, (render_x, y))
                if render_x + text_w < x + max_width:
                    self.screen.blit(surface, (render_x + text_w + gap, y))
                self.screen.set_clip(previous)
                return
        self._text(text, x, y, color)

    def draw_list(self, selector: Selector) -> range:
        """Draw the directory listing; return the indices of the rows shown."""
        _, height = self.screen.get_size()
        self.screen.fill(BLACK)
        lh = self.font.get_linesize()
        max_lines = max(1, (height - lh * 4) // lh)
        entries = selector.entries
        total = len(entries)
        if total == 0:
            self._text("No items found", 30, 50, WHITE)
            return range(0)
        selected = min(max(selector.selected_index, 0), total - 1)
        half = max_lines // 2
        if selected <= half:
            offset = 0
        elif selected >= total - half:
            offset = max(0, total - max_lines)
        else:
            offset = selected - half

        self._text("Directory: " + selector.current_path, 5, 2, WHITE)
        visible = range(offset, min(total, offset + max_lines))
        y = lh + 5
        for index in visible:
            entry = entries[index]
            if index == selected:
                color = YELLOW
            else:
                color = CYAN if entry.is_dir else WHITE
            prefix = "[DIR] " if entry.is_dir else " "
            self._text(prefix + entry.name, 10, y, color)
            y += lh
        help_y = height - 120
        self._text("A: Play/Enter  B: Back  L1/R1: Jump", 10, help_y, WHITE)
        self._text("SL: Exit  Menu: Lock", 10, help_y + lh, WHITE)
        return visible

    def draw_playback(self, selector: Selector) -> float:
        """Draw the now-playing screen; return the progress bar fill (0..1)."""
        if selector.track_epoch != self._epoch:
            self._scroll_start.clear()
            self._epoch = selector.track_epoch
        width, height = self.screen.get_size()
        meta = selector.meta
        elapsed = selector.elapsed()
        self.screen.fill(BLACK)

        max_label = max(self.font.size(label)[0] for label in LABELS)
        padding = 10
        total = _display_seconds(meta, selector.loop_mode)
        x_value = 20 + max_label + padding
        max_width = width - x_value - 10

        y = 20
        self._text("Now Playing...", 20, y, GREEN)
        y += 80
        for key, label in (("game", "Game:"), ("title", "Title:"), ("artist", "Artist:")):
            value = getattr(meta, key)
            if value:
                self._text(label, 20, y, GREEN)
                self._scrolling(key, value, x_value, y, max_width, ORANGE)
                y += 50
        for label, value in (("Length:", _clock_text(total)), ("Elapsed:", _clock_text(elapsed))):
            self._text(label, 20, y, GREEN)
            self._text(value, x_value, y, ORANGE)
            y += 50
        for label, value in (("Year:", meta.year), ("GSF By:", meta.gsf_by), ("Copyright:", meta.copyright)):
            if value:
                self._text(label, 20, y, GREEN)
                self._text(value, x_value, y, ORANGE)
                y += 50

        y_bar = y + (height - 200 - y) // 2
        bar_x, bar_w, bar_h = 40, width - 80, 40
        pygame.draw.rect(self.screen, WHITE, pygame.Rect(bar_x, y_bar, bar_w, bar_h), 1)
        progress = 0.0
        if total > 0:
            progress = max(0.0, min(1.0, elapsed / total))
        fill_w = int((bar_w - 2) * progress)
        if fill_w > 0:
            pygame.draw.rect(self.screen, RED, pygame.Rect(bar_x + 1, y_bar + 1, fill_w, bar_h - 2))

        y_status = height - 140
        base_x = 10
        self._text("[BASS]", base_x, y_status, RED if selector.bass else DIM)
        paused_x = base_x + self.font.size("[BASS]")[0] + 30
        paused = selector.paused
        self._text("[PAUSED]", paused_x, y_status, ORANGE if paused else DIM)
        playing_x = paused_x + self.font.size("[PAUSED]")[0] + 30
        self._text("[PLAYING]", playing_x, y_status, DIM if paused else ORANGE)

        loop_x = width - 240
        self._text("Loop:", loop_x, y_status, GREEN)
        self._text(selector.loop_mode.name, loop_x + 120, y_status, ORANGE)

        self._text("B:Back L2/R2:Prev/Next Y:Loop Mode X:Bass Mode", 10, height - 90, GREEN)
        self._text("ST:Pause  SL:exit  Menu:Lock", 10, height - 50, GREEN)
        self._draw_status(width)
        return progress

    def _draw_status(self, width: int) -> None:
        label = "BAT:"
        value = f"{self.battery}% "
        label_w = self.font.size(label)[0]
        value_w = self.font.size(value)[0]
        x = width - 10 - (label_w + value_w)
        self._text(label, x, 10, GREEN)
        self._text(value, x + label_w, 10, ORANGE)


def _open_controller():
    try:
        from pygame._sdl2 import controller
    except ImportError:
        return None
    try:
        controller.init()
        if controller.get_count() > 0:
            return controller.Controller(0)
    except pygame.error:
        return None
    return None


def _run(args, screen, font) -> int:
    app_dir = args.app_dir
    state_path = state_file_path(app_dir)
    player = PlayerProcess(args.player or os.path.join(app_dir, "playgsf"))
    selector = Selector(args.root, player)
    saved = load_state(state_path)
    if saved is not None:
        selector.restore(saved)
    renderer = Renderer(screen, font)
    pad = _open_controller()
    last_brightness = get_brightness()
    last_battery = pygame.time.get_ticks()
    button_event = getattr(pygame, "CONTROLLERBUTTONDOWN", None)

    try:
        while selector.running:
            pygame.time.delay(FRAME_DELAY_MS)
            now = pygame.time.get_ticks()
            if now - last_battery >= BATTERY_INTERVAL_MS:
                level = read_battery_percent()
                if level is not None:
                    renderer.battery = level
                last_battery = now

            selector.tick()
            if pad is not None:
                selector.triggers(pad.get_axis(TRIGGER_LEFT_AXIS), pad.get_axis(TRIGGER_RIGHT_AXIS))

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    selector.running = False
                elif button_event is not None and event.type == button_event:
                    try:
                        button = Button(event.button)
                    except ValueError:
                        continue
                    was_off = selector.screen_off
                    if button is Button.GUIDE and not was_off:
                        last_brightness = get_brightness()
                        set_fb_blank(4)
                        set_brightness(0)
                    selector.press(button)
                    if button is Button.GUIDE:
                        if was_off:
                            set_fb_blank(0)
                            set_brightness(last_brightness)
                        pygame.time.delay(60)

            if not selector.screen_off:
                if selector.mode is Mode.LIST:
                    renderer.draw_list(selector)
                else:
                    renderer.draw_playback(selector)
                pygame.display.flip()
    finally:
        player.stop()
        try:
            save_state(state_path, selector.snapshot())
        except OSError:
            pass
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the full-screen GSF selector; returns the exit status."""
    parser = argparse.ArgumentParser(prog="gsfselect", description="Browse and play GSF music.")
    parser.add_argument("--root", default=MUSIC_ROOT, help="top music directory")
    parser.add_argument("--app-dir", default=APP_DIR, help="directory for state, font and player")
    parser.add_argument("--player", default=None, help="player executable")
    parser.add_argument("--font", default=None, help="TrueType font file")
    args = parser.parse_args(argv)

    pygame.init()
    try:
        try:
            screen = pygame.display.set_mode(
                (SCREEN_WIDTH, SCREEN_HEIGHT), pygame.FULLSCREEN | pygame.NOFRAME
            )
        except pygame.error as exc:
            print(f"display error: {exc}", file=sys.stderr)
            return 1
        pygame.display.set_caption("playgsf selector")
        font_path = args.font or os.path.join(args.app_dir, "DejaVuSans.ttf")
        try:
            font = pygame.font.Font(font_path, FONT_SIZE)
        except (OSError, pygame.error) as exc:
            print(f"font error: {exc}", file=sys.stderr)
            return 1
        return _run(args, screen, font)
    finally:
        pygame.quit()
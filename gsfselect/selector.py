"""Browser and playback state machine driven by controller buttons and a clock."""

from __future__ import annotations

import os
import time
from enum import Enum, IntEnum
from typing import Callable, Optional

from .library import (
    Entry,
    TrackMetadata,
    find_next_track,
    list_directory,
    parse_length,
    read_metadata,
    total_track_seconds,
)
from .player import PlayerProcess
from .state import SavedState

MUSIC_ROOT = "/mnt/SDCARD/Music/GBA"
TRIGGER_THRESHOLD = 16000
PAGE_JUMP = 10
DEFAULT_FADE_SECONDS = 10


class Mode(Enum):
    """What the screen shows."""

    LIST = "list"
    PLAYBACK = "playback"


class LoopMode(Enum):
    """What happens when a track ends by itself."""

    OFF = 0
    ONE = 1
    ALL = 2


class Button(IntEnum):
    """Game controller buttons, numbered as the controller reports them."""

    A = 0
    B = 1
    X = 2
    Y = 3
    BACK = 4
    GUIDE = 5
    START = 6
    LEFTSTICK = 7
    RIGHTSTICK = 8
    LEFTSHOULDER = 9
    RIGHTSHOULDER = 10
    DPAD_UP = 11
    DPAD_DOWN = 12
    DPAD_LEFT = 13
    DPAD_RIGHT = 14


class Selector:
    """Directory browsing, track changes and play timing.

    ``player`` needs ``launch``, ``stop``, ``pause``, ``resume``,
    ``toggle_bass``, ``poll`` and the ``running`` and ``paused`` attributes.
    ``clock`` returns seconds from a monotonic source.
    """

    def __init__(
        self,
        root: str = MUSIC_ROOT,
        player=None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.root = str(root)
        self.player = player if player is not None else PlayerProcess()
        self.clock = clock if clock is not None else time.monotonic
        self.mode = Mode.LIST
        self.loop_mode = LoopMode.ALL
        self.bass = False
        self.current_path = self.root
        self.entries: list[Entry] = []
        self.selected_index = 0
        self.meta = TrackMetadata()
        self.track_seconds = 0
        self.playback_start = self.clock()
        self.paused_at = self.playback_start
        self.paused_seconds_total = 0
        self.elapsed_seconds = 0
        self.manual_switch = False
        self.manual_forward = True
        self.screen_off = False
        self.running = True
        self.track_epoch = 0
        self._l2_prev = False
        self._r2_prev = False
        self._open(self.current_path)

    # -- helpers ---------------------------------------------------------

    @property
    def paused(self) -> bool:
        """Whether the player child is suspended."""
        return bool(self.player.paused)

    def _open(self, path: str) -> None:
        self.current_path = path
        self.entries = list_directory(path)
        self.selected_index = 0

    def _track_path(self) -> str:
        return self.current_path + "/" + self.entries[self.selected_index].name

    def _read(self, path: str) -> Optional[TrackMetadata]:
        meta = read_metadata(path)
        self.meta = meta if meta is not None else TrackMetadata(length="", fade="")
        return meta

    def _start_current(self, full_length: bool) -> None:
        path = self._track_path()
        meta = self._read(path)
        if meta is not None:
            self.track_seconds = (
                total_track_seconds(meta) if full_length else parse_length(meta.length)
            )
            self.playback_start = self.clock()
            self.paused_seconds_total = 0
            self.track_epoch += 1
        self.elapsed_seconds = 0
        self.player.launch(path, self.bass)
        self.mode = Mode.PLAYBACK

    def _skip(self, forward: bool) -> None:
        self.manual_switch = True
        self.manual_forward = forward
        self.player.stop()

    def _move_to_next(self, forward: bool) -> None:
        nxt = find_next_track(self.entries, self.selected_index, forward)
        if nxt >= 0:
            self.selected_index = nxt

    # -- persistence -----------------------------------------------------

    def restore(self, state: SavedState) -> None:
        """Return to a saved directory and entry and take over the bass setting."""
        if state.bass is not None:
            self.bass = state.bass
        if not state.path or not os.path.isdir(state.path):
            return
        self._open(state.path)
        if not state.name:
            return
        for index, entry in enumerate(self.entries):
            if entry.name == state.name:
                self.selected_index = index
                if state.is_dir and state.path != self.root:
                    self._open(state.path + "/" + state.name)
                break

    def snapshot(self) -> SavedState:
        """The state to save on exit."""
        if 0 <= self.selected_index < len(self.entries):
            entry = self.entries[self.selected_index]
            return SavedState(self.current_path, entry.name, entry.is_dir, self.bass)
        return SavedState(self.current_path, "", False, self.bass)

    # -- input -----------------------------------------------------------

    def press(self, button: Button) -> None:
        """Handle one controller button press."""
        if button is Button.GUIDE:
            self.screen_off = not self.screen_off
            return
        if self.screen_off:
            return
        if button is Button.BACK:
            self.running = False
        if self.mode is Mode.PLAYBACK:
            self._press_playback(button)
        else:
            self._press_list(button)

    def _press_playback(self, button: Button) -> None:
        if button is Button.A:
            self.player.stop()
            self.mode = Mode.LIST
        elif button is Button.DPAD_LEFT:
            self._skip(False)
        elif button is Button.DPAD_RIGHT:
            self._skip(True)
        elif button is Button.X:
            self.loop_mode = LoopMode((self.loop_mode.value + 1) % len(LoopMode))
        elif button is Button.Y:
            self.bass = not self.bass
            if self.player.running:
                self.player.toggle_bass()
        elif button is Button.START and self.player.running:
            if not self.player.paused:
                if self.player.pause():
                    self.paused_at = self.clock()
            elif self.player.resume():
                self.paused_seconds_total += int(self.clock() - self.paused_at)

    def _press_list(self, button: Button) -> None:
        last = max(0, len(self.entries) - 1)
        if button is Button.DPAD_UP:
            self.selected_index = max(0, self.selected_index - 1)
        elif button is Button.DPAD_DOWN:
            self.selected_index = min(last, self.selected_index + 1)
        elif button is Button.LEFTSHOULDER:
            self.selected_index = max(0, self.selected_index - PAGE_JUMP)
        elif button is Button.RIGHTSHOULDER:
            self.selected_index = min(last, self.selected_index + PAGE_JUMP)
        elif button is Button.DPAD_LEFT:
            self._move_to_next(False)
        elif button is Button.DPAD_RIGHT:
            self._move_to_next(True)
        elif button is Button.B:
            self._enter()
        elif button is Button.A:
            self._leave()

    def _enter(self) -> None:
        if not 0 <= self.selected_index < len(self.entries):
            return
        entry = self.entries[self.selected_index]
        if entry.is_dir:
            sep = "" if self.current_path == "/" else "/"
            self._open(self.current_path + sep + entry.name)
            return
        path = self._track_path()
        meta = self._read(path)
        if meta is not None:
            self.track_epoch += 1
            self.track_seconds = parse_length(meta.length)
            self.playback_start = self.clock()
            self.paused_seconds_total = 0
        self.elapsed_seconds = 0
        self.player.launch(path, self.bass)
        self.mode = Mode.PLAYBACK

    def _leave(self) -> None:
        if self.current_path == self.root:
            return
        parent, sep, last_folder = self.current_path.rpartition("/")
        self._open(parent if sep else self.root)
        for index, entry in enumerate(self.entries):
            if entry.is_dir and entry.name == last_folder:
                self.selected_index = index
                break

    def triggers(self, left: int, right: int) -> None:
        """Handle analog trigger positions; a new press skips a track."""
        if not (self.player.running and self.mode is Mode.PLAYBACK):
            return
        l2 = left > TRIGGER_THRESHOLD
        r2 = right > TRIGGER_THRESHOLD
        if l2 and not self._l2_prev:
            self._skip(False)
        if r2 and not self._r2_prev:
            self._skip(True)
        self._l2_prev = l2
        self._r2_prev = r2

    # -- time ------------------------------------------------------------

    def tick(self) -> None:
        """Reap a finished player, pick what plays next and enforce track length."""
        if self.player.poll() and self.mode is Mode.PLAYBACK:
            self._after_exit()

        if self.mode is Mode.PLAYBACK and self.player.running and not self.player.paused:
            self.elapsed_seconds = (
                int(self.clock() - self.playback_start) - self.paused_seconds_total
            )
            fade = parse_length(self.meta.fade) or DEFAULT_FADE_SECONDS
            if self.loop_mode is LoopMode.ALL:
                limit = self.track_seconds + fade
            else:
                limit = self.track_seconds + 1
            if self.track_seconds > 0 and self.elapsed_seconds >= limit:
                self.manual_switch = False
                self.player.stop()

    def _after_exit(self) -> None:
        if not self.entries:
            self.mode = Mode.LIST
            return
        if self.manual_switch:
            self._move_to_next(self.manual_forward)
            self.manual_switch = False
            self._start_current(self.loop_mode is not LoopMode.ONE)
            return
        if self.track_seconds <= 0:
            return
        if self.loop_mode is LoopMode.OFF:
            self.mode = Mode.LIST
        elif self.loop_mode is LoopMode.ONE:
            self._start_current(False)
        else:
            self._move_to_next(True)
            self._start_current(True)

    def elapsed(self) -> int:
        """Seconds played of the current track, not counting pauses."""
        return self.elapsed_seconds
"""Browsing GSF music directories and reading track metadata."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from .psftag import PsfTagError, get_var, parse_tag, read_tag

MUSIC_EXTENSIONS = (".minigsf", ".gsf")
DEFAULT_LENGTH = "150"
DEFAULT_FADE = "10"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class Entry:
    """One item shown in the browser: a directory or a music file."""

    name: str
    is_dir: bool


@dataclass
class TrackMetadata:
    """Tag values of one track; ``length`` and ``fade`` carry defaults."""

    filename: str = ""
    title: str = ""
    artist: str = ""
    game: str = ""
    year: str = ""
    copyright: str = ""
    gsf_by: str = ""
    length: str = DEFAULT_LENGTH
    fade: str = DEFAULT_FADE


def _to_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if not match:
        raise ValueError(f"no integer in {text!r}")
    return int(match.group(1))


def is_valid_music(name: str) -> bool:
    """Tell whether ``name`` has a .gsf or .minigsf extension, in any case."""
    _, dot, ext = name.rpartition(".")
    return bool(dot) and ("." + ext.lower()) in MUSIC_EXTENSIONS


def list_directory(path: Union[str, Path]) -> list[Entry]:
    """Subdirectories and music files of ``path``, directories first, by name.

    An unreadable directory gives an empty list.
    """
    try:
        names = os.listdir(path)
    except OSError:
        return []
    entries = []
    for name in names:
        is_dir = os.path.isdir(os.path.join(path, name))
        if is_dir or is_valid_music(name):
            entries.append(Entry(name, is_dir))
    entries.sort(key=lambda e: (not e.is_dir, e.name))
    return entries


def find_next_track(entries: Sequence[Entry], current: int, forward: bool = True) -> int:
    """Index of the next music file after ``current``, wrapping around.

    Returns -1 for an empty list and ``current`` when no other track exists.
    """
    size = len(entries)
    if size == 0:
        return -1
    step = 1 if forward else -1
    for offset in range(1, size + 1):
        idx = (current + step * offset) % size
        entry = entries[idx]
        if not entry.is_dir and is_valid_music(entry.name):
            return idx
    return current


def parse_length(text: str) -> int:
    """Seconds in a length tag: "m:ss", "ss" or "ss.xxx"; 0 if unparsable."""
    if not text:
        return 0
    try:
        minutes, colon, seconds = text.partition(":")
        if colon:
            return _to_int(minutes) * 60 + _to_int(seconds)
        whole, dot, _ = text.partition(".")
        if dot:
            return _to_int(whole)
        return _to_int(text)
    except ValueError:
        return 0


def parse_time_string(text: str) -> int:
    """Seconds in "m:ss" or "ss", ignoring anything after a dot; 0 if unparsable."""
    text = text.partition(".")[0]
    minutes, colon, seconds = text.partition(":")
    try:
        if colon:
            return _to_int(minutes) * 60 + _to_int(seconds)
        return _to_int(text)
    except ValueError:
        return 0


def read_metadata(path: Union[str, Path]) -> Optional[TrackMetadata]:
    """Metadata of a GSF file, or ``None`` if it cannot be read as one."""
    try:
        tag = parse_tag(read_tag(path))
    except PsfTagError:
        return None

    def value(name: str, default: str = "") -> str:
        found = get_var(tag, name)
        return default if found is None else found

    return TrackMetadata(
        filename=str(path),
        title=value("title"),
        artist=value("artist"),
        game=value("game"),
        year=value("year"),
        copyright=value("copyright"),
        gsf_by=value("gsfby"),
        length=value("length", DEFAULT_LENGTH),
        fade=value("fade", DEFAULT_FADE),
    )


def total_track_seconds(meta: TrackMetadata) -> int:
    """Track length plus fade, in seconds."""
    return parse_length(meta.length) + parse_length(meta.fade)
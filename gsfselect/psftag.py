"""Reading the "[TAG]" metadata block that follows the data of a GSF file."""

from __future__ import annotations

import struct
from pathlib import Path
from typing import Mapping, Union

GSF_SIGNATURE = b"PSF\x22"
TAG_MARKER = b"[TAG]"

_HEADER = struct.Struct("<4sIII")


class PsfTagError(Exception):
    """A file could not be read as a GSF file."""


def is_valid_gsf(header: bytes) -> bool:
    """Tell whether ``header`` starts with the GSF signature."""
    return bytes(header[:4]) == GSF_SIGNATURE


def _decode(data: Union[bytes, bytearray, str]) -> str:
    if isinstance(data, str):
        return data
    return bytes(data).decode("utf-8", errors="replace")


def parse_tag(data: Union[bytes, bytearray, str]) -> dict[str, str]:
    """Parse ``name=value`` lines into a dict keyed by lower-case names.

    Surrounding whitespace is dropped from names and values, lines without
    ``=`` are ignored, and repeated names join their values with newlines.
    """
    variables: dict[str, str] = {}
    for line in _decode(data).split("\n"):
        name, sep, value = line.partition("=")
        if not sep:
            continue
        name = name.strip().lower()
        if not name:
            continue
        value = value.strip()
        if name in variables:
            variables[name] += "\n" + value
        else:
            variables[name] = value
    return variables


def read_tag(path: Union[str, Path]) -> str:
    """Return the tag text of a GSF file, or an empty string if it has none.

    Raises :class:`PsfTagError` if the file cannot be read or is not a GSF file.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise PsfTagError(f"cannot read {path}: {exc}") from exc
    if len(data) < _HEADER.size or not is_valid_gsf(data):
        raise PsfTagError(f"not a GSF file: {path}")
    _, reserved_size, program_size, _crc = _HEADER.unpack_from(data)
    tag_start = _HEADER.size + reserved_size + program_size
    if data[tag_start : tag_start + len(TAG_MARKER)] != TAG_MARKER:
        return ""
    return _decode(data[tag_start + len(TAG_MARKER) :])


def get_var(tag: Union[str, bytes, Mapping[str, str]], name: str) -> str | None:
    """Look up a tag variable by name, ignoring case; ``None`` if absent."""
    variables = tag if isinstance(tag, Mapping) else parse_tag(tag)
    return variables.get(name.strip().lower())
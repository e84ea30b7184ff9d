"""Building display titles from GSF tag variables and a "%name%" format string."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Mapping, Union

from .psftag import get_var, parse_tag, read_tag

DEFAULT_TITLE_FORMAT = "%game% - %title%"

_SEPARATORS = re.compile(r"[\\/]")


class TitleFormatError(ValueError):
    """The title format string has a "%" token without a closing "%"."""


def _file_part(filename: str) -> str:
    return _SEPARATORS.split(filename)[-1]


def format_title(
    fmt: str,
    tag: Union[str, bytes, Mapping[str, str]],
    filename: str = "",
) -> str:
    """Expand ``%name%`` tokens in ``fmt`` from ``tag``.

    The token ``%file%`` expands to the last path component of ``filename``.
    Variables missing from the tag expand to an empty string.  Raises
    :class:`TitleFormatError` on an unterminated token.
    """
    variables = tag if isinstance(tag, Mapping) else parse_tag(tag)
    parts: list[str] = []
    pos = 0
    while pos < len(fmt):
        start = fmt.find("%", pos)
        if start < 0:
            parts.append(fmt[pos:])
            break
        parts.append(fmt[pos:start])
        end = fmt.find("%", start + 1)
        if end < 0:
            raise TitleFormatError("Bad title format string (unterminated token)")
        name = fmt[start + 1 : end]
        if name == "file":
            parts.append(_file_part(filename))
        else:
            parts.append(get_var(variables, name) or "")
        pos = end + 1
    return "".join(parts)


def file_title(path: Union[str, Path], fmt: str = DEFAULT_TITLE_FORMAT) -> str:
    """Title for a GSF file: the formatted tag, or the file name if it has no tag.

    Raises :class:`~gsfselect.psftag.PsfTagError` if the file is not a GSF file.
    """
    name = str(path)
    tag = read_tag(path)
    if not tag:
        return _file_part(name)
    return format_title(fmt, tag, name)
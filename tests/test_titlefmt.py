import struct

import pytest

from gsfselect.psftag import PsfTagError
from gsfselect.titlefmt import TitleFormatError, file_title, format_title


def _gsf(tag: bytes | None, program: bytes = b"\x00" * 8) -> bytes:
    data = b"PSF\x22" + struct.pack("<III", 0, len(program), 0) + program
    if tag is not None:
        data += b"[TAG]" + tag
    return data


def test_default_style_format_from_tag_text():
    tag = "game=Golden Sun\ntitle=Venus Lighthouse\n"
    assert format_title("%game% - %title%", tag) == "Golden Sun - Venus Lighthouse"


def test_format_from_mapping():
    assert format_title("[%artist%]", {"artist": "Someone"}) == "[Someone]"


def test_missing_variable_expands_empty():
    assert format_title("%game%|%title%", {"game": "G"}) == "G|"


def test_file_token_uses_last_component():
    assert format_title("%file%", {}, "C:\\music\\song.minigsf") == "song.minigsf"
    assert format_title("%file%", {}, "/music/gba/track.gsf") == "track.gsf"


def test_literal_text_without_tokens_is_kept():
    assert format_title("plain text", {"game": "x"}) == "plain text"


def test_unterminated_token_raises():
    with pytest.raises(TitleFormatError):
        format_title("%game% - %title", {"game": "a", "title": "b"})


def test_file_title_from_tag(tmp_path):
    path = tmp_path / "a.minigsf"
    path.write_bytes(_gsf(b"game=Metroid\ntitle=Brinstar\n"))
    assert file_title(path) == "Metroid - Brinstar"


def test_file_title_custom_format(tmp_path):
    path = tmp_path / "b.gsf"
    path.write_bytes(_gsf(b"title=Intro\n"))
    assert file_title(path, "%title% (%file%)") == "Intro (b.gsf)"


def test_file_title_without_tag_uses_file_name(tmp_path):
    path = tmp_path / "untagged.gsf"
    path.write_bytes(_gsf(None))
    assert file_title(path) == "untagged.gsf"


def test_file_title_rejects_non_gsf(tmp_path):
    path = tmp_path / "bad.gsf"
    path.write_bytes(b"not a gsf file at all")
    with pytest.raises(PsfTagError):
        file_title(path)
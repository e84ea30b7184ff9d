import struct

import pytest

from gsfselect.library import (
    Entry,
    TrackMetadata,
    find_next_track,
    is_valid_music,
    list_directory,
    parse_length,
    parse_time_string,
    read_metadata,
    total_track_seconds,
)


def _gsf(tag: bytes | None) -> bytes:
    program = b"\x01\x02\x03\x04"
    data = b"PSF\x22" + struct.pack("<III", 0, len(program), 0) + program
    if tag is not None:
        data += b"[TAG]" + tag
    return data


@pytest.mark.parametrize(
    "name, expected",
    [
        ("song.gsf", True),
        ("song.MINIGSF", True),
        ("lib.gsflib", False),
        ("noext", False),
        ("song.mp3", False),
    ],
)
def test_is_valid_music(name, expected):
    assert is_valid_music(name) is expected


def test_list_directory_sorts_dirs_first_and_filters(tmp_path):
    (tmp_path / "zeta").mkdir()
    (tmp_path / "alpha").mkdir()
    (tmp_path / "b.minigsf").write_bytes(b"")
    (tmp_path / "a.gsf").write_bytes(b"")
    (tmp_path / "readme.txt").write_text("x")
    assert list_directory(tmp_path) == [
        Entry("alpha", True),
        Entry("zeta", True),
        Entry("a.gsf", False),
        Entry("b.minigsf", False),
    ]


def test_list_directory_missing_is_empty(tmp_path):
    assert list_directory(tmp_path / "missing") == []


ENTRIES = [
    Entry("dir", True),
    Entry("a.gsf", False),
    Entry("b.gsf", False),
    Entry("c.minigsf", False),
]


def test_find_next_track_forward_and_wrap():
    assert find_next_track(ENTRIES, 1, True) == 2
    assert find_next_track(ENTRIES, 3, True) == 1


def test_find_next_track_backward_skips_dirs():
    assert find_next_track(ENTRIES, 1, False) == 3
    assert find_next_track(ENTRIES, 0, False) == 3


def test_find_next_track_empty_and_only_dirs():
    assert find_next_track([], 0) == -1
    assert find_next_track([Entry("x", True), Entry("y", True)], 1) == 1


def test_find_next_track_single_track_returns_itself():
    entries = [Entry("d", True), Entry("only.gsf", False)]
    assert find_next_track(entries, 1, True) == 1


@pytest.mark.parametrize(
    "text, expected",
    [("45", 45), ("45.500", 45), ("", 0), ("abc", 0), ("1:05", 65)],
)
def test_parse_length(text, expected):
    assert parse_length(text) == expected


def test_parse_length_minutes_match_seconds():
    assert parse_length("3:00") == parse_length("180")


@pytest.mark.parametrize(
    "text, expected",
    [("12", 12), ("12.999", 12), ("x:1", 0), ("", 0)],
)
def test_parse_time_string(text, expected):
    assert parse_time_string(text) == expected


def test_parse_time_string_strips_fraction_before_colon():
    assert parse_time_string("2:30.5") == parse_time_string("2:30")


def test_read_metadata_fields(tmp_path):
    path = tmp_path / "t.minigsf"
    path.write_bytes(
        _gsf(b"title=Opening\nartist=Composer\ngame=Game\nyear=2001\n"
             b"copyright=Pub\ngsfby=Ripper\nlength=1:05\nfade=5\n")
    )
    meta = read_metadata(path)
    assert meta == TrackMetadata(
        filename=str(path),
        title="Opening",
        artist="Composer",
        game="Game",
        year="2001",
        copyright="Pub",
        gsf_by="Ripper",
        length="1:05",
        fade="5",
    )
    assert total_track_seconds(meta) == parse_length("1:05") + 5


def test_read_metadata_defaults(tmp_path):
    path = tmp_path / "plain.gsf"
    path.write_bytes(_gsf(None))
    meta = read_metadata(path)
    assert meta.length == "150"
    assert meta.fade == "10"
    assert meta.title == ""
    assert total_track_seconds(meta) == 160


def test_read_metadata_not_gsf(tmp_path):
    path = tmp_path / "bad.gsf"
    path.write_bytes(b"garbage")
    assert read_metadata(path) is None
    assert read_metadata(tmp_path / "missing.gsf") is None
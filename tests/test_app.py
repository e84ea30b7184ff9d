import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402
import pytest  # noqa: E402

from gsfselect.app import Renderer, main  # noqa: E402
from gsfselect.library import TrackMetadata  # noqa: E402
from gsfselect.selector import LoopMode, Selector  # noqa: E402


@pytest.fixture
def renderer():
    pygame.font.init()
    surface = pygame.Surface((1024, 768))
    return Renderer(surface, pygame.font.Font(None, 40))


@pytest.fixture
def many(tmp_path):
    root = tmp_path / "music"
    root.mkdir()
    for i in range(40):
        (root / f"t{i:02}.gsf").write_bytes(b"")
    return Selector(str(root))


def has_red(surface, x):
    return any(surface.get_at((x, y))[:3] == (255, 0, 0) for y in range(surface.get_height()))


def test_draw_list_empty(renderer, tmp_path):
    selector = Selector(str(tmp_path))
    visible = renderer.draw_list(selector)
    assert len(visible) == 0
    assert renderer.screen.get_at((1000, 700))[:3] == (0, 0, 0)


def test_draw_list_scroll_keeps_selection_visible(renderer, many):
    many.selected_index = 0
    first = renderer.draw_list(many)
    assert first.start == 0
    assert 0 < len(first) < 40
    many.selected_index = 39
    last = renderer.draw_list(many)
    assert last.stop == 40
    assert 39 in last
    many.selected_index = 20
    middle = renderer.draw_list(many)
    assert 20 in middle
    assert len(middle) == len(first)


def test_progress_bounds(renderer, tmp_path):
    selector = Selector(str(tmp_path))
    selector.meta = TrackMetadata(title="Song", length="1:00", fade="5")
    selector.elapsed_seconds = 0
    assert renderer.draw_playback(selector) == 0.0
    assert not has_red(renderer.screen, 512)
    selector.elapsed_seconds = 30
    assert 0.0 < renderer.draw_playback(selector) < 1.0
    selector.elapsed_seconds = 1000
    assert renderer.draw_playback(selector) == 1.0
    assert has_red(renderer.screen, 512)


def test_loop_one_excludes_fade(renderer, tmp_path):
    selector = Selector(str(tmp_path))
    selector.meta = TrackMetadata(length="1:00", fade="5")
    selector.elapsed_seconds = 60
    selector.loop_mode = LoopMode.ONE
    assert renderer.draw_playback(selector) == 1.0
    selector.loop_mode = LoopMode.ALL
    assert renderer.draw_playback(selector) < 1.0


def test_main_fails_without_font(tmp_path):
    status = main(
        [
            "--root",
            str(tmp_path),
            "--app-dir",
            str(tmp_path),
            "--font",
            str(tmp_path / "missing.ttf"),
        ]
    )
    assert status == 1
    assert not (tmp_path / "state.txt").exists()
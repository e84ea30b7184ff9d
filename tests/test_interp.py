import pytest

from gsfselect.interp import Interpolator, blend32, diff32


def test_unsupported_depth_rejected():
    with pytest.raises(ValueError):
        Interpolator(24)


def test_mismatched_lengths_rejected():
    with pytest.raises(ValueError):
        Interpolator(16).blend((1, 1), (0x1234,))


def test_zero_weights_rejected():
    with pytest.raises(ValueError):
        blend32((0, 0), (1, 2))


@pytest.mark.parametrize("bpp,pixel", [(15, 0x7FFF), (15, 0x1234), (16, 0xF81F), (16, 0xBEEF)])
def test_blending_identical_pixels_returns_pixel(bpp, pixel):
    interp = Interpolator(bpp)
    for weights in [(5, 2, 1), (3, 3, 2), (14, 1, 1), (7, 7, 2)]:
        assert interp.blend(weights, (pixel,) * 3) == pixel


def test_blend32_identical_pixels_drops_alpha():
    assert blend32((9, 7), (0xFF123456, 0xFF123456)) == 0x123456


def test_blend32_midpoint_black_white():
    assert blend32((1, 1), (0x000000, 0xFFFFFF)) == 0x7F7F7F


def test_blend_is_order_independent():
    interp = Interpolator(16)
    a, b = 0x1234, 0xF00F
    assert interp.blend((5, 3), (a, b)) == interp.blend((3, 5), (b, a))


def test_blend_stays_within_masks():
    interp = Interpolator(15)
    result = interp.blend((4, 3, 1), (0x7FFF, 0x0000, 0x5555))
    assert result & ~0x7FFF == 0


def test_diff32_equal_pixels():
    assert diff32(0x123456, 0x123456) is False


def test_diff32_ignores_low_bits():
    assert diff32(0x000000, 0x070707) is False


def test_diff32_small_difference():
    assert diff32(0x000000, 0x000008) is False


def test_diff32_black_white():
    assert diff32(0x000000, 0xFFFFFF) is True


def test_diff32_strong_blue():
    assert diff32(0x000000, 0x0000FF) is True


@pytest.mark.parametrize("bpp", [15, 16, 32])
def test_interpolator_diff_equal_is_false(bpp):
    assert Interpolator(bpp).diff(0x4321, 0x4321) is False


def test_diff16_black_white():
    assert Interpolator(16).diff(0x0000, 0xFFFF) is True


def test_diff15_black_white():
    assert Interpolator(15).diff(0x0000, 0x7FFF) is True


def test_diff16_one_step_blue_is_close():
    assert Interpolator(16).diff(0x0000, 0x0001) is False


def test_diff32_through_interpolator_matches_function():
    interp = Interpolator(32)
    assert interp.diff(0x102030, 0xF0E0D0) == diff32(0x102030, 0xF0E0D0)
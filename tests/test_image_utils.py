"""Tests for background color sampling."""

import pytest

from utils.color_utils import hex_to_rgb, rgb_to_hex
from utils.exceptions import LayoutInputError
from utils.image_utils import BackgroundSampler, Sampled, DefaultedTo, load_image_bytes
from utils.math_utils import round_half_up


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(232.5) == 233
    assert round_half_up(1.49) == 1


def test_hex_conversions():
    assert hex_to_rgb("#FF8000") == (255, 128, 0)
    assert hex_to_rgb("ff8000") == (255, 128, 0)
    assert hex_to_rgb("not a color") == (0, 0, 0)
    assert rgb_to_hex(127.5, 0, 300) == "#8000ff"


def test_load_image_bytes(split_png):
    image = load_image_bytes(split_png("red", "blue"))
    assert image.shape == (200, 400, 3)


def test_load_invalid_bytes_raises():
    with pytest.raises(ValueError):
        load_image_bytes(b"not an image")


def test_region_mean(split_png):
    sampler = BackgroundSampler.from_bytes(split_png("black", "white"))
    assert sampler.size == (400, 200)
    assert sampler.sample_region_color((0, 0, 50, 50)) == Sampled("#000000")
    assert sampler.sample_region_color((300, 50, 50, 50)) == Sampled("#ffffff")


def test_region_outside_image_defaults(split_png):
    sampler = BackgroundSampler.from_bytes(split_png("black", "white"))
    result = sampler.sample_region_color((390, 0, 50, 50))
    assert isinstance(result, DefaultedTo)
    assert result.color == "#808080"
    assert result.is_fallback


def test_empty_region_defaults(split_png):
    sampler = BackgroundSampler.from_bytes(split_png("black", "white"))
    assert sampler.sample_region_color((10, 10, 0, 20)).is_fallback


def test_repeated_region_is_cached(split_png):
    sampler = BackgroundSampler.from_bytes(split_png("black", "white"))
    first = sampler.sample_region_color((10.2, 10.4, 40, 40))
    second = sampler.sample_region_color((10, 10, 40, 40))
    assert first is second


def test_grid_average(split_png):
    sampler = BackgroundSampler.from_bytes(split_png((255, 0, 0), (0, 0, 255)))
    result = sampler.sample_background_colors((0, 0, 400, 200), samples=4)
    assert result == Sampled("#800080")


def test_zero_samples_raises(split_png):
    sampler = BackgroundSampler.from_bytes(split_png("black", "white"))
    with pytest.raises(LayoutInputError):
        sampler.sample_background_colors((0, 0, 100, 100), samples=0)


def test_undecodable_background_always_defaults():
    sampler = BackgroundSampler.from_bytes(b"not an image")
    result = sampler.sample_background_colors((0, 0, 100, 100))
    assert isinstance(result, DefaultedTo)
    assert result.color == "#808080"
    assert "decode" in result.cause


def test_no_image_defaults():
    result = BackgroundSampler().sample_region_color((0, 0, 10, 10))
    assert result == DefaultedTo("#808080", "No background image")


def test_decompression_bomb_header_raises_value_error(header_only_png):
    with pytest.raises(ValueError):
        load_image_bytes(header_only_png(20000, 20000))


def test_decompression_bomb_background_defaults(header_only_png):
    sampler = BackgroundSampler.from_bytes(header_only_png(20000, 20000))
    result = sampler.sample_background_colors((0, 0, 100, 100))
    assert isinstance(result, DefaultedTo)
    assert result.color == "#808080"


def test_raster_above_pixel_cap_is_not_decoded(header_only_png):
    with pytest.raises(ValueError, match="exceeds"):
        load_image_bytes(header_only_png(10000, 5000))
    sampler = BackgroundSampler.from_bytes(header_only_png(10000, 5000))
    assert sampler.size == (0, 0)
    assert sampler.sample_region_color((0, 0, 10, 10)).is_fallback


def test_grid_average_skips_cells_outside_image(solid_png):
    sampler = BackgroundSampler.from_bytes(solid_png("black", size=(400, 200)))
    assert sampler.sample_region_color((400, 0, 100, 100)).is_fallback
    result = sampler.sample_background_colors((300, 0, 200, 200), samples=4)
    assert result == Sampled("#000000")

"""
Unit tests for the pixel sampler.

Covers stride walking, alpha filtering, frequency ranking and the
empty / fully transparent edge cases.
"""

import numpy as np
import pytest

from colorcraft.services.colors.conversions import color_from_rgb
from colorcraft.services.colors.extraction import (
    PixelBuffer, as_pixel_array, extract_colors_from_image, rank_by_frequency,
    sample_colors, sample_pixels
)


def flat_rgba(pixels):
    """Flatten a list of (r, g, b, a) tuples into a byte buffer."""
    return bytes(channel for pixel in pixels for channel in pixel)


class TestAsPixelArray:
    """Test buffer normalization."""

    def test_accepts_bytes_list_and_numpy(self):
        pixels = [(1, 2, 3, 255), (4, 5, 6, 255)]
        expected = np.array(pixels, dtype=np.uint8)

        np.testing.assert_array_equal(as_pixel_array(flat_rgba(pixels)), expected)
        np.testing.assert_array_equal(as_pixel_array(list(flat_rgba(pixels))), expected)
        np.testing.assert_array_equal(as_pixel_array(expected.reshape(-1)), expected)
        np.testing.assert_array_equal(as_pixel_array(expected.reshape(1, 2, 4)), expected)

    def test_accepts_pixel_buffer(self):
        buffer = PixelBuffer(width=2, height=1, data=flat_rgba([(1, 2, 3, 255), (4, 5, 6, 255)]))
        assert as_pixel_array(buffer).shape == (2, 4)
        assert buffer.pixel_count == 2

    def test_trailing_partial_pixel_is_ignored(self):
        data = flat_rgba([(1, 2, 3, 255)]) + bytes([9, 9])
        assert as_pixel_array(data).shape == (1, 4)


class TestSamplePixels:
    """Test stride and alpha filtering."""

    def test_stride_selects_every_nth_pixel(self):
        pixels = [(i, 0, 0, 255) for i in range(10)]
        # 20 bytes = every 5th pixel
        sampled = sample_pixels(flat_rgba(pixels), stride=20)
        assert sampled[:, 0].tolist() == [0, 5]
        # 16 bytes = every 4th pixel
        sampled = sample_pixels(flat_rgba(pixels), stride=16)
        assert sampled[:, 0].tolist() == [0, 4, 8]

    def test_alpha_below_cutoff_is_dropped(self):
        pixels = [(10, 0, 0, 124), (20, 0, 0, 125), (30, 0, 0, 255), (40, 0, 0, 0)]
        sampled = sample_pixels(flat_rgba(pixels), stride=4)
        assert sampled[:, 0].tolist() == [20, 30]

    def test_custom_alpha_cutoff(self):
        pixels = [(10, 0, 0, 124), (20, 0, 0, 200)]
        sampled = sample_pixels(flat_rgba(pixels), stride=4, alpha_cutoff=201)
        assert len(sampled) == 0

    @pytest.mark.parametrize("stride", [0, -4, 3, 10])
    def test_invalid_stride_raises(self, stride):
        with pytest.raises(ValueError):
            sample_pixels(flat_rgba([(0, 0, 0, 255)]), stride=stride)

    def test_empty_buffer(self):
        assert len(sample_pixels(b"", stride=16)) == 0


class TestSampleColors:
    """Test conversion of samples to ColorInfo."""

    def test_samples_keep_order_and_duplicates(self):
        pixels = [(255, 0, 0, 255), (0, 0, 255, 255), (255, 0, 0, 255)]
        colors = sample_colors(flat_rgba(pixels), stride=4)
        assert [c.hex for c in colors] == ["#ff0000", "#0000ff", "#ff0000"]
        assert colors[0].hsl == (0, 100, 50)

    def test_channels_are_python_ints(self):
        colors = sample_colors(flat_rgba([(12, 34, 56, 255)]), stride=4)
        assert all(type(c) is int for c in colors[0].rgb)


class TestRankByFrequency:
    """Test frequency ranking."""

    def test_most_frequent_first(self):
        red, green, blue = color_from_rgb(255, 0, 0), color_from_rgb(0, 255, 0), color_from_rgb(0, 0, 255)
        ranked = rank_by_frequency([red, blue, blue, green, blue, green], limit=10)
        assert [c.hex for c in ranked] == ["#0000ff", "#00ff00", "#ff0000"]

    def test_ties_keep_first_seen_order(self):
        red, green = color_from_rgb(255, 0, 0), color_from_rgb(0, 255, 0)
        ranked = rank_by_frequency([green, red, red, green], limit=10)
        assert [c.hex for c in ranked] == ["#00ff00", "#ff0000"]

    def test_limit(self):
        colors = [color_from_rgb(i, 0, 0) for i in range(30)]
        assert len(rank_by_frequency(colors, limit=12)) == 12

    def test_empty(self):
        assert rank_by_frequency([], limit=20) == []


class TestExtractColorsFromImage:
    """Test simple (coarse stride) extraction."""

    def test_two_color_image(self):
        img = np.zeros((10, 10, 4), dtype=np.uint8)
        img[:, :] = (255, 0, 0, 255)
        img[:3, :] = (0, 0, 255, 255)
        colors = extract_colors_from_image(PixelBuffer(10, 10, img.reshape(-1)))
        assert [c.hex for c in colors] == ["#ff0000", "#0000ff"]

    def test_caps_at_twenty_distinct_colors(self):
        # 100 distinct colors, every pixel sampled with a stride of 4 bytes
        pixels = [(i, 255 - i, 7, 255) for i in range(100)]
        colors = extract_colors_from_image(flat_rgba(pixels), stride=4)
        assert len(colors) == 20
        assert len({c.hex for c in colors}) == 20

    def test_fully_transparent_buffer_yields_nothing(self):
        img = np.zeros((20, 20, 4), dtype=np.uint8)
        img[:, :] = (200, 100, 50, 0)
        assert extract_colors_from_image(PixelBuffer(20, 20, img)) == []

    def test_empty_buffer_yields_nothing(self):
        assert extract_colors_from_image(PixelBuffer(0, 0, b"")) == []

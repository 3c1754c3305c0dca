"""Tests for histogram auto brightness / contrast."""

import numpy as np
import pytest

from ascii_blocks.contrast import (
    auto_brightness_contrast,
    histogram,
    stretch_bounds,
    stretch_params,
)
from ascii_blocks.errors import DegenerateHistogram
from ascii_blocks.pixels import PixelBuffer
from conftest import solid, split


def two_tone(alpha=255):
    """20x20: left half gray 100, right half gray 150."""
    arr = np.empty((20, 20, 4), dtype=np.uint8)
    arr[:, :10, :3] = 100
    arr[:, 10:, :3] = 150
    arr[..., 3] = alpha
    return PixelBuffer.from_array(arr)


class TestStretchBounds:
    def test_small_image_clips_nothing(self):
        hist = np.zeros(256, dtype=np.int64)
        hist[0] = 32
        hist[255] = 32
        # 64 pixels -> clip count 0: min is bin 0, max the last bin below 64
        assert stretch_bounds(hist) == (0, 254)

    def test_clip_count(self):
        hist = np.zeros(256, dtype=np.int64)
        hist[100] = 200
        hist[150] = 200
        # 400 pixels -> clip count 2
        assert stretch_bounds(hist) == (100, 149)

    def test_clip_count_rounds_down(self):
        hist = np.zeros(256, dtype=np.int64)
        hist[10] = 50
        hist[200] = 50
        # 100 pixels -> clip count 0, not 0.5: empty bin 0 already reaches it
        assert stretch_bounds(hist) == (0, 199)

    def test_clip_count_rounds_down_in_stretch(self):
        buf = split(10, 10, left=10, right=200)
        alpha, beta = stretch_params(buf)
        assert alpha == pytest.approx(255 / 199)
        assert beta == 0

    def test_single_black_bin(self):
        hist = np.zeros(256, dtype=np.int64)
        hist[0] = 10
        assert stretch_bounds(hist) == (0, -1)

    def test_histogram_counts(self):
        gray = np.array([[0, 0, 5], [255, 5, 5]], dtype=np.uint8)
        hist = histogram(gray)
        assert hist.shape == (256,)
        assert hist[0] == 2 and hist[5] == 3 and hist[255] == 1
        assert hist.sum() == 6


class TestAutoBrightnessContrast:
    def test_full_range_image_unchanged(self):
        buf = split(8, 8, left=0, right=255)
        alpha, beta = stretch_params(buf)
        assert alpha == pytest.approx(1.0, abs=0.01)
        assert beta == 0
        out = auto_brightness_contrast(buf)
        assert np.array_equal(out.data, buf.data)

    def test_stretches_low_contrast(self):
        out = auto_brightness_contrast(two_tone())
        px = out.rgba
        assert px[0, 0, :3].tolist() == [0, 0, 0]
        assert px[0, 19, :3].tolist() == [255, 255, 255]

    def test_returns_new_buffer(self):
        buf = two_tone()
        before = buf.data.copy()
        out = auto_brightness_contrast(buf)
        assert out is not buf
        assert np.array_equal(buf.data, before)
        assert (out.width, out.height) == (buf.width, buf.height)

    def test_alpha_channel_stretched_by_default(self):
        out = auto_brightness_contrast(two_tone(alpha=128))
        # 128 * 255/49 - 100 * 255/49 = 145.7
        assert int(out.rgba[0, 0, 3]) == 146

    def test_alpha_channel_kept_when_disabled(self):
        out = auto_brightness_contrast(two_tone(alpha=128), stretch_alpha=False)
        assert np.all(out.rgba[..., 3] == 128)
        assert out.rgba[0, 19, :3].tolist() == [255, 255, 255]

    @pytest.mark.parametrize("value", [0, 1, 255])
    def test_uniform_image_is_degenerate(self, value):
        with pytest.raises(DegenerateHistogram):
            auto_brightness_contrast(solid(20, 20, (value, value, value)))

    def test_output_in_range(self, noise_buffer):
        out = auto_brightness_contrast(noise_buffer)
        assert out.data.dtype == np.uint8
        assert out.data.size == noise_buffer.data.size

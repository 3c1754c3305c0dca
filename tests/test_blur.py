"""Tests for the separable Gaussian blur."""

import math

import numpy as np
import pytest

from ascii_blocks.blur import gaussian_blur, gaussian_kernel, kernel_size
from ascii_blocks.pixels import to_luminance
from conftest import solid


def reference_blur(gray, sigma):
    """Straight per-pixel loops: skip taps outside the field, truncate per pass."""
    h, w = gray.shape
    kernel = gaussian_kernel(sigma)
    half = len(kernel) // 2
    temp = np.zeros((h, w), dtype=np.uint8)
    result = np.zeros((h, w), dtype=np.uint8)
    for y in range(h):
        for x in range(w):
            s = 0.0
            for i, k in enumerate(kernel):
                ix = x + i - half
                if 0 <= ix < w:
                    s += float(gray[y, ix]) * float(k)
            temp[y, x] = int(s)
    for y in range(h):
        for x in range(w):
            s = 0.0
            for i, k in enumerate(kernel):
                iy = y + i - half
                if 0 <= iy < h:
                    s += float(temp[iy, x]) * float(k)
            result[y, x] = int(s)
    return result


class TestKernel:
    @pytest.mark.parametrize("sigma", [0.1, 0.5, 1.0, 1.3, 2.0, 3.7])
    def test_sums_to_one(self, sigma):
        assert float(gaussian_kernel(sigma).astype(np.float64).sum()) == pytest.approx(1.0, abs=1e-6)

    @pytest.mark.parametrize("sigma, size", [(0.1, 1), (0.5, 3), (1.0, 6), (1.3, 8), (2.0, 12)])
    def test_size(self, sigma, size):
        assert kernel_size(sigma) == size
        assert len(gaussian_kernel(sigma)) == size

    @pytest.mark.parametrize("sigma", [0.01, 0.03])
    def test_tiny_sigma_is_unit_impulse(self, sigma):
        k = gaussian_kernel(sigma)
        assert not np.isnan(k).any()
        assert k.tolist() == [1.0]

    def test_float32(self):
        assert gaussian_kernel(1.0).dtype == np.float32

    def test_samples_offset_from_half_size(self):
        # size 3, centre 1.5: samples at -1.5, -0.5, 0.5
        k = gaussian_kernel(0.5).astype(np.float64)
        raw = np.array([math.exp(-(x * x) / 0.5) for x in (-1.5, -0.5, 0.5)])
        assert k == pytest.approx(raw / raw.sum(), rel=1e-6)
        assert k[1] == pytest.approx(k[2], rel=1e-6)
        assert k[0] < k[1]


class TestGaussianBlur:
    @pytest.mark.parametrize("sigma", [0.5, 1.0, 1.7])
    def test_matches_reference_loops(self, noise_buffer, sigma):
        gray = to_luminance(noise_buffer)
        assert np.array_equal(gaussian_blur(gray, sigma), reference_blur(gray, sigma))

    def test_accepts_pixel_buffer(self, noise_buffer):
        gray = to_luminance(noise_buffer)
        assert np.array_equal(gaussian_blur(noise_buffer, 1.0), gaussian_blur(gray, 1.0))

    def test_shape_and_dtype(self, noise_buffer):
        out = gaussian_blur(noise_buffer, 1.0)
        assert out.shape == (noise_buffer.height, noise_buffer.width)
        assert out.dtype == np.uint8

    def test_zero_field_stays_zero(self):
        out = gaussian_blur(np.zeros((9, 9), dtype=np.uint8), 2.0)
        assert not out.any()

    def test_border_darkens_where_taps_are_skipped(self):
        out = gaussian_blur(solid(16, 16, (200, 200, 200)), 1.0)
        assert out[0, 0] < out[8, 8]
        assert out[8, 8] >= 198

    @pytest.mark.parametrize("sigma", [0.01, 0.03])
    def test_tiny_sigma_leaves_field_unchanged(self, noise_buffer, sigma):
        gray = to_luminance(noise_buffer)
        assert np.array_equal(gaussian_blur(gray, sigma), gray)

    def test_does_not_modify_input(self, noise_buffer):
        gray = to_luminance(noise_buffer)
        before = gray.copy()
        gaussian_blur(gray, 1.0)
        assert np.array_equal(gray, before)

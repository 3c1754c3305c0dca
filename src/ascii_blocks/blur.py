"""Separable Gaussian blur over a luminance field."""

import math

import numpy as np

from .pixels import PixelBuffer, to_luminance


def kernel_size(sigma: float) -> int:
    return math.ceil(6 * sigma)


def gaussian_kernel(sigma: float) -> np.ndarray:
    """
    Normalized 1-D Gaussian kernel of ceil(6*sigma) float32 taps.

    Samples sit at i - size/2, so even sized kernels are not centred on a tap.
    Very small sigmas underflow every tap to zero; the kernel then collapses
    to the unit impulse.
    """
    size = kernel_size(sigma)
    half = size / 2
    kernel = np.empty(size, dtype=np.float32)
    for i in range(size):
        x = i - half
        kernel[i] = math.exp(-(x * x) / (2 * sigma * sigma))

    total = 0.0
    for v in kernel:
        total += float(v)
    if total == 0.0:
        return np.ones(1, dtype=np.float32)
    return (kernel.astype(np.float64) / total).astype(np.float32)


def _convolve_axis(src: np.ndarray, kernel: np.ndarray, axis: int) -> np.ndarray:
    """One 1-D pass; taps falling outside the field are skipped."""
    n = src.shape[axis]
    offset = len(kernel) // 2
    values = src.astype(np.float64)
    acc = np.zeros(src.shape, dtype=np.float64)

    # Accumulate tap by tap so each pixel sums its products in kernel order.
    for i, weight in enumerate(kernel):
        d = i - offset
        lo, hi = max(0, -d), min(n, n - d)
        if lo >= hi:
            continue
        if axis == 1:
            acc[:, lo:hi] += values[:, lo + d:hi + d] * float(weight)
        else:
            acc[lo:hi, :] += values[lo + d:hi + d, :] * float(weight)

    return np.trunc(acc).astype(np.uint8)


def gaussian_blur(field, sigma: float) -> np.ndarray:
    """
    Blur a luminance field (or an RGBA PixelBuffer, reduced first).

    Horizontal pass then vertical pass, each truncated to uint8.
    """
    if isinstance(field, PixelBuffer):
        field = to_luminance(field)
    kernel = gaussian_kernel(sigma)
    temp = _convolve_axis(field, kernel, axis=1)
    return _convolve_axis(temp, kernel, axis=0)

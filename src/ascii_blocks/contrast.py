"""Histogram based auto brightness / contrast."""

import logging

import numpy as np

from .errors import DegenerateHistogram
from .pixels import PixelBuffer, to_luminance

LOG = logging.getLogger(__name__)

# Share of the histogram mass clipped from the two ends together.
CLIP_PERCENT = 1


def histogram(gray: np.ndarray) -> np.ndarray:
    """256-bin histogram of a luminance field."""
    return np.bincount(gray.reshape(-1), minlength=256)


def stretch_bounds(hist: np.ndarray) -> tuple[int, int]:
    """
    Return (min_gray, max_gray) after clipping CLIP_PERCENT of the mass.

    min_gray is the first bin whose cumulative count reaches the clip count,
    max_gray the last bin whose cumulative count stays below total - clip.
    max_gray is -1 when no bin qualifies.
    """
    acc = np.cumsum(hist, dtype=np.int64)
    total = int(acc[-1])
    clip = total * CLIP_PERCENT // 100 // 2

    min_gray = int(np.argmax(acc >= clip))
    below = np.nonzero(acc < total - clip)[0]
    max_gray = int(below[-1]) if below.size else -1
    return min_gray, max_gray


def stretch_params(buf: PixelBuffer) -> tuple[float, float]:
    """Linear (alpha, beta) that maps min_gray to 0 and max_gray to 255."""
    min_gray, max_gray = stretch_bounds(histogram(to_luminance(buf)))
    if max_gray <= min_gray:
        raise DegenerateHistogram(
            f"cannot stretch histogram: min_gray={min_gray} max_gray={max_gray}"
        )
    alpha = 255 / (max_gray - min_gray)
    beta = -min_gray * alpha
    LOG.debug(
        "Stretch: min_gray=%d max_gray=%d alpha=%.4f beta=%.4f",
        min_gray, max_gray, alpha, beta,
    )
    return alpha, beta


def auto_brightness_contrast(buf: PixelBuffer, stretch_alpha: bool = True) -> PixelBuffer:
    """
    Apply the linear stretch to every channel and return a new buffer.

    The alpha channel is stretched like the color channels unless
    stretch_alpha is False, in which case it is copied through.
    Results are clamped to 0..255 and rounded half to even.
    """
    alpha, beta = stretch_params(buf)
    px = buf.data.astype(np.float64)
    out = np.clip(np.rint(px * alpha + beta), 0, 255).astype(np.uint8)
    if not stretch_alpha:
        out[3::4] = buf.data[3::4]
    return PixelBuffer(buf.width, buf.height, out)

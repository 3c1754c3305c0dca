"""Difference-of-Gaussians edge emphasis, Sobel gradients and edge glyphs."""

import logging
import math
from dataclasses import dataclass

import numpy as np

from .blur import gaussian_blur
from .pixels import PixelBuffer, to_luminance

LOG = logging.getLogger(__name__)

EDGE_THRESHOLD = 50
DOG_OFFSET = 128

# Period 4 over 8 slots: only four distinct direction buckets are reachable.
EDGE_CHARS = ("-", "\\", "|", "/", "-", "\\", "|", "/")

SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]])
SOBEL_Y = np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]])


@dataclass(frozen=True, eq=False)
class GradientField:
    """Per-pixel gradient magnitude and direction (radians), both float32 HxW."""

    magnitude: np.ndarray
    direction: np.ndarray

    @property
    def shape(self):
        return self.magnitude.shape


def difference_of_gaussians(field, sigma1: float, sigma2: float) -> np.ndarray:
    """blur(sigma1) - blur(sigma2), offset by 128 and clamped to 0..255."""
    if isinstance(field, PixelBuffer):
        field = to_luminance(field)

    blurred = {}
    for sigma in (sigma1, sigma2):
        if sigma not in blurred:
            blurred[sigma] = gaussian_blur(field, sigma).astype(np.int16)

    diff = blurred[sigma1] - blurred[sigma2] + DOG_OFFSET
    return np.clip(diff, 0, 255).astype(np.uint8)


def sobel(field: np.ndarray) -> GradientField:
    """
    3x3 Sobel over a uint8 field.

    The one pixel border is left at zero magnitude and zero direction.
    """
    h, w = field.shape
    magnitude = np.zeros((h, w), dtype=np.float32)
    direction = np.zeros((h, w), dtype=np.float32)
    if h < 3 or w < 3:
        return GradientField(magnitude, direction)

    a = field.astype(np.int32)
    gx = np.zeros((h - 2, w - 2), dtype=np.int32)
    gy = np.zeros((h - 2, w - 2), dtype=np.int32)
    for i in range(3):
        for j in range(3):
            window = a[i:h - 2 + i, j:w - 2 + j]
            if SOBEL_X[i, j]:
                gx += SOBEL_X[i, j] * window
            if SOBEL_Y[i, j]:
                gy += SOBEL_Y[i, j] * window

    gxf = gx.astype(np.float64)
    gyf = gy.astype(np.float64)
    magnitude[1:-1, 1:-1] = np.sqrt(gxf * gxf + gyf * gyf)
    direction[1:-1, 1:-1] = np.arctan2(gyf, gxf)
    return GradientField(magnitude, direction)


def detect_edges(field, sigma1: float, sigma2: float) -> GradientField:
    """Sobel gradients of the difference-of-Gaussians of a field or buffer."""
    dog = difference_of_gaussians(field, sigma1, sigma2)
    grad = sobel(dog)
    LOG.debug(
        "Edges: sigma1=%s sigma2=%s max magnitude=%.1f",
        sigma1, sigma2, float(grad.magnitude.max()) if grad.magnitude.size else 0.0,
    )
    return grad


def edge_char(magnitude: float, direction: float) -> str | None:
    """
    Directional glyph for a gradient, or None below EDGE_THRESHOLD.

    The direction is shifted into 0..360 degrees and bucketed into 45 degree
    sectors centred on the axes and diagonals (folded mod 180).
    """
    if magnitude < EDGE_THRESHOLD:
        return None
    angle = (direction + math.pi) * (180 / math.pi)
    index = math.floor(math.fmod(angle + 22.5, 180) / 45)
    if not 0 <= index < len(EDGE_CHARS):
        return None
    return EDGE_CHARS[index]

"""Shared fixtures: small synthetic RGBA buffers."""

import numpy as np
import pytest

from ascii_blocks.config import Config
from ascii_blocks.pixels import PixelBuffer


def solid(width, height, rgb=(0, 0, 0), alpha=255):
    arr = np.empty((height, width, 4), dtype=np.uint8)
    arr[..., :3] = rgb
    arr[..., 3] = alpha
    return PixelBuffer.from_array(arr)


def split(width, height, left=0, right=255, at=None):
    """Left part gray `left`, right part gray `right`, split at column `at`."""
    at = width // 2 if at is None else at
    arr = np.full((height, width, 4), 255, dtype=np.uint8)
    arr[:, :at, :3] = left
    arr[:, at:, :3] = right
    return PixelBuffer.from_array(arr)


@pytest.fixture
def plain_config():
    """Brightness-only settings: no auto adjust, no color, no edges."""
    return Config(auto_adjust=False, color=False, detect_edges=False)


@pytest.fixture
def noise_buffer():
    rng = np.random.default_rng(1234)
    arr = rng.integers(0, 256, size=(23, 37, 4), dtype=np.uint8)
    arr[..., 3] = 255
    return PixelBuffer.from_array(arr)

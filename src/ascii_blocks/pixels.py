"""Pixel buffers and luminance reduction."""

from dataclasses import dataclass

import numpy as np
from PIL import Image

from .errors import InvalidDimensions

# ITU-R BT.601 weights
LUMA_R = 0.299
LUMA_G = 0.587
LUMA_B = 0.114


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Row-major RGBA pixels, one uint8 per channel."""

    width: int
    height: int
    data: np.ndarray

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise InvalidDimensions(
                f"negative image size {self.width}x{self.height}"
            )
        data = self.data
        if isinstance(data, (bytes, bytearray, memoryview)):
            data = np.frombuffer(data, dtype=np.uint8)
        data = np.asarray(data, dtype=np.uint8).reshape(-1)
        expected = self.width * self.height * 4
        if data.size != expected:
            raise InvalidDimensions(
                f"buffer has {data.size} bytes, expected {expected} "
                f"for {self.width}x{self.height} RGBA"
            )
        object.__setattr__(self, "data", data)

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelBuffer":
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        w, h = img.size
        return cls(w, h, np.asarray(img, dtype=np.uint8).reshape(-1))

    @classmethod
    def from_array(cls, rgba: np.ndarray) -> "PixelBuffer":
        """Build from an (H, W, 4) array."""
        rgba = np.asarray(rgba)
        if rgba.ndim != 3 or rgba.shape[2] != 4:
            raise InvalidDimensions(f"expected HxWx4 array, got shape {rgba.shape}")
        h, w = rgba.shape[:2]
        return cls(w, h, rgba.reshape(-1))

    @property
    def rgba(self) -> np.ndarray:
        return self.data.reshape(self.height, self.width, 4)

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.ascontiguousarray(self.rgba))


def luminance(r, g, b):
    """Perceptual luminance, rounded half up. Works on scalars and arrays."""
    return np.floor(LUMA_R * r + LUMA_G * g + LUMA_B * b + 0.5)


def to_luminance(buf: PixelBuffer) -> np.ndarray:
    """Reduce an RGBA buffer to an (H, W) uint8 luminance field."""
    px = buf.rgba.astype(np.float64)
    gray = luminance(px[..., 0], px[..., 1], px[..., 2])
    return gray.astype(np.uint8)

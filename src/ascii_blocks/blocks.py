"""Per-block accumulation of brightness, color and gradient statistics."""

from dataclasses import dataclass

import numpy as np

from .config import Config
from .edges import GradientField
from .pixels import PixelBuffer, to_luminance


@dataclass(frozen=True)
class BlockStats:
    sum_brightness: int
    sum_color: tuple[int, int, int]
    pixel_count: int
    sum_magnitude: float = 0.0
    sum_direction: float = 0.0


def block_extent(width: int, height: int, x: int, y: int, block_size: int) -> tuple[int, int]:
    """Block width and height; edge blocks are truncated, never padded."""
    return max(0, min(block_size, width - x)), max(0, min(block_size, height - y))


def _sequential_sum(values: np.ndarray, axis: int = -1):
    # cumsum adds strictly left to right, unlike np.sum's pairwise reduction
    if values.size == 0:
        shape = list(values.shape)
        del shape[axis]
        return np.zeros(shape, dtype=np.float64)
    return np.take(np.cumsum(values, axis=axis, dtype=np.float64), -1, axis=axis)


def aggregate_block(
    buf: PixelBuffer,
    x: int,
    y: int,
    config: Config,
    gradient: GradientField | None = None,
    gray: np.ndarray | None = None,
) -> BlockStats:
    """
    Accumulate the block whose top-left pixel is (x, y).

    gray may carry a precomputed luminance field of buf.
    """
    bw, bh = block_extent(buf.width, buf.height, x, y, config.block_size)
    if gray is None:
        gray = to_luminance(buf)

    sum_brightness = int(gray[y:y + bh, x:x + bw].sum(dtype=np.int64))
    sum_color = (0, 0, 0)
    if config.color:
        rgb = buf.rgba[y:y + bh, x:x + bw, :3].reshape(-1, 3)
        sum_color = tuple(int(v) for v in rgb.sum(axis=0, dtype=np.int64))

    sum_mag = sum_dir = 0.0
    if config.detect_edges and gradient is not None:
        sum_mag = float(_sequential_sum(gradient.magnitude[y:y + bh, x:x + bw].reshape(-1)))
        sum_dir = float(_sequential_sum(gradient.direction[y:y + bh, x:x + bw].reshape(-1)))

    return BlockStats(sum_brightness, sum_color, bw * bh, sum_mag, sum_dir)


def _row_blocks(band: np.ndarray, block_size: int) -> np.ndarray:
    """Split an (h, W, ...) band into (n_blocks, h * block_size, ...) in row-major block order."""
    h, w = band.shape[:2]
    n = -(-w // block_size)
    pad = [(0, 0), (0, n * block_size - w)] + [(0, 0)] * (band.ndim - 2)
    padded = np.pad(band, pad)
    blocks = padded.reshape((h, n, block_size) + band.shape[2:])
    blocks = np.swapaxes(blocks, 0, 1)
    return blocks.reshape((n, h * block_size) + band.shape[2:])


def aggregate_row(
    buf: PixelBuffer,
    y: int,
    config: Config,
    gradient: GradientField | None = None,
    gray: np.ndarray | None = None,
) -> list[BlockStats]:
    """
    Accumulate every block of the block row starting at pixel row y.

    Equivalent to calling aggregate_block for x = 0, bs, 2*bs, ... but
    vectorized across the row. Padding only ever adds zeros, so sums and
    their order of accumulation match the per-block path.
    """
    bs = config.block_size
    if gray is None:
        gray = to_luminance(buf)
    _, bh = block_extent(buf.width, buf.height, 0, y, bs)
    rows = slice(y, y + bh)
    xs = range(0, buf.width, bs)
    n = len(xs)

    brightness = _row_blocks(gray[rows], bs).sum(axis=1, dtype=np.int64)

    if config.color:
        colors = _row_blocks(buf.rgba[rows, :, :3], bs).sum(axis=1, dtype=np.int64)
    else:
        colors = np.zeros((n, 3), dtype=np.int64)

    if config.detect_edges and gradient is not None:
        mags = _sequential_sum(_row_blocks(gradient.magnitude[rows], bs), axis=1)
        dirs = _sequential_sum(_row_blocks(gradient.direction[rows], bs), axis=1)
    else:
        mags = dirs = np.zeros(n, dtype=np.float64)

    stats = []
    for i, x in enumerate(xs):
        bw, _ = block_extent(buf.width, buf.height, x, y, bs)
        stats.append(
            BlockStats(
                int(brightness[i]),
                (int(colors[i, 0]), int(colors[i, 1]), int(colors[i, 2])),
                bw * bh,
                float(mags[i]),
                float(dirs[i]),
            )
        )
    return stats

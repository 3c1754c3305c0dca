"""Map block statistics to one glyph and one color."""

import math

from .blocks import BlockStats
from .config import Config
from .edges import edge_char
from .errors import EmptyBlock

WHITE = (255, 255, 255)


def _require_pixels(stats: BlockStats) -> None:
    if stats.pixel_count <= 0:
        raise EmptyBlock("block contains no pixels")


def ramp_char(brightness: int, ramp: str) -> str:
    """Glyph for a clamped 0..255 brightness; 0 is always a space."""
    if brightness == 0:
        return " "
    index = brightness * len(ramp) // 256
    return ramp[min(index, len(ramp) - 1)]


def select_char(stats: BlockStats, config: Config) -> str:
    """
    Pick the block glyph.

    An edge glyph wins over the brightness ramp when edge detection is on and
    the block's average gradient clears the edge threshold.
    """
    _require_pixels(stats)
    avg = stats.sum_brightness // stats.pixel_count
    boosted = math.floor(avg * config.brightness)
    clamped = max(0, min(255, boosted))

    if config.detect_edges:
        ch = edge_char(
            stats.sum_magnitude / stats.pixel_count,
            stats.sum_direction / stats.pixel_count,
        )
        if ch is not None:
            return ch

    return ramp_char(clamped, config.ramp)


def select_color(stats: BlockStats, config: Config) -> tuple[int, int, int]:
    """Average block color, white when color is off, optionally inverted."""
    if not config.color:
        return WHITE
    _require_pixels(stats)
    r, g, b = (s // stats.pixel_count for s in stats.sum_color)
    if config.invert_color:
        return 255 - r, 255 - g, 255 - b
    return r, g, b


def select(stats: BlockStats, config: Config) -> tuple[str, tuple[int, int, int]]:
    return select_char(stats, config), select_color(stats, config)

"""
Image to glyph grid pipeline.

generate() runs, in order: optional auto contrast, optional DoG + Sobel edge
detection, then block aggregation and glyph/color selection for every block.
Nothing is cached between calls; the same buffer and config always give the
same grid.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable

from .blocks import aggregate_row
from .config import Config
from .contrast import auto_brightness_contrast
from .edges import detect_edges
from .errors import EmptyBlock, GenerationCancelled
from .glyphs import select
from .pixels import PixelBuffer, to_luminance

LOG = logging.getLogger(__name__)

RGB = tuple[int, int, int]


@dataclass
class GlyphGrid:
    """Glyph rows plus a same-shaped grid of RGB block colors."""

    lines: list[str]
    colors: list[list[RGB]]
    block_size: int = 8
    source_size: tuple[int, int] = (0, 0)
    invert_color: bool = False
    color: bool = True

    @property
    def text(self) -> str:
        """Rows joined by newlines, with a trailing newline."""
        return "".join(line + "\n" for line in self.lines)

    @property
    def rows(self) -> int:
        return len(self.lines)

    @property
    def cols(self) -> int:
        return len(self.lines[0]) if self.lines else 0

    def cells(self):
        """Yield (row, col, char, color) for every block."""
        for r, (line, colors) in enumerate(zip(self.lines, self.colors)):
            for c, (ch, rgb) in enumerate(zip(line, colors)):
                yield r, c, ch, rgb


def generate(
    buf: PixelBuffer,
    config: Config | None = None,
    should_cancel: Callable[[], bool] | None = None,
) -> GlyphGrid:
    """
    Convert a pixel buffer into a GlyphGrid.

    should_cancel, when given, is polled between block rows; a true result
    aborts the run with GenerationCancelled. Any error aborts the whole run
    and no partial grid is returned.
    """
    config = (config or Config()).validate()
    if buf.width == 0 or buf.height == 0:
        raise EmptyBlock(f"image has no pixels ({buf.width}x{buf.height})")

    t0 = time.perf_counter()
    LOG.debug("Generating %dx%d with %s", buf.width, buf.height, config)

    if config.auto_adjust:
        buf = auto_brightness_contrast(buf, stretch_alpha=config.stretch_alpha)
        LOG.debug("Auto adjust done in %.3fs", time.perf_counter() - t0)

    gradient = None
    if config.detect_edges:
        gradient = detect_edges(buf, config.sigma1, config.sigma2)
        LOG.debug("Edge detection done in %.3fs", time.perf_counter() - t0)

    gray = to_luminance(buf)
    lines: list[str] = []
    colors: list[list[RGB]] = []
    for y in range(0, buf.height, config.block_size):
        if should_cancel is not None and should_cancel():
            raise GenerationCancelled(f"cancelled at pixel row {y}")
        row_chars = []
        row_colors = []
        for stats in aggregate_row(buf, y, config, gradient, gray):
            ch, rgb = select(stats, config)
            row_chars.append(ch)
            row_colors.append(rgb)
        lines.append("".join(row_chars))
        colors.append(row_colors)

    elapsed = time.perf_counter() - t0
    LOG.debug("Grid %dx%d done in %.3fs", len(lines[0]), len(lines), elapsed)
    return GlyphGrid(
        lines=lines,
        colors=colors,
        block_size=config.block_size,
        source_size=(buf.width, buf.height),
        invert_color=config.invert_color,
        color=config.color,
    )

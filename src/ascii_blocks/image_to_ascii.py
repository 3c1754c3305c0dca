#!/usr/bin/env python3
"""Convert an image file to a block glyph grid (plain text)."""

import argparse
import logging
import sys
import time

from PIL import Image

from .config import Config, load_config
from .errors import AsciiBlocksError
from .pipeline import generate
from .pixels import PixelBuffer

LOG = logging.getLogger("ascii_blocks")


def setup_logging(debug: bool, log_path: str | None = None) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    LOG.setLevel(logging.DEBUG if (debug or log_path) else logging.WARNING)

    fmt = logging.Formatter("%(levelname)s: %(message)s")

    handlers: list[logging.Handler] = []

    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level)
    sh.setFormatter(fmt)
    handlers.append(sh)

    if log_path:
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s: %(message)s"))
        handlers.append(fh)

    LOG.handlers[:] = handlers
    LOG.propagate = False       # prevent double logging via root logger


def load_buffer(path: str) -> PixelBuffer:
    """Decode an image file into an RGBA pixel buffer."""
    try:
        with Image.open(path) as img:
            buf = PixelBuffer.from_image(img)
    except OSError as e:
        raise SystemExit(f"Cannot open image {path}: {e}")
    LOG.debug("Loaded %s: %dx%d", path, buf.width, buf.height)
    return buf


def add_pipeline_args(ap: argparse.ArgumentParser) -> None:
    """Conversion flags shared by every command; unset flags keep config values."""
    g = ap.add_argument_group("conversion")
    g.add_argument("--config", default=None, help="JSON settings file")
    g.add_argument("-b", "--block-size", type=int, default=None,
                   help="Pixels per block edge (default: 8)")
    g.add_argument("--brightness", type=float, default=None,
                   help="Brightness multiplier (default: 1.0)")
    g.add_argument("--chars", default=None,
                   help='Glyph ramp, darkest first (default: " .:-=+*#%%@")')
    g.add_argument("--auto-adjust", action=argparse.BooleanOptionalAction, default=None,
                   help="Histogram auto brightness/contrast (default: on)")
    g.add_argument("--stretch-alpha", action=argparse.BooleanOptionalAction, default=None,
                   help="Auto adjust also stretches the alpha channel (default: on)")
    g.add_argument("--edges", dest="detect_edges", action=argparse.BooleanOptionalAction,
                   default=None, help="Directional edge glyphs (default: off)")
    g.add_argument("--sigma1", type=float, default=None, help="Edge: inner blur sigma (default: 0.5)")
    g.add_argument("--sigma2", type=float, default=None, help="Edge: outer blur sigma (default: 1.0)")
    g.add_argument("--color", action=argparse.BooleanOptionalAction, default=None,
                   help="Average block colors (default: on)")
    g.add_argument("--invert", dest="invert_color", action=argparse.BooleanOptionalAction,
                   default=None, help="Invert block colors (default: off)")
    g.add_argument("--debug", action="store_true", help="Debug logging to stderr")
    g.add_argument("--log", default=None, help="Also write a debug log to FILE")


def config_from_args(args: argparse.Namespace) -> Config:
    base = load_config(args.config) if args.config else Config()
    return base.with_overrides(
        block_size=args.block_size,
        brightness=args.brightness,
        ramp=args.chars,
        auto_adjust=args.auto_adjust,
        stretch_alpha=args.stretch_alpha,
        detect_edges=args.detect_edges,
        sigma1=args.sigma1,
        sigma2=args.sigma2,
        color=args.color,
        invert_color=args.invert_color,
    ).validate()


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="ascii-blocks image",
        description="Block-averaged ASCII art with optional edge glyphs",
    )
    ap.add_argument("input", help="Input image path")
    ap.add_argument(
        "-o", "--output", default=None, help="Output text file (default: stdout)"
    )
    add_pipeline_args(ap)
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.debug, args.log)
    t0 = time.perf_counter()

    try:
        config = config_from_args(args)
        grid = generate(load_buffer(args.input), config)
    except AsciiBlocksError as e:
        LOG.error("%s", e)
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(grid.text)
    else:
        sys.stdout.write(grid.text)

    LOG.debug("Wrote %d rows x %d cols in %.3fs", grid.rows, grid.cols, time.perf_counter() - t0)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""Draw a glyph grid back into a bitmap the size of the source image."""

import argparse
import os
import platform
import time

from PIL import Image, ImageDraw, ImageFont

from .errors import AsciiBlocksError
from .image_to_ascii import (
    LOG,
    add_pipeline_args,
    config_from_args,
    load_buffer,
    setup_logging,
)
from .pipeline import GlyphGrid, generate

# Glyphs are drawn at this multiple of the source size, then downsampled.
SCALE_FACTOR = 4


def find_default_mono_font():
    system = platform.system().lower()

    candidates = []
    if "darwin" in system:  # macOS
        candidates = [
            "/System/Library/Fonts/Menlo.ttc",
            "/System/Library/Fonts/Monaco.ttf",
            "/Library/Fonts/Courier New.ttf",
            "/System/Library/Fonts/Supplemental/Courier New.ttf",
        ]
    elif "windows" in system:
        windir = os.environ.get("WINDIR", r"C:\Windows")
        candidates = [
            os.path.join(windir, "Fonts", "CASCADIAMONO.TTF"),
            os.path.join(windir, "Fonts", "CONSOLA.TTF"),
            os.path.join(windir, "Fonts", "LUCON.TTF"),
        ]
    else:  # Linux and others
        candidates = [
            "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
            "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
            "/usr/share/fonts/truetype/noto/NotoSansMono-Regular.ttf",
            "/usr/share/fonts/truetype/ubuntu/UbuntuMono-R.ttf",
        ]

    for p in candidates:
        if os.path.exists(p):
            return p
    return None


def load_font(font_path: str | None, font_size: int):
    if not font_path:
        font_path = find_default_mono_font()
    if font_path:
        LOG.debug("Using font %s (size=%d)", font_path, font_size)
        return ImageFont.truetype(font_path, font_size)
    LOG.debug("Using PIL default font (size=%d)", font_size)
    return ImageFont.load_default(size=font_size)


def rasterize(grid: GlyphGrid, scale: int = SCALE_FACTOR, font_path: str | None = None) -> Image.Image:
    """
    Render each glyph in its block color and return an RGB image of the
    grid's source size on black (white when colors are inverted).
    """
    width, height = grid.source_size
    cell = grid.block_size * scale
    layer = Image.new("RGBA", (width * scale, height * scale), (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    font = load_font(font_path, cell)

    for r, c, ch, rgb in grid.cells():
        if ch.isspace():
            continue
        # Center glyph in its cell via bbox
        bbox = draw.textbbox((0, 0), ch, font=font)
        tw, th = bbox[2] - bbox[0], bbox[3] - bbox[1]
        x = c * cell + (cell - tw) // 2 - bbox[0]
        y = r * cell + (cell - th) // 2 - bbox[1]
        draw.text((x, y), ch, fill=rgb + (255,), font=font)

    small = layer.resize((width, height), resample=Image.Resampling.LANCZOS)
    background = (255, 255, 255, 255) if grid.invert_color else (0, 0, 0, 255)
    out = Image.new("RGBA", (width, height), background)
    out.alpha_composite(small)
    return out.convert("RGB")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="ascii-blocks raster",
        description="Convert an image to glyph art and save it as a bitmap",
    )
    ap.add_argument("input", help="Input image path")
    ap.add_argument("-o", "--output", required=True, help="Output image file (e.g. art.png)")
    ap.add_argument("--scale", type=int, default=SCALE_FACTOR,
                    help="Supersampling factor for glyph drawing")
    ap.add_argument("--font", default=None, help="Path to .ttf monospace font")
    add_pipeline_args(ap)
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.debug, args.log)
    t0 = time.perf_counter()

    if args.scale < 1:
        raise SystemExit("--scale must be at least 1")

    try:
        config = config_from_args(args)
        grid = generate(load_buffer(args.input), config)
    except AsciiBlocksError as e:
        LOG.error("%s", e)
        return 1

    img = rasterize(grid, scale=args.scale, font_path=args.font)
    img.save(args.output)
    LOG.debug("Saved %s (%dx%d) in %.3fs", args.output, img.width, img.height,
              time.perf_counter() - t0)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""Colored ANSI / HTML presentation of a glyph grid."""

import argparse
import html
import os
import sys
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .errors import AsciiBlocksError
from .image_to_ascii import (
    LOG,
    add_pipeline_args,
    config_from_args,
    load_buffer,
    setup_logging,
)
from .pipeline import GlyphGrid, generate

ESC = "\x1b"


@dataclass
class HtmlOptions:
    font_size_px: int = 12
    line_height_px: Optional[int] = None  # None => match font-size
    fill_spaces: bool = False


def colorize_lines_ansi(grid: GlyphGrid, color_spaces=False) -> List[str]:
    """Return list of ANSI-colored lines."""
    out_lines = []
    for line, colors in zip(grid.lines, grid.colors):
        prev = None
        row = []
        for ch, rgb in zip(line, colors):
            if ch == " " and not color_spaces:
                if prev is not None:
                    row.append(f"{ESC}[0m")
                    prev = None
                row.append(" ")
                continue

            if prev != rgb:
                r, g, b = rgb
                row.append(f"{ESC}[38;2;{r};{g};{b}m")
                prev = rgb

            row.append(ch)

        row.append(f"{ESC}[0m")
        out_lines.append("".join(row))
    return out_lines


def colorize_lines_html(grid: GlyphGrid, color_spaces=False, fill_spaces=False) -> List[str]:
    """Return list of HTML lines (no surrounding <pre>).

    fill_spaces paints space blocks with their block color; it has no effect
    on a grid generated without color, whose colors are all white.
    """
    fill_spaces = fill_spaces and grid.color
    out_lines = []
    for line, colors in zip(grid.lines, grid.colors):
        prev = None
        span_open = False
        row = []

        for ch, rgb in zip(line, colors):
            r, g, b = rgb

            if ch == " " and not color_spaces:
                if span_open:
                    row.append("</span>")
                    span_open = False
                    prev = None
                if fill_spaces:
                    row.append(f'<span style="background-color: rgb({r},{g},{b})">&nbsp;</span>')
                else:
                    row.append(" ")
                continue

            if prev != rgb:
                if span_open:
                    row.append("</span>")
                row.append(f'<span style="color: rgb({r},{g},{b})">')
                span_open = True
                prev = rgb

            row.append(html.escape(ch))

        if span_open:
            row.append("</span>")

        out_lines.append("".join(row))

    return out_lines


def wrap_html(pre_lines: Sequence[str], title="ASCII Art", font_size_px=12,
              line_height_px=None, background="#000") -> str:
    # Browsers can drift if line-height is not locked; keep px values.
    if line_height_px is None:
        line_height_px = font_size_px

    return (
        "<!doctype html>\n"
        "<html>\n<head>\n"
        '  <meta charset="utf-8">\n'
        '  <meta name="viewport" content="width=device-width, initial-scale=1">\n'
        f"  <title>{html.escape(title)}</title>\n"
        "  <style>\n"
        f"    html, body {{ margin: 0; background: {background}; }}\n"
        "    .wrap { padding: 16px; }\n"
        "    pre {\n"
        "      margin: 0;\n"
        "      white-space: pre;\n"
        "      overflow: auto;\n"
        '      font-family: "Hack", "JetBrains Mono", "Cascadia Mono", "Fira Code", Consolas, monospace;\n'
        "      font-variant-ligatures: none;\n"
        f"      font-size: {font_size_px}px;\n"
        f"      line-height: {line_height_px}px;\n"
        "      letter-spacing: 0;\n"
        "    }\n"
        "  </style>\n"
        "</head>\n<body>\n"
        '  <div class="wrap">\n'
        "    <pre>\n" + "\n".join(pre_lines) + "\n    </pre>\n"
        "  </div>\n"
        "</body>\n</html>\n"
    )


def render_ansi(grid: GlyphGrid) -> str:
    return "\n".join(colorize_lines_ansi(grid)) + "\n"


def render_html(grid: GlyphGrid, html_opt: Optional[HtmlOptions] = None, title="ASCII Art") -> str:
    html_opt = html_opt or HtmlOptions()
    pre_lines = colorize_lines_html(grid, fill_spaces=html_opt.fill_spaces)
    return wrap_html(
        pre_lines,
        title=title,
        font_size_px=html_opt.font_size_px,
        line_height_px=html_opt.line_height_px,
        background="#fff" if grid.invert_color else "#000",
    )


# -----------------------------
# main
# -----------------------------

def build_parser():
    ap = argparse.ArgumentParser(
        prog="ascii-blocks colorize",
        description="Convert an image to colored glyph art (ANSI or HTML)",
    )
    ap.add_argument("input", help="Input image path")
    ap.add_argument("-o", "--output", default=None,
                    help="Output file (.ans or .html; default: stdout)")
    ap.add_argument("--format", choices=["ansi", "html"], default=None,
                    help="Output format (default: inferred from output extension, else ansi)")
    ap.add_argument("--html-font-size", type=int, default=12, help="HTML font size in px")
    ap.add_argument("--html-line-height", type=int, default=None, help="HTML line height in px")
    ap.add_argument("--html-fill-spaces", action="store_true",
                    help="HTML: paint block color behind spaces")
    add_pipeline_args(ap)
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.debug, args.log)
    t0 = time.perf_counter()

    out_format = args.format
    if out_format is None:
        out_format = "html" if args.output and os.path.splitext(args.output)[1].lower() == ".html" else "ansi"
    LOG.debug("Output format: %s", out_format)

    try:
        config = config_from_args(args)
        grid = generate(load_buffer(args.input), config)
    except AsciiBlocksError as e:
        LOG.error("%s", e)
        return 1

    if out_format == "ansi":
        text = render_ansi(grid)
    else:
        html_opt = HtmlOptions(args.html_font_size, args.html_line_height, args.html_fill_spaces)
        title = os.path.basename(args.output) if args.output else "ASCII Art"
        text = render_html(grid, html_opt, title=title)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as out:
            out.write(text)
    else:
        sys.stdout.write(text)

    LOG.debug("Done in %.3fs", time.perf_counter() - t0)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

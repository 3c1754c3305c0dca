"""ASCII Blocks - block-averaged ASCII art with edge-aware glyphs."""

__version__ = "0.1.0"

# Entry points are lazy wrappers so `python -m ascii_blocks.<cmd>` does not
# find the submodule already in `sys.modules`. The core API is importable from
# the submodules directly (`ascii_blocks.pipeline.generate`, ...).


def colorize_main(*args, **kwargs):
    from .colorize_ascii import main as _m

    return _m(*args, **kwargs)


def image_to_ascii_main(*args, **kwargs):
    from .image_to_ascii import main as _m

    return _m(*args, **kwargs)


def rasterize_main(*args, **kwargs):
    from .rasterize import main as _m

    return _m(*args, **kwargs)


__all__ = [
    "colorize_main",
    "image_to_ascii_main",
    "rasterize_main",
]

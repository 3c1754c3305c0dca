"""Error kinds raised by the conversion pipeline."""


class AsciiBlocksError(Exception):
    """Base class for every error the pipeline raises."""


class InvalidDimensions(AsciiBlocksError, ValueError):
    """Pixel buffer length does not match width * height * 4."""


class DegenerateHistogram(AsciiBlocksError, ValueError):
    """Auto contrast cannot derive a usable linear stretch."""


class EmptyBlock(AsciiBlocksError, ValueError):
    """A block (or the whole image) contains no pixels."""


class InvalidConfig(AsciiBlocksError, ValueError):
    """A configuration value is out of range or of the wrong type."""


class GenerationCancelled(AsciiBlocksError):
    """The caller asked the pipeline to stop between block rows."""

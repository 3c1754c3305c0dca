"""Conversion settings."""

import json
import logging
import math
from dataclasses import dataclass, fields, replace
from pathlib import Path

from .errors import InvalidConfig

LOG = logging.getLogger(__name__)

DEFAULT_RAMP = " .:-=+*#%@"

# Names used by settings files exported from the web generator.
_CAMEL_KEYS = {
    "blockSize": "block_size",
    "autoAdjust": "auto_adjust",
    "detectEdges": "detect_edges",
    "invertColor": "invert_color",
    "asciiChars": "ramp",
    "stretchAlpha": "stretch_alpha",
}


@dataclass(frozen=True)
class Config:
    """
    Immutable per-run settings.

    ramp runs from darkest to brightest glyph. sigma1 < sigma2 by convention,
    which is not enforced. stretch_alpha controls whether auto adjust also
    stretches the alpha channel.
    """

    block_size: int = 8
    brightness: float = 1.0
    auto_adjust: bool = True
    detect_edges: bool = False
    color: bool = True
    invert_color: bool = False
    ramp: str = DEFAULT_RAMP
    sigma1: float = 0.5
    sigma2: float = 1.0
    stretch_alpha: bool = True

    def validate(self) -> "Config":
        if isinstance(self.block_size, bool) or not isinstance(self.block_size, int):
            raise InvalidConfig(f"block_size must be an integer, got {self.block_size!r}")
        if self.block_size <= 0:
            raise InvalidConfig(f"block_size must be positive, got {self.block_size}")
        if not isinstance(self.ramp, str) or not self.ramp:
            raise InvalidConfig("ramp must be a non-empty string")
        for name in ("brightness", "sigma1", "sigma2"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidConfig(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise InvalidConfig(f"{name} must be finite and positive, got {value}")
        for name in ("auto_adjust", "detect_edges", "color", "invert_color", "stretch_alpha"):
            if not isinstance(getattr(self, name), bool):
                raise InvalidConfig(f"{name} must be true or false")
        return self

    def with_overrides(self, **changes) -> "Config":
        """Copy with the non-None values in changes applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def config_from_dict(data: dict, base: Config | None = None) -> Config:
    known = {f.name for f in fields(Config)}
    values = {}
    for key, value in data.items():
        name = _CAMEL_KEYS.get(key, key)
        if name not in known:
            raise InvalidConfig(f"unknown setting: {key}")
        values[name] = value
    return replace(base or Config(), **values).validate()


def load_config(path: str | Path) -> Config:
    """Load settings from a JSON file; missing keys keep their defaults."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidConfig(f"{path}: not valid JSON ({e})") from e
    except OSError as e:
        raise InvalidConfig(f"cannot read settings file {path}: {e}") from e
    if not isinstance(data, dict):
        raise InvalidConfig(f"{path}: expected a JSON object")
    LOG.debug("Loaded settings from %s: %s", path, sorted(data))
    return config_from_dict(data)

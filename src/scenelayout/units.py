"""Length parsing and number formatting."""
from __future__ import annotations

import logging
import math
import re
from typing import Optional, Union

from .errors import ConfigError

logger = logging.getLogger(__name__)

ROOT_FONT_SIZE = 16.0

Length = Union[int, float, str]

_LENGTH_RE = re.compile(r"^(-?(?:\d+(?:\.\d*)?|\.\d+))\s*([a-z%]*)$", re.IGNORECASE)

_UNIT_FACTORS = {
    "": 1.0,
    "px": 1.0,
    "pt": 4.0 / 3.0,
    "pc": 16.0,
    "in": 96.0,
    "cm": 96.0 / 2.54,
    "mm": 96.0 / 25.4,
}


def parse_length(value: Optional[Length], default: Optional[float] = None, *, base: float = ROOT_FONT_SIZE) -> Optional[float]:
    """Resolve a number or unit-tagged string (``"12px"``, ``"2rem"``) to pixels.

    ``rem``/``em`` and ``%`` are resolved against ``base``. ``None`` yields
    ``default``; anything unparseable raises ConfigError.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigError(f"invalid length: {value!r}")
    if isinstance(value, (int, float)):
        if math.isnan(value):
            raise ConfigError("invalid length: NaN")
        return float(value)
    if not isinstance(value, str):
        raise ConfigError(f"invalid length: {value!r}")
    match = _LENGTH_RE.match(value.strip())
    if not match:
        raise ConfigError(f"invalid length: {value!r}")
    number = float(match.group(1))
    unit = match.group(2).lower()
    if unit in ("rem", "em"):
        return number * base
    if unit == "%":
        return number / 100.0 * base
    factor = _UNIT_FACTORS.get(unit)
    if factor is None:
        logger.warning("unknown unit %r in %r, treating as pixels", unit, value)
        return number
    return number * factor


def parse_size(value: Length) -> Optional[float]:
    """Like :func:`parse_length` but maps ``"auto"`` to ``None``."""
    if isinstance(value, str) and value.strip().lower() == "auto":
        return None
    if value is None:
        raise ConfigError("size must be a number, a length string or 'auto'")
    size = parse_length(value)
    if size is not None and size < 0:
        raise ConfigError(f"size must not be negative: {value!r}")
    return size


def fmt(value: float) -> str:
    if math.isclose(value, round(value), abs_tol=1e-9):
        return str(int(round(value)))
    return f"{value:.3f}".rstrip("0").rstrip(".")

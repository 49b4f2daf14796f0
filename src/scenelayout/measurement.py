"""Text measurement backends injected into :class:`~scenelayout.text.Text`."""
from __future__ import annotations

import abc
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Tuple

from PIL import ImageFont

from .errors import MeasurementUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "sans-serif"
DEFAULT_FONT_SIZE = 16.0
DEFAULT_LINE_HEIGHT = 1.2
GENERIC_FONT_FALLBACKS = {
    "sans-serif": ["Helvetica", "Arial", "Liberation Sans", "DejaVu Sans"],
    "serif": ["Times New Roman", "Times", "Liberation Serif", "DejaVu Serif"],
    "monospace": [
        "Courier New",
        "Courier",
        "Liberation Mono",
        "DejaVu Sans Mono",
    ],
}

_BOLD_WEIGHTS = {"bold", "bolder", "600", "700", "800", "900"}
_WORD_RE = re.compile(r"\S+")


@dataclass(frozen=True)
class PartBox:
    """Box of one measured word, relative to the text's content-box top-left."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class TextMetrics:
    width: float
    height: float
    ascent: float
    descent: float = 0.0
    parts: Tuple[PartBox, ...] = field(default_factory=tuple)
    line_height: float = 0.0


class Measurement(Protocol):
    def measure(
        self,
        content: str,
        font_size: float,
        font_family: Optional[str] = None,
        font_weight: Optional[str] = None,
    ) -> TextMetrics:
        ...


def is_bold(font_weight: Optional[str]) -> bool:
    return font_weight is not None and str(font_weight).strip().lower() in _BOLD_WEIGHTS


class _LineMeasurement(abc.ABC):
    """Lays out lines and words given a per-run advance and vertical metrics."""

    line_height = DEFAULT_LINE_HEIGHT

    @abc.abstractmethod
    def _advance(self, text: str, font_size: float, font_family: Optional[str], font_weight: Optional[str]) -> float:
        ...

    def _vertical(self, font_size: float, font_family: Optional[str], font_weight: Optional[str]) -> Tuple[float, float]:
        return 0.8 * font_size, 0.2 * font_size

    def measure(
        self,
        content: str,
        font_size: float,
        font_family: Optional[str] = None,
        font_weight: Optional[str] = None,
    ) -> TextMetrics:
        ascent, descent = self._vertical(font_size, font_family, font_weight)
        step = max(ascent + descent, font_size * self.line_height)
        lines = content.split("\n")
        parts: List[PartBox] = []
        width = 0.0
        for index, line in enumerate(lines):
            top = index * step
            width = max(width, self._advance(line, font_size, font_family, font_weight))
            for match in _WORD_RE.finditer(line):
                x = self._advance(line[: match.start()], font_size, font_family, font_weight)
                w = self._advance(match.group(0), font_size, font_family, font_weight)
                parts.append(PartBox(x, top, w, ascent + descent))
        height = ascent + descent + (len(lines) - 1) * step
        return TextMetrics(width, height, ascent, descent, tuple(parts), step)


class HeuristicMeasurement(_LineMeasurement):
    """Deterministic per-character estimate; never touches the filesystem."""

    def _advance(self, text: str, font_size: float, font_family: Optional[str], font_weight: Optional[str]) -> float:
        width = heuristic_width(text, font_size)
        return width * 1.05 if is_bold(font_weight) else width


class PillowMeasurement(_LineMeasurement):
    """Caches Pillow fonts and measures with their real advances."""

    FONT_DIRS = [
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/Library/Fonts"),
        Path("~/Library/Fonts").expanduser(),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        Path("C:/Windows/Fonts"),
    ]

    def __init__(self, font_path: Optional[str] = None) -> None:
        self.font_path = font_path
        self._font_cache: Dict[Tuple[str, bool, int], Optional[ImageFont.FreeTypeFont]] = {}
        self._font_paths: Dict[str, Optional[str]] = {}

    def font(self, size: float, family: Optional[str], font_weight: Optional[str] = None) -> ImageFont.FreeTypeFont:
        key_size = max(1, int(round(size)))
        family = family or DEFAULT_FONT_FAMILY
        bold = is_bold(font_weight)
        cache_key = ((self.font_path or family).lower(), bold, key_size)
        if cache_key not in self._font_cache:
            self._font_cache[cache_key] = self._load(family, bold, key_size)
        font = self._font_cache[cache_key]
        if font is None:
            raise MeasurementUnavailableError(f"no TrueType font found for family {family!r}")
        return font

    def _load(self, family: str, bold: bool, size: int) -> Optional[ImageFont.FreeTypeFont]:
        candidates: List[str] = []
        if self.font_path:
            candidates.append(self.font_path)
        for fam in GENERIC_FONT_FALLBACKS.get(family.lower(), [family]):
            names = [f"{fam} Bold", fam] if bold else [fam]
            for name in names:
                resolved = self._locate_font(name)
                if resolved:
                    candidates.append(resolved)
        candidates.append("DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf")
        for candidate in candidates:
            path, index = _parse_font_candidate(candidate)
            try:
                font = ImageFont.truetype(path, size, index=index)
            except OSError:
                continue
            logger.debug("loaded font %s for family %r at %spx", path, family, size)
            return font
        logger.debug("no font candidates loadable for family %r", family)
        return None

    def _advance(self, text: str, font_size: float, font_family: Optional[str], font_weight: Optional[str]) -> float:
        if not text:
            return 0.0
        font = self.font(font_size, font_family, font_weight)
        return float(font.getlength(text)) * font_size / max(1, int(round(font_size)))

    def _vertical(self, font_size: float, font_family: Optional[str], font_weight: Optional[str]) -> Tuple[float, float]:
        font = self.font(font_size, font_family, font_weight)
        ascent, descent = font.getmetrics()
        scale = font_size / max(1, int(round(font_size)))
        return float(ascent) * scale, float(descent) * scale

    def _locate_font(self, family: str) -> Optional[str]:
        key = family.lower()
        if key in self._font_paths:
            return self._font_paths[key]
        normalized = re.sub(r"[^a-z0-9]+", "", family, flags=re.IGNORECASE).lower()
        aliases = {normalized, normalized + "mt", normalized + "psmt"}
        best_match: Optional[Tuple[int, str]] = None
        for directory in self.FONT_DIRS:
            if not normalized or not directory.exists():
                continue
            try:
                for glob in ("*.ttf", "*.ttc"):
                    for path in directory.rglob(glob):
                        stem = re.sub(r"[^a-z0-9]+", "", path.stem, flags=re.IGNORECASE).lower()
                        if stem in aliases:
                            score = 0
                        elif stem.startswith(normalized):
                            score = 1
                        elif normalized in stem:
                            score = 2
                        else:
                            continue
                        candidate = str(path) if glob == "*.ttf" else f"{path};0"
                        if best_match is None or score < best_match[0]:
                            best_match = (score, candidate)
            except OSError:
                continue
        resolved = best_match[1] if best_match else None
        self._font_paths[key] = resolved
        return resolved


def _parse_font_candidate(candidate: str) -> Tuple[str, int]:
    if ";" in candidate:
        path, index = candidate.rsplit(";", 1)
        try:
            return path, int(index)
        except ValueError:
            return candidate, 0
    return candidate, 0


def heuristic_width(text: str, font_size: float) -> float:
    width = 0.0
    for ch in text:
        if ch.isspace():
            width += font_size * 0.33
        elif ch in "il":
            width += font_size * 0.3
        elif ch in "mwMW@#":
            width += font_size * 0.9
        else:
            width += font_size * 0.6
    return width

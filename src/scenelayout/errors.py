"""Error types raised by the layout engine."""
from __future__ import annotations

from typing import Optional


class SceneLayoutError(ValueError):
    """Structured layout error with a stable code for callers to switch on."""

    code = "E_LAYOUT"

    def __init__(self, message: str, *, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return self.message


class ConfigError(SceneLayoutError):
    """Raised for missing, conflicting or unsupported configuration."""

    code = "E_CONFIG"


class BoundsError(SceneLayoutError, IndexError):
    """Raised when a row, column or cell index is out of range."""

    code = "E_BOUNDS"


class ReferencePointError(SceneLayoutError):
    """Raised when a requested reference point cannot be resolved."""

    code = "E_REFERENCE"


class MeasurementUnavailableError(SceneLayoutError):
    """Raised by a measurement backend that cannot size the given content."""

    code = "E_MEASUREMENT"

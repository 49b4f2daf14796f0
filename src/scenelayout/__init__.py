"""Public API for scenelayout."""
import logging

from .alignable import Alignable, Alignment, BoundingBoxAlignable, BoxAlignable, Direction, RadiusAlignable
from .annotations import AngleMarker
from .box_model import Box, BoxModel, BoxReference, Insets
from .composite import Columns, Grid
from .config import (
    ArtboardConfig,
    CircleConfig,
    ColumnsConfig,
    ContainerConfig,
    GridConfig,
    LineConfig,
    RectConfig,
    RegularPolygonConfig,
    SquareConfig,
    TextConfig,
    TriangleConfig,
    element_from_config,
)
from .container import Artboard, Container
from .element import BoxAccessor, Element, PositionRequest, Transform
from .errors import BoundsError, ConfigError, MeasurementUnavailableError, ReferencePointError, SceneLayoutError
from .geometry import BoundingBox, Point, Side, Vector
from .measurement import HeuristicMeasurement, Measurement, PartBox, PillowMeasurement, TextMetrics
from .shapes import Circle, Line, Polygon, Rect, RegularPolygon, Square, Triangle
from .text import Text
from .units import parse_length

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Alignable",
    "Alignment",
    "AngleMarker",
    "Artboard",
    "ArtboardConfig",
    "BoundingBox",
    "BoundingBoxAlignable",
    "BoundsError",
    "Box",
    "BoxAccessor",
    "BoxAlignable",
    "BoxModel",
    "BoxReference",
    "Circle",
    "CircleConfig",
    "Columns",
    "ColumnsConfig",
    "ConfigError",
    "Container",
    "ContainerConfig",
    "Direction",
    "Element",
    "Grid",
    "GridConfig",
    "HeuristicMeasurement",
    "Insets",
    "Line",
    "LineConfig",
    "Measurement",
    "MeasurementUnavailableError",
    "PartBox",
    "PillowMeasurement",
    "Point",
    "Polygon",
    "PositionRequest",
    "RadiusAlignable",
    "Rect",
    "RectConfig",
    "ReferencePointError",
    "RegularPolygon",
    "RegularPolygonConfig",
    "SceneLayoutError",
    "Side",
    "Square",
    "SquareConfig",
    "Text",
    "TextConfig",
    "TextMetrics",
    "Transform",
    "Triangle",
    "TriangleConfig",
    "Vector",
    "element_from_config",
    "parse_length",
]

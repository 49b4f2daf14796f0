"""Grid and column layouts built from nested containers."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from .alignable import Direction
from .box_model import BoxModel
from .container import Container
from .errors import BoundsError, ConfigError
from .units import parse_length, parse_size


def _count(value: Any, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"{label} must be a positive integer, got {value!r}")
    return value


def _check_index(index: Any, count: int, label: str) -> int:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < count:
        raise BoundsError(f"{label} {index!r} is out of bounds (0..{count - 1})")
    return index


class Grid(Container):
    """Vertical stack of horizontal rows, each holding fixed-size ``none`` cells."""

    kind = "grid"

    def __init__(
        self,
        rows: int,
        columns: int,
        cell_width: Any,
        cell_height: Any,
        gutter: Any = 0,
        cell_style: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        self.row_count = _count(rows, "rows")
        self.column_count = _count(columns, "columns")
        width = parse_size(cell_width)
        height = parse_size(cell_height)
        if width is None or height is None:
            raise ConfigError("grid cells need a fixed width and height")
        super().__init__(direction=Direction.VERTICAL, spacing=gutter, **kwargs)
        self.cell_width = width
        self.cell_height = height
        self.gutter = parse_length(gutter, 0.0)
        self.rows: List[Container] = []
        self.cells: List[List[Container]] = []
        for r in range(self.row_count):
            row = Container(direction=Direction.HORIZONTAL, spacing=self.gutter, name=_child_name(self.name, f"row{r}"))
            row_cells = []
            for c in range(self.column_count):
                cell = Container(
                    width=width,
                    height=height,
                    direction=Direction.NONE,
                    style=cell_style,
                    name=_child_name(self.name, f"cell{r}-{c}"),
                )
                row.add_element(cell)
                row_cells.append(cell)
            self.add_element(row)
            self.rows.append(row)
            self.cells.append(row_cells)

    def get_cell(self, row: int, column: int) -> Container:
        r = _check_index(row, self.row_count, "row")
        c = _check_index(column, self.column_count, "column")
        return self.cells[r][c]

    def get_row(self, row: int) -> Container:
        return self.rows[_check_index(row, self.row_count, "row")]

    def get_column(self, column: int) -> List[Container]:
        c = _check_index(column, self.column_count, "column")
        return [row_cells[c] for row_cells in self.cells]


class Columns(Container):
    """Horizontal row of ``count`` equally wide ``none`` containers."""

    kind = "columns"

    def __init__(
        self,
        count: int,
        column_width: Any,
        height: Any = "auto",
        gutter: Any = 0,
        vertical_alignment: Any = "top",
        column_style: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        self.count = _count(count, "count")
        width = parse_size(column_width)
        self.gutter = parse_length(gutter, 0.0)
        insets = BoxModel.of(kwargs.get("box_model"))
        outer_width: Any = "auto"
        if width is not None:
            content_width = width * self.count + self.gutter * (self.count - 1)
            outer_width = content_width + insets.horizontal
        outer_height = parse_size(height)
        # columns fill the content box, not the border box
        column_height: Any = "auto" if outer_height is None else max(0.0, outer_height - insets.vertical)
        super().__init__(
            width=outer_width,
            height=height,
            direction=Direction.HORIZONTAL,
            spacing=self.gutter,
            vertical_alignment=vertical_alignment,
            **kwargs,
        )
        self.column_width = width
        self.columns: List[Container] = []
        for i in range(self.count):
            column = Container(
                width=column_width,
                height=column_height,
                direction=Direction.NONE,
                style=column_style,
                name=_child_name(self.name, f"column{i}"),
            )
            self.add_element(column)
            self.columns.append(column)

    def get_column(self, index: int) -> Container:
        return self.columns[_check_index(index, self.count, "column")]


def _child_name(parent: Optional[str], suffix: str) -> Optional[str]:
    return f"{parent}-{suffix}" if parent else None

"""Cell coordinates, regions, and column/row descriptors.

These value types are shared by selection resolution, matrix building, export,
and hover tracking. Equality is structural everywhere; nothing in this package
compares cells by object identity.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum


class CellRegion(str, Enum):
    """Role of a cell inside the grid."""

    ROW_HEADER = "row-header"
    COLUMN_HEADER = "column-header"
    BODY = "body"
    CORNER = "corner"


class ColumnType(int, Enum):
    """Role of a column; the index column renders in the row-header region."""

    INDEX = 0
    BODY = 1


_REGION_RANK = {
    CellRegion.CORNER: 0,
    CellRegion.ROW_HEADER: 0,
    CellRegion.COLUMN_HEADER: 1,
    CellRegion.BODY: 1,
}


@dataclass(frozen=True)
class CellCoordinate:
    """One cell position: row, column, and region."""

    row: int
    column: int
    region: CellRegion = CellRegion.BODY

    def __post_init__(self) -> None:
        if self.row < 0 or self.column < 0:
            raise ValueError(f"cell coordinates must be non-negative, got ({self.row}, {self.column})")
        object.__setattr__(self, "region", CellRegion(self.region))


@dataclass(frozen=True)
class CellRange:
    """Inclusive rectangular span; ``start``/``end`` may arrive in either order."""

    start: CellCoordinate
    end: CellCoordinate

    def normalized(self) -> CellRange:
        """Return an equivalent range with minima at ``start`` and maxima at ``end``.

        Rows order numerically. Columns order by region first (index column
        before body columns) and then by column index.
        """
        first_row = min(self.start.row, self.end.row)
        last_row = max(self.start.row, self.end.row)
        start_key = (_REGION_RANK[self.start.region], self.start.column)
        end_key = (_REGION_RANK[self.end.region], self.end.column)
        low, high = (self.start, self.end) if start_key <= end_key else (self.end, self.start)
        return CellRange(
            start=CellCoordinate(row=first_row, column=low.column, region=low.region),
            end=CellCoordinate(row=last_row, column=high.column, region=high.region),
        )

    @property
    def row_count(self) -> int:
        return abs(self.end.row - self.start.row) + 1


@dataclass(frozen=True)
class CellFormatConfig:
    """Input record handed to a column's formatting strategy.

    Geometry fields only matter when painting; export always passes zeros.
    """

    row: int
    column: int
    region: CellRegion
    value: object
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    metadata: dict[str, object] = field(default_factory=dict)


FormatFn = Callable[[CellFormatConfig], object]


@dataclass(frozen=True)
class Column:
    """Read-only column descriptor owned by a column manager."""

    index: int
    name: str
    type: ColumnType
    format_fn: FormatFn


@dataclass(frozen=True)
class Row:
    """Read-only row owned by a row manager."""

    index: int
    values: Sequence[object] = ()

    def get_value(self, column_index: int) -> object:
        """Return the raw stored value, or ``None`` outside the row."""
        if 0 <= column_index < len(self.values):
            return self.values[column_index]
        return None


@dataclass(frozen=True)
class HoveredCell:
    """Pointer-hover payload: a cell identity, its value, and cached geometry.

    ``offset``/``offset_top`` are screen offsets of the row; they may be
    ``None`` or NaN when the cell is not laid out.
    """

    row: int
    column: int
    region: CellRegion = CellRegion.BODY
    value: object = None
    offset: float | None = None
    offset_top: float | None = None

    @property
    def coordinate(self) -> CellCoordinate:
        return CellCoordinate(row=self.row, column=self.column, region=self.region)

    def has_valid_geometry(self) -> bool:
        """Return whether both offsets are real numbers."""
        for offset in (self.offset, self.offset_top):
            if offset is None or isinstance(offset, bool):
                return False
            try:
                if math.isnan(offset):
                    return False
            except TypeError:
                return False
        return True


CellMatrix = list[list[object]]


def create_cell_config(
    row: int = 0,
    column: int = 0,
    value: object = 0,
    region: CellRegion | str = CellRegion.BODY,
) -> CellFormatConfig:
    """Build a formatting input with neutral geometry from partial input."""
    return CellFormatConfig(
        row=row,
        column=column,
        region=CellRegion(region),
        value=value,
    )


def cells_equal(cell: HoveredCell | CellCoordinate | None, other: HoveredCell | CellCoordinate | None) -> bool:
    """Compare two cells by ``(row, column, region)``; ``None`` never matches."""
    if cell is None or other is None:
        return False
    return (
        cell.row == other.row
        and cell.column == other.column
        and CellRegion(cell.region) == CellRegion(other.region)
    )

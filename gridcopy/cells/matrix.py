"""Build ordered matrices of formatted cell values."""

from __future__ import annotations

from ..model import CellMatrix, CellRange, CellRegion, ColumnType, create_cell_config
from .selection import SelectionRangeResolver


class CellMatrixBuilder:
    """Resolve rows/columns from the table managers and format every cell.

    Rows and columns are emitted in ascending index order. A header row of
    column names leads the matrix whenever more than one row or more than one
    column was resolved.
    """

    def __init__(self, row_manager, column_manager, resolver: SelectionRangeResolver | None = None) -> None:
        self._row_manager = row_manager
        self._column_manager = column_manager
        self._resolver = resolver

    def get_cells(self, rows_range: CellRange, columns_range: CellRange) -> CellMatrix:
        rows_range = rows_range.normalized()
        columns_range = columns_range.normalized()
        rows = self._row_manager.take_rows(rows_range.start.row, rows_range.end.row + 1)
        columns = self._column_manager.take_columns_by_cells(columns_range.start, columns_range.end)
        cells: CellMatrix = []

        if not rows or not columns:
            return cells

        if len(rows) != 1 or len(columns) != 1:
            cells.append([column.name for column in columns])

        for row in rows:
            result: list[object] = []
            for column in columns:
                if column.type is ColumnType.INDEX:
                    config = create_cell_config(
                        region=CellRegion.ROW_HEADER,
                        row=row.index,
                        column=column.index,
                        value=row.index,
                    )
                else:
                    config = create_cell_config(
                        region=CellRegion.BODY,
                        row=row.index,
                        column=column.index,
                        value=row.get_value(column.index),
                    )
                result.append(column.format_fn(config))
            cells.append(result)

        return cells

    def get_selected_cells(self) -> CellMatrix:
        """Return the matrix for the active selection, or ``[]`` without one."""
        ranges = self._require_resolver().get_selected_range()
        if ranges is None:
            return []
        return self.get_cells(*ranges)

    def get_all_cells(self) -> CellMatrix:
        return self.get_cells(*self._require_resolver().get_all_range())

    def _require_resolver(self) -> SelectionRangeResolver:
        if self._resolver is None:
            raise RuntimeError("CellMatrixBuilder was created without a SelectionRangeResolver")
        return self._resolver

"""Selection-to-range resolution.

Turns the active selection, or "everything", into a normalized row range and
column range ready for matrix building.
"""

from __future__ import annotations

from typing import Protocol

from ..model import CellCoordinate, CellRange, CellRegion, ColumnType

ResolvedRanges = tuple[CellRange, CellRange]


class SelectionSource(Protocol):
    def get_rows_range_cells(self) -> CellRange | None: ...

    def get_columns_range_cells(self) -> CellRange | None: ...


class SelectionRangeResolver:
    """Resolve row/column ranges from a selection manager and table managers."""

    def __init__(self, selection: SelectionSource, row_manager, column_manager) -> None:
        self._selection = selection
        self._row_manager = row_manager
        self._column_manager = column_manager

    def get_selected_range(self) -> ResolvedRanges | None:
        """Return ``(rows_range, columns_range)`` or ``None`` when nothing is selected."""
        rows_range = self._selection.get_rows_range_cells()
        columns_range = self._selection.get_columns_range_cells()
        if rows_range is None or columns_range is None:
            return None
        return rows_range.normalized(), columns_range.normalized()

    def get_all_range(self) -> ResolvedRanges:
        """Return ranges covering every row and every column, index column first.

        With zero body columns the column endpoint degrades to 0.
        """
        last_row = max(0, len(self._row_manager.rows) - 1)
        last_column = max(0, len(self._column_manager.columns[ColumnType.BODY]) - 1)
        full_range = CellRange(
            start=CellCoordinate(row=0, column=0, region=CellRegion.ROW_HEADER),
            end=CellCoordinate(row=last_row, column=last_column, region=CellRegion.BODY),
        )
        return full_range, full_range

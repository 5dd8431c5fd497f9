"""Selection range resolution for active selections and select-all."""

from __future__ import annotations

import unittest

from gridcopy.cells.selection import SelectionRangeResolver
from gridcopy.model import CellCoordinate, CellRange, CellRegion
from gridcopy.store import TableStore


class _PartialSelection:
    """Selection manager with only a row range."""

    def get_rows_range_cells(self) -> CellRange | None:
        return CellRange(start=CellCoordinate(row=0, column=0), end=CellCoordinate(row=1, column=0))

    def get_columns_range_cells(self) -> CellRange | None:
        return None


def _make_resolver(store: TableStore, selection=None) -> SelectionRangeResolver:
    return SelectionRangeResolver(
        selection if selection is not None else store.selection,
        store.row_manager,
        store.column_manager,
    )


class SelectionRangeResolverTests(unittest.TestCase):
    def test_missing_selection_resolves_to_none(self) -> None:
        store = TableStore.from_rows(["A"], [["a0"]])

        self.assertIsNone(_make_resolver(store).get_selected_range())

    def test_missing_column_range_resolves_to_none(self) -> None:
        store = TableStore.from_rows(["A"], [["a0"], ["a1"]])

        self.assertIsNone(_make_resolver(store, _PartialSelection()).get_selected_range())

    def test_selected_range_is_normalized(self) -> None:
        store = TableStore.from_rows(["A", "B"], [["a0", "b0"], ["a1", "b1"]])
        store.selection.select(CellCoordinate(row=1, column=1), CellCoordinate(row=0, column=0))

        rows_range, columns_range = _make_resolver(store).get_selected_range()

        self.assertEqual(rows_range.start.row, 0)
        self.assertEqual(rows_range.end.row, 1)
        self.assertEqual(columns_range.start.column, 0)
        self.assertEqual(columns_range.end.column, 1)

    def test_all_range_spans_index_through_last_body_column(self) -> None:
        store = TableStore.from_rows(["A", "B", "C"], [["a", "b", "c"]] * 4)

        rows_range, columns_range = _make_resolver(store).get_all_range()

        self.assertEqual(rows_range.start, CellCoordinate(row=0, column=0, region=CellRegion.ROW_HEADER))
        self.assertEqual(rows_range.end, CellCoordinate(row=3, column=2, region=CellRegion.BODY))
        self.assertEqual(columns_range, rows_range)

    def test_all_range_degrades_to_column_zero_without_body_columns(self) -> None:
        store = TableStore.from_rows([], [[], []])

        _rows_range, columns_range = _make_resolver(store).get_all_range()

        self.assertEqual(columns_range.end.column, 0)
        self.assertEqual(columns_range.end.region, CellRegion.BODY)


if __name__ == "__main__":
    unittest.main()

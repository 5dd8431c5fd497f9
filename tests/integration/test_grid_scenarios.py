"""End-to-end grid scenarios: select, build, export, and hover on one table."""

from __future__ import annotations

import unittest

from gridcopy.cells import CellManager
from gridcopy.export import ClipboardWriter, ExportFormat, export_cells_to
from gridcopy.interaction import HoverCallbacks, HoverTracker
from gridcopy.model import CellCoordinate, CellRegion, HoveredCell
from gridcopy.store import TableStore


def _make_store() -> TableStore:
    return TableStore.from_rows(
        ["A", "B"],
        [["a0", "b0"], ["a1", "b1"]],
        index=["x0", "x1"],
        has_index=True,
    )


class ExportScenarioTests(unittest.TestCase):
    def test_full_block_with_index_column_exports_body_only(self) -> None:
        store = _make_store()
        store.selection.select(
            CellCoordinate(row=0, column=0, region=CellRegion.ROW_HEADER),
            CellCoordinate(row=1, column=1, region=CellRegion.BODY),
        )
        manager = CellManager.for_store(store, clipboard=ClipboardWriter(is_available=lambda: False))

        cells = manager.get_selected_cells()

        self.assertEqual(cells[0], ["index", "A", "B"])
        self.assertEqual(
            export_cells_to(cells, ExportFormat.CSV, has_index=True, eol="\n"),
            '"A","B"\n"a0","b0"\n"a1","b1"\n',
        )

    def test_csv_without_selection_exports_whole_dataset_minus_index(self) -> None:
        store = _make_store()
        manager = CellManager.for_store(
            store,
            clipboard=ClipboardWriter(is_available=lambda: False),
            line_ending="lf",
        )

        self.assertEqual(manager.csv_text(selected_only=False), '"A","B"\n"a0","b0"\n"a1","b1"\n')
        self.assertEqual(manager.csv_text(selected_only=True), "")

    def test_single_cell_copy_has_no_header(self) -> None:
        store = _make_store()
        store.selection.select(CellCoordinate(row=0, column=1))
        copied: list[str] = []
        manager = CellManager.for_store(
            store,
            clipboard=ClipboardWriter(copy_text=lambda text: copied.append(text) or True, is_available=lambda: True),
            line_ending="crlf",
        )

        self.assertTrue(manager.copy_to_clipboard())
        self.assertEqual(copied, ["b0\r\n"])


class HoverScenarioTests(unittest.TestCase):
    def test_hovering_same_body_cell_twice_repaints_once(self) -> None:
        repaints: list[tuple] = []
        tracker = HoverTracker(
            HoverCallbacks(
                repaint_region=lambda *args: repaints.append(args),
                body_width=lambda: 300,
                default_row_height=lambda: 20,
                set_cursor=lambda _cursor: None,
                is_column_resizing=lambda: False,
                is_column_dragging=lambda: False,
            )
        )
        hovered = HoveredCell(row=2, column=1, region=CellRegion.BODY, value="a", offset=0, offset_top=40)
        again = HoveredCell(row=2, column=1, region=CellRegion.BODY, value="a", offset=0, offset_top=40)

        tracker.handle_cell_hovered(hovered)
        tracker.handle_cell_hovered(again)

        self.assertEqual(repaints, [("body", 0, 40, 300, 20)])


if __name__ == "__main__":
    unittest.main()

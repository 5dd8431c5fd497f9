"""Copy/download entry points of ``CellManager``.

Covers clipboard fallback to the whole table, the selected-only CSV flag,
index-column omission, and download payload delivery.
"""

from __future__ import annotations

import unittest

from gridcopy.cells.manager import CellManager
from gridcopy.export.sinks import ClipboardWriter
from gridcopy.model import CellCoordinate, CellRegion
from gridcopy.store import TableStore


def _make_store(has_index: bool = True) -> TableStore:
    return TableStore.from_rows(
        ["A", "B"],
        [["a0", "b0"], ["a1", "b1"]],
        index=["x0", "x1"],
        has_index=has_index,
    )


class _RecordingClipboard:
    def __init__(self, available: bool = True) -> None:
        self.available = available
        self.copied: list[str] = []

    def writer(self) -> ClipboardWriter:
        return ClipboardWriter(copy_text=self._copy, is_available=lambda: self.available)

    def _copy(self, text: str) -> bool:
        self.copied.append(text)
        return True


def _make_manager(store: TableStore, clipboard: _RecordingClipboard | None = None, **kwargs) -> CellManager:
    clipboard = clipboard or _RecordingClipboard()
    return CellManager.for_store(store, clipboard=clipboard.writer(), line_ending="lf", **kwargs)


class CsvExportTests(unittest.TestCase):
    def test_body_block_selection_exports_body_values(self) -> None:
        store = _make_store()
        store.selection.select(CellCoordinate(row=0, column=0), CellCoordinate(row=1, column=1))
        manager = _make_manager(store)

        self.assertEqual(manager.csv_text(selected_only=True), '"A","B"\n"a0","b0"\n"a1","b1"\n')

    def test_selection_starting_at_index_column_omits_it(self) -> None:
        store = _make_store()
        store.selection.select(
            CellCoordinate(row=0, column=0, region=CellRegion.ROW_HEADER),
            CellCoordinate(row=1, column=1),
        )
        manager = _make_manager(store)

        self.assertEqual(manager.csv_text(selected_only=True), '"A","B"\n"a0","b0"\n"a1","b1"\n')

    def test_whole_table_export_omits_index_column_when_index_is_data(self) -> None:
        manager = _make_manager(_make_store())

        self.assertEqual(manager.csv_text(selected_only=False), '"A","B"\n"a0","b0"\n"a1","b1"\n')

    def test_whole_table_export_keeps_row_number_column_without_index(self) -> None:
        store = TableStore.from_rows(["A"], [["a0"], ["a1"]], has_index=False)
        manager = _make_manager(store)

        self.assertEqual(manager.csv_text(selected_only=False), '"index","A"\n"0","a0"\n"1","a1"\n')

    def test_selected_only_without_selection_does_not_fall_back(self) -> None:
        manager = _make_manager(_make_store())

        self.assertEqual(manager.csv_text(selected_only=True), "")

    def test_crlf_line_ending(self) -> None:
        store = _make_store()
        manager = CellManager.for_store(store, clipboard=_RecordingClipboard().writer(), line_ending="crlf")

        self.assertEqual(manager.csv_text(selected_only=False), '"A","B"\r\n"a0","b0"\r\n"a1","b1"\r\n')

    def test_tsv_export_text(self) -> None:
        manager = _make_manager(_make_store())

        self.assertEqual(manager.export_text("tabs", selected_only=False), "A\tB\na0\tb0\na1\tb1\n")


class CsvDownloadTests(unittest.TestCase):
    def test_download_payload_is_delivered_to_trigger(self) -> None:
        delivered = []
        manager = _make_manager(_make_store(), trigger_download=delivered.append)

        payload = manager.csv_download(selected_only=False)

        self.assertEqual(delivered, [payload])
        self.assertEqual(payload.filename, "tableRows.csv")
        self.assertEqual(payload.mime_type, "text/csv")
        self.assertEqual(payload.text, '"A","B"\n"a0","b0"\n"a1","b1"\n')
        self.assertEqual(
            payload.href,
            "data:attachment/csv;charset=utf-8,%22A%22,%22B%22%0A%22a0%22,%22b0%22%0A%22a1%22,%22b1%22%0A",
        )

    def test_download_without_trigger_still_returns_payload(self) -> None:
        manager = _make_manager(_make_store(), download_filename="rows.csv")

        payload = manager.csv_download(selected_only=False)

        self.assertEqual(payload.filename, "rows.csv")

    def test_destroy_detaches_download_trigger(self) -> None:
        delivered = []
        manager = _make_manager(_make_store(), trigger_download=delivered.append)

        manager.destroy()
        manager.csv_download(selected_only=False)

        self.assertEqual(delivered, [])


class ClipboardCopyTests(unittest.TestCase):
    def test_copy_uses_selection_as_tsv(self) -> None:
        store = _make_store()
        store.selection.select(CellCoordinate(row=1, column=1))
        clipboard = _RecordingClipboard()
        manager = _make_manager(store, clipboard)

        self.assertTrue(manager.copy_to_clipboard())
        self.assertEqual(clipboard.copied, ["b1\n"])

    def test_copy_without_selection_falls_back_to_whole_table(self) -> None:
        clipboard = _RecordingClipboard()
        manager = _make_manager(_make_store(), clipboard)

        self.assertTrue(manager.copy_to_clipboard())
        self.assertEqual(clipboard.copied, ["A\tB\na0\tb0\na1\tb1\n"])

    def test_copy_with_empty_selection_result_falls_back_to_whole_table(self) -> None:
        store = _make_store()
        store.selection.select(CellCoordinate(row=9, column=0))
        clipboard = _RecordingClipboard()
        manager = _make_manager(store, clipboard)

        manager.copy_to_clipboard()

        self.assertEqual(clipboard.copied, ["A\tB\na0\tb0\na1\tb1\n"])

    def test_copy_is_noop_without_clipboard(self) -> None:
        clipboard = _RecordingClipboard(available=False)
        manager = _make_manager(_make_store(), clipboard)

        self.assertFalse(manager.copy_to_clipboard())
        self.assertEqual(clipboard.copied, [])

    def test_copy_reports_failure_when_clipboard_keeps_raising(self) -> None:
        def broken_copy(_text: str) -> bool:
            raise RuntimeError("clipboard write failed")

        manager = CellManager.for_store(
            _make_store(),
            clipboard=ClipboardWriter(copy_text=broken_copy, is_available=lambda: True),
            line_ending="lf",
        )

        with self.assertLogs("gridcopy.export.sinks", level="WARNING"):
            self.assertFalse(manager.copy_to_clipboard())

    def test_copy_formats_each_selected_cell_once(self) -> None:
        seen: list[tuple[int, int]] = []

        def counting_format(config) -> str:
            seen.append((config.row, config.column))
            return str(config.value)

        store = TableStore.from_rows(
            ["A", "B"],
            [["a0", "b0"], ["a1", "b1"]],
            formatters={"A": counting_format, "B": counting_format},
        )
        store.selection.select(CellCoordinate(row=0, column=0), CellCoordinate(row=1, column=1))
        clipboard = _RecordingClipboard()
        manager = _make_manager(store, clipboard)

        manager.copy_to_clipboard()

        self.assertEqual(clipboard.copied, ["A\tB\na0\tb0\na1\tb1\n"])
        self.assertEqual(sorted(seen), [(0, 0), (0, 1), (1, 0), (1, 1)])


if __name__ == "__main__":
    unittest.main()

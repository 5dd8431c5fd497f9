"""Copy and download entry points for a grid's cells.

``CellManager`` composes selection resolution, matrix building, and export,
then hands the text to a clipboard writer or a download trigger.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..export.exporter import ExportFormat, LineEnding, export_cells_to, resolve_line_ending
from ..export.sinks import CSV_DOWNLOAD_FILENAME, ClipboardWriter, DownloadPayload, build_csv_download
from ..model import CellMatrix, CellRange, CellRegion
from .matrix import CellMatrixBuilder
from .selection import ResolvedRanges, SelectionRangeResolver

logger = logging.getLogger(__name__)


class CellManager:
    """Export the selected cells, or the whole table, of one grid."""

    def __init__(
        self,
        *,
        row_manager,
        column_manager,
        selection,
        has_index: Callable[[], bool],
        clipboard: ClipboardWriter | None = None,
        trigger_download: Callable[[DownloadPayload], None] | None = None,
        line_ending: LineEnding | str = LineEnding.AUTO,
        download_filename: str = CSV_DOWNLOAD_FILENAME,
    ) -> None:
        """Bind export operations to a grid's managers and sinks.

        Args:
            row_manager: Provides ``rows`` and ``take_rows(start, end)``.
            column_manager: Provides ``columns`` and ``take_columns_by_cells``.
            selection: Provides ``get_rows_range_cells`` and
                ``get_columns_range_cells``.
            has_index: Whether the table's index column holds real data; such
                a column is left out of exported text.
            clipboard: Clipboard writer; a system writer by default.
            trigger_download: Receives CSV download payloads. Downloads are
                skipped when omitted.
            line_ending: ``auto``, ``lf``, or ``crlf``.
            download_filename: Suggested name for CSV downloads.
        """
        self.resolver = SelectionRangeResolver(selection, row_manager, column_manager)
        self.builder = CellMatrixBuilder(row_manager, column_manager, self.resolver)
        self._has_index = has_index
        self._clipboard = clipboard if clipboard is not None else ClipboardWriter()
        self._trigger_download = trigger_download
        self._eol = resolve_line_ending(line_ending)
        self._download_filename = download_filename

    @classmethod
    def for_store(cls, store, **kwargs) -> CellManager:
        """Create a manager over a ``TableStore``."""
        return cls(
            row_manager=store.row_manager,
            column_manager=store.column_manager,
            selection=store.selection,
            has_index=store.has_index,
            **kwargs,
        )

    @property
    def eol(self) -> str:
        return self._eol

    def get_selected_cells(self) -> CellMatrix:
        return self.builder.get_selected_cells()

    def get_all_cells(self) -> CellMatrix:
        return self.builder.get_all_cells()

    def _strip_index(self, columns_range: CellRange) -> bool:
        """Return whether column 0 of a matrix built from ``columns_range`` is a data index."""
        return bool(self._has_index()) and columns_range.normalized().start.region is CellRegion.ROW_HEADER

    def _export_cells(self, cells: CellMatrix, columns_range: CellRange, fmt: ExportFormat) -> str:
        return export_cells_to(cells, fmt, self._strip_index(columns_range), self._eol)

    def _export(self, ranges: ResolvedRanges | None, fmt: ExportFormat) -> str:
        if ranges is None:
            return ""
        rows_range, columns_range = ranges
        return self._export_cells(self.builder.get_cells(rows_range, columns_range), columns_range, fmt)

    def export_text(self, fmt: ExportFormat | str, selected_only: bool) -> str:
        """Return ``fmt`` text for the selection (``selected_only``) or the whole table.

        A selected-only export with no active selection yields ``""``; there is
        no fallback to the whole table here.
        """
        fmt = ExportFormat(fmt)
        if selected_only:
            return self._export(self.resolver.get_selected_range(), fmt)
        return self._export(self.resolver.get_all_range(), fmt)

    def csv_text(self, selected_only: bool) -> str:
        return self.export_text(ExportFormat.CSV, selected_only)

    def clipboard_text(self) -> str:
        """Return TSV for the selection, falling back to the whole table."""
        ranges = self.resolver.get_selected_range()
        if ranges is not None:
            rows_range, columns_range = ranges
            cells = self.builder.get_cells(rows_range, columns_range)
            if cells:
                return self._export_cells(cells, columns_range, ExportFormat.TSV)
        return self._export(self.resolver.get_all_range(), ExportFormat.TSV)

    def copy_to_clipboard(self) -> bool:
        """Copy the selection (or whole table) as TSV; a no-op without a clipboard."""
        if not self._clipboard.is_available():
            logger.debug("clipboard unavailable; copy skipped")
            return False
        return self._clipboard.write(self.clipboard_text())

    def csv_download(self, selected_only: bool) -> DownloadPayload:
        """Build a CSV download payload and pass it to the download trigger."""
        payload = build_csv_download(self.csv_text(selected_only), self._download_filename)
        if self._trigger_download is None:
            logger.debug("no download trigger configured; payload for %s not delivered", payload.filename)
        else:
            self._trigger_download(payload)
        return payload

    def destroy(self) -> None:
        self._trigger_download = None

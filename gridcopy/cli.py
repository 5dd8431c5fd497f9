"""Command-line front door for gridcopy.

Loads a dataset, applies an optional rectangular selection, and exports it
as CSV/TSV to stdout, the clipboard, or a downloads directory.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .cells.manager import CellManager
from .export.exporter import ExportFormat, LineEnding
from .export.sinks import ClipboardWriter, save_payload_to_directory
from .logging_config import setup_logging
from .model import CellCoordinate, CellRegion
from .store import DatasetError, load_table

INDEX_TOKEN = "index"


def _parse_span(text: str, *, allow_index: bool) -> tuple[int | None, int]:
    """Parse ``A`` or ``A:B`` into inclusive bounds; ``None`` marks the index column."""
    parts = text.split(":")
    if len(parts) > 2 or not all(part.strip() for part in parts):
        raise argparse.ArgumentTypeError(f"invalid span: {text!r}")
    bounds: list[int | None] = []
    for part in parts:
        part = part.strip()
        if allow_index and part.lower() == INDEX_TOKEN:
            bounds.append(None)
            continue
        try:
            value = int(part)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"invalid integer value: {part!r}") from exc
        if value < 0:
            raise argparse.ArgumentTypeError("span bounds must be >= 0")
        bounds.append(value)
    if len(bounds) == 1:
        bounds.append(bounds[0])
    first, last = bounds
    if last is None:
        raise argparse.ArgumentTypeError("the index column may only start a column span")
    return first, last


def parse_selection(text: str) -> tuple[CellCoordinate, CellCoordinate]:
    """argparse type for ``ROWS,COLUMNS`` selections such as ``0:4,index:2``."""
    try:
        rows_text, columns_text = text.split(",")
    except ValueError as exc:
        raise argparse.ArgumentTypeError("selection must look like ROWS,COLUMNS (e.g. 0:4,1:2)") from exc
    first_row, last_row = _parse_span(rows_text, allow_index=False)
    first_column, last_column = _parse_span(columns_text, allow_index=True)
    if first_column is None:
        start = CellCoordinate(row=first_row, column=0, region=CellRegion.ROW_HEADER)
    else:
        start = CellCoordinate(row=first_row, column=first_column, region=CellRegion.BODY)
    end = CellCoordinate(row=last_row, column=last_column, region=CellRegion.BODY)
    return start, end


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, load the dataset, and run the requested export."""
    parser = argparse.ArgumentParser(
        description="Export a selection of a table as CSV or TSV text."
    )
    parser.add_argument("path", help="Dataset file (.json, .csv or .tsv).")
    parser.add_argument(
        "--format",
        choices=["csv", "tsv"],
        default="csv",
        help="Output format for stdout (default: csv). Clipboard copies always use tsv.",
    )
    parser.add_argument(
        "--select",
        type=parse_selection,
        default=None,
        metavar="ROWS,COLUMNS",
        help="Inclusive selection, e.g. 0:4,1:2 or 0:4,index:2.",
    )
    parser.add_argument(
        "--has-index",
        action="store_true",
        help="Treat the index column as data and leave it out of exports.",
    )
    parser.add_argument(
        "--eol",
        choices=[ending.value for ending in LineEnding],
        default=None,
        help="Line ending (default: configured value, else auto).",
    )
    parser.add_argument("--copy", action="store_true", help="Copy to the clipboard instead of printing.")
    parser.add_argument(
        "--download",
        nargs="?",
        const="",
        default=None,
        metavar="DIR",
        help="Save CSV as a download into DIR (default: configured downloads folder).",
    )
    parser.add_argument("--verbose", action="store_true", help="Log diagnostics to stderr.")
    parser.add_argument("--log-file", default=None, metavar="FILE", help="Also write diagnostics to FILE.")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, log_file=args.log_file)

    path = Path(args.path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    try:
        store = load_table(path, has_index=args.has_index)
    except DatasetError as exc:
        raise SystemExit(str(exc)) from exc

    if args.select is not None:
        store.selection.select(*args.select)

    download_dir = None
    if args.download is not None:
        download_dir = Path(args.download) if args.download else config.load_download_directory()

    manager = CellManager.for_store(
        store,
        clipboard=ClipboardWriter(),
        trigger_download=save_payload_to_directory(download_dir) if download_dir is not None else None,
        line_ending=args.eol or config.load_line_ending(),
        download_filename=config.load_download_filename(),
    )

    if args.copy:
        if not manager.copy_to_clipboard():
            raise SystemExit("Clipboard is not available.")
        return

    if download_dir is not None:
        payload = manager.csv_download(selected_only=args.select is not None)
        sys.stdout.write(f"{download_dir / payload.filename}\n")
        return

    fmt = ExportFormat.CSV if args.format == "csv" else ExportFormat.TSV
    sys.stdout.write(manager.export_text(fmt, selected_only=args.select is not None))


if __name__ == "__main__":
    main()

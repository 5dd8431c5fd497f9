"""Delimiter-separated export and its clipboard/download sinks."""

from .exporter import ExportFormat, ExportOptions, LineEnding, export_cells_to, resolve_line_ending
from .sinks import ClipboardWriter, DownloadPayload, build_csv_download, save_payload_to_directory

__all__ = [
    "ExportFormat",
    "ExportOptions",
    "LineEnding",
    "export_cells_to",
    "resolve_line_ending",
    "ClipboardWriter",
    "DownloadPayload",
    "build_csv_download",
    "save_payload_to_directory",
]

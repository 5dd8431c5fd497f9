"""Delimiter-separated serialization of cell matrices.

CSV always quotes every field and doubles embedded quotes. TSV never quotes
and replaces embedded tabs with a single space. Every row, the last one
included, ends with the line ending.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum


class ExportFormat(str, Enum):
    CSV = "csv"
    TSV = "tabs"


class LineEnding(str, Enum):
    AUTO = "auto"
    LF = "lf"
    CRLF = "crlf"


@dataclass(frozen=True)
class ExportOptions:
    """Separator, quote character, and escaping rule for one format."""

    separator: str
    quote: str
    escape: Callable[[str], str]


def _escape_csv(text: str) -> str:
    return text.replace('"', '""')


def _escape_tsv(text: str) -> str:
    return text.replace("\t", " ")


EXPORT_OPTIONS: dict[ExportFormat, ExportOptions] = {
    ExportFormat.CSV: ExportOptions(separator=",", quote='"', escape=_escape_csv),
    ExportFormat.TSV: ExportOptions(separator="\t", quote="", escape=_escape_tsv),
}


def resolve_line_ending(setting: LineEnding | str = LineEnding.AUTO, platform: str | None = None) -> str:
    """Map a line-ending setting to the literal EOL string.

    ``auto`` picks ``\\r\\n`` on Windows and ``\\n`` elsewhere.
    """
    setting = LineEnding(setting)
    if setting is LineEnding.LF:
        return "\n"
    if setting is LineEnding.CRLF:
        return "\r\n"
    platform = sys.platform if platform is None else platform
    return "\r\n" if platform.startswith("win") else "\n"


def _render_cell(value: object, options: ExportOptions) -> str:
    text = "" if value is None else options.escape(str(value))
    return f"{options.quote}{text}{options.quote}"


def export_cells_to(
    cells: Sequence[Sequence[object]],
    fmt: ExportFormat | str,
    has_index: bool,
    eol: str | None = None,
) -> str:
    """Serialize ``cells`` as CSV or TSV text.

    When ``has_index`` is set, the first column of every row (header row
    included) is dropped. ``eol`` defaults to the platform line ending.
    """
    options = EXPORT_OPTIONS[ExportFormat(fmt)]
    if eol is None:
        eol = resolve_line_ending(LineEnding.AUTO)
    start_index = 1 if has_index else 0

    out: list[str] = []
    for row in cells:
        out.append(options.separator.join(_render_cell(value, options) for value in row[start_index:]))
        out.append(eol)
    return "".join(out)

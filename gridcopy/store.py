"""In-memory row, column, and selection managers.

The cell core only talks to these through duck-typed methods, so a real grid
can supply its own managers. These implementations back the CLI and tests.
"""

from __future__ import annotations

import csv
import json
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .formatters import format_index, formatter_for_values
from .model import CellCoordinate, CellRange, CellRegion, Column, ColumnType, FormatFn, Row

INDEX_COLUMN_NAME = "index"


class DatasetError(ValueError):
    """Raised when a dataset file cannot be turned into a table."""


class RowManager:
    """Ordered rows of a table."""

    def __init__(self, rows: Sequence[Row]) -> None:
        self.rows = list(rows)

    def take_rows(self, start: int, end: int) -> list[Row]:
        """Return rows in ``[start, end)`` clamped to the table."""
        start = max(0, start)
        end = max(start, end)
        return self.rows[start:end]


class ColumnManager:
    """Index column plus ordered body columns."""

    def __init__(self, index_column: Column, body_columns: Sequence[Column]) -> None:
        self.columns: dict[ColumnType, list[Column]] = {
            ColumnType.INDEX: [index_column],
            ColumnType.BODY: list(body_columns),
        }

    def take_columns_by_cells(self, start: CellCoordinate, end: CellCoordinate) -> list[Column]:
        """Return the columns spanned by two cells, in display order.

        A span starting in the row-header region begins with the index column
        and continues from the first body column.
        """
        span = CellRange(start=start, end=end).normalized()
        result: list[Column] = []
        first_body = span.start.column
        if span.start.region is CellRegion.ROW_HEADER:
            result.extend(self.columns[ColumnType.INDEX])
            first_body = 0
        if span.end.region is CellRegion.ROW_HEADER:
            return result
        result.extend(self.columns[ColumnType.BODY][first_body : span.end.column + 1])
        return result


class GridSelection:
    """Single contiguous selection between two cells."""

    def __init__(self) -> None:
        self._start: CellCoordinate | None = None
        self._end: CellCoordinate | None = None

    def select(self, start: CellCoordinate, end: CellCoordinate | None = None) -> None:
        self._start = start
        self._end = end if end is not None else start

    def clear(self) -> None:
        self._start = None
        self._end = None

    def is_empty(self) -> bool:
        return self._start is None or self._end is None

    def get_rows_range_cells(self) -> CellRange | None:
        if self._start is None or self._end is None:
            return None
        return CellRange(start=self._start, end=self._end)

    def get_columns_range_cells(self) -> CellRange | None:
        if self._start is None or self._end is None:
            return None
        return CellRange(start=self._start, end=self._end)


@dataclass
class TableStore:
    """Managers for one table plus its ``has_index`` flag."""

    row_manager: RowManager
    column_manager: ColumnManager
    selection: GridSelection = field(default_factory=GridSelection)
    index_is_data: bool = False

    def has_index(self) -> bool:
        """Return whether the index column holds real data (not row numbers)."""
        return self.index_is_data

    @property
    def row_count(self) -> int:
        return len(self.row_manager.rows)

    @property
    def body_column_count(self) -> int:
        return len(self.column_manager.columns[ColumnType.BODY])

    @classmethod
    def from_rows(
        cls,
        column_names: Sequence[str],
        rows: Sequence[Sequence[object]],
        *,
        index: Sequence[object] | None = None,
        index_name: str = INDEX_COLUMN_NAME,
        has_index: bool = False,
        formatters: Mapping[str, FormatFn] | None = None,
    ) -> TableStore:
        """Build a table from column names and positional row values.

        ``index`` labels rows when given; otherwise rows are labelled by
        position. Columns without an explicit formatter get one picked from
        their values.
        """
        names = [str(name) for name in column_names]
        formatters = dict(formatters or {})
        for position, values in enumerate(rows):
            if len(values) > len(names):
                raise DatasetError(f"row {position} has {len(values)} values for {len(names)} columns")
        if index is not None and len(index) != len(rows):
            raise DatasetError(f"index has {len(index)} labels for {len(rows)} rows")

        body_columns = []
        for col_idx, name in enumerate(names):
            format_fn = formatters.get(name)
            if format_fn is None:
                column_values = [values[col_idx] if col_idx < len(values) else None for values in rows]
                format_fn = formatter_for_values(column_values)
            body_columns.append(Column(index=col_idx, name=name, type=ColumnType.BODY, format_fn=format_fn))

        index_column = Column(
            index=0,
            name=index_name,
            type=ColumnType.INDEX,
            format_fn=_index_formatter(index) if index is not None else format_index,
        )
        return cls(
            row_manager=RowManager([Row(index=row_idx, values=tuple(values)) for row_idx, values in enumerate(rows)]),
            column_manager=ColumnManager(index_column, body_columns),
            index_is_data=has_index,
        )

    @classmethod
    def from_records(cls, records: Sequence[Mapping[str, object]], **kwargs: object) -> TableStore:
        """Build a table from dict records; column order follows first appearance."""
        names: list[str] = []
        for record in records:
            if not isinstance(record, Mapping):
                raise DatasetError("records must be JSON objects")
            for key in record:
                if key not in names:
                    names.append(key)
        rows = [[record.get(name) for name in names] for record in records]
        return cls.from_rows(names, rows, **kwargs)


def _index_formatter(labels: Sequence[object]) -> FormatFn:
    """Format the index column from explicit labels keyed by row position."""
    labels = list(labels)

    def _format(config):
        position = config.value
        if isinstance(position, int) and 0 <= position < len(labels):
            label = labels[position]
            return None if label is None else str(label)
        return format_index(config)

    return _format


def _coerce_scalar(text: str) -> object:
    """Convert CSV text to int/float when it reads back identically; empty becomes ``None``.

    Text such as ``02134``, ``1_000``, `` 7`` or ``nan`` stays a string.
    """
    if text == "":
        return None
    try:
        number = int(text)
    except ValueError:
        pass
    else:
        return number if str(number) == text else text
    try:
        real = float(text)
    except ValueError:
        return text
    if math.isfinite(real) and repr(real) == text:
        return real
    return text


def load_table(path: Path, *, has_index: bool = False) -> TableStore:
    """Load a ``.json`` or ``.csv`` dataset into a ``TableStore``.

    JSON may be a list of record objects or an object with ``columns`` and
    ``rows`` (and optional ``index``). CSV uses its first line as header.
    """
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise DatasetError(f"cannot read {path}: {exc}") from exc

    if suffix == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DatasetError(f"invalid JSON in {path}: {exc}") from exc
        if isinstance(data, list):
            return TableStore.from_records(data, has_index=has_index)
        if isinstance(data, dict) and isinstance(data.get("columns"), list) and isinstance(data.get("rows"), list):
            index = data.get("index")
            if index is not None and not isinstance(index, list):
                raise DatasetError("'index' must be a list")
            rows = data["rows"]
            if not all(isinstance(row, list) for row in rows):
                raise DatasetError("'rows' must be a list of lists")
            return TableStore.from_rows(
                data["columns"],
                rows,
                index=index,
                has_index=has_index or index is not None,
            )
        raise DatasetError("JSON dataset must be a list of records or an object with 'columns' and 'rows'")

    if suffix in (".csv", ".tsv"):
        delimiter = "\t" if suffix == ".tsv" else ","
        reader = csv.reader(text.splitlines(), delimiter=delimiter)
        lines = list(reader)
        if not lines:
            return TableStore.from_rows([], [], has_index=has_index)
        header, *body = lines
        rows = [[_coerce_scalar(cell) for cell in line] for line in body]
        return TableStore.from_rows(header, rows, has_index=has_index)

    raise DatasetError(f"unsupported dataset type: {path.suffix or '(none)'}")

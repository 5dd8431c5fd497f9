"""Column formatting strategies.

Each strategy is a plain callable taking a ``CellFormatConfig`` and returning
the display value. Columns carry one as ``format_fn``.
"""

from __future__ import annotations

from datetime import date, datetime

from .model import CellFormatConfig, FormatFn

DEFAULT_DOUBLE_PRECISION = 4


def format_string(config: CellFormatConfig) -> object:
    """Pass ``None`` through untouched and stringify everything else."""
    if config.value is None:
        return None
    return str(config.value)


def format_index(config: CellFormatConfig) -> object:
    return str(config.value) if config.value is not None else None


def format_integer(config: CellFormatConfig) -> object:
    value = config.value
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value).lower()
    try:
        return str(int(value))
    except (TypeError, ValueError):
        return str(value)


def format_boolean(config: CellFormatConfig) -> object:
    value = config.value
    if value is None:
        return None
    return "true" if value else "false"


def double_formatter(precision: int = DEFAULT_DOUBLE_PRECISION) -> FormatFn:
    """Return a strategy rendering floats with ``precision`` decimals.

    NaN and infinities keep their names; non-numeric values are stringified.
    """
    precision = max(0, precision)

    def _format(config: CellFormatConfig) -> object:
        value = config.value
        if value is None:
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return str(value)
        if number != number:
            return "NaN"
        if number in (float("inf"), float("-inf")):
            return "Infinity" if number > 0 else "-Infinity"
        return f"{number:.{precision}f}"

    return _format


def datetime_formatter(pattern: str = "%Y-%m-%d %H:%M:%S") -> FormatFn:
    """Return a strategy rendering ``date``/``datetime`` values with ``pattern``."""

    def _format(config: CellFormatConfig) -> object:
        value = config.value
        if value is None:
            return None
        if isinstance(value, (datetime, date)):
            return value.strftime(pattern)
        return str(value)

    return _format


def formatter_for_values(values: list[object]) -> FormatFn:
    """Pick a default strategy from the non-null values of one column."""
    present = [value for value in values if value is not None]
    if not present:
        return format_string
    if all(isinstance(value, bool) for value in present):
        return format_boolean
    if all(isinstance(value, int) and not isinstance(value, bool) for value in present):
        return format_integer
    if all(isinstance(value, (int, float)) and not isinstance(value, bool) for value in present):
        return double_formatter()
    if all(isinstance(value, (datetime, date)) for value in present):
        return datetime_formatter()
    return format_string

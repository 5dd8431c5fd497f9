"""Selection resolution, matrix building, and copy/download entry points."""

from .manager import CellManager
from .matrix import CellMatrixBuilder
from .selection import SelectionRangeResolver

__all__ = [
    "CellManager",
    "CellMatrixBuilder",
    "SelectionRangeResolver",
]

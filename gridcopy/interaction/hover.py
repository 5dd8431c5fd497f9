"""Pointer-hover tracking with minimal row repaints.

The tracker remembers one hovered cell. When the pointer moves to a different
cell (by row, column, and region), it asks the renderer to repaint only the
row it left and the row it entered.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..model import CellRegion, HoveredCell, cells_equal
from .urls import is_url

POINTER_CURSOR = "pointer"
DEFAULT_CURSOR = ""


@dataclass(frozen=True)
class HoverCallbacks:
    """Renderer and interaction-mode hooks used by ``HoverTracker``."""

    repaint_region: Callable[[str, float, float, float, float], None]
    body_width: Callable[[], float]
    default_row_height: Callable[[], float]
    set_cursor: Callable[[str], None]
    is_column_resizing: Callable[[], bool]
    is_column_dragging: Callable[[], bool]


class HoverTracker:
    """Track the hovered cell and request repaints only when it changes.

    Events arriving while a column is being resized or dragged are ignored
    entirely: no cursor update, no repaint, no state change.
    """

    def __init__(self, callbacks: HoverCallbacks) -> None:
        self._callbacks = callbacks
        self._hovered: HoveredCell | None = None

    @property
    def hovered_cell(self) -> HoveredCell | None:
        return self._hovered

    def set_hovered_cell(self, data: HoveredCell | None) -> None:
        self._hovered = data

    def destroy(self) -> None:
        self._hovered = None

    def _gesture_in_progress(self) -> bool:
        return self._callbacks.is_column_resizing() or self._callbacks.is_column_dragging()

    def repaint_row(self, cell: HoveredCell | None) -> bool:
        """Request a repaint of the body row holding ``cell``.

        Returns ``False`` without repainting when the cell is missing, its
        cached geometry is not numeric, or a column drag is in progress.
        """
        if cell is None or not cell.has_valid_geometry() or self._callbacks.is_column_dragging():
            return False
        self._callbacks.repaint_region(
            CellRegion.BODY.value,
            cell.offset,
            cell.offset_top,
            self._callbacks.body_width(),
            self._callbacks.default_row_height(),
        )
        return True

    def update_cursor(self, value: object) -> None:
        self._callbacks.set_cursor(POINTER_CURSOR if is_url(value) else DEFAULT_CURSOR)

    def handle_cell_hovered(self, data: HoveredCell | None) -> None:
        """Process one hover event; ``None`` means the pointer left all cells."""
        if self._gesture_in_progress():
            return

        self.update_cursor(data.value if data is not None else None)

        if cells_equal(data, self._hovered):
            return

        self.repaint_row(self._hovered)
        if data is not None:
            self.repaint_row(data)
        self.set_hovered_cell(data)

from __future__ import annotations

import logging

from .field import PlayField
from .shapes import ShapeMatrix

logger = logging.getLogger(__name__)


class LineClearEngine:
    """Removes full rows from a PlayField after a piece locks."""

    def __init__(self, field: PlayField) -> None:
        self.field = field

    def clear_rows(self, y_start: int, span: int) -> int:
        """Scan rows ``[y_start, y_start + span)`` bottom to top and delete full ones.

        After a deletion the same row index is checked again, since the row
        above has just moved into it. Returns the number of deleted rows.
        """
        y_end = min(y_start + span, self.field.height)
        y = max(y_start, 1)  # never check the floor
        cleared = 0
        while y < y_end:
            if self.field.is_row_full(y):
                self.field.shift_rows_down(y)
                cleared += 1
                logger.debug("Cleared row %d", y)
            else:
                y += 1
        return cleared

    def clear_after_lock(self, shape: ShapeMatrix, y: int) -> int:
        """Clear full rows among those a piece locked with top row ``y`` covers."""
        return self.clear_rows(y - shape.size + 1, shape.size)

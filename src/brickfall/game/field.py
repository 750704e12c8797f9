from __future__ import annotations

from typing import List

import numpy as np

from .config import ConfigError
from .shapes import Coordinate, ShapeMatrix


class PlayField:
    """Bounded occupancy grid with permanent walls and floor.

    The grid is stored as ``grid[y, x]`` with row 0 as the floor and ``y``
    growing upward, so positions match the vertical axis of any renderer.
    The ``max_piece_size`` leftmost and rightmost columns and row 0 are always
    occupied, which lets pieces collide with walls and floor exactly as they
    collide with locked cells. The extra ``max_piece_size`` rows above the
    playable area form the spawn buffer.
    """

    def __init__(self, playable_width: int, playable_height: int, max_piece_size: int) -> None:
        if playable_width <= 0 or playable_height <= 0 or max_piece_size <= 0:
            raise ConfigError(
                "Field dimensions must be positive, got "
                f"width={playable_width} height={playable_height} max_piece_size={max_piece_size}"
            )
        self.playable_width = int(playable_width)
        self.playable_height = int(playable_height)
        self.max_piece_size = int(max_piece_size)
        self.width = self.playable_width + 2 * self.max_piece_size
        self.height = self.playable_height + self.max_piece_size
        self.grid = np.zeros((self.height, self.width), dtype=np.bool_)
        self.reset()

    @classmethod
    def build(cls, playable_width: int, playable_height: int, max_piece_size: int) -> "PlayField":
        return cls(playable_width, playable_height, max_piece_size)

    @property
    def playable_columns(self) -> slice:
        return slice(self.max_piece_size, self.width - self.max_piece_size)

    def reset(self) -> None:
        self.grid.fill(False)
        # Walls
        self.grid[:, : self.max_piece_size] = True
        self.grid[:, self.width - self.max_piece_size :] = True
        # Floor
        self.grid[0, :] = True

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_border(self, x: int, y: int) -> bool:
        return y == 0 or x < self.max_piece_size or x >= self.width - self.max_piece_size

    def is_occupied(self, x: int, y: int) -> bool:
        return bool(self.grid[y, x])

    def _field_cells(self, shape: ShapeMatrix, x: int, y: int) -> List[Coordinate]:
        # Shape row 0 is the top of the piece, so field row decreases as sy grows.
        return [(x + sx, y - sy) for sx, sy in shape.cells()]

    def would_collide(self, shape: ShapeMatrix, x: int, y: int) -> bool:
        """True if any occupied shape cell lands on an occupied field cell.

        Positions outside the allocated grid count as collisions.
        """
        for fx, fy in self._field_cells(shape, x, y):
            if not self.is_inside(fx, fy):
                return True
            if self.grid[fy, fx]:
                return True
        return False

    def commit(self, shape: ShapeMatrix, x: int, y: int) -> int:
        """Mark the shape's cells occupied and return how many were written.

        Assumes the position was already validated with ``would_collide``.
        """
        cells = self._field_cells(shape, x, y)
        for fx, fy in cells:
            if not self.is_inside(fx, fy):
                raise ValueError(f"Cannot commit cell ({fx}, {fy}) outside a {self.width}x{self.height} field")
        for fx, fy in cells:
            self.grid[fy, fx] = True
        return len(cells)

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y, self.playable_columns]))

    def shift_rows_down(self, from_y: int) -> None:
        """Delete row ``from_y`` by moving every row above it down by one."""
        cols = self.playable_columns
        self.grid[from_y : self.height - 1, cols] = self.grid[from_y + 1 : self.height, cols].copy()
        # Make sure top line is cleared
        self.grid[self.height - 1, cols] = False

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def snapshot(self, include_border: bool = True) -> np.ndarray:
        """Copy of the occupancy grid, indexed ``[y, x]`` with row 0 at the bottom."""
        if include_border:
            return self.grid.copy()
        return self.grid[1:, self.playable_columns].copy()

    def copy(self) -> "PlayField":
        new_field = PlayField(self.playable_width, self.playable_height, self.max_piece_size)
        new_field.grid = self.grid.copy()
        return new_field

    def to_text(self) -> str:
        return "\n".join("".join("1" if cell else "0" for cell in row) for row in self.grid[::-1])


def print_field(field: PlayField) -> None:
    """Print the field top row first, for debugging."""
    print(field.to_text())

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np


Coordinate = Tuple[int, int]


class InvalidShapeError(ValueError):
    """Raised when a shape definition cannot be turned into a ShapeMatrix."""


def _rot90_cw(cells: np.ndarray) -> np.ndarray:
    # new (x, y) = old (y, N-1-x)
    return np.rot90(cells, 1, axes=(1, 0))


class ShapeMatrix:
    """Immutable square boolean grid describing one orientation of a piece.

    Cells are stored as ``cells[y, x]`` where row ``y = 0`` is the visual top
    of the piece. Rotating produces a new matrix; the receiver never changes,
    so one instance can be shared by every spawn of a piece type.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: np.ndarray) -> None:
        cells = np.array(cells, dtype=np.bool_)
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1]:
            raise InvalidShapeError("Brick width and height must be the same")
        if cells.shape[0] < 2:
            raise InvalidShapeError("Bricks must have at least two lines")
        cells.flags.writeable = False
        self._cells = cells

    @classmethod
    def build(cls, rows: Sequence[str], max_size: Optional[int] = None) -> "ShapeMatrix":
        """Build a matrix from rows of '0'/'1' characters."""
        rows = list(rows)
        size = len(rows)
        if size < 2:
            raise InvalidShapeError("Bricks must have at least two lines")
        for row in rows:
            if len(row) != len(rows[0]):
                raise InvalidShapeError("All lines in the brick must be the same length")
        if len(rows[0]) != size:
            raise InvalidShapeError("Brick width and height must be the same")
        if max_size is not None and size > max_size:
            raise InvalidShapeError(f"Brick must not be larger than {max_size}")
        bad = {ch for row in rows for ch in row} - {"0", "1"}
        if bad:
            raise InvalidShapeError(f"Unexpected characters in brick definition: {sorted(bad)}")
        cells = np.array([[ch == "1" for ch in row] for row in rows], dtype=np.bool_)
        return cls(cells)

    @property
    def size(self) -> int:
        return int(self._cells.shape[0])

    @property
    def array(self) -> np.ndarray:
        """Read-only view of the cells, indexed ``[y, x]``."""
        return self._cells

    def cell(self, x: int, y: int) -> bool:
        return bool(self._cells[y, x])

    def __getitem__(self, xy: Coordinate) -> bool:
        x, y = xy
        return self.cell(x, y)

    def cells(self) -> List[Coordinate]:
        """Occupied ``(x, y)`` offsets, row by row from the top."""
        ys, xs = np.nonzero(self._cells)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    @property
    def cell_count(self) -> int:
        return int(np.count_nonzero(self._cells))

    def rotated_clockwise(self) -> "ShapeMatrix":
        return ShapeMatrix(_rot90_cw(self._cells))

    def to_rows(self) -> List[str]:
        return ["".join("1" if v else "0" for v in row) for row in self._cells]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ShapeMatrix):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    def __hash__(self) -> int:
        return hash((self.size, self._cells.tobytes()))

    def __repr__(self) -> str:
        return f"ShapeMatrix({self.to_rows()!r})"


# Square definitions of the seven tetrominoes; row 0 is the top of the piece.
DEFAULT_SHAPES: Tuple[Tuple[str, ...], ...] = (
    ("0000", "1111", "0000", "0000"),  # I
    ("11", "11"),                      # O
    ("010", "111", "000"),             # T
    ("011", "110", "000"),             # S
    ("110", "011", "000"),             # Z
    ("100", "111", "000"),             # J
    ("001", "111", "000"),             # L
)

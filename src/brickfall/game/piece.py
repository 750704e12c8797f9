from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .field import PlayField
from .shapes import Coordinate, ShapeMatrix


class FallResult(Enum):
    FELL = "fell"
    LOCKED = "locked"


class SpawnBlocked(Exception):
    """The spawn position is already occupied; the game cannot continue."""

    def __init__(self, shape: ShapeMatrix, x: int, y: int) -> None:
        super().__init__(f"Spawn position ({x}, {y}) is blocked")
        self.shape = shape
        self.x = x
        self.y = y


@dataclass
class ActivePiece:
    shape: ShapeMatrix
    x: int
    y: int
    dropped: bool = False

    def cells(self) -> List[Coordinate]:
        """Field coordinates covered by the piece."""
        return [(self.x + sx, self.y - sy) for sx, sy in self.shape.cells()]


class PieceController:
    """Owns the falling piece and applies move/rotate/fall requests to it.

    Every request is checked against the field first; a blocked request leaves
    the piece untouched and reports ``False`` (or ``FallResult.LOCKED``).
    """

    def __init__(self, field: PlayField) -> None:
        self.field = field
        self.piece: Optional[ActivePiece] = None

    def spawn_anchor(self, shape: ShapeMatrix) -> Tuple[int, int]:
        # Odd sizes center on the middle column, even sizes on the middle edge.
        x = self.field.width // 2 - shape.size // 2
        y = self.field.height - 1
        return x, y

    def try_spawn(self, shape: ShapeMatrix) -> ActivePiece:
        x, y = self.spawn_anchor(shape)
        if self.field.would_collide(shape, x, y):
            self.piece = None
            raise SpawnBlocked(shape, x, y)
        self.piece = ActivePiece(shape=shape, x=x, y=y)
        return self.piece

    def _active(self) -> ActivePiece:
        if self.piece is None:
            raise RuntimeError("No active piece")
        return self.piece

    def try_move(self, direction: int) -> bool:
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or 1, got {direction}")
        piece = self._active()
        if piece.dropped:
            return False
        if self.field.would_collide(piece.shape, piece.x + direction, piece.y):
            return False
        piece.x += direction
        return True

    def try_rotate_clockwise(self) -> bool:
        piece = self._active()
        if piece.dropped:
            return False
        rotated = piece.shape.rotated_clockwise()
        if self.field.would_collide(rotated, piece.x, piece.y):
            return False
        piece.shape = rotated
        return True

    def try_fall_one_row(self) -> FallResult:
        piece = self._active()
        if self.field.would_collide(piece.shape, piece.x, piece.y - 1):
            return FallResult.LOCKED
        piece.y -= 1
        return FallResult.FELL

    def drop(self) -> bool:
        """Mark the piece as dropped; it ignores further moves and rotations."""
        piece = self._active()
        if piece.dropped:
            return False
        piece.dropped = True
        return True

    def lock(self) -> ActivePiece:
        """Write the piece into the field at its current anchor and release it."""
        piece = self._active()
        self.field.commit(piece.shape, piece.x, piece.y)
        self.piece = None
        return piece

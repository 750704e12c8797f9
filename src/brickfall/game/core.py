from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional, Sequence

import numpy as np

from .clearing import LineClearEngine
from .config import GameConfig
from .field import PlayField
from .piece import ActivePiece, FallResult, PieceController, SpawnBlocked
from .rules import SpeedRules
from .shapes import InvalidShapeError, ShapeMatrix

logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    DROP = 3
    ADVANCE = 4
    NONE = 5


class Outcome(Enum):
    APPLIED = "applied"
    REJECTED = "rejected"
    LOCKED = "locked"
    SESSION_OVER = "session_over"


@dataclass(frozen=True)
class CommandResult:
    outcome: Outcome
    rows_cleared: int = 0
    game_over: bool = False

    @property
    def applied(self) -> bool:
        return self.outcome in (Outcome.APPLIED, Outcome.LOCKED)

    @property
    def locked(self) -> bool:
        return self.outcome is Outcome.LOCKED


@dataclass(frozen=True)
class PieceView:
    """Read-only copy of the falling piece for rendering."""
    shape: ShapeMatrix
    x: int
    y: int
    dropped: bool


class GameSession:
    """Runs one game: spawn, fall, lock, clear, respawn, until a spawn is blocked.

    The session is single-threaded and never waits; the host decides when to
    call ``advance_fall`` (see ``fall_interval``) and re-renders from the
    query methods after each command.
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 shapes: Optional[Sequence[Sequence[str]]] = None) -> None:
        self.config = config or GameConfig()
        definitions = shapes if shapes is not None else self.config.shape_definitions
        self.shapes = self._build_shapes(definitions)
        self.rng = random.Random(self.config.random_seed)
        self.field = PlayField.build(
            self.config.playable_width, self.config.playable_height, self.config.max_piece_size
        )
        self.controller = PieceController(self.field)
        self.clearer = LineClearEngine(self.field)
        self.speed = SpeedRules(
            base_fall_speed=self.config.base_fall_speed,
            drop_fall_speed=self.config.drop_fall_speed,
            rows_cleared_to_speedup=self.config.rows_cleared_to_speedup,
            speedup_increment=self.config.speedup_increment,
        )
        self.game_over = False
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.reset()

    def _build_shapes(self, definitions: Sequence[Sequence[str]]) -> List[ShapeMatrix]:
        if len(definitions) == 0:
            raise InvalidShapeError("At least one shape definition is required")
        shapes = [ShapeMatrix.build(rows, max_size=self.config.max_piece_size) for rows in definitions]
        for shape in shapes:
            if shape.size > self.config.playable_width:
                raise InvalidShapeError(
                    f"Brick of size {shape.size} does not fit a field {self.config.playable_width} wide"
                )
        return shapes

    def reset(self) -> None:
        self.field.reset()
        self.speed.reset()
        self.controller.piece = None
        self.game_over = False
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.spawn_next()

    # Commands

    def spawn_next(self) -> CommandResult:
        if self.game_over:
            return CommandResult(Outcome.SESSION_OVER, game_over=True)
        if self.controller.piece is not None:
            return CommandResult(Outcome.REJECTED)
        shape = self.rng.choice(self.shapes)
        try:
            self.controller.try_spawn(shape)
        except SpawnBlocked as exc:
            logger.info("Game over: %s after %d pieces", exc, self.pieces_locked)
            self.game_over = True
            return CommandResult(Outcome.REJECTED, game_over=True)
        return CommandResult(Outcome.APPLIED)

    def _apply(self, applied: bool) -> CommandResult:
        return CommandResult(Outcome.APPLIED if applied else Outcome.REJECTED)

    def move_left(self) -> CommandResult:
        if self.game_over:
            return CommandResult(Outcome.SESSION_OVER, game_over=True)
        return self._apply(self.controller.try_move(-1))

    def move_right(self) -> CommandResult:
        if self.game_over:
            return CommandResult(Outcome.SESSION_OVER, game_over=True)
        return self._apply(self.controller.try_move(1))

    def rotate(self) -> CommandResult:
        if self.game_over:
            return CommandResult(Outcome.SESSION_OVER, game_over=True)
        return self._apply(self.controller.try_rotate_clockwise())

    def drop(self) -> CommandResult:
        """Switch the falling piece to drop speed; the host advances it faster."""
        if self.game_over:
            return CommandResult(Outcome.SESSION_OVER, game_over=True)
        return self._apply(self.controller.drop())

    def advance_fall(self) -> CommandResult:
        """One gravity step; locks the piece and spawns the next one when it lands."""
        if self.game_over:
            return CommandResult(Outcome.SESSION_OVER, game_over=True)
        if self.controller.try_fall_one_row() is FallResult.FELL:
            return CommandResult(Outcome.APPLIED)
        return self._lock_piece()

    def _lock_piece(self) -> CommandResult:
        piece = self.controller.lock()
        self.pieces_locked += 1
        rows = self.clearer.clear_after_lock(piece.shape, piece.y)
        self.lines_cleared_total += rows
        self.speed.register_cleared(rows)
        logger.debug("Locked piece at (%d, %d), %d rows cleared", piece.x, piece.y, rows)
        spawned = self.spawn_next()
        return CommandResult(Outcome.LOCKED, rows_cleared=rows, game_over=spawned.game_over)

    def step(self, action: Action) -> CommandResult:
        if self.game_over:
            return CommandResult(Outcome.SESSION_OVER, game_over=True)

        if action == Action.LEFT:
            return self.move_left()
        elif action == Action.RIGHT:
            return self.move_right()
        elif action == Action.ROTATE:
            return self.rotate()
        elif action == Action.DROP:
            return self.drop()
        elif action == Action.ADVANCE:
            return self.advance_fall()
        elif action == Action.NONE:
            return CommandResult(Outcome.REJECTED)
        raise ValueError(f"Unknown action {action!r}")

    # Queries

    @property
    def fall_speed(self) -> float:
        return self.speed.fall_speed

    @property
    def rows_cleared_since_speedup(self) -> int:
        return self.speed.rows_cleared_since_speedup

    @property
    def active_piece(self) -> Optional[PieceView]:
        piece: Optional[ActivePiece] = self.controller.piece
        if piece is None:
            return None
        return PieceView(piece.shape, piece.x, piece.y, piece.dropped)

    def fall_interval(self) -> float:
        """Seconds until the next gravity step for the current piece."""
        piece = self.controller.piece
        return self.speed.fall_interval(dropped=piece is not None and piece.dropped)

    def field_snapshot(self, include_border: bool = False) -> np.ndarray:
        return self.field.snapshot(include_border=include_border)

    def get_state(self) -> np.ndarray:
        # Locked cells and border are 1, the falling piece is overlaid as -1.
        state = self.field.snapshot().astype(np.int8)
        piece = self.controller.piece
        if piece is not None and not self.game_over:
            for x, y in piece.cells():
                if self.field.is_inside(x, y):
                    state[y, x] = -1
        return state

    def get_stats(self) -> dict:
        return {
            "pieces_locked": self.pieces_locked,
            "lines_cleared": self.lines_cleared_total,
            "fall_speed": self.fall_speed,
            "rows_cleared_since_speedup": self.rows_cleared_since_speedup,
            "game_over": self.game_over,
        }

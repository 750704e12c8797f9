"""Game module for brickfall.

Exports the core engine and supporting classes:
- ShapeMatrix: Immutable square piece shape with clockwise rotation
- PlayField: Bordered occupancy grid with collision and commit
- LineClearEngine: Cascading full-row removal
- PieceController: Falling piece movement against the field
- SpeedRules: Fall speed progression
- GameSession: Main game loop and state management
"""

from .shapes import DEFAULT_SHAPES, InvalidShapeError, ShapeMatrix
from .config import ConfigError, GameConfig
from .field import PlayField, print_field
from .clearing import LineClearEngine
from .piece import ActivePiece, FallResult, PieceController, SpawnBlocked
from .rules import SpeedRules
from .core import Action, CommandResult, GameSession, Outcome, PieceView

__all__ = [
    "DEFAULT_SHAPES",
    "InvalidShapeError",
    "ShapeMatrix",
    "ConfigError",
    "GameConfig",
    "PlayField",
    "print_field",
    "LineClearEngine",
    "ActivePiece",
    "FallResult",
    "PieceController",
    "SpawnBlocked",
    "SpeedRules",
    "Action",
    "CommandResult",
    "GameSession",
    "Outcome",
    "PieceView",
]

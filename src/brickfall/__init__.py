"""brickfall: the logic core of a falling-block puzzle game."""

from .game import (
    Action,
    CommandResult,
    ConfigError,
    GameConfig,
    GameSession,
    InvalidShapeError,
    Outcome,
    PlayField,
    ShapeMatrix,
)

__version__ = "0.1.0"

__all__ = [
    "Action",
    "CommandResult",
    "ConfigError",
    "GameConfig",
    "GameSession",
    "InvalidShapeError",
    "Outcome",
    "PlayField",
    "ShapeMatrix",
    "__version__",
]

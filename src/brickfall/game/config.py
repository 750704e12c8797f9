from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .shapes import DEFAULT_SHAPES


class ConfigError(ValueError):
    """Raised when a game configuration cannot be used to run a session."""


@dataclass(frozen=True)
class GameConfig:
    """Configuration for a game session, fixed for its lifetime."""
    playable_width: int = 10
    playable_height: int = 13
    max_piece_size: int = 5
    base_fall_speed: float = 2.0  # rows per second
    drop_fall_speed: float = 30.0
    move_repeat_delay: float = 0.1  # seconds between repeated horizontal moves
    rows_cleared_to_speedup: int = 10
    speedup_increment: float = 0.5
    random_seed: Optional[int] = None
    shape_definitions: Sequence[Sequence[str]] = DEFAULT_SHAPES

    def __post_init__(self) -> None:
        if self.playable_width <= 0 or self.playable_height <= 0:
            raise ConfigError(
                f"Playable area must be positive, got {self.playable_width}x{self.playable_height}"
            )
        if self.max_piece_size < 2:
            raise ConfigError(f"max_piece_size must be at least 2, got {self.max_piece_size}")
        if self.base_fall_speed <= 0 or self.drop_fall_speed <= 0:
            raise ConfigError("Fall speeds must be positive")
        if self.move_repeat_delay < 0:
            raise ConfigError("move_repeat_delay must not be negative")
        if self.rows_cleared_to_speedup < 1:
            raise ConfigError("rows_cleared_to_speedup must be at least 1")
        if self.speedup_increment < 0:
            raise ConfigError("speedup_increment must not be negative")
        if len(self.shape_definitions) == 0:
            raise ConfigError("At least one shape definition is required")

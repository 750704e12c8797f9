from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class SpeedRules:
    """Fall speed progression.

    Every ``rows_cleared_to_speedup`` cleared rows the fall speed grows by
    ``speedup_increment`` and the counter starts again from zero.
    """
    base_fall_speed: float = 2.0
    drop_fall_speed: float = 30.0
    rows_cleared_to_speedup: int = 10
    speedup_increment: float = 0.5
    fall_speed: float = field(init=False)
    rows_cleared_since_speedup: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self.fall_speed = self.base_fall_speed

    def reset(self) -> None:
        self.fall_speed = self.base_fall_speed
        self.rows_cleared_since_speedup = 0

    def register_cleared(self, rows: int) -> int:
        """Count cleared rows and return how many speedups they triggered."""
        speedups = 0
        for _ in range(max(0, rows)):
            self.rows_cleared_since_speedup += 1
            if self.rows_cleared_since_speedup == self.rows_cleared_to_speedup:
                self.fall_speed += self.speedup_increment
                self.rows_cleared_since_speedup = 0
                speedups += 1
        if speedups:
            logger.info("Fall speed increased to %.2f rows/s", self.fall_speed)
        return speedups

    def fall_interval(self, dropped: bool = False) -> float:
        """Seconds the host should wait between gravity steps."""
        speed = self.drop_fall_speed if dropped else self.fall_speed
        return 1.0 / speed

    def spawn_delay(self) -> float:
        # A fresh piece hovers for two fall intervals before gravity starts.
        return self.fall_interval() * 2.0

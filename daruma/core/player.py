"""
Player Steering
===============

Discrete steering direction mapped to a heading angle. The player's
speed grows with mileage; the heading splits it into sideways motion
and the level's scroll.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from daruma.core.config_loader import PlayerConfig


@dataclass
class PlayerState:
    """Horizontal position and steering direction of the falling object."""
    x: float = 0.5
    direction: int = 0

    @classmethod
    def spawn(cls, config: PlayerConfig) -> "PlayerState":
        return cls(x=config.start_x, direction=0)

    def steer(self, left: bool, right: bool, config: PlayerConfig) -> None:
        """
        Step the direction once if exactly one of left/right was pressed.

        Args:
            left: Left was pressed this tick.
            right: Right was pressed this tick.
            config: Player configuration (for the direction limit).
        """
        if left == right:
            return
        limit = config.max_direction
        if left:
            self.direction = max(self.direction - 1, -limit)
        else:
            self.direction = min(self.direction + 1, limit)

    def angle(self, config: PlayerConfig) -> float:
        """Heading in radians; negative is left, positive is right."""
        sign = 1 if self.direction > 0 else -1
        return sign * config.steering_angles[abs(self.direction)]

    def advance(self, mileage: float, config: PlayerConfig) -> float:
        """
        Move sideways for one tick.

        Args:
            mileage: Current level mileage (sets the speed).
            config: Player configuration.

        Returns:
            Vertical scroll delta to feed into the level this tick.
        """
        dx, dy = self.velocity(mileage, config)
        self.x += dx
        return dy

    def velocity(self, mileage: float, config: PlayerConfig) -> Tuple[float, float]:
        """(sideways, scroll) displacement per tick at the given mileage."""
        speed = player_speed(mileage, config)
        angle = self.angle(config)
        return math.sin(angle) * speed, math.cos(angle) * speed


def player_speed(mileage: float, config: PlayerConfig) -> float:
    """Speed per tick; grows linearly with mileage."""
    return config.base_speed + config.speed_per_mileage * mileage

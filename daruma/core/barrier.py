"""
Barrier
=======

A single row of wall in the lane. Geometry is fixed at creation;
only the vertical position changes as the level scrolls.

Gap edges belong to the wall: openings are open intervals, so a player
exactly on ``gap_offset`` (or ``gap_offset + hole_width`` for a slit) hits.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class BarrierType(Enum):
    """Which side(s) of the row are solid."""
    LEFT = 0     # Solid from the left edge up to gap_offset
    RIGHT = 1    # Solid from gap_offset to the right edge
    SLIT = 2     # Solid on both sides of a hole_width gap


@dataclass
class Barrier:
    """
    Barrier row in lane-normalized coordinates.

    Attributes:
        type: Which side(s) are solid.
        gap_offset: Edge of the solid region (LEFT/RIGHT) or left edge of the gap (SLIT).
        height: Vertical extent in screen heights.
        y_pos: Top of the barrier; decreases as the level scrolls.
        hole_width: Gap width, only meaningful for SLIT.
    """
    type: BarrierType
    gap_offset: float
    height: float
    y_pos: float
    hole_width: float = field(default=0.25)

    def blocks(self, x: float) -> bool:
        """True if ``x`` lies in this row's solid region, ignoring height."""
        if self.type is BarrierType.LEFT:
            return x <= self.gap_offset
        if self.type is BarrierType.RIGHT:
            return x >= self.gap_offset
        return not (self.gap_offset < x < self.gap_offset + self.hole_width)

    def hit(self, x: float, player_y: float) -> bool:
        """
        Check whether a player at (x, player_y) collides with this barrier.

        Args:
            x: Horizontal player position.
            player_y: Fixed vertical player position.

        Returns:
            True if the point is inside a solid span of this row.
        """
        if not self.blocks(x):
            return False
        return self.y_pos < player_y < self.y_pos + self.height

    def is_visible(self) -> bool:
        """True while any part of the barrier is still below the top edge."""
        return self.y_pos > -self.height

    def opening(self) -> Tuple[float, float]:
        """Open horizontal interval (lo, hi) the player can pass through."""
        if self.type is BarrierType.LEFT:
            return (self.gap_offset, 1.0)
        if self.type is BarrierType.RIGHT:
            return (0.0, self.gap_offset)
        return (self.gap_offset, self.gap_offset + self.hole_width)

    def solid_spans(self) -> Tuple[Tuple[float, float], ...]:
        """Solid horizontal spans (x0, x1), used for drawing."""
        if self.type is BarrierType.LEFT:
            return ((0.0, self.gap_offset),)
        if self.type is BarrierType.RIGHT:
            return ((self.gap_offset, 1.0),)
        return (
            (0.0, self.gap_offset),
            (self.gap_offset + self.hole_width, 1.0),
        )

    def __repr__(self) -> str:
        return (f"Barrier({self.type.name}, gap={self.gap_offset:.3f}, "
                f"h={self.height:.3f}, y={self.y_pos:.3f})")

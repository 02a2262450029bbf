"""
Level - Rolling Barrier Window
==============================

Generates barriers procedurally, scrolls them past the player and
answers lane-wide collision queries.
"""

from __future__ import annotations

import random
from collections import deque
from typing import Deque, Optional, Tuple

from daruma.core.barrier import Barrier, BarrierType
from daruma.core.config_loader import GameConfig, LaneConfig, get_config


# Types allowed to follow each type; keeps every opening reachable
_SUCCESSORS = {
    BarrierType.LEFT: (BarrierType.RIGHT, BarrierType.SLIT),
    BarrierType.RIGHT: (BarrierType.LEFT, BarrierType.SLIT),
    BarrierType.SLIT: (BarrierType.LEFT, BarrierType.RIGHT, BarrierType.SLIT),
}


def barrier_height_for(mileage: float, lane: LaneConfig) -> float:
    """
    Height of a barrier generated at the given mileage.

    Grows linearly from the initial to the max height over
    ``difficulty_mileage``, then stays flat.
    """
    factor = min(mileage / lane.difficulty_mileage, 1.0)
    return (lane.initial_barrier_height
            + factor * (lane.max_barrier_height - lane.initial_barrier_height))


class Level:
    """
    Ordered window of barriers for one run.

    The front of the window is the oldest barrier (closest to the top edge),
    the back is the newest. Each update retires at most one barrier and
    appends exactly one in its place.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize level.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Ignored if rng is given.
            rng: Random generator to draw barriers from.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._lane = config.lane
        self._rng = rng if rng is not None else random.Random(seed)
        self._mileage: float = 0.0

        # Seed barrier: a centered slit
        lane = self._lane
        self._barriers: Deque[Barrier] = deque([
            Barrier(
                type=BarrierType.SLIT,
                gap_offset=0.5 - lane.hole_width / 2.0,
                height=lane.initial_barrier_height,
                y_pos=lane.spawn_y,
                hole_width=lane.hole_width
            )
        ])

        # Prefill until the window depth is covered
        spanned = 0.0
        while spanned < lane.window_depth:
            self._add_barrier()
            spanned += lane.barrier_interval

    @property
    def mileage(self) -> float:
        """Total distance scrolled so far."""
        return self._mileage

    @property
    def barriers(self) -> Tuple[Barrier, ...]:
        """Current barrier window, front first (read-only view)."""
        return tuple(self._barriers)

    @property
    def score(self) -> int:
        """Score earned on this level."""
        return self._config.score_for(self._mileage)

    def update(self, scroll_delta: float) -> bool:
        """
        Scroll the level by ``scroll_delta``.

        Args:
            scroll_delta: Distance scrolled this tick (non-negative).

        Returns:
            True if the front barrier was retired this tick.
        """
        self._mileage += scroll_delta

        # Scroll every barrier up
        for barrier in self._barriers:
            barrier.y_pos -= scroll_delta

        # Retire at most one barrier, replacing it at the back
        if not self._barriers[0].is_visible():
            self._barriers.popleft()
            self._add_barrier()
            return True
        return False

    def hit(self, player_x: float) -> bool:
        """
        Check whether a player at ``player_x`` collides with anything.

        Side walls are tested first, then each barrier in window order.
        """
        # Side walls
        wall = self._lane.side_wall_width
        if player_x < wall or player_x > 1.0 - wall:
            return True

        # Barriers
        player_y = self._lane.player_pos_y
        return any(barrier.hit(player_x, player_y) for barrier in self._barriers)

    def get_mileage(self) -> float:
        return self._mileage

    def _add_barrier(self) -> None:
        """Append one barrier behind the current back of the window."""
        lane = self._lane
        previous = self._barriers[-1]

        pos = self._rng.uniform(lane.gap_anchor_min, lane.gap_anchor_max)
        new_type = self._rng.choice(_SUCCESSORS[previous.type])

        # Offset follows the type of the barrier in front
        if previous.type is BarrierType.LEFT:
            gap_offset = pos
        elif previous.type is BarrierType.RIGHT:
            gap_offset = 1.0 - pos
        else:
            gap_offset = pos - lane.hole_width / 2.0

        self._barriers.append(Barrier(
            type=new_type,
            gap_offset=gap_offset,
            height=barrier_height_for(self._mileage, lane),
            y_pos=previous.y_pos + lane.barrier_interval,
            hole_width=lane.hole_width
        ))

    def __len__(self) -> int:
        return len(self._barriers)

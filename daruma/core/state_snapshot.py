"""
State Snapshot
==============

Packs game state into fixed-size numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, TYPE_CHECKING
import numpy as np

from daruma.core.config_loader import GameConfig, get_config

if TYPE_CHECKING:
    from daruma.core.scenes import SessionState


@dataclass
class GameSnapshot:
    """
    Game state snapshot.

    Barrier arrays are fixed-size with masking; slot 0 is the front
    (oldest) barrier of the window.
    """
    # Player
    player_x: float
    direction: int
    angle: float
    player_y: float

    # Progress
    mileage: float
    score: int
    high_score: int
    ticks: int

    # Lane
    side_wall_width: float
    hole_width: float

    # Barrier arrays (fixed size, padded)
    bar_type: np.ndarray              # (MAX_BAR,) int8, -1 for empty slots
    bar_gap: np.ndarray               # (MAX_BAR,) float32
    bar_y: np.ndarray                 # (MAX_BAR,) float32
    bar_height: np.ndarray            # (MAX_BAR,) float32
    bar_mask: np.ndarray              # (MAX_BAR,) bool

    # Optional image
    board_rgb: Optional[np.ndarray] = None

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        obs = {
            "player_x": np.array(self.player_x, dtype=np.float32),
            "direction": np.array(self.direction, dtype=np.int32),
            "angle": np.array(self.angle, dtype=np.float32),
            "mileage": np.array(self.mileage, dtype=np.float32),
            "score": np.array(self.score, dtype=np.int64),

            "bar_type": self.bar_type.copy(),
            "bar_gap": self.bar_gap.copy(),
            "bar_y": self.bar_y.copy(),
            "bar_height": self.bar_height.copy(),
            "bar_mask": self.bar_mask.astype(np.int8),
        }
        if self.board_rgb is not None:
            obs["board_rgb"] = self.board_rgb
        return obs

    @property
    def barrier_count(self) -> int:
        return int(self.bar_mask.sum())

    def nearest_barrier_below(self) -> int:
        """
        Slot of the first barrier whose top is still below the player.

        Returns:
            Slot index, or -1 if none.
        """
        below = np.where(self.bar_mask & (self.bar_y > self.player_y))[0]
        return int(below[0]) if below.size else -1


class SnapshotBuilder:
    """Builds GameSnapshot instances from a session state."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()
        self._config = config
        self._max_barriers = config.observation.max_barriers

    def build(
        self,
        state: "SessionState",
        board_rgb: Optional[np.ndarray] = None
    ) -> GameSnapshot:
        """
        Build a snapshot of the current session.

        Args:
            state: Session state to read from.
            board_rgb: Optional rendered image to attach.

        Returns:
            GameSnapshot with padded barrier arrays.
        """
        n = self._max_barriers
        bar_type = np.full(n, -1, dtype=np.int8)
        bar_gap = np.zeros(n, dtype=np.float32)
        bar_y = np.zeros(n, dtype=np.float32)
        bar_height = np.zeros(n, dtype=np.float32)
        bar_mask = np.zeros(n, dtype=bool)

        mileage = 0.0
        if state.level is not None:
            mileage = state.level.mileage
            for i, barrier in enumerate(state.level.barriers[:n]):
                bar_type[i] = barrier.type.value
                bar_gap[i] = barrier.gap_offset
                bar_y[i] = barrier.y_pos
                bar_height[i] = barrier.height
                bar_mask[i] = True

        player_cfg = self._config.player
        lane = self._config.lane
        return GameSnapshot(
            player_x=state.player.x,
            direction=state.player.direction,
            angle=state.player.angle(player_cfg),
            player_y=lane.player_pos_y,
            mileage=mileage,
            score=state.score,
            high_score=state.high_score,
            ticks=state.ticks,
            side_wall_width=lane.side_wall_width,
            hole_width=lane.hole_width,
            bar_type=bar_type,
            bar_gap=bar_gap,
            bar_y=bar_y,
            bar_height=bar_height,
            bar_mask=bar_mask,
            board_rgb=board_rgb,
        )

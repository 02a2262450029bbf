"""
Core Game
=========

Loop driver owning the session state and dispatching to scene updates.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Dict, Optional

from daruma.core.config_loader import GameConfig, get_config
from daruma.core.level import Level
from daruma.core.player import PlayerState
from daruma.core.scenes import (
    SCENE_UPDATES,
    InputState,
    Scene,
    SessionState,
    change_scene,
)
from daruma.core.state_snapshot import GameSnapshot, SnapshotBuilder


@dataclass
class TickResult:
    """Result of a single game tick."""
    scene: Scene
    previous_scene: Scene
    delta_score: int
    crashed: bool

    @property
    def scene_changed(self) -> bool:
        return self.scene is not self.previous_scene


class DarumaGame:
    """
    Main game driver.

    Holds one ``SessionState`` and runs exactly one scene update per tick.
    The session starts on the title scene; ``reset()`` skips straight to a
    fresh run for agents and tests.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        high_score: int = 0
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility.
            high_score: Best score carried in from a previous session.
        """
        if config is None:
            config = get_config()

        self._config = config

        # Game state
        self._state = SessionState(
            config=config,
            rng=random.Random(seed),
            high_score=max(0, int(high_score))
        )

        # Snapshot builder for observations
        self._snapshot_builder = SnapshotBuilder(config)

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def state(self) -> SessionState:
        """Session state (shared with scene updates)."""
        return self._state

    @property
    def scene(self) -> Scene:
        return self._state.scene

    @property
    def level(self) -> Optional[Level]:
        """Level of the current or last run; None before the first run."""
        return self._state.level

    @property
    def player(self) -> PlayerState:
        return self._state.player

    @property
    def score(self) -> int:
        """Current score."""
        return self._state.score

    @property
    def high_score(self) -> int:
        return self._state.high_score

    @property
    def ticks(self) -> int:
        """Ticks played in the current run."""
        return self._state.ticks

    @property
    def is_over(self) -> bool:
        """True once the current run has crashed."""
        return self._state.scene is Scene.GAME_OVER

    def reset(self, seed: Optional[int] = None) -> GameSnapshot:
        """
        Start a fresh run immediately.

        Args:
            seed: New random seed. Continues the current RNG if None.

        Returns:
            Initial game snapshot.
        """
        if seed is not None:
            self._state.rng = random.Random(seed)
        change_scene(self._state, Scene.PLAYING)

        # Return initial snapshot
        return self.snapshot()

    def tick(self, inputs: Optional[InputState] = None) -> TickResult:
        """
        Run one scene update.

        Args:
            inputs: Input pressed this tick. No input if None.

        Returns:
            TickResult describing the scene after the tick.
        """
        if inputs is None:
            inputs = InputState()

        # Run the active scene
        previous = self._state.scene
        score_before = self._state.score

        next_scene = SCENE_UPDATES[previous](self._state, inputs)
        crashed = previous is Scene.PLAYING and next_scene is Scene.GAME_OVER

        # Calculate delta score
        delta_score = 0
        if previous is Scene.PLAYING:
            delta_score = self._state.score - score_before

        # Switch scene if requested
        if next_scene is not None:
            change_scene(self._state, next_scene)

        return TickResult(
            scene=self._state.scene,
            previous_scene=previous,
            delta_score=delta_score,
            crashed=crashed
        )

    def snapshot(self) -> GameSnapshot:
        """Build current game state snapshot."""
        return self._snapshot_builder.build(self._state)

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        level = self._state.level
        return {
            "score": self._state.score,
            "high_score": self._state.high_score,
            "mileage": level.mileage if level is not None else 0.0,
            "ticks": self._state.ticks,
            "scene": self._state.scene.value,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with lane geometry, barrier spans, player and score info.
        """
        lane = self._config.lane
        level = self._state.level

        barriers_data = []
        if level is not None:
            for barrier in level.barriers:
                barriers_data.append({
                    "type": barrier.type.name,
                    "y": barrier.y_pos,
                    "height": barrier.height,
                    "spans": barrier.solid_spans(),
                })

        return {
            "scene": self._state.scene,
            "side_wall_width": lane.side_wall_width,
            "player_x": self._state.player.x,
            "player_y": lane.player_pos_y,
            "barriers": barriers_data,
            "score": self._state.score,
            "high_score": self._state.high_score,
            "title": self._config.display.title,
        }

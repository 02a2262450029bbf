"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to a single Daruma Otoshi run.
Reward is the score gained on each tick.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from daruma.core.config_loader import GameConfig, load_config
from daruma.core.game import DarumaGame
from daruma.core.scenes import InputState
from daruma.core.state_snapshot import GameSnapshot

# Discrete actions
STEER_LEFT = 0
HOLD = 1
STEER_RIGHT = 2

_ACTION_INPUTS = {
    STEER_LEFT: InputState.steer_left(),
    HOLD: InputState(),
    STEER_RIGHT: InputState.steer_right(),
}


class DarumaEnv(gym.Env):
    """
    Daruma Otoshi as a Gymnasium environment.

    Action Space:
        Discrete(3): 0 = steer one step left, 1 = hold, 2 = steer one step right.

    Observation Space:
        Dict with player state, progress and padded barrier arrays.

    Reward:
        Score gained this tick.

    Episode end:
        terminated when the player hits a wall or barrier,
        truncated after caps.max_ticks ticks.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        image_obs: Optional[bool] = None,
        image_width: Optional[int] = None,
        image_height: Optional[int] = None,
        debug: bool = False,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            image_obs: If True, include board_rgb in observations. Config default if None.
            image_width: Override observation image width.
            image_height: Override observation image height.
            debug: If True, prints per-step debug output.
        """
        super().__init__()

        # Load config
        self._config = load_config(config_path)

        # Store render settings
        self.render_mode = render_mode
        self._debug = debug
        if image_obs is None:
            image_obs = self._config.observation.image_enabled
        self._image_obs = image_obs

        # Image dimensions
        self._img_width = image_width or self._config.observation.image_width
        self._img_height = image_height or self._config.observation.image_height

        # Initialize game
        self._game = DarumaGame(config=self._config)

        # Initialize renderers (lazy)
        self._renderer = None
        self._screen_renderer = None
        self._window_open = render_mode == "human"

        # Define action and observation spaces
        self.action_space = spaces.Discrete(3)
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] DarumaEnv initialized")
            print(f"[DEBUG]   Side wall: {self._config.lane.side_wall_width}")
            print(f"[DEBUG]   Max barriers: {self._config.observation.max_barriers}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        max_bar = self._config.observation.max_barriers
        max_dir = self._config.player.max_direction

        obs_dict = {
            # Player state
            "player_x": spaces.Box(low=-np.inf, high=np.inf, shape=(), dtype=np.float32),
            "direction": spaces.Box(low=-max_dir, high=max_dir, shape=(), dtype=np.int32),
            "angle": spaces.Box(low=-math.pi / 2, high=math.pi / 2, shape=(), dtype=np.float32),

            # Progress
            "mileage": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),

            # Barrier arrays
            "bar_type": spaces.Box(low=-1, high=2, shape=(max_bar,), dtype=np.int8),
            "bar_gap": spaces.Box(low=0, high=1, shape=(max_bar,), dtype=np.float32),
            "bar_y": spaces.Box(low=-np.inf, high=np.inf, shape=(max_bar,), dtype=np.float32),
            "bar_height": spaces.Box(low=0, high=1, shape=(max_bar,), dtype=np.float32),
            "bar_mask": spaces.MultiBinary(max_bar),
        }

        if self._image_obs:
            obs_dict["board_rgb"] = spaces.Box(
                low=0,
                high=255,
                shape=(self._img_height, self._img_width, 3),
                dtype=np.uint8
            )

        return spaces.Dict(obs_dict)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        # Reset game
        snapshot = self._game.reset(seed=seed)

        # Build observation
        obs = self._snapshot_to_obs(snapshot)
        info = self._game.get_info()
        info["delta_score"] = 0

        return obs, info

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one tick.

        Args:
            action: One of STEER_LEFT, HOLD, STEER_RIGHT.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        # Convert action to scalar
        if isinstance(action, np.ndarray):
            action = int(action.item())
        action = int(action)
        if action not in _ACTION_INPUTS:
            raise ValueError(f"Invalid action: {action}")

        if self._game.is_over:
            # Run already ended; report the final state again
            obs = self._snapshot_to_obs(self._game.snapshot())
            info = self._game.get_info()
            info["delta_score"] = 0
            return obs, 0.0, True, False, info

        # Step game
        result = self._game.tick(_ACTION_INPUTS[action])

        # Build observation
        snapshot = self._game.snapshot()
        obs = self._snapshot_to_obs(snapshot)

        # Reward is the score gained this tick
        reward = float(result.delta_score)
        terminated = result.crashed
        truncated = not terminated and self._game.ticks >= self._config.caps.max_ticks

        # Build info
        info = self._game.get_info()
        info["delta_score"] = result.delta_score

        # Debug output
        if self._debug:
            print(f"[DEBUG] Step: action={action}, x={float(obs['player_x']):.3f}, "
                  f"mileage={float(obs['mileage']):.3f}, score={info['score']}")
            if terminated:
                print(f"[DEBUG] TERMINATED: crashed at tick {self._game.ticks}")
            self._debug_next_barrier(snapshot)

        return obs, reward, terminated, truncated, info

    def _debug_next_barrier(self, snapshot: GameSnapshot) -> None:
        """Print the opening of the next barrier the player has to pass."""
        slot = snapshot.nearest_barrier_below()
        if slot < 0:
            print(f"[DEBUG]   No barrier ahead ({snapshot.barrier_count} in window)")
            return
        lo, hi = self._game.level.barriers[slot].opening()
        print(f"[DEBUG]   Next barrier: slot={slot}/{snapshot.barrier_count}, "
              f"opening=({lo:.3f}, {hi:.3f}), y={float(snapshot.bar_y[slot]):.3f}")

    def _snapshot_to_obs(self, snapshot: GameSnapshot) -> Dict[str, np.ndarray]:
        """Convert snapshot to observation dict."""
        obs = snapshot.to_obs_dict()

        # Add image if requested
        if self._image_obs:
            obs["board_rgb"] = self._render_to_array()

        return obs

    def _render_to_array(self) -> np.ndarray:
        """Render board to RGB array."""
        if self._renderer is None:
            from daruma.core.render_solid import SolidRenderer
            self._renderer = SolidRenderer(self._config)

        render_data = self._game.get_render_data()
        return self._renderer.render(
            render_data,
            self._img_width,
            self._img_height
        )

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode == "rgb_array":
            return self._render_to_array()

        if self.render_mode == "human":
            if not self._window_open:
                return None
            if self._screen_renderer is None:
                from daruma.core.render_pygame import PygameRenderer
                self._screen_renderer = PygameRenderer(self._config)

            render_data = self._game.get_render_data()
            self._screen_renderer.render_to_screen(render_data)

            # Drain the event queue; closing the window stops human rendering
            if not self._screen_renderer.handle_events():
                if self._debug:
                    print("[DEBUG] Window closed")
                self._screen_renderer.close()
                self._screen_renderer = None
                self._window_open = False
            return None

        return None

    def close(self) -> None:
        """Clean up resources."""
        if self._renderer is not None:
            self._renderer.close()
            self._renderer = None
        if self._screen_renderer is not None:
            self._screen_renderer.close()
            self._screen_renderer = None

    @property
    def window_open(self) -> bool:
        """True while the human render window has not been closed."""
        return self._window_open

    @property
    def game(self) -> DarumaGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

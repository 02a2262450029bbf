"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import yaml


DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(__file__)),
    "game_config.yaml"
)


@dataclass(frozen=True)
class LaneConfig:
    """Lane geometry and barrier generation settings."""
    side_wall_width: float         # Solid margin on each side of the lane
    player_pos_y: float            # Fixed vertical position of the player
    hole_width: float              # Gap width of a slit barrier
    barrier_interval: float        # Vertical spacing between barriers
    initial_barrier_height: float
    max_barrier_height: float
    difficulty_mileage: float      # Mileage where the height ramp flattens
    gap_anchor_min: float
    gap_anchor_max: float
    window_depth: float            # Vertical span pre-filled on level start
    spawn_y: float                 # Y of the first barrier

    @property
    def window_size(self) -> int:
        """Number of barriers a level keeps in its window."""
        return 1 + math.ceil(self.window_depth / self.barrier_interval)


@dataclass(frozen=True)
class PlayerConfig:
    """Player steering and speed parameters."""
    start_x: float
    base_speed: float
    speed_per_mileage: float
    steering_angles: Tuple[float, ...]   # Radians, index = |direction|

    @property
    def max_direction(self) -> int:
        return len(self.steering_angles) - 1


@dataclass(frozen=True)
class ScoringConfig:
    """Scoring parameters."""
    score_scale: float


@dataclass(frozen=True)
class HighScoreConfig:
    """High score file location."""
    path: str


@dataclass(frozen=True)
class DisplayConfig:
    """Window settings for the interactive front end."""
    window_size: int
    target_fps: int
    title: str
    player_size: int
    font_size: int


@dataclass(frozen=True)
class ObservationConfig:
    """Observation space parameters."""
    max_barriers: int
    image_enabled: bool
    image_width: int
    image_height: int


@dataclass(frozen=True)
class CapsConfig:
    """Game limits."""
    max_ticks: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    lane: LaneConfig
    player: PlayerConfig
    scoring: ScoringConfig
    high_score: HighScoreConfig
    display: DisplayConfig
    observation: ObservationConfig
    caps: CapsConfig

    def score_for(self, mileage: float) -> int:
        """Score shown for a given mileage."""
        return int(mileage * self.scoring.score_scale)


def _parse_angles(angles_data: list) -> Tuple[float, ...]:
    """Parse the steering angle table (degrees) from YAML."""
    if not angles_data:
        raise ValueError("steering_angles_deg must contain at least one angle")
    return tuple(math.radians(float(a)) for a in angles_data)


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    lane = config.lane

    if not 0.0 <= lane.side_wall_width < 0.5:
        raise ValueError(f"side_wall_width must be in [0, 0.5), got {lane.side_wall_width}")

    if lane.initial_barrier_height <= 0:
        raise ValueError(
            f"initial_barrier_height must be positive, got {lane.initial_barrier_height}"
        )

    if lane.max_barrier_height < lane.initial_barrier_height:
        raise ValueError(
            f"max_barrier_height ({lane.max_barrier_height}) must not be below "
            f"initial_barrier_height ({lane.initial_barrier_height})"
        )

    if lane.max_barrier_height >= lane.barrier_interval:
        raise ValueError(
            f"max_barrier_height ({lane.max_barrier_height}) must be smaller than "
            f"barrier_interval ({lane.barrier_interval})"
        )

    if lane.difficulty_mileage <= 0:
        raise ValueError(f"difficulty_mileage must be positive, got {lane.difficulty_mileage}")

    if lane.window_depth <= 0:
        raise ValueError(f"window_depth must be positive, got {lane.window_depth}")

    if not 0.0 < lane.gap_anchor_min <= lane.gap_anchor_max < 1.0:
        raise ValueError(
            f"Gap anchor range [{lane.gap_anchor_min}, {lane.gap_anchor_max}] "
            f"must be ordered and inside (0, 1)"
        )

    # A slit centered on any anchor must stay clear of both side walls
    half_hole = lane.hole_width / 2.0
    if (lane.gap_anchor_min - half_hole < lane.side_wall_width
            or lane.gap_anchor_max + half_hole > 1.0 - lane.side_wall_width):
        raise ValueError(
            f"hole_width ({lane.hole_width}) does not fit between the side walls "
            f"for anchors in [{lane.gap_anchor_min}, {lane.gap_anchor_max}]"
        )

    # Left/right barriers need a reachable opening inside the lane
    if (lane.gap_anchor_min <= lane.side_wall_width
            or lane.gap_anchor_max >= 1.0 - lane.side_wall_width):
        raise ValueError("Gap anchors must lie strictly between the side walls")

    angles = config.player.steering_angles
    if angles[0] != 0.0:
        raise ValueError(f"First steering angle must be 0, got {math.degrees(angles[0])}")
    if any(b <= a for a, b in zip(angles, angles[1:])):
        raise ValueError("Steering angles must be strictly increasing")
    if angles[-1] >= math.pi / 2:
        raise ValueError("Steering angles must stay below 90 degrees")

    if config.observation.max_barriers < lane.window_size:
        raise ValueError(
            f"observation.max_barriers ({config.observation.max_barriers}) must hold "
            f"the full barrier window ({lane.window_size})"
        )

    if config.caps.max_ticks <= 0:
        raise ValueError(f"max_ticks must be positive, got {config.caps.max_ticks}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    lane_data = raw["lane"]
    lane = LaneConfig(
        side_wall_width=float(lane_data["side_wall_width"]),
        player_pos_y=float(lane_data["player_pos_y"]),
        hole_width=float(lane_data["hole_width"]),
        barrier_interval=float(lane_data["barrier_interval"]),
        initial_barrier_height=float(lane_data["initial_barrier_height"]),
        max_barrier_height=float(lane_data["max_barrier_height"]),
        difficulty_mileage=float(lane_data.get("difficulty_mileage", 100.0)),
        gap_anchor_min=float(lane_data.get("gap_anchor_min", 0.4)),
        gap_anchor_max=float(lane_data.get("gap_anchor_max", 0.6)),
        window_depth=float(lane_data.get("window_depth", 1.0)),
        spawn_y=float(lane_data.get("spawn_y", 1.0))
    )

    player_data = raw["player"]
    player = PlayerConfig(
        start_x=float(player_data.get("start_x", 0.5)),
        base_speed=float(player_data["base_speed"]),
        speed_per_mileage=float(player_data["speed_per_mileage"]),
        steering_angles=_parse_angles(player_data["steering_angles_deg"])
    )

    scoring_data = raw["scoring"]
    scoring = ScoringConfig(
        score_scale=float(scoring_data["score_scale"])
    )

    hs_data = raw.get("high_score", {})
    high_score = HighScoreConfig(
        path=str(hs_data.get("path", "score"))
    )

    display_data = raw.get("display", {})
    display = DisplayConfig(
        window_size=int(display_data.get("window_size", 600)),
        target_fps=int(display_data.get("target_fps", 60)),
        title=str(display_data.get("title", "Daruma Otoshi")),
        player_size=int(display_data.get("player_size", 50)),
        font_size=int(display_data.get("font_size", 30))
    )

    obs_data = raw.get("observation", {})
    observation = ObservationConfig(
        max_barriers=int(obs_data.get("max_barriers", 8)),
        image_enabled=bool(obs_data.get("image_enabled", False)),
        image_width=int(obs_data.get("image_width", 120)),
        image_height=int(obs_data.get("image_height", 120))
    )

    caps_data = raw.get("caps", {})
    caps = CapsConfig(
        max_ticks=int(caps_data.get("max_ticks", 36000))
    )

    config = GameConfig(
        lane=lane,
        player=player,
        scoring=scoring,
        high_score=high_score,
        display=display,
        observation=observation,
        caps=caps
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config

"""
Scenes
======

Title → Playing → GameOver state machine.

Each scene is a plain update function over the shared ``SessionState``;
``SCENE_UPDATES`` maps scene ids to them. An update returns the scene to
switch to, or None to stay.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional

from daruma.core.config_loader import GameConfig
from daruma.core.level import Level
from daruma.core.player import PlayerState


class Scene(Enum):
    TITLE = "title"
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class InputState:
    """Edge-triggered input for one tick."""
    left: bool = False      # Steer-left pressed this tick
    right: bool = False     # Steer-right pressed this tick
    any_key: bool = False   # Any key/button pressed this tick

    @classmethod
    def steer_left(cls) -> "InputState":
        return cls(left=True, any_key=True)

    @classmethod
    def steer_right(cls) -> "InputState":
        return cls(right=True, any_key=True)


@dataclass
class SessionState:
    """Everything a running session carries between scenes."""
    config: GameConfig
    rng: random.Random
    scene: Scene = Scene.TITLE
    high_score: int = 0
    level: Optional[Level] = None
    player: PlayerState = field(default_factory=PlayerState)
    ticks: int = 0

    @property
    def score(self) -> int:
        """Score of the current (or last) run."""
        if self.level is None:
            return 0
        return self.level.score

    def begin_run(self) -> None:
        """Replace the level and player with fresh ones."""
        self.level = Level(self.config, rng=self.rng)
        self.player = PlayerState.spawn(self.config.player)
        self.ticks = 0


def update_title(state: SessionState, inputs: InputState) -> Optional[Scene]:
    if inputs.any_key:
        return Scene.PLAYING
    return None


def update_playing(state: SessionState, inputs: InputState) -> Optional[Scene]:
    """
    Advance the run by one tick.

    The player moves sideways first; a collision at the new position ends
    the run before the level scrolls.
    """
    player_cfg = state.config.player
    level = state.level
    player = state.player

    # Steer and move sideways
    player.steer(inputs.left, inputs.right, player_cfg)
    scroll = player.advance(level.mileage, player_cfg)
    state.ticks += 1

    # Crash check at the new position
    if level.hit(player.x):
        return Scene.GAME_OVER

    # Scroll the level and track the best score
    level.update(scroll)
    state.high_score = max(state.score, state.high_score)
    return None


def update_game_over(state: SessionState, inputs: InputState) -> Optional[Scene]:
    if inputs.any_key:
        return Scene.PLAYING
    return None


SCENE_UPDATES: Dict[Scene, Callable[[SessionState, InputState], Optional[Scene]]] = {
    Scene.TITLE: update_title,
    Scene.PLAYING: update_playing,
    Scene.GAME_OVER: update_game_over,
}


def change_scene(state: SessionState, scene: Scene) -> None:
    """Switch scenes, starting a fresh run when entering PLAYING."""
    if scene is Scene.PLAYING:
        state.begin_run()
    state.scene = scene

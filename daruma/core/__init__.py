"""
Daruma Core - The heart of the game.

This module provides the level generator, collision model, scene machine,
Gymnasium environment wrapper and all supporting systems.

Main exports:
- Level / Barrier: Procedural barrier window and hit tests
- DarumaGame: Headless loop driver (Title -> Playing -> GameOver)
- DarumaEnv: Gymnasium environment for a single run
- GameConfig: Configuration loaded from game_config.yaml
"""

from daruma.core.config_loader import GameConfig, load_config
from daruma.core.barrier import Barrier, BarrierType
from daruma.core.level import Level, barrier_height_for
from daruma.core.player import PlayerState
from daruma.core.scenes import InputState, Scene, SessionState
from daruma.core.game import DarumaGame, TickResult
from daruma.core.high_score import load_high_score, save_high_score
from daruma.core.env_gym import DarumaEnv

__all__ = [
    "GameConfig",
    "load_config",
    "Barrier",
    "BarrierType",
    "Level",
    "barrier_height_for",
    "PlayerState",
    "InputState",
    "Scene",
    "SessionState",
    "DarumaGame",
    "TickResult",
    "load_high_score",
    "save_high_score",
    "DarumaEnv",
]

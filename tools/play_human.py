"""
Human Play Mode
================

Play Daruma Otoshi interactively in a pygame window.

Controls:
    - Left/Right arrows: Turn the falling block one step
    - Any key: Start / retry
    - Gamepad: D-pad left/right turns, any button starts / retries
    - ESC: Quit

The high score is read from the score file at startup and written back on exit.

Usage:
    python -m tools.play_human [--seed SEED] [--size SIZE] [--fps FPS] [--score-file PATH]
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from daruma.core.config_loader import load_config, GameConfig
from daruma.core.game import DarumaGame
from daruma.core.high_score import load_high_score, save_high_score
from daruma.core.scenes import InputState, Scene


class HumanPlayer:
    """
    Human-playable Daruma Otoshi with keyboard and gamepad input.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        window_size: Optional[int] = None,
        target_fps: Optional[int] = None,
        score_file: Optional[str] = None
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._window_size = window_size or config.display.window_size
        self._target_fps = target_fps or config.display.target_fps
        self._score_file = score_file or config.high_score.path

        self._game = DarumaGame(
            config=config,
            seed=seed,
            high_score=load_high_score(self._score_file)
        )

        pygame.init()
        self._clock = pygame.time.Clock()

        # First connected gamepad, if any
        self._joysticks: List["pygame.joystick.JoystickType"] = []
        pygame.joystick.init()
        if pygame.joystick.get_count() > 0:
            joystick = pygame.joystick.Joystick(0)
            joystick.init()
            self._joysticks.append(joystick)

        from daruma.core.render_pygame import PygameRenderer
        self._renderer = PygameRenderer(config)

        self._running = True

    def run(self) -> int:
        """Run the game loop. Returns the high score."""
        print(f"=== {self._config.display.title} ===")
        print("Left/Right to steer, any key to start, ESC to quit")
        print(f"High score: {self._game.high_score}")
        print()

        try:
            while self._running:
                inputs = self._poll_input()
                if not self._running:
                    break

                result = self._game.tick(inputs)
                if result.crashed:
                    print(f"GAME OVER - Score: {self._game.score}")
                elif result.scene_changed and result.scene is Scene.PLAYING:
                    print("=== New Run ===")

                self._renderer.render_to_screen(
                    self._game.get_render_data(),
                    self._window_size,
                    self._window_size
                )
                self._clock.tick(self._target_fps)
        finally:
            save_high_score(self._score_file, self._game.high_score)
            self._renderer.close()
            pygame.quit()

        return self._game.high_score

    def _poll_input(self) -> InputState:
        """Collect this frame's key and button presses."""
        left = right = any_key = False

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                    continue
                any_key = True
                if event.key == pygame.K_LEFT:
                    left = True
                elif event.key == pygame.K_RIGHT:
                    right = True

            elif event.type == pygame.JOYHATMOTION:
                hat_x, hat_y = event.value
                if hat_x < 0:
                    left = True
                elif hat_x > 0:
                    right = True
                if hat_x != 0 or hat_y != 0:
                    any_key = True

            elif event.type == pygame.JOYBUTTONDOWN:
                any_key = True

        return InputState(left=left, right=right, any_key=any_key)


def main():
    parser = argparse.ArgumentParser(description="Play Daruma Otoshi interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--size", type=int, default=None, help="Window size in pixels (default: from config)")
    parser.add_argument("--fps", type=int, default=None, help="Target FPS (default: from config)")
    parser.add_argument("--score-file", type=str, default=None, help="High score file (default: from config)")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            window_size=args.size,
            target_fps=args.fps,
            score_file=args.score_file
        )
        high_score = player.run()
        print(f"\nHigh Score: {high_score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

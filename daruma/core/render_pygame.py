"""
Pygame Renderer
===============

Draws the lane, barriers, player and score text with pygame.
Supports both display mode (human play) and headless RGB output.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from daruma.core.config_loader import GameConfig, get_config
from daruma.core.scenes import Scene


class PygameRenderer:
    """
    Scene-aware renderer using pygame.

    Each scene has its own draw function, looked up from a table:
    - TITLE: title and start prompt on black
    - PLAYING: lane, barriers, player, score line
    - GAME_OVER: lane, barriers, score line, game over prompt
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        if config is None:
            config = get_config()

        self._config = config

        if not pygame.get_init():
            pygame.init()

        # Display surface (created on demand)
        self._screen: Optional[pygame.Surface] = None
        self._screen_size: Optional[Tuple[int, int]] = None

        pygame.font.init()
        self._font = pygame.font.Font(None, config.display.font_size)

        self._bg_color = (0, 0, 0)
        self._lane_color = (255, 255, 255)
        self._barrier_color = (0, 0, 0)
        self._player_color = (255, 0, 0)
        self._title_color = (255, 255, 255)
        self._text_color = (0, 0, 0)

        self._scene_draw: Dict[Scene, Callable[[pygame.Surface, Dict[str, Any]], None]] = {
            Scene.TITLE: self._draw_title,
            Scene.PLAYING: self._draw_playing,
            Scene.GAME_OVER: self._draw_game_over,
        }

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render to RGB array.

        Args:
            render_data: Data from DarumaGame.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        surface = pygame.Surface((width, height))
        self.draw(surface, render_data)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_screen(
        self,
        render_data: Dict[str, Any],
        window_width: Optional[int] = None,
        window_height: Optional[int] = None
    ) -> None:
        """
        Render to the pygame window and flip it.

        Args:
            render_data: Data from DarumaGame.get_render_data().
            window_width: Window width. Config window size if None.
            window_height: Window height. Config window size if None.
        """
        size = self._config.display.window_size
        window_width = window_width or size
        window_height = window_height or size

        # Create or resize the window
        if self._screen is None or self._screen_size != (window_width, window_height):
            if not pygame.display.get_init():
                pygame.display.init()
            self._screen = pygame.display.set_mode((window_width, window_height))
            self._screen_size = (window_width, window_height)
            pygame.display.set_caption(self._config.display.title)

        self.draw(self._screen, render_data)
        pygame.display.flip()

    def draw(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        """Draw the active scene onto a surface."""
        # Clear, then dispatch on the active scene
        surface.fill(self._bg_color)
        self._scene_draw[render_data["scene"]](surface, render_data)

    def _draw_title(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        center = surface.get_rect().center
        self._draw_centered(surface, render_data["title"].upper(), center, self._title_color)
        self._draw_centered(
            surface,
            "PRESS ANY KEY TO START",
            (center[0], center[1] + self._font.get_height()),
            self._title_color
        )

    def _draw_playing(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        self._draw_lane(surface, render_data)
        self._draw_player(surface, render_data)
        self._draw_score_line(surface, render_data)

    def _draw_game_over(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        self._draw_lane(surface, render_data)
        self._draw_score_line(surface, render_data)

        center = surface.get_rect().center
        self._draw_centered(surface, "GAME OVER", center, self._text_color)
        self._draw_centered(
            surface,
            "PRESS ANY KEY TO RETRY",
            (center[0], center[1] + self._font.get_height()),
            self._text_color
        )

    def _draw_lane(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        """Draw the open lane and every barrier in the window."""
        width, height = surface.get_size()
        wall = render_data["side_wall_width"]
        pygame.draw.rect(
            surface,
            self._lane_color,
            pygame.Rect(int(wall * width), 0, int((1.0 - 2.0 * wall) * width), height)
        )

        for barrier in render_data["barriers"]:
            top = int(barrier["y"] * height)
            bar_height = max(1, int(barrier["height"] * height))
            for left, right in barrier["spans"]:
                rect = pygame.Rect(int(left * width), top, int((right - left) * width), bar_height)
                pygame.draw.rect(surface, self._barrier_color, rect)

    def _draw_player(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        width, height = surface.get_size()
        side = int(self._config.display.player_size * width / self._config.display.window_size)
        rect = pygame.Rect(0, 0, side, side)
        rect.center = (int(render_data["player_x"] * width), int(render_data["player_y"] * height))
        pygame.draw.rect(surface, self._player_color, rect)

    def _draw_score_line(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        """Draw 'SCORE n HIGHSCORE m' centered at the top."""
        text = f"SCORE {render_data['score']} HIGHSCORE {render_data['high_score']}"
        label = self._font.render(text, True, self._text_color)
        rect = label.get_rect(midtop=(surface.get_width() // 2, 0))
        surface.blit(label, rect)

    def _draw_centered(
        self,
        surface: pygame.Surface,
        text: str,
        center: Tuple[int, int],
        color: Tuple[int, int, int]
    ) -> None:
        label = self._font.render(text, True, color)
        surface.blit(label, label.get_rect(center=center))

    def handle_events(self) -> bool:
        """Handle pygame events. Returns False if quit requested."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
        return True

    def close(self) -> None:
        """Close the window if one was opened."""
        if self._screen is not None:
            pygame.display.quit()
            self._screen = None
            self._screen_size = None

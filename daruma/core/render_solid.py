"""
Solid Renderer
==============

Fast numpy-based renderer that draws the lane as flat rectangles.
Used for rgb_array observations; no pygame required.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple
import numpy as np

from daruma.core.config_loader import GameConfig, get_config
from daruma.core.scenes import Scene


class SolidRenderer:
    """
    Renders the game as solid-color rectangles.

    Screen layout matches the interactive front end: black background,
    white lane between the side walls, black barriers, red player square.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config

        self._bg_color = np.array([0, 0, 0], dtype=np.uint8)
        self._lane_color = np.array([255, 255, 255], dtype=np.uint8)
        self._barrier_color = np.array([0, 0, 0], dtype=np.uint8)
        self._player_color = np.array([255, 0, 0], dtype=np.uint8)

        # Player size as a fraction of the window
        display = config.display
        self._player_frac = display.player_size / display.window_size

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render the game state to an RGB array.

        Args:
            render_data: Data from DarumaGame.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        img = np.zeros((height, width, 3), dtype=np.uint8)
        img[:] = self._bg_color

        scene = render_data.get("scene", Scene.PLAYING)
        if scene is Scene.TITLE:
            return img

        # Lane
        wall = render_data["side_wall_width"]
        x0, x1 = self._span_to_px(wall, 1.0 - wall, width)
        img[:, x0:x1] = self._lane_color

        # Barriers
        for barrier in render_data["barriers"]:
            y0, y1 = self._span_to_px(barrier["y"], barrier["y"] + barrier["height"], height)
            if y1 <= y0:
                continue
            for left, right in barrier["spans"]:
                bx0, bx1 = self._span_to_px(left, right, width)
                img[y0:y1, bx0:bx1] = self._barrier_color

        # Player (hidden once the run is over)
        if scene is Scene.PLAYING:
            half_w = self._player_frac / 2.0
            px0, px1 = self._span_to_px(
                render_data["player_x"] - half_w, render_data["player_x"] + half_w, width
            )
            py0, py1 = self._span_to_px(
                render_data["player_y"] - half_w, render_data["player_y"] + half_w, height
            )
            img[py0:py1, px0:px1] = self._player_color

        return img

    @staticmethod
    def _span_to_px(lo: float, hi: float, size: int) -> Tuple[int, int]:
        """Convert a normalized span to clipped pixel bounds."""
        a = int(round(lo * size))
        b = int(round(hi * size))
        return max(0, min(size, a)), max(0, min(size, b))

    def close(self) -> None:
        """Nothing to release."""
        pass

"""Gymnasium environment wrapper for Grid Sokoban.

Drives the pure state machine in :mod:`grid_sokoban.step` from integer
actions and pairs a rendered RGBA image with a small status dictionary.
Reward is ``1.0`` on the step that solves a level and ``0.0`` otherwise;
``terminated`` is ``True`` while the current level is solved. Session
controls (undo, reset, level navigation, advance) are ordinary actions.

Observation schema:

``{"image": np.ndarray(H,W,4), "info": {"level", "legal_move_count", "move_step",
"boxes_on_target", "box_count", "phase"}}``

Usage:

``env = SokobanEnv(catalog=load_levels("Classic.txt"), level=0)``

The environment is purposely *not* vectorized; wrap externally if needed.
"""

import logging
from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from PIL import Image
from PIL.Image import Image as PILImage

from grid_sokoban.actions import GymAction, from_gym_action
from grid_sokoban.examples.classic_levels import load_classic
from grid_sokoban.levels.catalog import LevelCatalog
from grid_sokoban.objectives import is_solved, phase
from grid_sokoban.renderer.texture import (
    DEFAULT_RESOLUTION,
    TextureMap,
    TextureRenderer,
)
from grid_sokoban.state import GameState
from grid_sokoban.step import Game
from grid_sokoban.types import LevelIndex

logger = logging.getLogger(__name__)

ObsType = Dict[str, Any]


def status_observation_dict(state: GameState) -> Dict[str, Any]:
    """Status portion of the observation (level, counters, phase)."""
    return {
        "level": int(state.level),
        "legal_move_count": int(state.legal_move_count),
        "move_step": int(state.move_step),
        "boxes_on_target": int(state.boxes_on_target),
        "box_count": len(state.boxes),
        "phase": phase(state).value,
    }


class SokobanEnv(gym.Env[ObsType, np.integer]):
    """Gymnasium ``Env`` implementation over a level catalog.

    The action space is ``Discrete(len(GymAction))``; see
    :mod:`grid_sokoban.actions`. The image size follows the widest and
    tallest level in the catalog so it stays constant across levels.
    """

    metadata = {"render_modes": ["human", "texture"]}

    def __init__(
        self,
        catalog: Optional[LevelCatalog] = None,
        level: LevelIndex = 0,
        render_mode: str = "texture",
        render_resolution: int = DEFAULT_RESOLUTION,
        render_texture_map: Optional[TextureMap] = None,
    ):
        """Create a new environment instance.

        Arguments:
            catalog: Levels to play; defaults to the built-in classic pack.
            level: Level entered on ``reset``.
            render_mode: "texture" to return PIL image frames, "human" to open window.
            render_resolution: Width (pixels) of one cell row of the widest level.
            render_texture_map: Sprite key to asset path mapping.
        """
        from gymnasium import spaces

        self.game = Game(catalog if catalog is not None else load_classic())
        self.start_level = self.game.catalog.clamp(level)
        self.state: Optional[GameState] = None
        self._render_mode = render_mode

        max_width = max(maze.width for maze in self.game.catalog)
        max_height = max(maze.height for maze in self.game.catalog)
        self._cell_size = max(1, render_resolution // max_width)
        self._texture_renderer = TextureRenderer(
            resolution=render_resolution, texture_map=render_texture_map
        )

        def int_box(low: int, high: int) -> spaces.Box:
            return spaces.Box(
                low=np.array(low, dtype=np.int64),
                high=np.array(high, dtype=np.int64),
                shape=(),
                dtype=np.int64,
            )

        self.observation_space = spaces.Dict(
            {
                "image": spaces.Box(
                    low=0,
                    high=255,
                    shape=(
                        max_height * self._cell_size,
                        max_width * self._cell_size,
                        4,
                    ),
                    dtype=np.uint8,
                ),
                "info": spaces.Dict(
                    {
                        "level": int_box(0, len(self.game.catalog) - 1),
                        "legal_move_count": int_box(0, 1_000_000_000),
                        "move_step": int_box(0, 1_000_000_000),
                        "boxes_on_target": int_box(0, 10_000),
                        "box_count": int_box(0, 10_000),
                        "phase": spaces.Text(max_length=32),
                    }
                ),
            }
        )
        self.action_space = spaces.Discrete(len(GymAction))

        self.reset()

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict[str, object]] = None
    ) -> Tuple[ObsType, Dict[str, object]]:
        """Re-enter the start level (``options={"level": n}`` overrides it)."""
        super().reset(seed=seed)
        level = self.start_level
        if options and "level" in options:
            level = int(options["level"])  # type: ignore[call-overload]
        self.state = self.game.new_state(level)
        logger.info("Environment reset at level %d", self.state.level)
        return self._get_obs(), self._get_info()

    def step(
        self, action: np.integer
    ) -> Tuple[ObsType, float, bool, bool, Dict[str, object]]:
        """Apply one environment step.

        Arguments:
            action: Integer index into the ``GymAction`` enum.

        Returns:
            (observation, reward, terminated, truncated, info)
        """
        assert self.state is not None

        step_action = from_gym_action(int(action))
        was_solved = is_solved(self.state)
        self.state = self.game.step(self.state, step_action)
        solved = is_solved(self.state)

        reward = 1.0 if solved and not was_solved else 0.0
        if reward:
            logger.info(
                "Level %d solved in %d moves",
                self.state.level,
                self.state.legal_move_count,
            )
        logger.debug(
            "Step %d: action=%s legal_moves=%d",
            self.state.move_step,
            step_action,
            self.state.legal_move_count,
        )
        return self._get_obs(), reward, solved, False, self._get_info()

    def render(self, mode: Optional[str] = None) -> Optional[PILImage]:  # type: ignore
        """Render the current state.

        Args:
            mode: "human" to display, "texture" to return PIL image. Defaults to
                instance's configured render mode.
        """
        render_mode = mode or self._render_mode
        assert self.state is not None
        img = self._frame()
        if render_mode == "human":
            img.show()
            return None
        elif render_mode == "texture":
            return img
        else:
            raise NotImplementedError(f"Render mode '{render_mode}' not supported.")

    def _frame(self) -> PILImage:
        """Current state rendered onto a canvas sized for the largest level."""
        assert self.state is not None
        space = self.observation_space["image"]
        height, width = space.shape[0], space.shape[1]  # type: ignore[index]
        canvas = Image.new("RGBA", (width, height), (0, 0, 0, 255))
        frame = self._texture_renderer.render(
            self.state, resolution=self._cell_size * self.state.width
        )
        if frame.width > width or frame.height > height:
            frame = frame.crop((0, 0, width, height))
        canvas.alpha_composite(frame, (0, 0))
        return canvas

    def _get_obs(self) -> ObsType:
        assert self.state is not None
        img_np = np.array(self._frame())
        return {"image": img_np, "info": status_observation_dict(self.state)}

    def _get_info(self) -> Dict[str, object]:
        """Return the step info (empty placeholder for compatibility)."""
        return {}

    def close(self) -> None:
        """Release any renderer resources (no-op placeholder)."""
        pass

"""Gymnasium environment wrapper for World of Bits.

Exposes the world to learning agents with discrete movement. The action space
is ``Discrete(4 + (2 * interact_radius + 1) ** 2)``: the first four actions
step north, south, west and east; the remaining ones interact with the cell
at each offset of the interact square, in row-major order starting from the
north-west corner.

Observation schema:

``{"image": np.ndarray(H, W, 4), "tokens": np.ndarray(S, S), "held": int, "score": int}``

``tokens`` is the visible window (``S = 2 * render_radius + 1``) with ``0``
for empty cells, laid out like the image (north at row 0). ``held`` is ``0``
for an empty hand. Reward is the delta of ``state.score`` per step;
``terminated`` is ``True`` on victory. The world never ends in defeat, so
``truncated`` is always ``False``.

Usage:

``env = WorldOfBitsEnv(config=CONFIG_REGISTRY["default"])``
"""

import gymnasium as gym
import numpy as np
from typing import Any, Dict, Optional, Tuple

from PIL.Image import Image as PILImage
from pyrsistent import thaw

from world_of_bits.actions import STEP_DELTAS, Action, InteractAction
from world_of_bits.components import Cell, LatLng
from world_of_bits.config import DEFAULT_CONFIG, WorldConfig
from world_of_bits.moves import resolve_origin
from world_of_bits.renderer.texture import (
    DEFAULT_RESOLUTION,
    TextureRenderer,
    image_side,
    window_cell_at,
)
from world_of_bits.state import State, create_initial_state
from world_of_bits.step import step
from world_of_bits.systems.window import player_cell, window_system

ObsType = Dict[str, Any]


def tokens_observation(state: State) -> np.ndarray:
    """Return the visible window as an int64 grid (``0`` for empty)."""
    side = 2 * state.config.render_radius + 1
    grid = np.zeros((side, side), dtype=np.int64)
    for row in range(side):
        for col in range(side):
            content = state.cells.get(window_cell_at(state, row, col))
            if content is not None:
                grid[row, col] = content
    return grid


class WorldOfBitsEnv(gym.Env[ObsType, np.integer]):
    """Gymnasium ``Env`` implementation for World of Bits."""

    metadata = {"render_modes": ["human", "texture"]}

    def __init__(
        self,
        config: WorldConfig = DEFAULT_CONFIG,
        origin: Optional[LatLng] = None,
        render_mode: str = "texture",
        render_resolution: int = DEFAULT_RESOLUTION,
    ):
        """Create a new environment instance.

        Arguments:
            config: World constants.
            origin: Real-world anchor; the config fallback origin if ``None``.
            render_mode: "texture" to return PIL images, "human" to open a window.
            render_resolution: Requested width (pixels) of rendered images.
        """
        from gymnasium import spaces

        self.config = config.validate()
        self.origin = resolve_origin(origin, self.config)
        self.state: Optional[State] = None
        self._render_mode = render_mode
        self._renderer = TextureRenderer(resolution=render_resolution)

        pixels = image_side(self.config.render_radius, render_resolution)
        side = 2 * self.config.render_radius + 1
        self._interact_side = 2 * self.config.interact_radius + 1

        def int_box(low: int, high: int, shape: Tuple[int, ...] = ()) -> spaces.Box:
            return spaces.Box(low=low, high=high, shape=shape, dtype=np.int64)

        self.observation_space = spaces.Dict(
            {
                "image": spaces.Box(
                    low=0, high=255, shape=(pixels, pixels, 4), dtype=np.uint8
                ),
                "tokens": int_box(0, 2**62, (side, side)),
                "held": int_box(0, 2**62),
                "score": int_box(0, 2**62),
            }
        )
        self.action_space = spaces.Discrete(
            len(STEP_DELTAS) + self._interact_side**2
        )

        self.reset()

    def to_action(self, action: int) -> Action:
        """Translate an action index into a world action."""
        if not 0 <= action < self.action_space.n:
            raise ValueError(f"Invalid action: {action}")
        if action < len(STEP_DELTAS):
            return STEP_DELTAS[action]
        assert self.state is not None
        row, col = divmod(action - len(STEP_DELTAS), self._interact_side)
        center = player_cell(self.state)
        radius = self.config.interact_radius
        return InteractAction(Cell(center.i + radius - row, center.j - radius + col))

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict[str, object]] = None
    ) -> Tuple[ObsType, Dict[str, object]]:
        """Start a new episode in a fresh world.

        Arguments:
            seed: Forwarded to Gymnasium; world content depends only on cells.
            options: Gymnasium options (unused).
        """
        super().reset(seed=seed)
        self.state = window_system(create_initial_state(self.origin, self.config))
        return self._get_obs(), self._get_info()

    def step(
        self, action: np.integer
    ) -> Tuple[ObsType, float, bool, bool, Dict[str, object]]:
        """Apply one environment step.

        Returns:
            (observation, reward, terminated, truncated, info)
        """
        assert self.state is not None
        world_action = self.to_action(int(action))
        prev_score = self.state.score
        self.state = step(self.state, world_action)
        reward = float(self.state.score - prev_score)
        return self._get_obs(), reward, self.state.win, False, self._get_info()

    def render(self, mode: Optional[str] = None) -> Optional[PILImage]:  # type: ignore
        render_mode = mode or self._render_mode
        assert self.state is not None
        img = self._renderer.render(self.state)
        if render_mode == "human":
            img.show()
            return None
        elif render_mode == "texture":
            return img
        else:
            raise NotImplementedError(f"Render mode '{render_mode}' not supported.")

    def _get_obs(self) -> ObsType:
        assert self.state is not None
        return {
            "image": np.array(self._renderer.render(self.state)),
            "tokens": tokens_observation(self.state),
            "held": np.int64(self.state.held or 0),
            "score": np.int64(self.state.score),
        }

    def _get_info(self) -> Dict[str, object]:
        assert self.state is not None
        rejection = self.state.rejection
        return {
            "turn": self.state.turn,
            "message": self.state.message,
            "rejected": None if rejection is None else str(rejection.reason),
            "state": thaw(self.state.description),
        }

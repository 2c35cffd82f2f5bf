"""Session-level constants.

A :class:`WorldConfig` is fixed for the lifetime of a session and carried on
every :class:`world_of_bits.state.State`. It is not part of the
persisted payload: a saved game is reinterpreted under whatever configuration
the loading session uses.

``CONFIG_REGISTRY`` maps preset names to ready-made configurations in the same
way :data:`world_of_bits.moves.MOVE_FN_REGISTRY` maps mode names to movement
functions.
"""

from dataclasses import dataclass, field, replace
from typing import Dict

from world_of_bits.components import LatLng


FALLBACK_ORIGIN = LatLng(36.997936938057016, -122.05703507501151)

DEFAULT_CELL_SIZE = 1e-4
DEFAULT_RENDER_RADIUS = 12
DEFAULT_INTERACT_RADIUS = 3

DEFAULT_SPAWN_PROBABILITY = 0.12
DEFAULT_TOKEN_SPREAD = 3
"""Exponent spread ``K``: spawned tokens are ``2 ** (1 + n)`` for ``n < K``.

With ``K = 3`` the world spawns {2, 4, 8}; the default victory token (32)
therefore always needs at least two crafts.
"""

DEFAULT_VICTORY_THRESHOLD = 32
DEFAULT_NOTIFY_THRESHOLD = 8
DEFAULT_PICKUP_SCORE = 1
DEFAULT_CRAFT_SCORE = 2


@dataclass(frozen=True)
class WorldConfig:
    """Immutable world configuration.

    Attributes:
        fallback_origin: Origin used when no real position is available.
        cell_size: Edge length of a cell in degrees.
        render_radius: Chebyshev radius of the visible window, in cells.
        interact_radius: Chebyshev radius within which cells accept
            interactions. Must not exceed ``render_radius``.
        spawn_probability: Chance that an untouched cell holds a token.
        token_spread: Exponent spread ``K`` of spawned token values.
        victory_threshold: Held value that ends the game in victory.
        notify_threshold: Held value from which the status shows a notice.
        pickup_score: Score awarded for picking up a token.
        craft_score: Score awarded for crafting two equal tokens.
    """

    fallback_origin: LatLng = field(default=FALLBACK_ORIGIN)
    cell_size: float = DEFAULT_CELL_SIZE
    render_radius: int = DEFAULT_RENDER_RADIUS
    interact_radius: int = DEFAULT_INTERACT_RADIUS
    spawn_probability: float = DEFAULT_SPAWN_PROBABILITY
    token_spread: int = DEFAULT_TOKEN_SPREAD
    victory_threshold: int = DEFAULT_VICTORY_THRESHOLD
    notify_threshold: int = DEFAULT_NOTIFY_THRESHOLD
    pickup_score: int = DEFAULT_PICKUP_SCORE
    craft_score: int = DEFAULT_CRAFT_SCORE

    def validate(self) -> "WorldConfig":
        """Return ``self`` if consistent.

        Raises:
            ValueError: If any constant is outside its meaningful range.
        """
        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if self.render_radius < 0 or self.interact_radius < 0:
            raise ValueError("Radii must be non-negative")
        if self.interact_radius > self.render_radius:
            raise ValueError(
                f"interact_radius ({self.interact_radius}) exceeds "
                f"render_radius ({self.render_radius})"
            )
        if not 0.0 <= self.spawn_probability <= 1.0:
            raise ValueError(
                f"spawn_probability must be within [0, 1], got {self.spawn_probability}"
            )
        if self.token_spread < 1:
            raise ValueError(f"token_spread must be >= 1, got {self.token_spread}")
        if self.victory_threshold < 2:
            raise ValueError("victory_threshold must be at least 2")
        if self.pickup_score < 0 or self.craft_score < 0:
            raise ValueError("Score deltas must be non-negative")
        return self


DEFAULT_CONFIG = WorldConfig()

CONFIG_REGISTRY: Dict[str, WorldConfig] = {
    "default": DEFAULT_CONFIG,
    "classic": replace(DEFAULT_CONFIG, token_spread=5),
    "empty": replace(DEFAULT_CONFIG, spawn_probability=0.0),
}
"""Named presets. ``classic`` spawns {2, ..., 32}; ``empty`` never spawns
tokens (useful for scripted scenarios)."""

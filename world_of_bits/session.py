"""Interactive session wrapper.

:class:`WorldSession` is the object a front end talks to. It owns the current
:class:`State`, feeds actions through :func:`world_of_bits.step.step`, reports
the resulting changes to a :class:`RenderSurface` and writes the game to a
:class:`ByteStore` whenever persistent fields changed.

Usage:

``session = WorldSession(store=FileStore("save.json"), surface=my_ui, position=gps_fix)``

On construction the session tries to continue the saved game; a missing or
corrupt save falls back to a fresh world anchored at ``position`` (or the
configured fallback origin when no position is available).
"""

import logging
from typing import Optional

from world_of_bits.actions import (
    Action,
    InteractAction,
    PositionAction,
    RestartAction,
    SetModeAction,
    StepAction,
)
from world_of_bits.components import Cell, LatLng
from world_of_bits.config import DEFAULT_CONFIG, WorldConfig
from world_of_bits.moves import resolve_origin
from world_of_bits.persistence import ByteStore, MemoryStore, deserialize, serialize
from world_of_bits.state import State, create_initial_state
from world_of_bits.step import step
from world_of_bits.surface import NullSurface, RenderSurface, notify_surface
from world_of_bits.systems.window import window_system
from world_of_bits.types import MovementMode


logger = logging.getLogger(__name__)


def _persistent_fields(state: State) -> tuple[object, ...]:
    return (
        state.origin,
        state.position,
        state.cells,
        state.held,
        state.score,
        state.win,
        state.mode,
        state.message,
        state.turn,
    )


class WorldSession:
    """Single-player session bound to one rendering surface and one store."""

    def __init__(
        self,
        config: WorldConfig = DEFAULT_CONFIG,
        store: Optional[ByteStore] = None,
        surface: Optional[RenderSurface] = None,
        position: Optional[LatLng] = None,
    ):
        """Load or create the world.

        Arguments:
            config: Session constants.
            store: Where the game is saved; defaults to an in-memory store.
            surface: Receiver of rendering notifications.
            position: Current real-world position, ``None`` if unavailable.
        """
        self.config = config.validate()
        self.store: ByteStore = store if store is not None else MemoryStore()
        self.surface: RenderSurface = surface if surface is not None else NullSurface()

        restored = deserialize(self.store.load(), self.config)
        if restored is None:
            origin = resolve_origin(position, self.config)
            logger.info("Starting new world at (%f, %f)", origin.lat, origin.lng)
            restored = create_initial_state(origin, self.config)
        else:
            logger.info("Continuing saved world with %d cells", len(restored.cells))

        self.state = restored
        self._commit(window_system(restored), previous=restored, force_save=True)

    def apply(self, action: Action) -> State:
        """Apply ``action``, notify the surface and save if needed."""
        self._commit(step(self.state, action), previous=self.state)
        return self.state

    def move(self, di: int, dj: int) -> State:
        return self.apply(StepAction(di, dj))

    def move_to(self, position: LatLng) -> State:
        return self.apply(PositionAction(position))

    def interact(self, cell: Cell) -> State:
        return self.apply(InteractAction(cell))

    def set_mode(self, mode: MovementMode) -> State:
        return self.apply(SetModeAction(mode))

    def restart(self) -> State:
        return self.apply(RestartAction())

    def new_game(self, position: Optional[LatLng] = None) -> State:
        """Erase the saved game and start a fresh world.

        Unlike :meth:`restart`, the new origin is ``position`` (or the
        fallback origin) rather than the player's current position.
        """
        self.store.clear()
        origin = resolve_origin(position, self.config)
        logger.info("Starting new world at (%f, %f)", origin.lat, origin.lng)
        fresh = create_initial_state(origin, self.config)
        self._commit(window_system(fresh), previous=self.state, force_save=True)
        return self.state

    def _commit(self, state: State, previous: State, force_save: bool = False) -> None:
        self.state = state
        notify_surface(self.surface, previous, state)
        if force_save or _persistent_fields(state) != _persistent_fields(previous):
            self.store.save(serialize(state))

"""Built-in movement sources.

Each *move function* maps ``(state, action) -> Optional[LatLng]``: the new
player position, or ``None`` if the action does not come from this source
and should be ignored. The reducer looks the function up by
``state.mode`` in :data:`MOVE_FN_REGISTRY` and never branches on the mode
itself, so adding a source (e.g. a replayed GPS trace) means registering one
more function.

Contract (``MoveFn``):

* Must not mutate ``State``.
* Must return ``None`` for actions it does not understand.
"""

from typing import Dict, Optional

from world_of_bits.actions import Action, PositionAction, StepAction
from world_of_bits.components import Cell, LatLng
from world_of_bits.config import WorldConfig
from world_of_bits.state import State
from world_of_bits.types import MoveFn, MovementMode
from world_of_bits.utils.grid import cell_center, to_cell


def step_move_fn(state: State, action: Action) -> Optional[LatLng]:
    """Discrete source: move by whole cells.

    The player lands on the centre of the target cell regardless of where
    inside the current cell they stood.
    """
    if not isinstance(action, StepAction):
        return None
    size = state.config.cell_size
    current = to_cell(state.position, state.origin, size)
    return cell_center(
        Cell(current.i + action.di, current.j + action.dj), state.origin, size
    )


def position_move_fn(state: State, action: Action) -> Optional[LatLng]:
    """Continuous source: follow reported real-world positions verbatim."""
    if not isinstance(action, PositionAction):
        return None
    return action.position


def resolve_origin(position: Optional[LatLng], config: WorldConfig) -> LatLng:
    """Return ``position``, or the configured fallback when positioning failed."""
    return position if position is not None else config.fallback_origin


MOVE_FN_REGISTRY: Dict[MovementMode, MoveFn] = {
    MovementMode.STEP: step_move_fn,
    MovementMode.POSITION: position_move_fn,
}
"""Movement mode to movement source."""

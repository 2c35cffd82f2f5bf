"""Action types.

Every input the world reacts to is one of the frozen dataclasses below.
Movement arrives either as a discrete :class:`StepAction` (keyboard, on-screen
buttons) or as a continuous :class:`PositionAction` (geolocation); which of
the two is honoured depends on the state's :class:`MovementMode`, resolved
through :data:`world_of_bits.moves.MOVE_FN_REGISTRY`.

``MOVE_ACTIONS`` is the tuple of movement action types; checks like
``isinstance(action, MOVE_ACTIONS)`` are preferred over enumerating them.
"""

from dataclasses import dataclass
from typing import Dict, Tuple, Union

from world_of_bits.components import Cell, LatLng
from world_of_bits.types import MovementMode


@dataclass(frozen=True)
class StepAction:
    """Move by whole cells (``di`` north, ``dj`` east)."""

    di: int
    dj: int


@dataclass(frozen=True)
class PositionAction:
    """Report an absolute real-world position."""

    position: LatLng


@dataclass(frozen=True)
class InteractAction:
    """Pick up, place or craft at ``cell``."""

    cell: Cell


@dataclass(frozen=True)
class SetModeAction:
    """Switch the active movement source."""

    mode: MovementMode


@dataclass(frozen=True)
class RestartAction:
    """Discard the world and start over at the current position."""


Action = Union[StepAction, PositionAction, InteractAction, SetModeAction, RestartAction]

MOVE_ACTIONS = (StepAction, PositionAction)

NORTH = StepAction(1, 0)
SOUTH = StepAction(-1, 0)
WEST = StepAction(0, -1)
EAST = StepAction(0, 1)

DIRECTIONS: Dict[str, StepAction] = {
    "north": NORTH,
    "south": SOUTH,
    "west": WEST,
    "east": EAST,
}
"""Named unit steps, in the order the gym environment exposes them."""

STEP_DELTAS: Tuple[StepAction, ...] = tuple(DIRECTIONS.values())

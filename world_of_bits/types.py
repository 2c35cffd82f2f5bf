"""Common type aliases and enumerations.

``GenerateFn`` and ``MoveFn`` are the extension points used by the reducer to
decide a cell's initial content and to turn movement input into a new player
position.
"""

from enum import StrEnum, auto
from typing import Callable, Optional, TYPE_CHECKING


# Forward declarations to avoid circular imports:
if TYPE_CHECKING:
    from world_of_bits.actions import Action
    from world_of_bits.components import Cell, LatLng
    from world_of_bits.config import WorldConfig
    from world_of_bits.state import State

CellContent = Optional[int]
"""``None`` for an empty cell, otherwise a positive power of two."""

GenerateFn = Callable[["Cell", "WorldConfig"], CellContent]
MoveFn = Callable[["State", "Action"], Optional["LatLng"]]


class MovementMode(StrEnum):
    """Which movement source currently drives the player."""

    STEP = auto()
    POSITION = auto()


class RejectReason(StrEnum):
    """Why an interaction left the world unchanged."""

    OUT_OF_RANGE = auto()
    INCOMPATIBLE = auto()

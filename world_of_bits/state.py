"""Core immutable world ``State`` dataclass.

This module defines the frozen :class:`State` object that represents the
whole game at one instant: the player, the world they have observed, and the
window currently rendered around them. Systems are pure functions that take a
previous ``State`` plus inputs (an ``Action``) and return a *new* ``State``.

Design notes:

* ``cells`` is the Cell Store, a **persistent map** (``pyrsistent.PMap``)
  keyed by :class:`world_of_bits.components.Cell`. Presence of a key means
  the cell's content is *decided*; absence means it will be generated on
  first access. Entries are never evicted; only a restart clears the map.
* ``visible`` is derived from ``position`` by
  :func:`world_of_bits.systems.window.window_system` and is never persisted.
* ``rejection`` is per-step feedback, reset by the reducer before each
  action.
* ``win`` is the terminal marker. The reducer ignores everything but a
  restart while it is set.

See :mod:`world_of_bits.step` for how the reducer orchestrates systems.
"""

from dataclasses import dataclass
from typing import Any, Optional
from pyrsistent import PMap, PSet, pmap, pset

from world_of_bits.components import Cell, LatLng, Rejection
from world_of_bits.config import DEFAULT_CONFIG, WorldConfig
from world_of_bits.types import CellContent, MovementMode


@dataclass(frozen=True)
class State:
    """Immutable world state.

    Instances are *value objects*; every transition creates a new ``State``.

    Attributes:
        config (WorldConfig): Session constants (not persisted).
        origin (LatLng): Real-world anchor of cell ``(0, 0)``.
        position (LatLng): Current real-world player position.
        cells (PMap[Cell, CellContent]): Decided cells.
        visible (PSet[Cell]): Cells currently materialized for rendering.
        held (CellContent): Token in the player's hand.
        score (int): Accumulated score.
        win (bool): True once the victory token has been held.
        mode (MovementMode): Active movement source.
        rejection (Rejection | None): Feedback from this step's interaction.
        message (str | None): Status text for the player.
        turn (int): Number of actions applied since the session started.
    """

    origin: LatLng
    position: LatLng
    config: WorldConfig = DEFAULT_CONFIG

    # World
    cells: PMap[Cell, CellContent] = pmap()
    visible: PSet[Cell] = pset()

    # Player
    held: CellContent = None
    score: int = 0
    mode: MovementMode = MovementMode.STEP

    # Status
    win: bool = False
    rejection: Optional[Rejection] = None
    message: Optional[str] = None
    turn: int = 0

    @property
    def description(self) -> PMap[str, Any]:
        """Sparse summary of the state for diagnostics.

        Omits the (potentially large) cell and window stores in favour of
        their sizes.
        """
        description: PMap[str, Any] = pmap()
        for field in self.__dataclass_fields__:
            value = getattr(self, field)
            if field in ("cells", "visible"):
                value = len(value)
            elif value is None:
                continue
            description = description.set(field, value)
        return description


def create_initial_state(
    origin: LatLng, config: WorldConfig = DEFAULT_CONFIG
) -> State:
    """Return a fresh session anchored at ``origin``.

    The player starts on the origin with an empty hand, an empty Cell Store
    and an empty visible window (run
    :func:`world_of_bits.systems.window.window_system` to populate it).
    """
    return State(origin=origin, position=origin, config=config.validate())

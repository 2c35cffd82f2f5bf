"""Rendering surface contract and change notification.

The world model never draws anything. After each step the session compares
the previous and current :class:`State` and tells a :class:`RenderSurface`
what changed, in this order:

1. ``on_cell_released`` for cells that left the window,
2. ``on_cell_materialized`` for cells that entered it,
3. ``on_cell_content_changed`` for cells visible before and after whose
   decided content differs,
4. ``on_interaction_rejected`` if the step rejected an interaction,
5. ``on_status_changed`` if hand, score, message or victory changed.

When the origin moves (restart) every bound changes, so the whole old window
is released and the whole new window materialized.
"""

from typing import Protocol

from pyrsistent import pset

from world_of_bits.components import Bounds, Cell
from world_of_bits.state import State
from world_of_bits.systems.window import diff_visible
from world_of_bits.types import CellContent, RejectReason
from world_of_bits.utils.grid import to_bounds


class RenderSurface(Protocol):
    """UI layer notified of world changes."""

    def on_cell_materialized(
        self, cell: Cell, content: CellContent, bounds: Bounds
    ) -> None: ...

    def on_cell_content_changed(self, cell: Cell, content: CellContent) -> None: ...

    def on_cell_released(self, cell: Cell) -> None: ...

    def on_interaction_rejected(self, cell: Cell, reason: RejectReason) -> None: ...

    def on_status_changed(
        self, held: CellContent, score: int, message: str | None, win: bool
    ) -> None: ...


class NullSurface:
    """Surface that ignores every notification (headless sessions)."""

    def on_cell_materialized(
        self, cell: Cell, content: CellContent, bounds: Bounds
    ) -> None:
        pass

    def on_cell_content_changed(self, cell: Cell, content: CellContent) -> None:
        pass

    def on_cell_released(self, cell: Cell) -> None:
        pass

    def on_interaction_rejected(self, cell: Cell, reason: RejectReason) -> None:
        pass

    def on_status_changed(
        self, held: CellContent, score: int, message: str | None, win: bool
    ) -> None:
        pass


def _status(state: State) -> tuple[CellContent, int, str | None, bool]:
    return state.held, state.score, state.message, state.win


def notify_surface(surface: RenderSurface, previous: State, current: State) -> None:
    """Report every difference between ``previous`` and ``current``.

    Arguments:
        surface: Receiver of notifications.
        previous: State before the step (may be identical to ``current``).
        current: State after the step.
    """
    if current.origin != previous.origin:
        entering, leaving, kept = current.visible, previous.visible, pset()
    else:
        entering, leaving = diff_visible(previous.visible, current.visible)
        kept = previous.visible & current.visible

    for cell in sorted(leaving):
        surface.on_cell_released(cell)

    size = current.config.cell_size
    for cell in sorted(entering):
        surface.on_cell_materialized(
            cell, current.cells.get(cell), to_bounds(cell, current.origin, size)
        )

    for cell in sorted(kept):
        content = current.cells.get(cell)
        if content != previous.cells.get(cell):
            surface.on_cell_content_changed(cell, content)

    if current.rejection is not None:
        surface.on_interaction_rejected(
            current.rejection.cell, current.rejection.reason
        )

    if _status(current) != _status(previous):
        surface.on_status_changed(*_status(current))

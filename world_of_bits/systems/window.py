"""Visible window system.

Maintains ``State.visible``: the Chebyshev square of cells around the
player's current cell. On every step the new window is diffed against the
previous one; cells entering the window are read through the Cell Store
(deciding them if needed) and cells leaving it are simply dropped from the
set. The store itself is never pruned here; a cell that scrolls out of view
keeps its decided content and shows it again when it returns.
"""

from dataclasses import replace
from typing import Tuple

from pyrsistent import PSet, pset

from world_of_bits.components import Cell
from world_of_bits.state import State
from world_of_bits.systems.cells import read_cell
from world_of_bits.utils.grid import chebyshev_distance, to_cell


def player_cell(state: State) -> Cell:
    """Return the cell the player currently stands in."""
    return to_cell(state.position, state.origin, state.config.cell_size)


def compute_visible(center: Cell, radius: int) -> PSet[Cell]:
    """Return every cell within Chebyshev distance ``radius`` of ``center``.

    The result always holds exactly ``(2 * radius + 1) ** 2`` cells.
    """
    return pset(
        Cell(center.i + di, center.j + dj)
        for di in range(-radius, radius + 1)
        for dj in range(-radius, radius + 1)
    )


def diff_visible(
    previous: PSet[Cell], current: PSet[Cell]
) -> Tuple[PSet[Cell], PSet[Cell]]:
    """Return ``(entering, leaving)`` between two windows."""
    return current - previous, previous - current


def can_interact(cell: Cell, center: Cell, interact_radius: int) -> bool:
    """Return True if ``cell`` lies within ``interact_radius`` of ``center``."""
    return chebyshev_distance(cell, center) <= interact_radius


def window_system(state: State) -> State:
    """Recompute the visible window for the player's current position.

    Arguments:
        state: Current immutable state.

    Returns:
        State: New state with ``visible`` replaced and every entering cell
        decided in ``cells``.
    """
    visible = compute_visible(player_cell(state), state.config.render_radius)
    if visible == state.visible:
        return state

    entering, _ = diff_visible(state.visible, visible)
    for cell in sorted(entering):
        state, _ = read_cell(state, cell)
    return replace(state, visible=visible)

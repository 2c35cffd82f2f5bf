"""Cell Store system.

The Cell Store is the ``State.cells`` persistent map. Each coordinate is
either *undecided* (absent) or *decided* (present, possibly holding ``None``).
The first :func:`read_cell` or :func:`write_cell` on a coordinate decides it;
after that reads return the stored value verbatim and never consult the
generator again. This is what lets the world be infinite while remembering
every change the player made: untouched cells cost nothing, touched cells
are kept forever.

There is no eviction. The only way to remove entries is
:func:`clear_cells`, which the restart system uses.
"""

import logging
from dataclasses import replace
from typing import Tuple

from pyrsistent import pmap

from world_of_bits.components import Cell
from world_of_bits.generator import generate
from world_of_bits.state import State
from world_of_bits.types import CellContent


logger = logging.getLogger(__name__)


def read_cell(state: State, cell: Cell) -> Tuple[State, CellContent]:
    """Return the content of ``cell``, deciding it if needed.

    Arguments:
        state: Current immutable state.
        cell: Coordinate to read.

    Returns:
        Tuple[State, CellContent]: The (possibly new) state with ``cell``
        decided, and the cell's content. The state is returned unchanged
        when the cell was already decided.
    """
    if cell in state.cells:
        return state, state.cells[cell]
    content = generate(cell, state.config)
    logger.debug("Materialized cell (%d, %d) -> %s", cell.i, cell.j, content)
    return replace(state, cells=state.cells.set(cell, content)), content


def peek_cell(state: State, cell: Cell) -> CellContent:
    """Return what :func:`read_cell` would return, without deciding the cell."""
    if cell in state.cells:
        return state.cells[cell]
    return generate(cell, state.config)


def write_cell(state: State, cell: Cell, content: CellContent) -> State:
    """Decide ``cell`` as ``content`` regardless of its previous state."""
    return replace(state, cells=state.cells.set(cell, content))


def clear_cells(state: State) -> State:
    """Forget every decided cell."""
    return replace(state, cells=pmap())

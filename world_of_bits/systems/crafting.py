"""Inventory and crafting system.

Resolves a player's interaction with one cell. The player holds at most one
token; the interaction outcome depends only on the held token and the cell's
content:

=========  ==========  ==============================================
held       cell        outcome
=========  ==========  ==============================================
``None``   ``None``    nothing happens
``None``   ``v``       pick up: hand ``v``, cell empty, +pickup score
``v``      ``None``    place: cell ``v``, hand empty
``v``      ``v``       craft: hand ``2v``, cell empty, +craft score
``v``      ``w``       rejected as incompatible
=========  ==========  ==============================================

Cells outside the interact radius are rejected before the table is
consulted. Rejections are recorded on ``State.rejection`` and change nothing
else.
"""

from dataclasses import replace
from typing import Optional, Tuple

from world_of_bits.components import Cell, Rejection
from world_of_bits.config import WorldConfig
from world_of_bits.state import State
from world_of_bits.systems.cells import read_cell, write_cell
from world_of_bits.systems.window import can_interact, player_cell
from world_of_bits.types import CellContent, RejectReason


Outcome = Tuple[CellContent, CellContent, int]
"""``(held, cell_content, score_delta)`` after a successful interaction."""


def resolve_interaction(
    held: CellContent, content: CellContent, config: WorldConfig
) -> Optional[Outcome]:
    """Apply the crafting table.

    Returns:
        Optional[Outcome]: The new hand, new cell content and score delta,
        or ``None`` if the two tokens are incompatible.
    """
    if held is None:
        if content is None:
            return None, None, 0
        return content, None, config.pickup_score
    if content is None:
        return None, held, 0
    if content == held:
        return held * 2, None, config.craft_score
    return None


def interaction_system(state: State, cell: Cell) -> State:
    """Interact with ``cell`` on behalf of the player.

    Arguments:
        state: Current immutable state.
        cell: Target cell.

    Returns:
        State: Updated state, or a state whose only change is ``rejection``
        if the cell is out of range or incompatible with the held token.
    """
    if not can_interact(cell, player_cell(state), state.config.interact_radius):
        return replace(state, rejection=Rejection(cell, RejectReason.OUT_OF_RANGE))

    # Reading an in-range cell decides it. It is always inside the visible
    # window already, so this never grows the store beyond what was rendered.
    state, content = read_cell(state, cell)
    outcome = resolve_interaction(state.held, content, state.config)
    if outcome is None:
        return replace(state, rejection=Rejection(cell, RejectReason.INCOMPATIBLE))

    held, new_content, score_delta = outcome
    if held == state.held and new_content == content:
        return state
    state = write_cell(state, cell, new_content)
    return replace(state, held=held, score=state.score + score_delta)

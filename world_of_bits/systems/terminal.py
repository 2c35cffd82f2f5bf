"""Terminal and status systems.

Defines victory evaluation, the restart transition back to a fresh world,
and the status message shown next to the held token. ``win`` is set exactly
once when the held token reaches the victory threshold; the reducer treats
a won state as frozen until :func:`restart_system` runs.
"""

import logging
from dataclasses import replace

from pyrsistent import pset

from world_of_bits.state import State
from world_of_bits.systems.cells import clear_cells
from world_of_bits.systems.window import window_system


logger = logging.getLogger(__name__)


def is_victory(state: State) -> bool:
    """Return True if the held token has reached the victory threshold."""
    return state.held is not None and state.held >= state.config.victory_threshold


def win_system(state: State) -> State:
    """Set ``win`` if the player holds the victory token (idempotent)."""
    if state.win or not is_victory(state):
        return state
    logger.info("Victory with token %d and score %d", state.held, state.score)
    return replace(
        state,
        win=True,
        message=f"You crafted a {state.held} token! Points: {state.score}",
    )


def notify_system(state: State) -> State:
    """Refresh the high-token notice.

    Leaves the victory message alone once the game is won.
    """
    if state.win:
        return state
    message = None
    if state.held is not None and state.held >= state.config.notify_threshold:
        message = f"High token ({state.held})!"
    if message == state.message:
        return state
    return replace(state, message=message)


def restart_system(state: State) -> State:
    """Start a new world anchored at the player's current position.

    Clears the Cell Store, empties the hand, zeroes the score, clears every
    status flag and recomputes the visible window around the new origin.
    Movement mode and turn counter carry over.
    """
    logger.info(
        "Restarting world at (%f, %f); forgetting %d cells",
        state.position.lat,
        state.position.lng,
        len(state.cells),
    )
    state = clear_cells(state)
    state = replace(
        state,
        origin=state.position,
        visible=pset(),
        held=None,
        score=0,
        win=False,
        rejection=None,
        message=None,
    )
    return window_system(state)

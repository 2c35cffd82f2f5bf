"""State reducer and step orchestration.

This module wires the systems together to implement a single transition
given an ``Action``. The exported :func:`step` is the only public mutation
entry point for gameplay progression and is pure: it returns a *new*
:class:`world_of_bits.state.State`.

Ordering (high level):

1. Per-step feedback (``rejection``) is cleared.
2. A won state ignores everything except :class:`RestartAction`.
3. The action is applied: movement through the active move function,
   interaction through the crafting system, mode switch, or restart.
4. ``window_system`` brings the visible window in line with the (possibly
   new) position, deciding every entering cell.
5. ``win_system`` and ``notify_system`` update terminal and status fields,
   and the turn counter is bumped.
"""

from dataclasses import replace

from world_of_bits.actions import (
    MOVE_ACTIONS,
    Action,
    InteractAction,
    RestartAction,
    SetModeAction,
)
from world_of_bits.moves import MOVE_FN_REGISTRY
from world_of_bits.state import State
from world_of_bits.systems.crafting import interaction_system
from world_of_bits.systems.terminal import notify_system, restart_system, win_system
from world_of_bits.systems.window import window_system


def step(state: State, action: Action) -> State:
    """Advance the world by one action.

    Args:
        state (State): Previous immutable world state.
        action (Action): Input to apply.

    Returns:
        State: Next state snapshot. A won state is returned unchanged for any
            action other than a restart.

    Raises:
        ValueError: If the action type is not recognized.
    """
    if state.rejection is not None:
        state = replace(state, rejection=None)

    if state.win and not isinstance(action, RestartAction):
        return state

    if isinstance(action, MOVE_ACTIONS):
        state = _step_move(state, action)
    elif isinstance(action, InteractAction):
        state = interaction_system(state, action.cell)
    elif isinstance(action, SetModeAction):
        state = replace(state, mode=action.mode)
    elif isinstance(action, RestartAction):
        state = restart_system(state)
    else:
        raise ValueError(f"Action is not valid: {action!r}")

    return _after_step(state)


def _step_move(state: State, action: Action) -> State:
    """Move the player if the action comes from the active movement source."""
    position = MOVE_FN_REGISTRY[state.mode](state, action)
    if position is None or position == state.position:
        return state
    return replace(state, position=position)


def _after_step(state: State) -> State:
    """Refresh derived fields after any action."""
    state = window_system(state)
    state = win_system(state)
    state = notify_system(state)
    return replace(state, turn=state.turn + 1)

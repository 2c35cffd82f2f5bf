from dataclasses import replace

from world_of_bits.components import Cell, LatLng
from world_of_bits.systems.terminal import (
    is_victory,
    notify_system,
    restart_system,
    win_system,
)
from world_of_bits.systems.window import compute_visible
from world_of_bits.utils.grid import cell_center

from tests.test_utils import EMPTY_CONFIG, FULL_CONFIG, ORIGIN, make_state


def test_win_requires_threshold() -> None:
    assert not is_victory(make_state(held=None))
    assert not is_victory(make_state(held=16))
    assert is_victory(make_state(held=32))
    assert is_victory(make_state(held=64))


def test_win_system_sets_flag_and_message() -> None:
    state = win_system(make_state(held=32, score=9))
    assert state.win
    assert state.message == "You crafted a 32 token! Points: 9"
    assert win_system(state) is state


def test_win_system_ignores_small_tokens() -> None:
    state = make_state(held=16)
    assert win_system(state) is state


def test_notify_high_token() -> None:
    assert notify_system(make_state(held=4)).message is None
    assert notify_system(make_state(held=8)).message == "High token (8)!"
    assert notify_system(make_state(held=16)).message == "High token (16)!"
    cleared = notify_system(replace(make_state(), message="High token (8)!"))
    assert cleared.message is None


def test_notify_keeps_victory_message() -> None:
    state = win_system(make_state(held=32))
    assert notify_system(state) is state


def test_restart_resets_world_at_current_position() -> None:
    size = EMPTY_CONFIG.cell_size
    here = cell_center(Cell(7, -3), ORIGIN, size)
    state = make_state(config=FULL_CONFIG, cells={(1, 1): None}, held=32, score=12)
    state = win_system(replace(state, position=here))

    state = restart_system(state)

    assert state.origin == here
    assert state.position == here
    assert state.held is None
    assert state.score == 0
    assert not state.win
    assert state.message is None
    assert state.visible == compute_visible(Cell(0, 0), FULL_CONFIG.render_radius)
    # Only the new window is decided; the old solved cell is gone.
    assert len(state.cells) == len(state.visible)
    assert all(content == 2 for content in state.cells.values())


def test_restart_keeps_mode_and_turn() -> None:
    state = replace(make_state(), turn=17, position=LatLng(1.0, 1.0))
    state = restart_system(state)
    assert state.turn == 17
    assert state.origin == LatLng(1.0, 1.0)

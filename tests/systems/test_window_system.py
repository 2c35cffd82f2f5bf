from dataclasses import replace

import pytest
from pyrsistent import pset

from world_of_bits.components import Cell, LatLng
from world_of_bits.systems.cells import write_cell
from world_of_bits.systems.window import (
    can_interact,
    compute_visible,
    diff_visible,
    player_cell,
    window_system,
)
from world_of_bits.utils.grid import cell_center, chebyshev_distance

from tests.test_utils import EMPTY_CONFIG, FULL_CONFIG, ORIGIN, make_state


@pytest.mark.parametrize("radius", [0, 1, 3, 12])
def test_window_size_and_shape(radius: int) -> None:
    center = Cell(-4, 9)
    visible = compute_visible(center, radius)
    assert len(visible) == (2 * radius + 1) ** 2
    assert all(chebyshev_distance(cell, center) <= radius for cell in visible)
    assert Cell(center.i + radius, center.j - radius) in visible
    assert Cell(center.i + radius + 1, center.j) not in visible


def test_diff_visible() -> None:
    before = compute_visible(Cell(0, 0), 1)
    after = compute_visible(Cell(0, 1), 1)
    entering, leaving = diff_visible(before, after)
    assert entering == pset([Cell(-1, 2), Cell(0, 2), Cell(1, 2)])
    assert leaving == pset([Cell(-1, -1), Cell(0, -1), Cell(1, -1)])


def test_can_interact_is_chebyshev() -> None:
    center = Cell(0, 0)
    assert can_interact(Cell(2, 2), center, 2)
    assert can_interact(Cell(-2, 1), center, 2)
    assert not can_interact(Cell(3, 0), center, 2)
    assert not can_interact(Cell(0, -3), center, 2)


def test_window_system_materializes_window() -> None:
    state = make_state(config=FULL_CONFIG, with_window=False)
    state = window_system(state)
    radius = FULL_CONFIG.render_radius
    assert state.visible == compute_visible(Cell(0, 0), radius)
    assert len(state.cells) == (2 * radius + 1) ** 2
    assert all(state.cells[cell] == 2 for cell in state.visible)


def test_window_system_is_noop_when_unchanged() -> None:
    state = make_state()
    assert window_system(state) is state


def test_moving_window_keeps_store() -> None:
    size = EMPTY_CONFIG.cell_size
    radius = EMPTY_CONFIG.render_radius
    state = make_state()
    state = replace(state, position=cell_center(Cell(0, 1), ORIGIN, size))
    state = window_system(state)
    assert player_cell(state) == Cell(0, 1)
    assert state.visible == compute_visible(Cell(0, 1), radius)
    # One new column entered; nothing was evicted from the store.
    assert len(state.cells) == (2 * radius + 1) * (2 * radius + 2)


def test_memento_survives_leaving_and_returning() -> None:
    size = EMPTY_CONFIG.cell_size
    state = make_state()
    state = write_cell(state, Cell(2, 3), 4)

    far = cell_center(Cell(100, 100), ORIGIN, size)
    state = window_system(replace(state, position=far))
    assert Cell(2, 3) not in state.visible
    assert state.cells[Cell(2, 3)] == 4

    state = window_system(replace(state, position=LatLng(0.0, 0.0)))
    assert Cell(2, 3) in state.visible
    assert state.cells[Cell(2, 3)] == 4

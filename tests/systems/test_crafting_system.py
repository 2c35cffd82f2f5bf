from dataclasses import replace

import pytest

from world_of_bits.components import Cell, Rejection
from world_of_bits.config import DEFAULT_CONFIG
from world_of_bits.systems.crafting import interaction_system, resolve_interaction
from world_of_bits.types import CellContent, RejectReason

from tests.test_utils import EMPTY_CONFIG, make_state


@pytest.mark.parametrize(
    "held, content, expected",
    [
        (None, None, (None, None, 0)),
        (None, 8, (8, None, 1)),
        (4, None, (None, 4, 0)),
        (8, 8, (16, None, 2)),
        (16, 4, None),
    ],
)
def test_resolve_interaction_table(
    held: CellContent, content: CellContent, expected: object
) -> None:
    assert resolve_interaction(held, content, DEFAULT_CONFIG) == expected


def test_pick_up() -> None:
    state = make_state(cells={(1, 0): 8})
    state = interaction_system(state, Cell(1, 0))
    assert state.held == 8
    assert state.cells[Cell(1, 0)] is None
    assert state.score == 1
    assert state.rejection is None


def test_place() -> None:
    state = make_state(held=4, score=3)
    state = interaction_system(state, Cell(-1, 1))
    assert state.held is None
    assert state.cells[Cell(-1, 1)] == 4
    assert state.score == 3


def test_craft_doubles_and_scores() -> None:
    state = make_state(cells={(0, 1): 8}, held=8, score=1)
    state = interaction_system(state, Cell(0, 1))
    assert state.held == 16
    assert state.cells[Cell(0, 1)] is None
    assert state.score == 3


def test_mismatch_is_rejected_without_change() -> None:
    before = make_state(cells={(2, 2): 4}, held=16, score=5)
    after = interaction_system(before, Cell(2, 2))
    assert after.rejection == Rejection(Cell(2, 2), RejectReason.INCOMPATIBLE)
    assert replace(after, rejection=None) == before


def test_out_of_range_is_rejected_without_change() -> None:
    radius = EMPTY_CONFIG.interact_radius
    before = make_state(cells={(radius + 1, 0): 2})
    after = interaction_system(before, Cell(radius + 1, 0))
    assert after.rejection == Rejection(Cell(radius + 1, 0), RejectReason.OUT_OF_RANGE)
    assert replace(after, rejection=None) == before


def test_empty_hand_on_empty_cell_is_noop() -> None:
    state = make_state()
    assert interaction_system(state, Cell(0, 0)) is state


def test_craft_chain_reaches_32() -> None:
    state = make_state(cells={(0, 1): 8, (1, 0): 8, (0, -1): 16})
    for cell in [Cell(0, 1), Cell(1, 0), Cell(0, -1)]:
        state = interaction_system(state, cell)
    assert state.held == 32
    assert state.score == 1 + 2 + 2

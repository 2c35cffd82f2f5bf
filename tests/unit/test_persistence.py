import json
from dataclasses import replace
from pathlib import Path

import pytest
from pyrsistent import pset

from world_of_bits.components import Cell, LatLng
from world_of_bits.persistence import (
    SCHEMA_VERSION,
    FileStore,
    MemoryStore,
    deserialize,
    serialize,
    state_to_dict,
)
from world_of_bits.state import State
from world_of_bits.types import MovementMode

from tests.test_utils import EMPTY_CONFIG, make_state


def _persisted(state: State) -> State:
    """The part of ``state`` a save is expected to reproduce."""
    return replace(state, visible=pset(), rejection=None)


@pytest.mark.parametrize(
    "state",
    [
        make_state(with_window=False),
        make_state(cells={(2, 3): 4, (-1, -7): None, (0, 0): 64}),
        replace(
            make_state(cells={(1, 1): 2}, held=16, score=11),
            position=LatLng(0.00012, -0.00034),
            mode=MovementMode.POSITION,
            turn=42,
            message="High token (16)!",
        ),
        replace(make_state(held=32, score=7), win=True, message="You won"),
    ],
)
def test_round_trip(state: State) -> None:
    restored = deserialize(serialize(state), EMPTY_CONFIG)
    assert restored == _persisted(state)


def test_serialize_is_canonical() -> None:
    a = make_state(cells={(0, 1): 2, (1, 0): 4}, with_window=False)
    b = make_state(cells={(1, 0): 4, (0, 1): 2}, with_window=False)
    assert serialize(a) == serialize(b)
    payload = json.loads(serialize(a))
    assert payload["schema_version"] == SCHEMA_VERSION
    assert payload["cells"] == [[0, 1, 2], [1, 0, 4]]
    assert "visible" not in payload


def test_visible_window_is_not_saved() -> None:
    state = make_state()
    assert len(state.visible) > 0
    assert deserialize(serialize(state), EMPTY_CONFIG).visible == pset()


def _corrupt(**changes: object) -> bytes:
    payload = state_to_dict(make_state(cells={(0, 0): 2}, held=4))
    payload.update(changes)
    return json.dumps(payload).encode("utf-8")


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"\xff\xfe\x00",
        b"not json",
        b"[1, 2, 3]",
        _corrupt(schema_version=99),
        _corrupt(origin=[1.0]),
        _corrupt(position="here"),
        _corrupt(position=[float("inf"), 0.0]),
        _corrupt(position=[float("nan"), 0.0]),
        _corrupt(origin=[10**400, 0]),
        _corrupt(origin=[-1e308, 0.0], position=[1e308, 0.0]),
        _corrupt(cells={"0,0": 2}),
        _corrupt(cells=[[0, 0]]),
        _corrupt(cells=[[0.5, 0, 2]]),
        _corrupt(cells=[[0, 0, 3]]),
        _corrupt(cells=[[0, 0, -4]]),
        _corrupt(held=6),
        _corrupt(held=True),
        _corrupt(score=-1),
        _corrupt(win="yes"),
        _corrupt(mode="teleport"),
        _corrupt(turn=None),
        _corrupt(message=12),
    ],
)
def test_corrupt_data_falls_back_to_none(data: bytes) -> None:
    assert deserialize(data, EMPTY_CONFIG) is None


def test_missing_data_is_none() -> None:
    assert deserialize(None, EMPTY_CONFIG) is None


def test_deserialize_uses_loading_config() -> None:
    restored = deserialize(serialize(make_state()), EMPTY_CONFIG)
    assert restored is not None
    assert restored.config is EMPTY_CONFIG
    assert restored.cells[Cell(0, 0)] is None


def test_memory_store() -> None:
    store = MemoryStore()
    assert store.load() is None
    store.save(b"abc")
    assert store.load() == b"abc"
    store.clear()
    assert store.load() is None


def test_file_store(tmp_path: Path) -> None:
    store = FileStore(tmp_path / "saves" / "world.json")
    assert store.load() is None
    data = serialize(make_state(cells={(2, 3): 4}))
    store.save(data)
    assert (tmp_path / "saves" / "world.json").read_bytes() == data
    assert deserialize(store.load(), EMPTY_CONFIG) is not None
    store.clear()
    assert store.load() is None
    store.clear()


def test_file_store_unreadable_path_loads_none(tmp_path: Path) -> None:
    # A directory where the file should be cannot be read as bytes.
    (tmp_path / "world.json").mkdir()
    assert FileStore(tmp_path / "world.json").load() is None

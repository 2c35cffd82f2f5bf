"""Persistence codec and byte stores.

:func:`serialize` turns a :class:`State` into compact JSON bytes;
:func:`deserialize` reverses it. The payload holds everything needed to
continue a session (origin, position, hand, score, flags and every decided
cell) but not the visible window, which is recomputed on load, nor the
:class:`WorldConfig`, which belongs to the loading session.

Payload schema (``schema_version`` 1)::

    {
        "schema_version": 1,
        "origin": [lat, lng],
        "position": [lat, lng],
        "held": int | null,
        "score": int,
        "win": bool,
        "mode": "step" | "position",
        "turn": int,
        "message": str | null,
        "cells": [[i, j, int | null], ...]   # sorted by (i, j)
    }

Loading never raises: missing, undecodable or inconsistent payloads are
logged and reported as ``None`` so the caller can start a fresh session.
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from pyrsistent import pmap

from world_of_bits.components import Cell, LatLng
from world_of_bits.config import DEFAULT_CONFIG, WorldConfig
from world_of_bits.state import State
from world_of_bits.types import CellContent, MovementMode


logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class ByteStore(Protocol):
    """External key-value byte sink holding a single saved game."""

    def load(self) -> Optional[bytes]: ...

    def save(self, data: bytes) -> None: ...

    def clear(self) -> None: ...


class MemoryStore:
    """In-process :class:`ByteStore`."""

    def __init__(self, data: Optional[bytes] = None) -> None:
        self.data = data

    def load(self) -> Optional[bytes]:
        return self.data

    def save(self, data: bytes) -> None:
        self.data = data

    def clear(self) -> None:
        self.data = None


class FileStore:
    """:class:`ByteStore` backed by a single file.

    Unreadable files load as ``None``; write errors propagate. Saves go
    through a sibling ``.tmp`` file so an interrupted write leaves the
    previous save intact.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> Optional[bytes]:
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Could not read save file %s: %s", self.path, exc)
            return None

    def save(self, data: bytes) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_bytes(data)
        tmp_path.replace(self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


def _encode_latlng(position: LatLng) -> List[float]:
    return [position.lat, position.lng]


def state_to_dict(state: State) -> Dict[str, Any]:
    """Return the JSON-friendly payload for ``state``."""
    return {
        "schema_version": SCHEMA_VERSION,
        "origin": _encode_latlng(state.origin),
        "position": _encode_latlng(state.position),
        "held": state.held,
        "score": state.score,
        "win": state.win,
        "mode": str(state.mode),
        "turn": state.turn,
        "message": state.message,
        "cells": [
            [cell.i, cell.j, content] for cell, content in sorted(state.cells.items())
        ],
    }


def serialize(state: State) -> bytes:
    """Encode ``state`` as compact, key-sorted UTF-8 JSON."""
    return json.dumps(
        state_to_dict(state), sort_keys=True, separators=(",", ":")
    ).encode("utf-8")


class _PayloadError(ValueError):
    """Raised internally when a payload does not match the schema."""


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _decode_latlng(value: Any, name: str) -> LatLng:
    if (
        not isinstance(value, list)
        or len(value) != 2
        or not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in value)
    ):
        raise _PayloadError(f"{name} must be a [lat, lng] pair")
    try:
        lat, lng = float(value[0]), float(value[1])
    except OverflowError as exc:
        raise _PayloadError(f"{name} is out of range") from exc
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise _PayloadError(f"{name} must be finite, got {value!r}")
    return LatLng(lat, lng)


def _decode_content(value: Any, name: str) -> CellContent:
    if value is None:
        return None
    if not _is_int(value) or value < 2 or value & (value - 1):
        raise _PayloadError(f"{name} must be null or a power of two >= 2, got {value!r}")
    return value


def _decode_non_negative(value: Any, name: str) -> int:
    if not _is_int(value) or value < 0:
        raise _PayloadError(f"{name} must be a non-negative integer, got {value!r}")
    return value


def state_from_dict(payload: Any, config: WorldConfig = DEFAULT_CONFIG) -> State:
    """Build a :class:`State` from a decoded payload.

    Raises:
        ValueError: If the payload does not match the schema.
    """
    if not isinstance(payload, dict):
        raise _PayloadError("payload must be an object")
    if payload.get("schema_version") != SCHEMA_VERSION:
        raise _PayloadError(
            f"unsupported schema_version {payload.get('schema_version')!r}"
        )

    cells: Dict[Cell, CellContent] = {}
    raw_cells = payload.get("cells")
    if not isinstance(raw_cells, list):
        raise _PayloadError("cells must be a list")
    for entry in raw_cells:
        if not isinstance(entry, list) or len(entry) != 3:
            raise _PayloadError(f"cell entry must be [i, j, content], got {entry!r}")
        i, j, content = entry
        if not _is_int(i) or not _is_int(j):
            raise _PayloadError(f"cell coordinates must be integers, got {entry!r}")
        cells[Cell(i, j)] = _decode_content(content, "cell content")

    win = payload.get("win")
    if not isinstance(win, bool):
        raise _PayloadError("win must be a boolean")
    try:
        mode = MovementMode(payload.get("mode"))
    except ValueError as exc:
        raise _PayloadError(f"unknown movement mode {payload.get('mode')!r}") from exc

    message = payload.get("message")
    if message is not None and not isinstance(message, str):
        raise _PayloadError("message must be a string or null")

    origin = _decode_latlng(payload.get("origin"), "origin")
    position = _decode_latlng(payload.get("position"), "position")
    offset = (
        (position.lat - origin.lat) / config.cell_size,
        (position.lng - origin.lng) / config.cell_size,
    )
    if not all(math.isfinite(v) for v in offset):
        raise _PayloadError("position is too far from origin")

    return State(
        origin=origin,
        position=position,
        config=config,
        cells=pmap(cells),
        held=_decode_content(payload.get("held"), "held"),
        score=_decode_non_negative(payload.get("score"), "score"),
        win=win,
        mode=mode,
        turn=_decode_non_negative(payload.get("turn"), "turn"),
        message=message,
    )


def deserialize(
    data: Optional[bytes], config: WorldConfig = DEFAULT_CONFIG
) -> Optional[State]:
    """Decode bytes produced by :func:`serialize`.

    Arguments:
        data: Saved bytes, or ``None`` if nothing was saved.
        config: Configuration of the loading session.

    Returns:
        Optional[State]: The restored state with an empty visible window, or
        ``None`` if there is no usable saved game.
    """
    if data is None:
        return None
    try:
        payload = json.loads(data.decode("utf-8"))
        return state_from_dict(payload, config)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Discarding undecodable save data: %s", exc)
    except ValueError as exc:
        logger.warning("Discarding invalid save data: %s", exc)
    return None

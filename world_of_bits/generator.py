"""Deterministic cell content generator.

Every cell's *initial* content is a pure function of its coordinate and the
world configuration. No process-wide RNG is involved: two sessions, or two
implementations in different languages, agree on every untouched cell as
long as they agree on the hash below.

Hash (pinned):

1. Encode ``f"{i},{j},{tag}"`` as UTF-8.
2. Take the SHA-256 digest.
3. Read the first 8 bytes as a big-endian unsigned integer.
4. Keep its top 53 bits and divide by ``2 ** 53``, giving an exactly
   representable float in ``[0, 1)``.

Two independent draws are taken per cell, one per purpose tag: ``spawn``
decides whether a token exists and ``value`` decides which power of two it
is. Using separate tags keeps the value distribution independent of the
spawn probability.
"""

import hashlib
import math

from world_of_bits.components import Cell
from world_of_bits.config import WorldConfig
from world_of_bits.types import CellContent


SPAWN_TAG = "spawn"
VALUE_TAG = "value"

_HASH_BITS = 53
_HASH_SCALE = float(2**_HASH_BITS)


def unit_hash(cell: Cell, tag: str) -> float:
    """Return a reproducible pseudo-random float in ``[0, 1)`` for ``cell``."""
    digest = hashlib.sha256(f"{cell.i},{cell.j},{tag}".encode("utf-8")).digest()
    word = int.from_bytes(digest[:8], byteorder="big", signed=False)
    return (word >> (64 - _HASH_BITS)) / _HASH_SCALE


def token_value(draw: float, token_spread: int) -> int:
    """Map a unit draw in ``[0, 1)`` to ``2 ** (1 + floor(draw * token_spread))``."""
    return 2 ** (1 + math.floor(draw * token_spread))


def generate(cell: Cell, config: WorldConfig) -> CellContent:
    """Return the default content of ``cell``.

    Args:
        cell: Coordinate to generate.
        config: Supplies ``spawn_probability`` and ``token_spread``.

    Returns:
        CellContent: ``None`` if no token spawns, otherwise its value.
    """
    if unit_hash(cell, SPAWN_TAG) >= config.spawn_probability:
        return None
    return token_value(unit_hash(cell, VALUE_TAG), config.token_spread)

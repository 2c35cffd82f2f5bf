"""Coordinate mapping helpers.

Pure conversions between real-world positions and integer cells, relative to
a fixed origin and cell size. Functions here are stateless and intentionally
lightweight; the window manager calls them once per visible cell.
"""

import math

from world_of_bits.components import Bounds, Cell, LatLng


def to_cell(position: LatLng, origin: LatLng, cell_size: float) -> Cell:
    """Return the cell containing ``position``.

    Each axis is floor-divided independently, so positions south or west of
    the origin map to negative indices.
    """
    return Cell(
        i=math.floor((position.lat - origin.lat) / cell_size),
        j=math.floor((position.lng - origin.lng) / cell_size),
    )


def to_bounds(cell: Cell, origin: LatLng, cell_size: float) -> Bounds:
    """Return the half-open rectangle covered by ``cell``."""
    return Bounds(
        south_west=LatLng(
            origin.lat + cell.i * cell_size,
            origin.lng + cell.j * cell_size,
        ),
        north_east=LatLng(
            origin.lat + (cell.i + 1) * cell_size,
            origin.lng + (cell.j + 1) * cell_size,
        ),
    )


def cell_center(cell: Cell, origin: LatLng, cell_size: float) -> LatLng:
    """Return the midpoint of ``cell``.

    Discrete movement snaps the player here so that accumulated float error
    can never land them on a cell border.
    """
    return LatLng(
        origin.lat + (cell.i + 0.5) * cell_size,
        origin.lng + (cell.j + 0.5) * cell_size,
    )


def chebyshev_distance(a: Cell, b: Cell) -> int:
    """Return ``max(|di|, |dj|)`` between two cells."""
    return max(abs(a.i - b.i), abs(a.j - b.j))

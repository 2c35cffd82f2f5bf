"""world_of_bits.components
=================================

Aggregate import surface for the value objects the world model is built
from. They carry no behavior beyond their fields; systems combine them into
new :class:`world_of_bits.state.State` snapshots::

    from world_of_bits.components import Cell, LatLng

"""

from .cell import Cell
from .latlng import Bounds, LatLng
from .rejection import Rejection

__all__ = [
    "Bounds",
    "Cell",
    "LatLng",
    "Rejection",
]

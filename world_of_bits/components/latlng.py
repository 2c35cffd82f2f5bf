"""Real-world coordinates.

``LatLng`` is the unit of both the session origin and the player position.
``Bounds`` is the half-open rectangle a cell covers on the map.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LatLng:
    """Latitude / longitude pair in degrees."""

    lat: float
    lng: float


@dataclass(frozen=True)
class Bounds:
    """Rectangle ``[south_west, north_east)`` on both axes.

    Attributes:
        south_west: Inclusive corner.
        north_east: Exclusive corner; equals the ``south_west`` of the
            neighbouring cell to the north east.
    """

    south_west: LatLng
    north_east: LatLng

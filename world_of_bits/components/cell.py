"""Cell component.

Immutable integer grid coordinates relative to the session origin. Used as the
key of ``State.cells`` and as the member type of ``State.visible``.
"""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Cell:
    """Grid coordinate.

    Attributes:
        i: Row index, growing northward (latitude).
        j: Column index, growing eastward (longitude).
    """

    i: int
    j: int

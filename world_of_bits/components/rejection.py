from dataclasses import dataclass

from world_of_bits.components.cell import Cell
from world_of_bits.types import RejectReason


@dataclass(frozen=True)
class Rejection:
    """Feedback for an interaction that changed nothing.

    Stored in ``State.rejection`` for the step that produced it only; the
    reducer clears it at the start of every step.
    """

    cell: Cell
    reason: RejectReason

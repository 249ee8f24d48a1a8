"""Value objects exchanged by the movement relay."""

from movementrelay.models._base import format_float
from movementrelay.models.messages import MovementResult, OutboundMessage
from movementrelay.models.vector import Vector3

__all__ = [
    "MovementResult",
    "OutboundMessage",
    "Vector3",
    "format_float",
]

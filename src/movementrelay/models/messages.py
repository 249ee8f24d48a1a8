"""Outbound messages and per-message results."""

from __future__ import annotations

from pydantic import Field, field_validator

from movementrelay.models._base import RelayBaseModel
from movementrelay.models.vector import Vector3


class OutboundMessage(RelayBaseModel):
    """A single publish: topic plus text payload."""

    topic: str
    payload: str

    @field_validator("topic")
    @classmethod
    def _non_empty_topic(cls, value: str) -> str:
        if not value:
            raise ValueError("topic must be non-empty")
        return value


class MovementResult(RelayBaseModel):
    """Outcome of one processed message.

    ``messages`` lists what was published, in publish order: the
    movement topic first, then ``information``.
    """

    old_position: Vector3
    new_position: Vector3
    movement: Vector3
    messages: tuple[OutboundMessage, ...] = Field(default_factory=tuple)

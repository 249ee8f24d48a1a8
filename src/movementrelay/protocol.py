"""Inbound message grammar, debounce gate, and outbound formatting.

Everything here is a pure function of its arguments except :func:`parse`,
which logs when the field count is wrong.
"""

from __future__ import annotations

import logging
import math

from movementrelay._constants import COORDINATE_PATTERN, INFORMATION_TEMPLATE
from movementrelay.exceptions import RelayNumericParseError
from movementrelay.models._base import format_float
from movementrelay.models.vector import Vector3

_logger = logging.getLogger(__name__)


def validate(raw: str) -> bool:
    """Return ``True`` when *raw* contains a ``(num, num, num)`` triple.

    The check is structural only: ``"(.,.,.)"`` matches here and is
    rejected later by :func:`parse`.
    """
    return COORDINATE_PATTERN.search(raw) is not None


def should_process(arrival_time: float, previous_time: float, window: float) -> bool:
    """Whether a message arriving at *arrival_time* is outside the debounce window."""
    return arrival_time - previous_time >= window


def _parse_field(field: str, raw: str) -> float:
    text = field.strip() or "0"
    if not text.isascii():
        raise RelayNumericParseError(
            f"Non-ASCII coordinate {field!r} in message: {raw}",
            raw=raw,
            field=field,
        )
    try:
        value = float(text)
    except ValueError as exc:
        raise RelayNumericParseError(
            f"Invalid coordinate {field!r} in message: {raw}",
            raw=raw,
            field=field,
        ) from exc
    if not math.isfinite(value):
        raise RelayNumericParseError(
            f"Non-finite coordinate {field!r} in message: {raw}",
            raw=raw,
            field=field,
        )
    return value


def parse(raw: str) -> Vector3:
    """Convert a coordinate message into a :class:`Vector3`.

    Empty fields count as ``0``. A message that does not split into
    exactly three fields is logged and yields the zero vector; callers
    still treat it as a processed (zero) movement.

    Raises
    ------
    RelayNumericParseError
        A field is not a finite number.
    """
    fields = raw.strip().strip("()").split(",")
    if len(fields) != 3:
        _logger.error("Invalid message format: %s", raw)
        return Vector3.zero()

    x, y, z = (_parse_field(field, raw) for field in fields)
    return Vector3(x=x, y=y, z=z)


def movement_topic(delta: Vector3) -> str:
    """Topic that announces *delta*, e.g. ``"(1, 2, 3)"``."""
    return str(delta)


def information_payload(old_position: Vector3, new_position: Vector3) -> str:
    """Human-readable description of a move from *old_position* to *new_position*."""
    return INFORMATION_TEMPLATE.format(
        *(format_float(value) for value in old_position.as_tuple()),
        *(format_float(value) for value in new_position.as_tuple()),
    )

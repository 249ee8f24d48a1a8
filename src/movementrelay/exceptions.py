"""Custom exception hierarchy for movementrelay."""

from __future__ import annotations


class RelayError(Exception):
    """Base exception for all movementrelay errors."""


class RelayConfigError(RelayError):
    """Invalid or missing configuration."""


class RelayFormatError(RelayError):
    """Inbound message does not match the coordinate grammar."""

    def __init__(self, message: str, *, raw: str = "") -> None:
        self.raw = raw
        super().__init__(message)


class RelayNumericParseError(RelayFormatError):
    """A structurally valid coordinate field is not a finite number.

    Raised by the coordinate parser for fields such as a lone ``"."``.
    The message is dropped without touching the tracked position.
    """

    def __init__(self, message: str, *, raw: str = "", field: str = "") -> None:
        self.field = field
        super().__init__(message, raw=raw)


class RelayTransportError(RelayError):
    """MQTT-level failure (connect refused, publish not accepted)."""

    def __init__(
        self,
        message: str,
        *,
        reason_code: int | None = None,
        topic: str = "",
    ) -> None:
        self.reason_code = reason_code
        self.topic = topic
        super().__init__(message)

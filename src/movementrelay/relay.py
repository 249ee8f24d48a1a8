"""The movement relay: validate, debounce, move, and republish."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from movementrelay._constants import DEBOUNCE_WINDOW, DEFAULT_NAME, INFORMATION_TOPIC
from movementrelay.exceptions import (
    RelayConfigError,
    RelayError,
    RelayFormatError,
    RelayNumericParseError,
    RelayTransportError,
)
from movementrelay.models.messages import MovementResult, OutboundMessage
from movementrelay.models.vector import Vector3
from movementrelay.protocol import information_payload, movement_topic, parse, should_process, validate


class Publisher(Protocol):
    """Anything that can send a text payload to a topic."""

    def publish(self, topic: str, payload: str) -> None: ...


class TrackedObject(Protocol):
    """An object with a mutable 3D position."""

    position: Vector3


@dataclass
class InMemoryObject:
    """Tracked object that only lives in memory."""

    position: Vector3 = field(default_factory=Vector3.zero)


@dataclass
class RelayState:
    """Mutable per-relay state.

    ``previous_timestamp`` is the arrival time of the last validated
    message, processed or not. ``None`` until the first one arrives.
    """

    movement: Vector3 = field(default_factory=Vector3.zero)
    old_position: Vector3 = field(default_factory=Vector3.zero)
    new_position: Vector3 = field(default_factory=Vector3.zero)
    previous_timestamp: float | None = None


@dataclass
class RelayStats:
    """Counters for what happened to inbound messages."""

    processed: int = 0
    suppressed: int = 0
    rejected: int = 0
    failed: int = 0
    last_processed_at: float | None = None


class MovementRelay:
    """Moves a tracked object by the deltas carried in inbound messages.

    Not thread-safe: calls to :meth:`on_message` must be serialized by the
    host (the MQTT runtime does this by dispatching onto one event loop).

    Usage::

        relay = MovementRelay(publisher, InMemoryObject())
        relay.on_message("(1, 2, 3)")
    """

    def __init__(
        self,
        publisher: Publisher | None = None,
        tracked_object: TrackedObject | None = None,
        *,
        name: str = DEFAULT_NAME,
        debounce_window: float = DEBOUNCE_WINDOW,
        clock: Callable[[], float] = time.monotonic,
        on_error: Callable[[RelayError], None] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if debounce_window < 0:
            raise RelayConfigError(f"debounce_window must be >= 0, got {debounce_window}")
        self._publisher = publisher
        self._tracked_object = tracked_object
        self._name = name
        self._debounce_window = debounce_window
        self._clock = clock
        self._on_error = on_error
        self._logger = logger or logging.getLogger(__name__)
        self.state = RelayState()
        self.stats = RelayStats()

    @property
    def name(self) -> str:
        return self._name

    @property
    def debounce_window(self) -> float:
        return self._debounce_window

    @property
    def position(self) -> Vector3 | None:
        """Current position of the tracked object, if one is attached."""
        if self._tracked_object is None:
            return None
        return self._tracked_object.position

    def attach_publisher(self, publisher: Publisher | None) -> None:
        self._publisher = publisher

    # ------------------------------------------------------------------
    # Inbound
    # ------------------------------------------------------------------

    def on_message(self, raw: str, arrival_time: float | None = None) -> MovementResult | None:
        """Handle one inbound message.

        Returns the :class:`MovementResult` when the message moved the
        tracked object, ``None`` when it was rejected, debounced, or no
        object is attached.

        Raises
        ------
        RelayNumericParseError
            The message matched the grammar but a field is not a number.
            Nothing is moved or published.
        RelayTransportError
            The publisher rejected one of the two status messages.
        """
        if not validate(raw):
            self.stats.rejected += 1
            self._logger.error("[%s] Invalid message format: %s", self._name, raw)
            self._report(RelayFormatError(f"Invalid message format: {raw}", raw=raw))
            return None

        now = self._clock() if arrival_time is None else arrival_time
        previous = self.state.previous_timestamp
        try:
            # Echoes from other relays arrive within the window; only the first counts.
            if previous is not None and not should_process(now, previous, self._debounce_window):
                self.stats.suppressed += 1
                self._logger.debug(
                    "[%s] Debounced message=%s gap=%.4fs window=%.4fs",
                    self._name,
                    raw,
                    now - previous,
                    self._debounce_window,
                )
                return None

            try:
                delta = parse(raw)
            except RelayNumericParseError as exc:
                self.stats.failed += 1
                self._report(exc)
                raise
            self.state.movement = delta
            result = self.apply_and_publish(delta)
            if result is not None:
                self.stats.last_processed_at = now
            return result
        finally:
            self.state.previous_timestamp = now

    # ------------------------------------------------------------------
    # Movement and outbound
    # ------------------------------------------------------------------

    def apply_and_publish(self, delta: Vector3) -> MovementResult | None:
        """Move the tracked object by *delta* and publish the two status messages.

        A publish failure is reported to ``on_error`` and re-raised. The move
        itself is not rolled back.
        """
        tracked = self._tracked_object
        if tracked is None:
            self._logger.debug("[%s] No tracked object attached, skipping move=%s", self._name, delta)
            return None

        old_position = tracked.position
        new_position = old_position + delta
        tracked.position = new_position
        self.state.old_position = old_position
        self.state.new_position = new_position

        payload = information_payload(old_position, new_position)
        messages = (
            OutboundMessage(topic=movement_topic(delta), payload=payload),
            OutboundMessage(topic=INFORMATION_TOPIC, payload=payload),
        )
        if self._publisher is None:
            self._logger.debug("[%s] No publisher attached, not announcing move=%s", self._name, delta)
        else:
            for message in messages:
                self._logger.debug("[%s] Publishing topic=%s payload=%s", self._name, message.topic, message.payload)
                try:
                    self._publisher.publish(message.topic, message.payload)
                except RelayTransportError as exc:
                    self.stats.failed += 1
                    self._report(exc)
                    raise
        self.stats.processed += 1

        return MovementResult(
            old_position=old_position,
            new_position=new_position,
            movement=delta,
            messages=messages,
        )

    def _report(self, error: RelayError) -> None:
        if self._on_error is None:
            return
        try:
            self._on_error(error)
        except Exception:
            self._logger.exception("[%s] on_error callback raised", self._name)

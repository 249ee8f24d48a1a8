"""High-level async client that runs a movement relay over MQTT."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from movementrelay._mqtt import RelayMqttRuntime
from movementrelay.config import RelayConfig
from movementrelay.exceptions import RelayError
from movementrelay.models.messages import MovementResult
from movementrelay.models.vector import Vector3
from movementrelay.relay import InMemoryObject, MovementRelay, RelayStats, TrackedObject

_logger = logging.getLogger(__name__)


class RelayClient:
    """Connects a :class:`MovementRelay` to an MQTT broker.

    Usage::

        async with RelayClient(RelayConfig.from_env()) as client:
            await asyncio.sleep(60)
            print(client.position, client.stats)
    """

    def __init__(
        self,
        config: RelayConfig,
        *,
        tracked_object: TrackedObject | None = None,
        on_result: Callable[[MovementResult], None] | None = None,
        on_error: Callable[[RelayError], None] | None = None,
    ) -> None:
        self._config = config.validate()
        self._relay = MovementRelay(
            tracked_object=tracked_object if tracked_object is not None else InMemoryObject(),
            name=config.name,
            debounce_window=config.debounce_window,
            on_error=on_error,
        )
        self._on_result = on_result
        self._runtime: RelayMqttRuntime | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> RelayClient:
        self.start(asyncio.get_running_loop())
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.stop()

    def start(self, loop: asyncio.AbstractEventLoop) -> None:
        """Start the MQTT runtime and route its messages into the relay."""
        self.stop()
        runtime = RelayMqttRuntime(loop=loop, config=self._config, on_payload=self._handle_payload)
        runtime.start()
        self._runtime = runtime
        self._relay.attach_publisher(runtime)
        _logger.debug("[%s] Relay listening on topic=%s", self._config.name, self._config.subscribe_topic)

    def stop(self) -> None:
        runtime = self._runtime
        self._runtime = None
        self._relay.attach_publisher(None)
        if runtime is not None:
            runtime.stop()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def relay(self) -> MovementRelay:
        return self._relay

    @property
    def is_running(self) -> bool:
        return self._runtime is not None and self._runtime.is_running

    @property
    def position(self) -> Vector3 | None:
        return self._relay.position

    @property
    def stats(self) -> RelayStats:
        return self._relay.stats

    def _handle_payload(self, text: str) -> MovementResult | None:
        result = self._relay.on_message(text)
        if result is not None and self._on_result is not None:
            self._on_result(result)
        return result

"""Internal MQTT runtime feeding inbound payloads to the relay."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, cast

import paho.mqtt.client as mqtt

from movementrelay.config import RelayConfig
from movementrelay.exceptions import RelayError, RelayTransportError


def decode_payload(payload: bytes) -> str:
    """Decode an inbound MQTT payload as UTF-8 text."""
    return payload.decode("utf-8", errors="replace").strip()


class RelayMqttRuntime:
    """Threaded paho-mqtt runtime that delivers payloads onto an asyncio loop.

    Inbound messages arrive on paho's network thread and are handed to
    ``on_payload`` on ``loop``, one at a time. :meth:`publish` may be
    called from any thread.
    """

    def __init__(
        self,
        *,
        loop: asyncio.AbstractEventLoop,
        config: RelayConfig,
        on_payload: Callable[[str], Any],
        logger: logging.Logger | None = None,
    ) -> None:
        self._loop = loop
        self._config = config
        self._on_payload = on_payload
        self._logger = logger or logging.getLogger(__name__)
        self._client: mqtt.Client | None = None
        self._running = False
        self._topic: str | None = None

    @property
    def is_running(self) -> bool:
        """Whether the MQTT runtime is actively running."""
        return self._running

    def start(self) -> None:
        """Connect to the broker and subscribe to the inbound topic."""
        self.stop()
        config = self._config
        self._logger.debug(
            "MQTT runtime start requested host=%s port=%s topic=%s client_id=%s",
            config.broker_host,
            config.broker_port,
            config.subscribe_topic,
            config.client_id,
        )

        client = mqtt.Client(
            callback_api_version=cast(Any, mqtt).CallbackAPIVersion.VERSION2,
            client_id=config.client_id,
            protocol=mqtt.MQTTv5,
        )
        client.enable_logger(self._logger)
        if config.username:
            client.username_pw_set(config.username, config.password)
        if config.tls_enabled:
            client.tls_set()

        self._topic = config.subscribe_topic

        def on_connect(
            c: mqtt.Client,
            _userdata: Any,
            _flags: Any,
            reason_code: Any,
            _properties: Any,
        ) -> None:
            if reason_code.value != 0:
                self._logger.warning("MQTT connect failed: %s", reason_code)
                return
            self._logger.debug("MQTT connected successfully reason=%s", reason_code)
            if self._topic:
                self._logger.debug("MQTT subscribing topic=%s", self._topic)
                c.subscribe(self._topic, qos=config.qos)

        def on_message(_c: mqtt.Client, _userdata: Any, msg: mqtt.MQTTMessage) -> None:
            self._logger.debug("Received PUBLISH topic=%s bytes=%d", msg.topic, len(msg.payload))
            self.deliver(msg.payload)

        def on_disconnect(
            _client: mqtt.Client,
            _userdata: Any,
            _disconnect_flags: Any,
            reason_code: Any,
            _properties: Any,
        ) -> None:
            if self._running:
                self._logger.debug("MQTT disconnected: %s", reason_code)

        client.on_connect = on_connect
        client.on_message = on_message
        client.on_disconnect = on_disconnect

        try:
            client.connect(config.broker_host, config.broker_port, keepalive=config.keepalive)
        except OSError as exc:
            raise RelayTransportError(
                f"MQTT connect to {config.broker_host}:{config.broker_port} failed: {exc}",
            ) from exc
        client.loop_start()

        self._client = client
        self._running = True
        self._logger.debug("MQTT network loop started")

    def stop(self) -> None:
        """Stop and disconnect current MQTT client if running."""
        client = self._client
        self._client = None
        was_running = self._running
        self._running = False
        self._topic = None

        if client is None:
            return
        try:
            if was_running:
                self._logger.debug("MQTT disconnect requested")
                client.disconnect()
        finally:
            client.loop_stop()
            self._logger.debug("MQTT network loop stopped")

    def deliver(self, payload: bytes) -> None:
        """Hand a raw payload to the event loop. Safe to call from any thread."""
        self._loop.call_soon_threadsafe(self._dispatch, decode_payload(payload))

    def _dispatch(self, text: str) -> None:
        if not self._running:
            self._logger.debug("MQTT runtime stopped, dropping queued message: %s", text)
            return
        try:
            self._on_payload(text)
        except RelayError:
            self._logger.error("Dropped inbound message: %s", text, exc_info=True)

    def publish(self, topic: str, payload: str) -> None:
        """Publish *payload* to *topic* with the configured QoS."""
        client = self._client
        if client is None:
            raise RelayTransportError("MQTT runtime is not running", topic=topic)
        info = client.publish(topic, payload, qos=self._config.qos)
        if info.rc != mqtt.MQTT_ERR_SUCCESS:
            raise RelayTransportError(
                f"MQTT publish failed: {mqtt.error_string(info.rc)}",
                reason_code=info.rc,
                topic=topic,
            )

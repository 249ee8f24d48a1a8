"""Relay configuration for movementrelay."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from movementrelay._constants import DEBOUNCE_WINDOW, DEFAULT_NAME
from movementrelay.exceptions import RelayConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class RelayConfig:
    """Relay configuration.

    Parameters
    ----------
    name : str
        Relay name, used as a prefix in log lines.
    broker_host : str
        MQTT broker hostname.
    broker_port : int
        MQTT broker port.
    username : str or None
        Broker username. Credentials are only sent when set.
    password : str or None
        Broker password.
    client_id : str
        MQTT client id. Empty lets the broker assign one.
    subscribe_topic : str
        Topic carrying inbound coordinate messages.
    tls_enabled : bool
        Connect with TLS using the system CA bundle.
    keepalive : int
        MQTT keepalive in seconds.
    qos : int
        QoS used for both the subscription and outbound publishes.
    debounce_window : float
        Minimum spacing in seconds between two processed messages.
    """

    name: str = DEFAULT_NAME
    broker_host: str = "localhost"
    broker_port: int = 1883
    username: str | None = None
    password: str | None = None
    client_id: str = ""
    subscribe_topic: str = "movement"
    tls_enabled: bool = False
    keepalive: int = 60
    qos: int = 0
    debounce_window: float = DEBOUNCE_WINDOW

    def validate(self) -> RelayConfig:
        """Raise :class:`RelayConfigError` on out-of-range values, else return self."""
        if not 1 <= self.broker_port <= 65535:
            raise RelayConfigError(f"broker_port must be between 1 and 65535, got {self.broker_port}")
        if self.qos not in (0, 1, 2):
            raise RelayConfigError(f"qos must be 0, 1 or 2, got {self.qos}")
        if self.debounce_window < 0:
            raise RelayConfigError(f"debounce_window must be >= 0, got {self.debounce_window}")
        if not self.subscribe_topic.strip():
            raise RelayConfigError("subscribe_topic must be non-empty")
        if self.keepalive <= 0:
            raise RelayConfigError(f"keepalive must be positive, got {self.keepalive}")
        return self

    @classmethod
    def from_env(cls, **overrides: Any) -> RelayConfig:
        """Create configuration from environment variables.

        Reads optional ``MOVEMENT_RELAY_*`` variables. Explicit keyword
        arguments override environment values.

        Raises
        ------
        RelayConfigError
            A numeric variable cannot be parsed, or a value is out of range.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "MOVEMENT_RELAY_NAME": "name",
            "MOVEMENT_RELAY_BROKER_HOST": "broker_host",
            "MOVEMENT_RELAY_USERNAME": "username",
            "MOVEMENT_RELAY_PASSWORD": "password",
            "MOVEMENT_RELAY_CLIENT_ID": "client_id",
            "MOVEMENT_RELAY_SUBSCRIBE_TOPIC": "subscribe_topic",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_NUMERIC_MAP: dict[str, tuple[str, type]] = {
            "MOVEMENT_RELAY_BROKER_PORT": ("broker_port", int),
            "MOVEMENT_RELAY_KEEPALIVE": ("keepalive", int),
            "MOVEMENT_RELAY_QOS": ("qos", int),
            "MOVEMENT_RELAY_DEBOUNCE_WINDOW": ("debounce_window", float),
        }
        for env_key, (field_name, cast) in _ENV_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = cast(val)
            except ValueError as exc:
                raise RelayConfigError(f"{env_key} is not a valid {cast.__name__}: {val!r}") from exc

        if "tls_enabled" not in overrides:
            config_kwargs["tls_enabled"] = _env_bool(env.get("MOVEMENT_RELAY_TLS"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs).validate()

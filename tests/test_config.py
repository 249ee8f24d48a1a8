from __future__ import annotations

import pytest

from movementrelay.config import RelayConfig
from movementrelay.exceptions import RelayConfigError


def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "MOVEMENT_RELAY_NAME",
        "MOVEMENT_RELAY_BROKER_HOST",
        "MOVEMENT_RELAY_BROKER_PORT",
        "MOVEMENT_RELAY_USERNAME",
        "MOVEMENT_RELAY_PASSWORD",
        "MOVEMENT_RELAY_CLIENT_ID",
        "MOVEMENT_RELAY_SUBSCRIBE_TOPIC",
        "MOVEMENT_RELAY_TLS",
        "MOVEMENT_RELAY_KEEPALIVE",
        "MOVEMENT_RELAY_QOS",
        "MOVEMENT_RELAY_DEBOUNCE_WINDOW",
    ):
        monkeypatch.delenv(key, raising=False)


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    config = RelayConfig.from_env()

    assert config.name == "Controller 1"
    assert config.broker_host == "localhost"
    assert config.broker_port == 1883
    assert config.subscribe_topic == "movement"
    assert config.debounce_window == pytest.approx(0.1)
    assert config.tls_enabled is False


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("MOVEMENT_RELAY_NAME", "Controller 2")
    monkeypatch.setenv("MOVEMENT_RELAY_BROKER_HOST", "broker.example.com")
    monkeypatch.setenv("MOVEMENT_RELAY_BROKER_PORT", "8883")
    monkeypatch.setenv("MOVEMENT_RELAY_TLS", "yes")
    monkeypatch.setenv("MOVEMENT_RELAY_QOS", "1")
    monkeypatch.setenv("MOVEMENT_RELAY_DEBOUNCE_WINDOW", "0.25")

    config = RelayConfig.from_env()

    assert config.name == "Controller 2"
    assert config.broker_host == "broker.example.com"
    assert config.broker_port == 8883
    assert config.tls_enabled is True
    assert config.qos == 1
    assert config.debounce_window == pytest.approx(0.25)


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("MOVEMENT_RELAY_BROKER_PORT", "8883")
    monkeypatch.setenv("MOVEMENT_RELAY_SUBSCRIBE_TOPIC", "from-env")

    config = RelayConfig.from_env(broker_port=1884, subscribe_topic="from-args")

    assert config.broker_port == 1884
    assert config.subscribe_topic == "from-args"


def test_unparseable_numeric_env_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("MOVEMENT_RELAY_BROKER_PORT", "not-a-port")

    with pytest.raises(RelayConfigError, match="MOVEMENT_RELAY_BROKER_PORT"):
        RelayConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"broker_port": 0},
        {"qos": 3},
        {"debounce_window": -0.1},
        {"subscribe_topic": "  "},
        {"keepalive": 0},
    ],
)
def test_validate_rejects_out_of_range_values(kwargs: dict[str, object]) -> None:
    with pytest.raises(RelayConfigError):
        RelayConfig(**kwargs).validate()  # type: ignore[arg-type]

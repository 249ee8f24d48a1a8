"""movementrelay - Move a tracked 3D object from MQTT coordinate messages."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pymovementrelay")
except PackageNotFoundError:
    __version__ = "0+local"
from movementrelay.client import RelayClient
from movementrelay.config import RelayConfig
from movementrelay.exceptions import (
    RelayConfigError,
    RelayError,
    RelayFormatError,
    RelayNumericParseError,
    RelayTransportError,
)
from movementrelay.models import MovementResult, OutboundMessage, Vector3
from movementrelay.protocol import parse, should_process, validate
from movementrelay.relay import InMemoryObject, MovementRelay, RelayState, RelayStats

__all__ = [
    "__version__",
    "InMemoryObject",
    "MovementRelay",
    "MovementResult",
    "OutboundMessage",
    "RelayClient",
    "RelayConfig",
    "RelayConfigError",
    "RelayError",
    "RelayFormatError",
    "RelayNumericParseError",
    "RelayState",
    "RelayStats",
    "RelayTransportError",
    "Vector3",
    "parse",
    "should_process",
    "validate",
]

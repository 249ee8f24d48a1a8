"""Internal constants shared across the library."""

import re

DEFAULT_NAME = "Controller 1"

# Minimum spacing (seconds) between two processed messages.
DEBOUNCE_WINDOW = 0.1

INFORMATION_TOPIC = "information"

# ------------------------------------------------------------------
# Inbound wire format: "( <num>, <num>, <num> )"
# ------------------------------------------------------------------

_NUMBER = r"[+-]?\d*\.?\d*"
COORDINATE_PATTERN: re.Pattern[str] = re.compile(
    rf"\(\s*{_NUMBER}\s*,\s*{_NUMBER}\s*,\s*{_NUMBER}\s*\)",
    re.ASCII,
)

INFORMATION_TEMPLATE = "I have moved from (X: {0}, Y: {1}, Z: {2}) to (X: {3}, Y: {4}, Z: {5})"

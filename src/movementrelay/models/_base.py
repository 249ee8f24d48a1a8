"""Base model and text helpers shared by relay models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


def format_float(value: float) -> str:
    """Render *value* in its shortest round-trip text form.

    Integral values drop the trailing ``.0`` so ``1.0`` renders as ``"1"``
    and ``-0.5`` stays ``"-0.5"``.
    """
    text = repr(float(value))
    if text.endswith(".0"):
        return text[:-2]
    return text


class RelayBaseModel(BaseModel):
    """Immutable base for relay value objects."""

    model_config = ConfigDict(frozen=True, extra="forbid")

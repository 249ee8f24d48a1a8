"""Three-axis floating-point vector."""

from __future__ import annotations

from movementrelay.models._base import RelayBaseModel, format_float


class Vector3(RelayBaseModel):
    """A position or a movement delta in 3D space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zero(cls) -> Vector3:
        return cls()

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(x=self.x + other.x, y=self.y + other.y, z=self.z + other.z)

    def __str__(self) -> str:
        return f"({format_float(self.x)}, {format_float(self.y)}, {format_float(self.z)})"

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

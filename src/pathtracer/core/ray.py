# core/ray.py
import math

from pathtracer.core.vector import Vector3


def _safe_inverse(d: float) -> float:
    if d == 0.0:
        return math.copysign(math.inf, d)
    return 1.0 / d


class Ray:
    """
    Represents a ray in 3D space with an origin, direction and a timestamp
    within the camera shutter interval.
    """
    def __init__(self, origin: Vector3, direction: Vector3, time: float = 0.0):
        self.origin = origin
        self.direction = direction
        self.time = time
        # Precomputed for the AABB slab test
        self.inv_direction = Vector3(
            _safe_inverse(direction.x),
            _safe_inverse(direction.y),
            _safe_inverse(direction.z)
        )

    def at(self, t: float) -> Vector3:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction}, time={self.time})"

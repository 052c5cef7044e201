# core/onb.py
from pathtracer.core.vector import Vector3


class OrthoNormalBasis:
    """
    Three mutually perpendicular unit vectors (u, v, w) used to map samples
    generated about +z into world space.
    """
    def __init__(self, u: Vector3, v: Vector3, w: Vector3):
        self.u = u
        self.v = v
        self.w = w

    @classmethod
    def build_from_w(cls, n: Vector3) -> "OrthoNormalBasis":
        w = n.normalize()
        # Pick a helper axis that is not nearly parallel to w.
        a = Vector3(0.0, 1.0, 0.0) if abs(w.x) > 0.9 else Vector3(1.0, 0.0, 0.0)
        v = w.cross(a).normalize()
        u = w.cross(v)
        return cls(u, v, w)

    def local(self, a: float, b: float, c: float) -> Vector3:
        return self.u * a + self.v * b + self.w * c

    def local_vector(self, p: Vector3) -> Vector3:
        return self.local(p.x, p.y, p.z)

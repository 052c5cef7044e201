# geometry/hittable.py
import copy
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3


class ShadingGeometry:
    """
    Differential surface data at a hit: the shading normal and the partial
    derivatives of the surface position with respect to (u, v).
    """
    def __init__(self, n: Vector3, dpdu: Vector3 = None, dpdv: Vector3 = None):
        self.n = n
        self.dpdu = dpdu if dpdu is not None else Vector3(0, 0, 0)
        self.dpdv = dpdv if dpdv is not None else Vector3(0, 0, 0)


class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    def __init__(self, p: Vector3 = None, normal: Vector3 = None,
                 t: float = 0, front_face: bool = True, material=None,
                 u: float = 0.0, v: float = 0.0):
        self.p = p              # Intersection point
        self.normal = normal    # Geometric normal, always facing against the ray
        self.t = t              # Ray parameter at intersection
        self.front_face = front_face  # Whether the hit was on the outward side
        self.material = material
        self.u = u
        self.v = v
        self.shading = ShadingGeometry(normal)

    @classmethod
    def from_ray(cls, ray: Ray, p: Vector3, outward_normal: Vector3, t: float,
                 u: float, v: float, material,
                 dpdu: Vector3 = None, dpdv: Vector3 = None) -> "HitRecord":
        rec = cls(p=p, t=t, material=material, u=u, v=v)
        rec.set_face_normal(ray, outward_normal)
        rec.shading = ShadingGeometry(rec.normal, dpdu, dpdv)
        return rec

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        """
        Ensures that the normal always points against the ray.
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal

    def set_shading_geometry(self, dpdu: Vector3, dpdv: Vector3):
        """
        Replace the shading frame with one derived from new partial
        derivatives. The geometric normal is left untouched.
        """
        n = dpdu.cross(dpdv).normalize()
        if n.near_zero() or n.has_nan():
            return
        if self.normal.dot(n) < 0.0:
            n = -n
        self.shading = ShadingGeometry(n, dpdu, dpdv)

    def copy(self) -> "HitRecord":
        rec = copy.copy(self)
        rec.shading = copy.copy(self.shading)
        return rec

    def __repr__(self) -> str:
        return (f"HitRecord(t={self.t}, p={self.p}, normal={self.normal}, "
                f"front_face={self.front_face})")


class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        """Density of sampling `direction` from `origin` toward this object."""
        return 0.0

    def random(self, origin: Vector3) -> Vector3:
        """Direction from `origin` toward a random point on this object."""
        return Vector3(1.0, 0.0, 0.0)

    def empty(self) -> bool:
        return False

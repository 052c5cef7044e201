# geometry/cylinder.py
import math
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord


class Cylinder(Hittable):
    """
    Open cylinder around the y axis between y_min and y_max, optionally cut
    to a partial sweep of phi_max radians.
    """
    def __init__(self, radius: float, y_min: float, y_max: float, material,
                 phi_max: float = 2.0 * math.pi):
        self.radius = radius
        self.y_min = min(y_min, y_max)
        self.y_max = max(y_min, y_max)
        self.phi_max = phi_max
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        o, d = ray.origin, ray.direction
        a = d.x * d.x + d.z * d.z
        if a == 0.0:
            return None
        half_b = o.x * d.x + o.z * d.z
        c = o.x * o.x + o.z * o.z - self.radius * self.radius
        discriminant = half_b * half_b - a * c
        if not discriminant >= 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Try the near root first, then the far one
        for root in ((-half_b - sqrt_disc) / a, (-half_b + sqrt_disc) / a):
            if root < t_min or root > t_max:
                continue
            p = ray.at(root)
            if p.y < self.y_min or p.y > self.y_max:
                continue
            phi = math.atan2(p.z, p.x) + math.pi
            if phi > self.phi_max:
                continue
            return self._record(ray, p, root, phi)
        return None

    def _record(self, ray: Ray, p: Vector3, t: float, phi: float) -> HitRecord:
        outward_normal = Vector3(p.x, 0.0, p.z) / self.radius
        u = phi / self.phi_max
        v = (p.y - self.y_min) / (self.y_max - self.y_min)
        dpdu = Vector3(-self.phi_max * p.z, 0.0, self.phi_max * p.x)
        dpdv = Vector3(0.0, self.y_max - self.y_min, 0.0)
        return HitRecord.from_ray(ray, p, outward_normal, t, u, v,
                                  self.material, dpdu, dpdv)

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        r = abs(self.radius)
        return AABB(Vector3(-r, self.y_min, -r), Vector3(r, self.y_max, r))

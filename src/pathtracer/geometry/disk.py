# geometry/disk.py
import math
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.aarect import BOX_PADDING
from pathtracer.geometry.hittable import Hittable, HitRecord


class Disk(Hittable):
    """
    Flat disk (or annulus when inner_radius > 0) lying in the plane
    y = height, centered on the y axis, facing +y.
    """
    def __init__(self, height: float, radius: float, material,
                 inner_radius: float = 0.0, phi_max: float = 2.0 * math.pi):
        if inner_radius >= radius:
            raise ValueError(f"Disk inner radius {inner_radius} must be below radius {radius}")
        self.height = height
        self.radius = radius
        self.inner_radius = inner_radius
        self.phi_max = phi_max
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if ray.direction.y == 0.0:
            return None
        t = (self.height - ray.origin.y) / ray.direction.y
        if t < t_min or t > t_max:
            return None

        p = ray.at(t)
        dist_squared = p.x * p.x + p.z * p.z
        if dist_squared > self.radius * self.radius or \
                dist_squared < self.inner_radius * self.inner_radius:
            return None

        phi = math.atan2(p.z, p.x) + math.pi
        if phi > self.phi_max:
            return None

        r_hit = math.sqrt(dist_squared)
        u = phi / self.phi_max
        v = 1.0 - (r_hit - self.inner_radius) / (self.radius - self.inner_radius)
        dpdu = Vector3(-self.phi_max * p.z, 0.0, self.phi_max * p.x)
        if r_hit > 0.0:
            dpdv = Vector3(p.x, 0.0, p.z) * ((self.inner_radius - self.radius) / r_hit)
        else:
            dpdv = Vector3(0.0, 0.0, 0.0)
        return HitRecord.from_ray(ray, p, Vector3(0.0, 1.0, 0.0), t, u, v,
                                  self.material, dpdu, dpdv)

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        return AABB(Vector3(-self.radius, self.height - BOX_PADDING, -self.radius),
                    Vector3(self.radius, self.height + BOX_PADDING, self.radius))

# geometry/aarect.py
import random
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.utils import INFINITY
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord

# Padding applied along the fixed axis so the box has non-zero thickness
BOX_PADDING = 1e-4


class AARect(Hittable):
    """
    Axis-aligned rectangle: a fixed coordinate k on one axis, bounded by
    [a0, a1] x [b0, b1] on the other two. Can be sampled as an area light.
    """
    def __init__(self, p0: Vector3, p1: Vector3, k_axis: int, material):
        if p0[k_axis] != p1[k_axis]:
            raise ValueError(
                f"AARect corners must share the fixed coordinate on axis {k_axis}: "
                f"{p0[k_axis]} != {p1[k_axis]}"
            )
        self.p0 = p0
        self.p1 = p1
        self.k_axis = k_axis
        self.a_axis = 1 if k_axis == 0 else 0
        self.b_axis = 1 if k_axis == 2 else 2
        self.normal = Vector3(0, 0, 0).with_axis(k_axis, 1.0)
        self.material = material

    @classmethod
    def xy_rect(cls, x0: float, x1: float, y0: float, y1: float, k: float, material) -> "AARect":
        return cls(Vector3(x0, y0, k), Vector3(x1, y1, k), 2, material)

    @classmethod
    def xz_rect(cls, x0: float, x1: float, z0: float, z1: float, k: float, material) -> "AARect":
        return cls(Vector3(x0, k, z0), Vector3(x1, k, z1), 1, material)

    @classmethod
    def yz_rect(cls, y0: float, y1: float, z0: float, z1: float, k: float, material) -> "AARect":
        return cls(Vector3(k, y0, z0), Vector3(k, y1, z1), 0, material)

    def area(self) -> float:
        return ((self.p1[self.a_axis] - self.p0[self.a_axis]) *
                (self.p1[self.b_axis] - self.p0[self.b_axis]))

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        d_k = ray.direction[self.k_axis]
        if d_k == 0.0:
            return None

        t = (self.p0[self.k_axis] - ray.origin[self.k_axis]) / d_k
        if t < t_min or t > t_max:
            return None

        a0, a1 = self.p0[self.a_axis], self.p1[self.a_axis]
        b0, b1 = self.p0[self.b_axis], self.p1[self.b_axis]
        a = ray.origin[self.a_axis] + t * ray.direction[self.a_axis]
        b = ray.origin[self.b_axis] + t * ray.direction[self.b_axis]
        if a < a0 or a > a1 or b < b0 or b > b1:
            return None

        u = (a - a0) / (a1 - a0)
        v = (b - b0) / (b1 - b0)
        dpdu = Vector3(0, 0, 0).with_axis(self.a_axis, a1 - a0)
        dpdv = Vector3(0, 0, 0).with_axis(self.b_axis, b1 - b0)
        return HitRecord.from_ray(ray, ray.at(t), self.normal, t, u, v,
                                  self.material, dpdu, dpdv)

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        pad = self.normal * BOX_PADDING
        return AABB(self.p0 - pad, self.p1 + pad)

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        rec = self.hit(Ray(origin, direction), 0.001, INFINITY)
        if rec is None:
            return 0.0
        # Convert the uniform area density to a solid-angle density.
        distance_squared = rec.t * rec.t * direction.length_squared()
        cosine = abs(direction.dot(rec.normal) / direction.length())
        return distance_squared / (cosine * self.area())

    def random(self, origin: Vector3) -> Vector3:
        point = self.p0 \
            .with_axis(self.a_axis, random.uniform(self.p0[self.a_axis], self.p1[self.a_axis])) \
            .with_axis(self.b_axis, random.uniform(self.p0[self.b_axis], self.p1[self.b_axis]))
        return point - origin

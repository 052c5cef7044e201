# geometry/medium.py
import math
import random
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.utils import INFINITY
from pathtracer.core.vector import Color, Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.materials.isotropic import Isotropic

# Offset used to find the exit point after the entry point
EXIT_EPSILON = 1e-4


class ConstantMedium(Hittable):
    """
    Homogeneous participating medium filling a closed boundary surface.
    A ray travelling through it scatters after an exponentially distributed
    free-flight distance, so thin slabs are mostly transparent.
    """
    def __init__(self, boundary: Hittable, density: float, phase_function):
        if density <= 0.0:
            raise ValueError(f"ConstantMedium density must be positive, got {density}")
        self.boundary = boundary
        self.neg_inv_density = -1.0 / density
        self.phase_function = phase_function

    @classmethod
    def from_color(cls, boundary: Hittable, density: float, albedo: Color) -> "ConstantMedium":
        return cls(boundary, density, Isotropic(albedo))

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        rec1 = self.boundary.hit(ray, -INFINITY, INFINITY)
        if rec1 is None:
            return None
        rec2 = self.boundary.hit(ray, rec1.t + EXIT_EPSILON, INFINITY)
        if rec2 is None:
            return None

        t1 = max(rec1.t, t_min)
        t2 = min(rec2.t, t_max)
        if t1 >= t2:
            return None
        t1 = max(t1, 0.0)

        ray_length = ray.direction.length()
        distance_inside = (t2 - t1) * ray_length
        hit_distance = self.neg_inv_density * math.log(1.0 - random.random())
        if hit_distance > distance_inside:
            return None

        t = t1 + hit_distance / ray_length
        # Normal and face are arbitrary inside a volume
        rec = HitRecord(p=ray.at(t), normal=Vector3(1.0, 0.0, 0.0), t=t,
                        front_face=True, material=self.phase_function)
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> Optional[AABB]:
        return self.boundary.bounding_box(time0, time1)

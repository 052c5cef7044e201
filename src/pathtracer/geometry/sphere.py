# geometry/sphere.py
import math
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.onb import OrthoNormalBasis
from pathtracer.core.ray import Ray
from pathtracer.core.utils import INFINITY, random_to_sphere
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord


def sphere_uv(n: Vector3):
    """
    Spherical texture coordinates of a point on the unit sphere.
    u runs around the y axis starting at -x, v from the south to the north pole.
    """
    theta = math.acos(max(-1.0, min(1.0, -n.y)))
    phi = math.atan2(-n.z, n.x) + math.pi
    return theta, phi


def _hit_sphere(center: Vector3, radius: float, material, ray: Ray,
                t_min: float, t_max: float) -> Optional[HitRecord]:
    oc = ray.origin - center
    a = ray.direction.length_squared()
    if a == 0.0:
        return None
    half_b = oc.dot(ray.direction)
    c = oc.length_squared() - radius * radius
    discriminant = half_b * half_b - a * c

    # No real root
    if not discriminant >= 0:
        return None

    sqrt_disc = math.sqrt(discriminant)
    # Find the nearest root that lies in the acceptable range
    root = (-half_b - sqrt_disc) / a
    if root < t_min or root > t_max:
        root = (-half_b + sqrt_disc) / a
        if root < t_min or root > t_max:
            return None

    p = ray.at(root)
    local = p - center
    outward_normal = local / radius
    theta, phi = sphere_uv(outward_normal)

    dpdu = Vector3(local.z, 0.0, -local.x) * (2.0 * math.pi)
    dpdv = Vector3(local.y * math.cos(phi),
                   abs(radius) * math.sin(theta),
                   -local.y * math.sin(phi)) * math.pi

    return HitRecord.from_ray(ray, p, outward_normal, root,
                              phi / (2.0 * math.pi), theta / math.pi,
                              material, dpdu, dpdv)


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    """
    def __init__(self, center: Vector3, radius: float, material):
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        return _hit_sphere(self.center, self.radius, self.material, ray, t_min, t_max)

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        # The bounding box of a sphere is center ± radius
        offset = Vector3(abs(self.radius), abs(self.radius), abs(self.radius))
        return AABB(self.center - offset, self.center + offset)

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        if self.hit(Ray(origin, direction), 0.001, INFINITY) is None:
            return 0.0
        distance_squared = (self.center - origin).length_squared()
        cos_theta_max = math.sqrt(max(0.0, 1.0 - self.radius * self.radius / distance_squared))
        solid_angle = 2.0 * math.pi * (1.0 - cos_theta_max)
        return 1.0 / solid_angle

    def random(self, origin: Vector3) -> Vector3:
        direction = self.center - origin
        distance_squared = direction.length_squared()
        uvw = OrthoNormalBasis.build_from_w(direction)
        return uvw.local_vector(random_to_sphere(self.radius, distance_squared))


class MovingSphere(Hittable):
    """
    A sphere whose center moves linearly from center0 at time0 to center1 at
    time1. The ray's timestamp selects the position.
    """
    def __init__(self, center0: Vector3, center1: Vector3,
                 time0: float, time1: float, radius: float, material):
        self.center0 = center0
        self.center1 = center1
        self.time0 = time0
        self.time1 = time1
        self.radius = radius
        self.material = material

    def center(self, time: float) -> Vector3:
        if self.time1 == self.time0:
            return self.center0
        fraction = (time - self.time0) / (self.time1 - self.time0)
        return self.center0 + (self.center1 - self.center0) * fraction

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        return _hit_sphere(self.center(ray.time), self.radius, self.material,
                           ray, t_min, t_max)

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        offset = Vector3(abs(self.radius), abs(self.radius), abs(self.radius))
        box0 = AABB(self.center(time0) - offset, self.center(time0) + offset)
        box1 = AABB(self.center(time1) - offset, self.center(time1) + offset)
        return AABB.surrounding_box(box0, box1)

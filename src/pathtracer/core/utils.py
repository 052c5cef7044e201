# core/utils.py
import math
import random

from pathtracer.core.vector import Vector3

INFINITY = math.inf


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def clamp(x: float, lo: float, hi: float) -> float:
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


def random_vector(lo: float = 0.0, hi: float = 1.0) -> Vector3:
    return Vector3(random.uniform(lo, hi),
                   random.uniform(lo, hi),
                   random.uniform(lo, hi))


def random_in_unit_sphere() -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = Vector3(random.uniform(-1, 1),
                    random.uniform(-1, 1),
                    random.uniform(-1, 1))
        if p.dot(p) < 1.0:
            return p


def random_unit_vector() -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    return random_in_unit_sphere().normalize()


def random_in_unit_disk() -> Vector3:
    """Random point in the z=0 unit disk, used for lens sampling."""
    while True:
        p = Vector3(random.uniform(-1, 1), random.uniform(-1, 1), 0.0)
        if p.dot(p) < 1.0:
            return p


def random_cosine_direction() -> Vector3:
    """
    Cosine-weighted direction about +z, density cos(theta) / pi.
    """
    r1 = random.random()
    r2 = random.random()
    z = math.sqrt(1.0 - r2)
    phi = 2.0 * math.pi * r1
    x = math.cos(phi) * math.sqrt(r2)
    y = math.sin(phi) * math.sqrt(r2)
    return Vector3(x, y, z)


def random_to_sphere(radius: float, distance_squared: float) -> Vector3:
    """
    Uniform direction about +z inside the cone subtended by a sphere of the
    given radius at the given squared distance.
    """
    r1 = random.random()
    r2 = random.random()
    z = 1.0 + r2 * (math.sqrt(max(0.0, 1.0 - radius * radius / distance_squared)) - 1.0)
    phi = 2.0 * math.pi * r1
    sin_theta = math.sqrt(max(0.0, 1.0 - z * z))
    x = math.cos(phi) * sin_theta
    y = math.sin(phi) * sin_theta
    return Vector3(x, y, z)


def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)


def refract(uv: Vector3, n: Vector3, etai_over_etat: float) -> Vector3:
    """
    Refracts the unit vector uv through a surface with normal n (Snell's law).
    """
    cos_theta = min(-uv.dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * etai_over_etat
    r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + r_out_parallel

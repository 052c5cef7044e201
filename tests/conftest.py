"""Pytest configuration for path tracer tests.

Provides a seeded random stream for every test plus small helpers for
building hit records and tiny scenes that render in well under a second.
"""

import random

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian
from pathtracer.scene.scene import Scene


@pytest.fixture(autouse=True)
def seed_random():
    """Seed the module-level random stream so every test is deterministic."""
    random.seed(12345)
    yield


@pytest.fixture
def make_hit():
    """Build a HitRecord on the plane z = 0 facing +z, hit by a ray going -z."""
    def _make_hit(material=None, p=Point3(0.0, 0.0, 0.0),
                  direction=Vector3(0.0, 0.0, -1.0),
                  outward_normal=Vector3(0.0, 0.0, 1.0), t=1.0):
        ray = Ray(p - direction * t, direction)
        return ray, HitRecord.from_ray(ray, p, outward_normal, t, 0.5, 0.5, material,
                                       Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0))
    return _make_hit


@pytest.fixture
def lit_scene():
    """Gray ground sphere under a small emissive sphere that is also sampled as a light."""
    light = Sphere(Point3(0.0, 3.0, 0.0), 1.0, DiffuseLight(Color(4.0, 4.0, 4.0)))
    objects = HittableList([
        Sphere(Point3(0.0, -1000.0, 0.0), 1000.0, Lambertian(Color(0.5, 0.5, 0.5))),
        Sphere(Point3(0.0, 1.0, 0.0), 1.0, Lambertian(Color(0.7, 0.3, 0.3))),
        light,
    ])
    return Scene.from_objects(objects, HittableList([light]),
                              background=Color(0.0, 0.0, 0.0),
                              lookfrom=Point3(0.0, 2.0, 10.0),
                              lookat=Point3(0.0, 1.0, 0.0), vfov=40.0)

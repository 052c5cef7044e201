"""Tests for the bounding volume hierarchy.

Tests cover:
- Agreement with a linear scan over the same objects
- Node boxes enclosing their children
- Construction errors
"""

import random

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.utils import INFINITY, random_unit_vector, random_vector
from pathtracer.core.vector import Point3
from pathtracer.geometry.bvh import BVHNode
from pathtracer.geometry.hittable import Hittable
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.lambertian import Lambertian


class Unbounded(Hittable):
    """A hittable with no bounding box."""

    def hit(self, ray, t_min, t_max):
        return None

    def bounding_box(self, time0, time1):
        return None


def _random_spheres(count):
    spheres = []
    for _ in range(count):
        material = Lambertian(random_vector())
        spheres.append(Sphere(random_vector(-10.0, 10.0), random.uniform(0.2, 1.5), material))
    return spheres


class TestBVHNode:
    """BVH construction and traversal."""

    def test_matches_linear_scan(self):
        spheres = _random_spheres(60)
        linear = HittableList(spheres)
        bvh = BVHNode(spheres)

        for _ in range(300):
            ray = Ray(random_vector(-15.0, 15.0), random_unit_vector())
            expected = linear.hit(ray, 0.001, INFINITY)
            actual = bvh.hit(ray, 0.001, INFINITY)
            if expected is None:
                assert actual is None
            else:
                assert actual is not None
                assert actual.t == pytest.approx(expected.t)
                assert actual.material is expected.material

    def test_box_encloses_every_object(self):
        spheres = _random_spheres(25)
        bvh = BVHNode(spheres)
        for s in spheres:
            assert bvh.bounding_box().contains(s.bounding_box())

    def test_single_object_aliases_both_children(self):
        s = Sphere(Point3(0, 0, 0), 1.0, None)
        node = BVHNode([s])
        assert node.left is s and node.right is s
        assert node.depth() == 1

    def test_depth_is_logarithmic(self):
        node = BVHNode(_random_spheres(64))
        assert node.depth() == 6

    def test_empty_list_raises(self):
        with pytest.raises(ValueError):
            BVHNode([])

    def test_object_without_box_raises(self):
        with pytest.raises(ValueError, match="No bounding box"):
            BVHNode([Unbounded(), Sphere(Point3(0, 0, 0), 1.0, None)])

    def test_build_returns_node(self):
        node = BVHNode.build(_random_spheres(5))
        assert isinstance(node, BVHNode)

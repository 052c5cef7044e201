"""Tests for the planar, quadric and volumetric primitives.

Tests cover:
- Axis-aligned rectangles and boxes, including area light sampling
- Partial cylinders and annular disks
- Constant density media
- Hittable lists
"""

import math

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.utils import INFINITY
from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.geometry.aarect import AARect, BOX_PADDING
from pathtracer.geometry.box import Box
from pathtracer.geometry.cylinder import Cylinder
from pathtracer.geometry.disk import Disk
from pathtracer.geometry.medium import ConstantMedium
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.isotropic import Isotropic


@pytest.fixture
def ceiling():
    return AARect.xz_rect(-1.0, 1.0, -1.0, 1.0, 1.0, None)


class TestAARect:
    """Axis-aligned rectangles."""

    def test_hit_center(self, ceiling):
        rec = ceiling.hit(Ray(Point3(0, 5, 0), Vector3(0, -1, 0)), 0.001, INFINITY)
        assert rec.t == pytest.approx(4.0)
        assert rec.front_face
        assert rec.normal == Vector3(0, 1, 0)
        assert (rec.u, rec.v) == (pytest.approx(0.5), pytest.approx(0.5))

    def test_miss_outside_bounds(self, ceiling):
        assert ceiling.hit(Ray(Point3(2, 5, 0), Vector3(0, -1, 0)), 0.001, INFINITY) is None

    def test_parallel_ray_misses(self, ceiling):
        assert ceiling.hit(Ray(Point3(0, 1, 0), Vector3(1, 0, 0)), 0.001, INFINITY) is None

    def test_box_is_padded_along_normal(self, ceiling):
        box = ceiling.bounding_box()
        assert box.minimum.y == pytest.approx(1.0 - BOX_PADDING)
        assert box.maximum.y == pytest.approx(1.0 + BOX_PADDING)

    def test_corners_must_be_coplanar(self):
        with pytest.raises(ValueError):
            AARect(Vector3(0, 0, 0), Vector3(1, 1, 1), 2, None)

    def test_pdf_value_straight_above(self, ceiling):
        """Unit distance, normal incidence and area 4 give a density of 1/4."""
        assert ceiling.pdf_value(Point3(0, 0, 0), Vector3(0, 1, 0)) == pytest.approx(0.25)

    def test_pdf_value_misses(self, ceiling):
        assert ceiling.pdf_value(Point3(0, 0, 0), Vector3(0, -1, 0)) == 0.0

    def test_random_points_lie_on_rect(self, ceiling):
        origin = Point3(0.3, -2.0, 0.5)
        for _ in range(100):
            p = origin + ceiling.random(origin)
            assert p.y == pytest.approx(1.0)
            assert -1.0 <= p.x <= 1.0
            assert -1.0 <= p.z <= 1.0

    def test_area(self):
        assert AARect.yz_rect(0, 2, 0, 3, 1.0, None).area() == pytest.approx(6.0)


class TestBox:
    """Six-sided boxes."""

    def test_hit_nearest_face(self):
        box = Box(Point3(0, 0, 0), Point3(1, 1, 1), None)
        rec = box.hit(Ray(Point3(0.5, 0.5, 5.0), Vector3(0, 0, -1)), 0.001, INFINITY)
        assert rec.t == pytest.approx(4.0)
        assert rec.normal == Vector3(0, 0, 1)

    def test_bounding_box(self):
        box = Box(Point3(0, 0, 0), Point3(1, 2, 3), None)
        assert box.bounding_box().maximum == Point3(1, 2, 3)
        assert len(box.sides) == 6


class TestCylinder:
    """Open cylinders around the y axis."""

    def test_hit_from_outside(self):
        cyl = Cylinder(1.0, 0.0, 2.0, None)
        rec = cyl.hit(Ray(Point3(5, 1, 0), Vector3(-1, 0, 0)), 0.001, INFINITY)
        assert rec.t == pytest.approx(4.0)
        assert rec.front_face
        assert rec.normal == Vector3(1, 0, 0)
        assert rec.u == pytest.approx(0.5)
        assert rec.v == pytest.approx(0.5)

    def test_miss_above_cap(self):
        cyl = Cylinder(1.0, 0.0, 2.0, None)
        assert cyl.hit(Ray(Point3(5, 3, 0), Vector3(-1, 0, 0)), 0.001, INFINITY) is None

    def test_hit_from_inside_uses_far_root(self):
        cyl = Cylinder(1.0, 0.0, 2.0, None)
        rec = cyl.hit(Ray(Point3(0, 1, 0), Vector3(1, 0, 0)), 0.001, INFINITY)
        assert rec.t == pytest.approx(1.0)
        assert not rec.front_face

    def test_partial_sweep_falls_through_to_far_side(self):
        """The near side is cut away, so the ray hits the inside of the far wall."""
        cyl = Cylinder(1.0, 0.0, 2.0, None, phi_max=math.pi)
        rec = cyl.hit(Ray(Point3(-5, 1, 0), Vector3(1, 0, 0)), 0.001, INFINITY)
        assert rec.t == pytest.approx(6.0)
        assert not rec.front_face

    def test_vertical_ray_misses(self):
        cyl = Cylinder(1.0, 0.0, 2.0, None)
        assert cyl.hit(Ray(Point3(1, 5, 0), Vector3(0, -1, 0)), 0.001, INFINITY) is None

    def test_bounding_box(self):
        box = Cylinder(2.0, -1.0, 1.0, None).bounding_box()
        assert box.minimum == Vector3(-2.0, -1.0, -2.0)
        assert box.maximum == Vector3(2.0, 1.0, 2.0)


class TestDisk:
    """Disks and annuli."""

    def test_hit_annulus(self):
        disk = Disk(1.0, 2.0, None, inner_radius=0.5)
        rec = disk.hit(Ray(Point3(1, 5, 0), Vector3(0, -1, 0)), 0.001, INFINITY)
        assert rec.t == pytest.approx(4.0)
        assert rec.front_face
        assert rec.v == pytest.approx(2.0 / 3.0)

    def test_miss_through_hole(self):
        disk = Disk(1.0, 2.0, None, inner_radius=0.5)
        assert disk.hit(Ray(Point3(0.2, 5, 0), Vector3(0, -1, 0)), 0.001, INFINITY) is None

    def test_miss_outside_radius(self):
        disk = Disk(1.0, 2.0, None)
        assert disk.hit(Ray(Point3(3, 5, 0), Vector3(0, -1, 0)), 0.001, INFINITY) is None

    def test_parallel_ray_misses(self):
        disk = Disk(1.0, 2.0, None)
        assert disk.hit(Ray(Point3(-5, 1, 0), Vector3(1, 0, 0)), 0.001, INFINITY) is None

    def test_inner_radius_must_be_smaller(self):
        with pytest.raises(ValueError):
            Disk(0.0, 1.0, None, inner_radius=1.0)


class TestConstantMedium:
    """Homogeneous participating media."""

    def test_dense_medium_scatters_at_boundary(self):
        medium = ConstantMedium.from_color(Sphere(Point3(0, 0, 0), 1.0, None), 1e6,
                                           Color(0.5, 0.5, 0.5))
        rec = medium.hit(Ray(Point3(-5, 0, 0), Vector3(1, 0, 0)), 0.001, INFINITY)
        assert 4.0 <= rec.t < 4.01
        assert rec.front_face
        assert rec.normal == Vector3(1, 0, 0)
        assert isinstance(rec.material, Isotropic)

    def test_thin_medium_is_transparent(self):
        medium = ConstantMedium.from_color(Sphere(Point3(0, 0, 0), 1.0, None), 1e-9,
                                           Color(0.5, 0.5, 0.5))
        assert medium.hit(Ray(Point3(-5, 0, 0), Vector3(1, 0, 0)), 0.001, INFINITY) is None

    def test_ray_starting_inside(self):
        medium = ConstantMedium.from_color(Sphere(Point3(0, 0, 0), 1.0, None), 1e6,
                                           Color(0.5, 0.5, 0.5))
        rec = medium.hit(Ray(Point3(0, 0, 0), Vector3(1, 0, 0)), 0.001, INFINITY)
        assert 0.001 <= rec.t < 0.01

    def test_miss_boundary(self):
        medium = ConstantMedium.from_color(Sphere(Point3(0, 0, 0), 1.0, None), 1.0,
                                           Color(0.5, 0.5, 0.5))
        assert medium.hit(Ray(Point3(-5, 3, 0), Vector3(1, 0, 0)), 0.001, INFINITY) is None

    def test_density_must_be_positive(self):
        with pytest.raises(ValueError):
            ConstantMedium(Sphere(Point3(0, 0, 0), 1.0, None), 0.0, Isotropic(Color(1, 1, 1)))


class TestHittableList:
    """Closest-hit lists and light collections."""

    def test_closest_hit_wins(self):
        near = Sphere(Point3(0, 0, -3), 1.0, "near")
        far = Sphere(Point3(0, 0, -10), 1.0, "far")
        world = HittableList([far, near])
        rec = world.hit(Ray(Point3(0, 0, 0), Vector3(0, 0, -1)), 0.001, INFINITY)
        assert rec.material == "near"

    def test_empty_list(self):
        world = HittableList()
        assert world.empty()
        assert world.bounding_box() is None
        assert world.pdf_value(Point3(0, 0, 0), Vector3(0, 1, 0)) == 0.0

    def test_pdf_value_averages_children(self, ceiling):
        floor = AARect.xz_rect(-1.0, 1.0, -1.0, 1.0, -1.0, None)
        lights = HittableList([ceiling, floor])
        assert lights.pdf_value(Point3(0, 0, 0), Vector3(0, 1, 0)) == pytest.approx(0.125)

"""Tests for the path tracing estimator.

Tests cover:
- Depth exhaustion and background radiance
- Emission without scattering
- Specular chains, which never consult a density
- Rejection of non-positive densities
- Light sampling in a lit scene
- An unlit scene with a black background stays exactly black
"""

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.metal import Metal
from pathtracer.renderer.integrator import ray_color
from pathtracer.sampling.pdf import PDF
from pathtracer.scene.scene import Scene

SKY = Color(0.5, 0.7, 1.0)
BLACK = Color(0.0, 0.0, 0.0)


class NoDensity(Material):
    """Scatters diffusely but reports no density anywhere."""

    def scatter(self, ray_in, rec):
        return ScatterRecord(Color(1.0, 1.0, 1.0))


class UnusablePDF(PDF):
    def value(self, direction):
        raise AssertionError("density evaluated for a specular bounce")

    def generate(self, srec=None):
        raise AssertionError("density sampled for a specular bounce")


class PassThrough(Material):
    """Lets rays continue unchanged as a specular event."""

    def scatter(self, ray_in, rec):
        return ScatterRecord(Color(0.5, 0.5, 0.5), pdf=UnusablePDF(),
                             specular_ray=Ray(rec.p, ray_in.direction, ray_in.time))


def _scene(*objects, lights=None, background=SKY):
    return Scene(HittableList(objects), lights, background=background)


def _toward_origin():
    return Ray(Point3(0, 0, 5), Vector3(0, 0, -1))


class TestRayColor:
    """The recursive radiance estimate."""

    def test_depth_zero_is_black(self):
        assert ray_color(_toward_origin(), _scene(), 0) == Color(0, 0, 0)

    def test_miss_returns_background(self):
        assert ray_color(_toward_origin(), _scene(), 5) == SKY

    def test_emitter_returns_emission(self):
        light = Sphere(Point3(0, 0, 0), 1.0, DiffuseLight(Color(5.0, 5.0, 5.0)))
        assert ray_color(_toward_origin(), _scene(light), 5) == Color(5.0, 5.0, 5.0)

    def test_mirror_reflects_background(self):
        mirror = Sphere(Point3(0, 0, 0), 1.0, Metal(Color(0.5, 0.5, 0.5)))
        color = ray_color(_toward_origin(), _scene(mirror), 5)
        assert color.x == pytest.approx(0.25)
        assert color.y == pytest.approx(0.35)
        assert color.z == pytest.approx(0.5)

    def test_mirror_chain_stops_at_depth(self):
        mirror = Sphere(Point3(0, 0, 0), 1.0, Metal(Color(0.5, 0.5, 0.5)))
        assert ray_color(_toward_origin(), _scene(mirror), 1) == Color(0, 0, 0)

    def test_specular_bounce_skips_the_density(self):
        glass = Sphere(Point3(0, 0, 0), 1.0, PassThrough())
        color = ray_color(_toward_origin(), _scene(glass), 5)
        assert color.x == pytest.approx(0.125)
        assert color.z == pytest.approx(0.25)

    def test_non_positive_density_raises(self):
        wall = Sphere(Point3(0, 0, 0), 1.0, NoDensity())
        with pytest.raises(RuntimeError, match="not positive"):
            ray_color(_toward_origin(), _scene(wall), 5)

    def test_lit_scene_gathers_light(self, lit_scene):
        ray = Ray(Point3(0.0, 2.0, 10.0), Point3(0.0, 1.0, 0.0) - Point3(0.0, 2.0, 10.0))
        total = Color(0, 0, 0)
        for _ in range(64):
            total = total + ray_color(ray, lit_scene, 8)
        assert total.luminance() > 0.0
        assert not total.has_nan()


class TestUnlitScene:
    """No lights, no emitters and a black background."""

    def _dark_scene(self):
        ball = Sphere(Point3(0, 0, 0), 1.0, Lambertian(Color(0.8, 0.8, 0.8)))
        return _scene(ball, lights=None, background=BLACK)

    def test_depth_zero(self):
        assert ray_color(_toward_origin(), self._dark_scene(), 0) == BLACK

    def test_miss(self):
        away = Ray(Point3(0, 0, 5), Vector3(0, 0, 1))
        assert ray_color(away, self._dark_scene(), 5) == BLACK

    def test_diffuse_hits_gather_nothing(self):
        scene = self._dark_scene()
        for _ in range(32):
            assert ray_color(_toward_origin(), scene, 5) == BLACK

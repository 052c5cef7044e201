"""Tests for materials and textures.

Tests cover:
- Scattering records of each material
- Fresnel, refraction and interior absorption in dielectrics
- Front-face emission
- Wavefront illumination models
- Bump mapping of shading frames
- Solid, checker, image and noise textures
"""

import math

import pytest
from PIL import Image

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.materials import (
    AnisotropicPhong, Corroded, Dielectric, DiffuseLight, Isotropic, Lambertian,
    Metal, WavefrontMaterial
)
from pathtracer.materials.perlin import Perlin
from pathtracer.materials.textures import (
    CheckerBump, CheckerTexture, FloatTexture, ImageTexture, MarbleTexture, SolidColor
)
from pathtracer.sampling.pdf import CosPDF, PhongPDF

WHITE = Color(1.0, 1.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0)


class LinearBump(FloatTexture):
    """Displacement rising along x with slope 0.5."""

    def value(self, u, v, p):
        return 0.5 * p.x


def _assert_vec(actual, expected, abs=1e-9):
    assert actual.x == pytest.approx(expected.x, abs=abs)
    assert actual.y == pytest.approx(expected.y, abs=abs)
    assert actual.z == pytest.approx(expected.z, abs=abs)


class TestLambertian:
    """Diffuse scattering."""

    def test_scatter_uses_cosine_density(self, make_hit):
        material = Lambertian(Color(0.2, 0.4, 0.6))
        ray, rec = make_hit(material)
        srec = material.scatter(ray, rec)
        assert not srec.is_specular
        assert isinstance(srec.pdf, CosPDF)
        assert srec.attenuation == Color(0.2, 0.4, 0.6)

    def test_scattering_pdf(self, make_hit):
        material = Lambertian(WHITE)
        ray, rec = make_hit(material)
        assert material.scattering_pdf(ray, rec, Ray(rec.p, Vector3(0, 0, 2))) == \
            pytest.approx(1.0 / math.pi)
        assert material.scattering_pdf(ray, rec, Ray(rec.p, Vector3(0, 0, -1))) == 0.0


class TestMetal:
    """Mirror and fuzzy reflection."""

    def test_fuzz_is_capped(self):
        assert Metal(WHITE, 5.0).fuzz == 1.0

    def test_mirror_reflection(self, make_hit):
        material = Metal(Color(0.9, 0.9, 0.9))
        ray, rec = make_hit(material, direction=Vector3(1.0, 0.0, -1.0))
        srec = material.scatter(ray, rec)
        assert srec.is_specular
        _assert_vec(srec.specular_ray.direction, Vector3(1.0, 0.0, 1.0).normalize())
        assert srec.specular_ray.origin == rec.p

    def test_absorbs_when_reflection_points_into_surface(self, make_hit):
        material = Metal(WHITE)
        ray, rec = make_hit(material)
        # A ray leaving the surface reflects back into it
        leaving = Ray(rec.p, Vector3(0.0, 0.0, 1.0))
        assert material.scatter(leaving, rec) is None


class TestDielectric:
    """Refraction, reflection and absorption."""

    def test_index_matched_passes_straight_through(self, make_hit):
        material = Dielectric(1.0)
        ray, rec = make_hit(material)
        srec = material.scatter(ray, rec)
        assert srec.is_specular
        _assert_vec(srec.specular_ray.direction, Vector3(0.0, 0.0, -1.0))
        assert srec.attenuation == WHITE

    def test_total_internal_reflection(self, make_hit):
        material = Dielectric(1.5)
        ray, rec = make_hit(material, direction=Vector3(1.0, 0.0, 0.1))
        assert not rec.front_face
        for _ in range(20):
            srec = material.scatter(ray, rec)
            assert srec.specular_ray.direction.z < 0.0

    def test_interior_absorption_on_exit(self, make_hit):
        material = Dielectric(1.5, density=1.0, volume_color=Color(1.0, 0.5, 0.0))
        ray, rec = make_hit(material, direction=Vector3(0.0, 0.0, 1.0), t=2.0)
        srec = material.scatter(ray, rec)
        _assert_vec(srec.attenuation, Color(1.0, math.exp(-1.0), math.exp(-2.0)))

    def test_no_absorption_on_entry(self, make_hit):
        material = Dielectric(1.5, density=1.0, volume_color=Color(1.0, 0.5, 0.0))
        ray, rec = make_hit(material, t=2.0)
        assert material.scatter(ray, rec).attenuation == WHITE


class TestEmitters:
    """Lights and the default material behavior."""

    def test_diffuse_light_front_face_only(self, make_hit):
        material = DiffuseLight(Color(4.0, 4.0, 4.0))
        ray, front = make_hit(material)
        assert material.emitted(ray, front, front.u, front.v, front.p) == Color(4.0, 4.0, 4.0)
        ray, back = make_hit(material, direction=Vector3(0.0, 0.0, 1.0))
        assert material.emitted(ray, back, back.u, back.v, back.p) == BLACK
        assert material.scatter(ray, back) is None

    def test_isotropic_scatters_from_hit_point(self, make_hit):
        material = Isotropic(Color(0.3, 0.3, 0.3))
        ray, rec = make_hit(material)
        srec = material.scatter(ray, rec)
        assert srec.is_specular
        assert srec.specular_ray.origin == rec.p
        assert srec.attenuation == Color(0.3, 0.3, 0.3)


class TestWavefrontMaterial:
    """MTL illumination models."""

    def _material(self, model):
        return WavefrontMaterial(model, Lambertian(Color(0.8, 0.1, 0.1)),
                                 Metal(WHITE, 0.0), DiffuseLight(BLACK))

    def test_unsupported_model(self):
        with pytest.raises(ValueError, match="unsupported material model: 3"):
            self._material(3)

    def test_flat_color_emits_albedo(self, make_hit):
        material = self._material(0)
        ray, rec = make_hit(material)
        assert material.scatter(ray, rec) is None
        assert material.emitted(ray, rec, rec.u, rec.v, rec.p) == Color(0.8, 0.1, 0.1)

    def test_diffuse_model(self, make_hit):
        material = self._material(1)
        ray, rec = make_hit(material)
        for _ in range(20):
            assert isinstance(material.scatter(ray, rec).pdf, CosPDF)
        assert material.emitted(ray, rec, rec.u, rec.v, rec.p) == BLACK

    def test_specular_model_mixes_lobes(self, make_hit):
        material = self._material(2)
        ray, rec = make_hit(material)
        specular = sum(1 for _ in range(1000) if material.scatter(ray, rec).is_specular)
        assert 50 <= specular <= 150


class TestBumpMapping:
    """Shading frame perturbation."""

    def test_bump_tilts_shading_normal_only(self, make_hit):
        material = Lambertian(WHITE)
        _, rec = make_hit(material)
        bumped = material.bump(LinearBump(), rec)
        _assert_vec(bumped.shading.n, Vector3(-0.5, 0.0, 1.0).normalize(), abs=1e-6)
        assert bumped.normal == rec.normal
        assert rec.shading.n == Vector3(0.0, 0.0, 1.0)

    def test_flat_bump_keeps_normal(self, make_hit):
        material = Lambertian(WHITE)
        _, rec = make_hit(material)
        bumped = material.bump(CheckerBump(0.1, 0.1), rec)
        _assert_vec(bumped.shading.n, rec.normal)

    def test_corroded_scatters_around_bumped_normal(self, make_hit):
        material = Corroded(Lambertian(WHITE), LinearBump())
        ray, rec = make_hit(material)
        srec = material.scatter(ray, rec)
        _assert_vec(srec.pdf.uvw.w, Vector3(-0.5, 0.0, 1.0).normalize(), abs=1e-6)
        assert rec.shading.n == Vector3(0.0, 0.0, 1.0)

    def test_corroded_default_bump(self, make_hit):
        material = Corroded(Metal(WHITE, 0.0))
        ray, rec = make_hit(material)
        srec = material.scatter(ray, rec)
        assert srec is None or srec.is_specular
        assert material.emitted(ray, rec, rec.u, rec.v, rec.p) == BLACK


class TestAnisotropicPhong:
    """Glossy plastic."""

    def test_scatter_uses_phong_density(self, make_hit):
        material = AnisotropicPhong(Color(0.5, 0.5, 0.5), Color(1.0, 1.0, 1.0), 100.0, 10.0)
        ray, rec = make_hit(material)
        srec = material.scatter(ray, rec)
        assert isinstance(srec.pdf, PhongPDF)
        assert srec.specular_color == Color(1.0, 1.0, 1.0)
        assert srec.attenuation == Color(0.5, 0.5, 0.5)


class TestTextures:
    """Color and scalar textures."""

    def test_solid_color(self):
        assert SolidColor(Color(0.1, 0.2, 0.3)).value(0.0, 0.0, Point3()) == Color(0.1, 0.2, 0.3)

    def test_checker_alternates(self):
        checker = CheckerTexture(WHITE, BLACK, scale=1.0)
        even = checker.value(0, 0, Point3(1.0, 1.0, 1.0))
        odd = checker.value(0, 0, Point3(-1.0, 1.0, 1.0))
        assert even == WHITE
        assert odd == BLACK

    def test_image_texture_lookup(self, tmp_path):
        path = tmp_path / "tex.png"
        img = Image.new("RGB", (2, 1))
        img.putpixel((0, 0), (255, 0, 0))
        img.putpixel((1, 0), (0, 0, 255))
        img.save(path)

        texture = ImageTexture(str(path))
        assert texture.value(0.1, 0.5, Point3()) == Color(1.0, 0.0, 0.0)
        assert texture.value(0.9, 0.5, Point3()) == Color(0.0, 0.0, 1.0)
        # Coordinates are clamped to the image
        assert texture.value(5.0, -3.0, Point3()) == Color(0.0, 0.0, 1.0)

    def test_missing_image(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ImageTexture(str(tmp_path / "absent.png"))

    def test_unreadable_image(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_text("not an image")
        with pytest.raises(ValueError):
            ImageTexture(str(path))

    def test_marble_stays_in_range(self):
        marble = MarbleTexture(4.0)
        for i in range(50):
            c = marble.value(0, 0, Point3(0.37 * i, 0.11 * i, 0.23 * i))
            assert 0.0 <= c.x <= 1.0

    def test_perlin_is_continuous_and_seeded(self):
        import random
        random.seed(3)
        a = Perlin()
        random.seed(3)
        b = Perlin()
        p = Point3(1.3, 2.7, -0.4)
        assert a.noise(p) == b.noise(p)
        assert abs(a.noise(p) - a.noise(p + Vector3(1e-6, 0, 0))) < 1e-3
        assert a.turb(p) >= 0.0

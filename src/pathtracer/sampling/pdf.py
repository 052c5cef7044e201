# sampling/pdf.py
import math
import random

from pathtracer.core.onb import OrthoNormalBasis
from pathtracer.core.utils import random_cosine_direction, reflect
from pathtracer.core.vector import Color, Vector3


class PDF:
    """
    A probability density over directions. value() and generate() must
    agree: directions are drawn in proportion to value().
    """
    def value(self, direction: Vector3) -> float:
        raise NotImplementedError("value() must be implemented by subclasses.")

    def generate(self, srec=None) -> Vector3:
        raise NotImplementedError("generate() must be implemented by subclasses.")


class NullPDF(PDF):
    """Placeholder density for specular scattering. Never sampled."""
    def value(self, direction: Vector3) -> float:
        return 0.0

    def generate(self, srec=None) -> Vector3:
        return Vector3(0.0, 0.0, 0.0)


class CosPDF(PDF):
    """Cosine-weighted hemisphere around w."""
    def __init__(self, w: Vector3):
        self.uvw = OrthoNormalBasis.build_from_w(w)

    def value(self, direction: Vector3) -> float:
        cosine = direction.normalize().dot(self.uvw.w)
        if cosine <= 0.0:
            return 0.0
        return cosine / math.pi

    def generate(self, srec=None) -> Vector3:
        return self.uvw.local_vector(random_cosine_direction())


class HittablePDF(PDF):
    """Samples directions from `origin` toward a hittable, usually the lights."""
    def __init__(self, obj, origin: Vector3):
        self.obj = obj
        self.origin = origin

    def value(self, direction: Vector3) -> float:
        return self.obj.pdf_value(self.origin, direction)

    def generate(self, srec=None) -> Vector3:
        return self.obj.random(self.origin)


class MixturePDF(PDF):
    """Even mixture of two densities."""
    def __init__(self, p0: PDF, p1: PDF):
        self.p = (p0, p1)

    def value(self, direction: Vector3) -> float:
        return 0.5 * self.p[0].value(direction) + 0.5 * self.p[1].value(direction)

    def generate(self, srec=None) -> Vector3:
        if random.random() < 0.5:
            return self.p[0].generate(srec)
        return self.p[1].generate(srec)


def _quadrant(xi: float):
    """
    Map a uniform sample onto one quarter of the circle.
    Returns the rescaled sample, the quadrant's phase and whether the
    angle runs backwards from that phase.
    """
    if xi < 0.25:
        return 4.0 * xi, 0.0, False
    if xi < 0.5:
        return 1.0 - 4.0 * (0.5 - xi), math.pi, True
    if xi < 0.75:
        return 1.0 - 4.0 * (0.75 - xi), math.pi, False
    return 1.0 - 4.0 * (1.0 - xi), 2.0 * math.pi, True


class PhongSpecularPDF(PDF):
    """
    Ashikhmin-Shirley anisotropic lobe. A half vector h is drawn once on
    construction with exponents nu (along u) and nv (along v); generate()
    mirrors the incident direction about it.
    """
    def __init__(self, incident: Vector3, normal: Vector3, nu: float, nv: float):
        self.incident = incident
        self.uvw = OrthoNormalBasis.build_from_w(normal)
        self.nu = nu
        self.nv = nv

        tan_phi_coeff = math.sqrt((nu + 1.0) / (nv + 1.0))
        xi, phase, flip = _quadrant(random.random())
        phi = math.atan(tan_phi_coeff * math.tan(math.pi * xi * 0.5))
        phi = phase - phi if flip else phi + phase

        cos_phi = math.cos(phi)
        sin_phi = math.sin(phi)
        self.cos_2_phi = cos_phi * cos_phi
        self.sin_2_phi = 1.0 - self.cos_2_phi

        exponent = 1.0 / (nu * self.cos_2_phi + nv * self.sin_2_phi + 1.0)
        theta = math.acos((1.0 - random.random()) ** exponent)
        sin_theta = math.sin(theta)
        self.h = self.uvw.local(sin_theta * cos_phi, sin_theta * sin_phi, math.cos(theta))

    def value(self, direction: Vector3) -> float:
        exponent = self.nu * self.cos_2_phi + self.nv * self.sin_2_phi
        ph = (math.sqrt((self.nu + 1.0) * (self.nv + 1.0)) / (2.0 * math.pi) *
              max(0.0, self.uvw.w.dot(self.h)) ** exponent)
        denom = 4.0 * (-self.incident).dot(self.h)
        if denom <= 0.0:
            return 0.0
        return ph / denom

    def generate(self, srec=None) -> Vector3:
        return reflect(self.incident, self.h)


class PhongPDF(PDF):
    """
    Diffuse cosine lobe with a glossy branch. The glossy branch is taken with
    probability 1 - 1/(1 + specular density) and, when taken, shifts the
    scatter record's attenuation toward the specular color.

    value() is only the diffuse cosine density. Glossy directions from
    generate() are a mirror about the lobe's fixed half vector, which has no
    finite density, so the two do not agree and estimates through this PDF
    are biased. The attenuation shift stands in for the missing glossy term.
    """
    def __init__(self, incident: Vector3, normal: Vector3,
                 nu: float = 1000.0, nv: float = 1000.0):
        self.diffuse = CosPDF(normal)
        self.specular = PhongSpecularPDF(incident.normalize(), normal, nu, nv)

    def value(self, direction: Vector3) -> float:
        return self.diffuse.value(direction)

    def generate(self, srec=None) -> Vector3:
        sel = random.random()
        spec = self.specular.generate(srec)

        if spec.dot(self.specular.uvw.w) < 0.0:
            diffuse_p = 1.0
        else:
            diffuse_p = 1.0 / (1.0 + self.specular.value(spec))

        if sel < diffuse_p:
            return self.diffuse.generate(srec)

        if srec is not None:
            specular_color = srec.specular_color
            if specular_color is None:
                specular_color = Color(1.0, 1.0, 1.0)
            srec.attenuation = specular_color * 0.8 + srec.attenuation * 0.2
        return spec

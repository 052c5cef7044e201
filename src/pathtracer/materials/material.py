# materials/material.py
from typing import Optional

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Vector3
from pathtracer.sampling.pdf import PDF, NullPDF

# Finite difference step for bump mapping
BUMP_DELTA = 0.01


class ScatterRecord:
    """
    A material's response to an incoming ray.

    Either `specular_ray` is set, in which case the integrator follows it
    directly and `pdf` is never evaluated, or `pdf` describes the
    distribution of scattered directions.
    """
    def __init__(self, attenuation: Color, pdf: PDF = None,
                 specular_ray: Optional[Ray] = None,
                 specular_color: Optional[Color] = None):
        self.specular_ray = specular_ray
        self.attenuation = attenuation
        self.pdf = pdf if pdf is not None else NullPDF()
        self.specular_color = specular_color

    @property
    def is_specular(self) -> bool:
        return self.specular_ray is not None


class Material:
    """
    Abstract material class. The defaults describe a surface that absorbs
    everything and emits nothing.
    """
    def scatter(self, ray_in: Ray, rec) -> Optional[ScatterRecord]:
        """
        Computes how the incoming ray scatters at the hit.
        Returns None if the ray is absorbed.
        """
        return None

    def scattering_pdf(self, ray_in: Ray, rec, scattered: Ray) -> float:
        return 0.0

    def emitted(self, ray_in: Ray, rec, u: float, v: float, p: Vector3) -> Color:
        return Color(0.0, 0.0, 0.0)

    def bump(self, displacement, rec):
        """
        Return a copy of `rec` whose shading frame is perturbed by the scalar
        `displacement` texture, using forward differences along dpdu and dpdv.
        """
        rec = rec.copy()
        shading = rec.shading
        disp = displacement.value(rec.u, rec.v, rec.p)
        u_disp = displacement.value(rec.u + BUMP_DELTA, rec.v,
                                    rec.p + shading.dpdu * BUMP_DELTA)
        v_disp = displacement.value(rec.u, rec.v + BUMP_DELTA,
                                    rec.p + shading.dpdv * BUMP_DELTA)

        dpdu = shading.dpdu + shading.n * ((u_disp - disp) / BUMP_DELTA)
        dpdv = shading.dpdv + shading.n * ((v_disp - disp) / BUMP_DELTA)
        rec.set_shading_geometry(dpdu, dpdv)
        return rec

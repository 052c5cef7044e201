# materials/dielectric.py
import math
import random
from typing import Union

from pathtracer.core.ray import Ray
from pathtracer.core.utils import reflect, refract
from pathtracer.core.vector import Color
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.textures import Texture, as_texture


def schlick(cos_theta: float, ref_idx: float) -> float:
    """Schlick's approximation of Fresnel reflectance."""
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow((1.0 - cos_theta), 5)


class Dielectric(Material):
    """
    Clear refractive material such as glass or water.

    `density` and `volume_color` tint light travelling inside the object:
    on the way out the attenuation is scaled by
    exp(-(1 - volume_color) * density * t), where t is the internal path
    parameter of the exiting hit.
    """
    def __init__(self, ir: float, density: float = 0.0,
                 volume_color: Color = Color(1.0, 1.0, 1.0),
                 albedo: Union[Color, Texture] = Color(1.0, 1.0, 1.0)):
        self.ir = ir
        self.density = density
        self.volume_color = volume_color
        self.albedo = as_texture(albedo)

    def _attenuation(self, rec) -> Color:
        attenuation = self.albedo.value(rec.u, rec.v, rec.p)
        if rec.front_face:
            return attenuation
        absorbance = (Color(1.0, 1.0, 1.0) - self.volume_color) * (self.density * -rec.t)
        return attenuation * absorbance.exp()

    def scatter(self, ray_in: Ray, rec) -> ScatterRecord:
        # Entering or exiting the material
        refraction_ratio = 1.0 / self.ir if rec.front_face else self.ir

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        # Total internal reflection, or a Fresnel reflection
        cannot_refract = refraction_ratio * sin_theta > 1.0
        if cannot_refract or schlick(cos_theta, refraction_ratio) > random.random():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, refraction_ratio)

        return ScatterRecord(
            attenuation=self._attenuation(rec),
            specular_ray=Ray(rec.p, direction, ray_in.time),
        )

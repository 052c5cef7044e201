# materials/isotropic.py
from typing import Union

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_sphere
from pathtracer.core.vector import Color
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.textures import Texture, as_texture


class Isotropic(Material):
    """Phase function of a participating medium: scatters uniformly in all directions."""
    def __init__(self, albedo: Union[Color, Texture]):
        self.albedo = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec) -> ScatterRecord:
        return ScatterRecord(
            attenuation=self.albedo.value(rec.u, rec.v, rec.p),
            specular_ray=Ray(rec.p, random_in_unit_sphere(), ray_in.time),
        )

# materials/metal.py
from typing import Optional, Union

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_sphere, reflect
from pathtracer.core.vector import Color
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.textures import Texture, as_texture


class Metal(Material):
    """
    Metal material with reflective properties and optional texture support.
    Larger fuzz blurs the reflection; it is capped at 1.
    """
    def __init__(self, albedo: Union[Color, Texture], fuzz: float = 0.0):
        self.albedo = as_texture(albedo)
        self.fuzz = min(fuzz, 1.0)

    def scatter(self, ray_in: Ray, rec) -> Optional[ScatterRecord]:
        normal = rec.shading.n
        reflected = reflect(ray_in.direction.normalize(), normal)
        direction = reflected + random_in_unit_sphere() * self.fuzz

        # Absorb the ray if it does not scatter forward
        if direction.dot(normal) <= 0.0:
            return None

        return ScatterRecord(
            attenuation=self.albedo.value(rec.u, rec.v, rec.p),
            specular_ray=Ray(rec.p, direction, ray_in.time),
        )

# materials/lambertian.py
import math
from typing import Union

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.textures import Texture, as_texture
from pathtracer.sampling.pdf import CosPDF


class Lambertian(Material):
    """
    Lambertian diffuse material with optional texture support.
    """
    def __init__(self, albedo: Union[Color, Texture]):
        # Store either a solid color or a texture.
        self.albedo = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec) -> ScatterRecord:
        return ScatterRecord(
            attenuation=self.albedo.value(rec.u, rec.v, rec.p),
            pdf=CosPDF(rec.shading.n),
        )

    def scattering_pdf(self, ray_in: Ray, rec, scattered: Ray) -> float:
        cosine = rec.shading.n.dot(scattered.direction.normalize())
        if cosine < 0.0:
            return 0.0
        return cosine / math.pi

# materials/phong.py
import math
from typing import Optional, Union

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.textures import Texture, as_texture
from pathtracer.sampling.pdf import PhongPDF


class AnisotropicPhong(Material):
    """
    Glossy plastic-like surface: a diffuse base with an anisotropic
    Ashikhmin-Shirley highlight. nu and nv are the lobe exponents along the
    two tangent directions; equal values give a round highlight.
    """
    def __init__(self, diffuse: Union[Color, Texture],
                 specular_color: Optional[Color] = None,
                 nu: float = 1000.0, nv: float = 1000.0):
        self.diffuse = as_texture(diffuse)
        self.specular_color = specular_color
        self.nu = nu
        self.nv = nv

    def scatter(self, ray_in: Ray, rec) -> ScatterRecord:
        return ScatterRecord(
            attenuation=self.diffuse.value(rec.u, rec.v, rec.p),
            pdf=PhongPDF(ray_in.direction, rec.shading.n, self.nu, self.nv),
            specular_color=self.specular_color,
        )

    def scattering_pdf(self, ray_in: Ray, rec, scattered: Ray) -> float:
        cosine = rec.shading.n.dot(scattered.direction.normalize())
        if cosine < 0.0:
            return 0.0
        return cosine / math.pi

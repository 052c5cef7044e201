# materials/corroded.py
from typing import Optional

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Vector3
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.textures import FloatTexture, NoiseBump


class Corroded(Material):
    """
    Wraps another material and roughens its shading normal with a bump
    texture before every query.
    """
    def __init__(self, material: Material, bump_texture: Optional[FloatTexture] = None):
        self.material = material
        self.bump_texture = bump_texture if bump_texture is not None else NoiseBump()

    def scatter(self, ray_in: Ray, rec) -> Optional[ScatterRecord]:
        return self.material.scatter(ray_in, self.bump(self.bump_texture, rec))

    def scattering_pdf(self, ray_in: Ray, rec, scattered: Ray) -> float:
        return self.material.scattering_pdf(ray_in, self.bump(self.bump_texture, rec), scattered)

    def emitted(self, ray_in: Ray, rec, u: float, v: float, p: Vector3) -> Color:
        return self.material.emitted(ray_in, rec, u, v, p)

# materials/diffuse_light.py
from typing import Union

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Vector3
from pathtracer.materials.material import Material
from pathtracer.materials.textures import Texture, as_texture


class DiffuseLight(Material):
    """
    Emissive material that provides constant radiance with optional texture support.

    Only the front face emits, so a light wrapped in FlipFace shines the
    other way. The texture can be used to create patterns in the emitted light.
    """
    def __init__(self, emit: Union[Color, Texture]):
        self.emit = as_texture(emit)

    def emitted(self, ray_in: Ray, rec, u: float, v: float, p: Vector3) -> Color:
        if not rec.front_face:
            return Color(0.0, 0.0, 0.0)
        return self.emit.value(u, v, p)

# materials/textures.py
import logging
import math
import os
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from pathtracer.core.utils import clamp
from pathtracer.core.vector import Color, Vector3
from pathtracer.materials.perlin import Perlin

logger = logging.getLogger(__name__)


class Texture:
    """Base class for all color textures."""
    def value(self, u: float, v: float, p: Vector3) -> Color:
        """Color at surface coordinates (u, v) and hit point p."""
        raise NotImplementedError("value() must be implemented by texture subclasses.")


class SolidColor(Texture):
    """A solid color texture."""
    def __init__(self, color: Color):
        self.color = color

    def value(self, u: float, v: float, p: Vector3) -> Color:
        return self.color


def as_texture(albedo: Union[Color, Texture]) -> Texture:
    """Wrap a plain color in a SolidColor; pass textures through."""
    if isinstance(albedo, Vector3):
        return SolidColor(albedo)
    return albedo


class CheckerTexture(Texture):
    """
    Solid 3D checker pattern: the sign of sin(sx)·sin(sy)·sin(sz) picks
    between the even and odd textures.
    """
    def __init__(self, even: Union[Color, Texture], odd: Union[Color, Texture],
                 scale: float = 10.0):
        self.even = as_texture(even)
        self.odd = as_texture(odd)
        self.scale = scale

    def value(self, u: float, v: float, p: Vector3) -> Color:
        sines = (math.sin(self.scale * p.x) *
                 math.sin(self.scale * p.y) *
                 math.sin(self.scale * p.z))
        if sines < 0.0:
            return self.odd.value(u, v, p)
        return self.even.value(u, v, p)


class ImageTexture(Texture):
    """A texture from an image file."""
    def __init__(self, image_path: str):
        if not os.path.exists(image_path):
            raise FileNotFoundError(f"Texture file not found: {image_path}")
        try:
            with Image.open(image_path) as img:
                if img.mode != 'RGB':
                    img = img.convert('RGB')
                # Normalize to [0, 1] once so lookups are plain indexing
                self.data = np.asarray(img, dtype=np.float64) / 255.0
        except (UnidentifiedImageError, OSError) as e:
            raise ValueError(f"Error loading texture {image_path}: {e}") from e
        self.height, self.width = self.data.shape[:2]
        logger.info("Loaded texture %s (%dx%d)", image_path, self.width, self.height)

    def value(self, u: float, v: float, p: Vector3) -> Color:
        u = clamp(u, 0.0, 1.0)
        v = 1.0 - clamp(v, 0.0, 1.0)  # Image rows run top to bottom

        x = min(int(u * self.width), self.width - 1)
        y = min(int(v * self.height), self.height - 1)

        color = self.data[y, x]
        return Color(float(color[0]), float(color[1]), float(color[2]))


class MarbleTexture(Texture):
    """Perlin turbulence bands along z, modulating an albedo texture."""
    def __init__(self, scale: float, albedo: Union[Color, Texture] = Color(1.0, 1.0, 1.0)):
        self.noise = Perlin()
        self.scale = scale
        self.albedo = as_texture(albedo)

    def value(self, u: float, v: float, p: Vector3) -> Color:
        # Shift the sine into [0, 1]
        band = 0.5 * (1.0 + math.sin(self.scale * p.z + 10.0 * self.noise.turb(p)))
        return self.albedo.value(u, v, p) * band


class FloatTexture:
    """Scalar field over a surface, used as a bump displacement."""
    def value(self, u: float, v: float, p: Vector3) -> float:
        raise NotImplementedError("value() must be implemented by float texture subclasses.")


class NoiseBump(FloatTexture):
    """Turbulent displacement giving a pitted, corroded look."""
    def __init__(self, scale: float = 0.02, frequency: float = 8.0):
        self.noise = Perlin()
        self.scale = scale
        self.frequency = frequency

    def value(self, u: float, v: float, p: Vector3) -> float:
        return self.scale * self.noise.turb(p * self.frequency)


class CheckerBump(FloatTexture):
    """Displacement alternating between two heights in a 3D checker pattern."""
    def __init__(self, high: float, low: float, scale: float = 10.0):
        self.high = high
        self.low = low
        self.scale = scale

    def value(self, u: float, v: float, p: Vector3) -> float:
        sines = (math.sin(self.scale * p.x) *
                 math.sin(self.scale * p.y) *
                 math.sin(self.scale * p.z))
        return self.low if sines < 0.0 else self.high

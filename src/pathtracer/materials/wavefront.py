# materials/wavefront.py
import logging
import os
import random
from typing import Dict, Optional

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Vector3
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.metal import Metal

logger = logging.getLogger(__name__)

# Share of scattering events handled by the diffuse part in model 2
DIFFUSE_SHARE = 0.9

# Values for MTL statements a material leaves out
DEFAULT_DIFFUSE = Color(0.8, 0.8, 0.8)
DEFAULT_SPECULAR = Color(1.0, 1.0, 1.0)
DEFAULT_AMBIENT = Color(0.2, 0.2, 0.2)
# Ns at or above this gives a perfect mirror
MAX_SHININESS = 1000.0


class WavefrontMaterial(Material):
    """
    Adapter for Wavefront MTL illumination models.

    0: flat color, the diffuse albedo is emitted and nothing scatters.
    1: diffuse only.
    2: diffuse with a specular highlight (90% / 10% of scattering events).
    """
    def __init__(self, model: int, diffuse: Lambertian, specular: Metal,
                 ambient: DiffuseLight):
        if model < 0 or model > 2:
            raise ValueError(f"unsupported material model: {model}")
        self.model = model
        self.diffuse = diffuse
        self.specular = specular
        self.ambient = ambient

    def emitted(self, ray_in: Ray, rec, u: float, v: float, p: Vector3) -> Color:
        if self.model == 0:
            return self.diffuse.albedo.value(u, v, p)
        return self.ambient.emitted(ray_in, rec, u, v, p)

    def scatter(self, ray_in: Ray, rec) -> Optional[ScatterRecord]:
        if self.model == 0:
            return None
        if self.model == 1 or random.random() < DIFFUSE_SHARE:
            return self.diffuse.scatter(ray_in, rec)
        return self.specular.scatter(ray_in, rec)

    def scattering_pdf(self, ray_in: Ray, rec, scattered: Ray) -> float:
        return self.diffuse.scattering_pdf(ray_in, rec, scattered)


def mtl_material(params: Dict[str, object]) -> Material:
    """
    Build the material for one MTL entry. Entries with an `illum` statement
    become a WavefrontMaterial, the rest are plain Lambertian in Kd.
    """
    diffuse = params.get('Kd', DEFAULT_DIFFUSE)
    if 'illum' not in params:
        return Lambertian(diffuse)
    shininess = params.get('Ns', 0.0)
    fuzz = max(0.0, 1.0 - shininess / MAX_SHININESS)
    return WavefrontMaterial(params['illum'],
                             Lambertian(diffuse),
                             Metal(params.get('Ks', DEFAULT_SPECULAR), fuzz),
                             DiffuseLight(params.get('Ka', DEFAULT_AMBIENT)))


def load_mtl(filename: str) -> Dict[str, Material]:
    """
    Read a Wavefront MTL library into a name -> material mapping.

    Only Kd, Ks, Ka, Ns and illum are read. Texture maps and other statements
    are skipped.
    """
    if not os.path.isfile(filename):
        raise FileNotFoundError(f"MTL file not found: {filename}")

    entries: Dict[str, Dict[str, object]] = {}
    current: Optional[Dict[str, object]] = None
    with open(filename, 'r') as f:
        for line_num, line in enumerate(f, 1):
            values = line.split()
            if not values or values[0].startswith('#'):
                continue
            keyword = values[0]
            if keyword == 'newmtl':
                if len(values) < 2:
                    raise ValueError(f"{filename}:{line_num}: newmtl without a name")
                current = entries.setdefault(' '.join(values[1:]), {})
                continue
            if keyword not in ('Kd', 'Ks', 'Ka', 'Ns', 'illum'):
                continue
            if current is None:
                raise ValueError(f"{filename}:{line_num}: {keyword} before any newmtl")

            try:
                if keyword == 'Ns':
                    current[keyword] = float(values[1])
                elif keyword == 'illum':
                    current[keyword] = int(values[1])
                else:
                    current[keyword] = Color(float(values[1]), float(values[2]), float(values[3]))
            except (IndexError, ValueError) as e:
                raise ValueError(f"{filename}:{line_num}: malformed line {line.strip()!r} ({e})") from e

    materials = {}
    for name, params in entries.items():
        try:
            materials[name] = mtl_material(params)
        except ValueError as e:
            raise ValueError(f"{filename}: material {name!r}: {e}") from e
    logger.info("Loaded %d material(s) from %s", len(materials), filename)
    return materials

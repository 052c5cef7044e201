from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.isotropic import Isotropic
from pathtracer.materials.phong import AnisotropicPhong
from pathtracer.materials.corroded import Corroded
from pathtracer.materials.wavefront import WavefrontMaterial, load_mtl

__all__ = ['Material', 'ScatterRecord', 'Lambertian', 'Metal', 'Dielectric',
           'DiffuseLight', 'Isotropic', 'AnisotropicPhong', 'Corroded',
           'WavefrontMaterial', 'load_mtl']

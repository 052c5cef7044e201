from pathtracer.geometry.hittable import Hittable, HitRecord, ShadingGeometry
from pathtracer.geometry.sphere import Sphere, MovingSphere
from pathtracer.geometry.aarect import AARect
from pathtracer.geometry.box import Box
from pathtracer.geometry.cylinder import Cylinder
from pathtracer.geometry.disk import Disk
from pathtracer.geometry.mesh import TriangleMesh, Triangle, ObjFormatError, load_obj
from pathtracer.geometry.medium import ConstantMedium
from pathtracer.geometry.transform import Translate, Rotate, FlipFace
from pathtracer.geometry.world import HittableList
from pathtracer.geometry.bvh import BVHNode

__all__ = ['Hittable', 'HitRecord', 'ShadingGeometry', 'Sphere', 'MovingSphere',
           'AARect', 'Box', 'Cylinder', 'Disk', 'TriangleMesh', 'Triangle',
           'load_obj', 'ObjFormatError', 'ConstantMedium', 'Translate', 'Rotate',
           'FlipFace', 'HittableList', 'BVHNode']

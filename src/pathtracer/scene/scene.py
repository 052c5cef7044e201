# scene/scene.py
import logging
from typing import Optional

from pathtracer.core.vector import Color, Point3
from pathtracer.geometry.bvh import BVHNode
from pathtracer.geometry.hittable import Hittable
from pathtracer.geometry.world import HittableList

logger = logging.getLogger(__name__)


class Scene:
    """
    Everything the integrator needs: the root hittable, the collection of
    objects worth sampling directly as lights, the background radiance and
    the default viewpoint.

    Emissive objects are not discovered automatically. An emitter that is
    left out of `lights` still shows up when paths hit it, it just is not
    importance sampled.
    """
    def __init__(self, world: Hittable, lights: Optional[HittableList] = None,
                 background: Color = Color(0.0, 0.0, 0.0),
                 lookfrom: Point3 = Point3(13.0, 2.0, 3.0),
                 lookat: Point3 = Point3(0.0, 0.0, 0.0),
                 vfov: float = 20.0):
        self.world = world
        self.lights = lights if lights is not None else HittableList()
        self.background = background
        self.lookfrom = lookfrom
        self.lookat = lookat
        self.vfov = vfov

    @classmethod
    def from_objects(cls, objects: HittableList, lights: Optional[HittableList] = None,
                     **kwargs) -> "Scene":
        """Wrap the objects in a BVH and build the scene around it."""
        world = BVHNode.build(objects.objects, 0.0, 1.0)
        scene = cls(world, lights, **kwargs)
        logger.info("Scene ready: %d top-level objects, %d lights",
                    len(objects), len(scene.lights))
        if scene.lights.empty():
            logger.debug("No lights to sample; scattering follows material densities only")
        return scene

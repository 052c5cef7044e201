# camera/camera.py
import logging
import math
import random

from pathtracer.core.ray import Ray
from pathtracer.core.utils import degrees_to_radians, random_in_unit_disk
from pathtracer.core.vector import Vector3

logger = logging.getLogger(__name__)


class Camera:
    """
    Thin-lens camera looking from `lookfrom` toward `lookat`.

    Rays start on a lens of diameter `aperture` and pass through the focus
    plane at `focus_dist`; each ray gets a random time in [time0, time1] for
    motion blur.
    """
    def __init__(self, lookfrom: Vector3, lookat: Vector3, vup: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0,
                 focus_dist: float = 10.0, time0: float = 0.0, time1: float = 1.0):
        theta = degrees_to_radians(vfov)
        h = math.tan(theta / 2.0)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        # Orthonormal basis for the lens and the focus plane
        self.w = (lookfrom - lookat).normalize()
        self.u = vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        self.origin = lookfrom
        self.horizontal = self.u * (focus_dist * viewport_width)
        self.vertical = self.v * (focus_dist * viewport_height)
        self.lower_left_corner = (self.origin -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.w * focus_dist)
        self.lens_radius = aperture / 2.0
        self.time0 = time0
        self.time1 = time1
        logger.debug("Camera from %s at %s, basis u=%s v=%s w=%s",
                     lookfrom, lookat, self.u, self.v, self.w)

    @classmethod
    def for_scene(cls, scene, aspect_ratio: float, aperture: float = 0.0,
                  focus_dist: float = 10.0) -> "Camera":
        """Camera using the scene's viewpoint with +y up and a 0..1 shutter."""
        return cls(scene.lookfrom, scene.lookat, Vector3(0.0, 1.0, 0.0),
                   scene.vfov, aspect_ratio, aperture, focus_dist, 0.0, 1.0)

    def get_ray(self, s: float, t: float) -> Ray:
        """Generates a ray through focus plane coordinates (s, t) in [0, 1]."""
        rd = random_in_unit_disk() * self.lens_radius
        offset = self.u * rd.x + self.v * rd.y
        direction = (self.lower_left_corner +
                     self.horizontal * s +
                     self.vertical * t -
                     self.origin - offset)
        return Ray(self.origin + offset, direction,
                   random.uniform(self.time0, self.time1))

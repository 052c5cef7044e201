# geometry/transform.py
import math
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.utils import INFINITY, degrees_to_radians
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord, ShadingGeometry


class Translate(Hittable):
    """
    Moves the wrapped object by a fixed offset. Rays are shifted into the
    object's frame and the hit point is shifted back.
    """
    def __init__(self, obj: Hittable, offset: Vector3):
        self.obj = obj
        self.offset = offset

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        moved = Ray(ray.origin - self.offset, ray.direction, ray.time)
        rec = self.obj.hit(moved, t_min, t_max)
        if rec is None:
            return None
        rec.p = rec.p + self.offset
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> Optional[AABB]:
        box = self.obj.bounding_box(time0, time1)
        if box is None:
            return None
        return box.translated(self.offset)

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        return self.obj.pdf_value(origin - self.offset, direction)

    def random(self, origin: Vector3) -> Vector3:
        return self.obj.random(origin - self.offset)


class Rotate(Hittable):
    """
    Rotates the wrapped object by `degrees` about one coordinate axis
    (0 = x, 1 = y, 2 = z).
    """
    def __init__(self, obj: Hittable, degrees: float, axis: int):
        self.obj = obj
        self.axis = axis
        # The two coordinates that change under this rotation, in cyclic order
        self.a_axis = (axis + 1) % 3
        self.b_axis = (axis + 2) % 3
        radians = degrees_to_radians(degrees)
        self.sin_theta = math.sin(radians)
        self.cos_theta = math.cos(radians)
        self.box = self._rotated_box(obj.bounding_box(0.0, 1.0))

    @classmethod
    def rotate_x(cls, obj: Hittable, degrees: float) -> "Rotate":
        return cls(obj, degrees, 0)

    @classmethod
    def rotate_y(cls, obj: Hittable, degrees: float) -> "Rotate":
        return cls(obj, degrees, 1)

    @classmethod
    def rotate_z(cls, obj: Hittable, degrees: float) -> "Rotate":
        return cls(obj, degrees, 2)

    def _rotate(self, v: Vector3, sin_theta: float) -> Vector3:
        a = v[self.a_axis]
        b = v[self.b_axis]
        return v \
            .with_axis(self.a_axis, self.cos_theta * a - sin_theta * b) \
            .with_axis(self.b_axis, sin_theta * a + self.cos_theta * b)

    def to_world(self, v: Vector3) -> Vector3:
        return self._rotate(v, self.sin_theta)

    def to_object(self, v: Vector3) -> Vector3:
        return self._rotate(v, -self.sin_theta)

    def _rotated_box(self, box: Optional[AABB]) -> Optional[AABB]:
        if box is None:
            return None
        # Rotate all eight corners and keep the extremes
        lo = [INFINITY, INFINITY, INFINITY]
        hi = [-INFINITY, -INFINITY, -INFINITY]
        for i in range(2):
            for j in range(2):
                for k in range(2):
                    corner = Vector3(
                        box.maximum.x if i else box.minimum.x,
                        box.maximum.y if j else box.minimum.y,
                        box.maximum.z if k else box.minimum.z,
                    )
                    rotated = self.to_world(corner)
                    for c in range(3):
                        lo[c] = min(lo[c], rotated[c])
                        hi[c] = max(hi[c], rotated[c])
        return AABB(Vector3(*lo), Vector3(*hi))

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        rotated = Ray(self.to_object(ray.origin), self.to_object(ray.direction), ray.time)
        rec = self.obj.hit(rotated, t_min, t_max)
        if rec is None:
            return None

        rec.p = self.to_world(rec.p)
        rec.normal = self.to_world(rec.normal)
        rec.shading = ShadingGeometry(
            self.to_world(rec.shading.n),
            self.to_world(rec.shading.dpdu),
            self.to_world(rec.shading.dpdv),
        )
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> Optional[AABB]:
        return self.box

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        return self.obj.pdf_value(self.to_object(origin), self.to_object(direction))

    def random(self, origin: Vector3) -> Vector3:
        return self.to_world(self.obj.random(self.to_object(origin)))


class FlipFace(Hittable):
    """
    Reports every hit of the wrapped object as coming from the other side.
    Used to turn one-sided emitters toward the scene.
    """
    def __init__(self, obj: Hittable):
        self.obj = obj

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        rec = self.obj.hit(ray, t_min, t_max)
        if rec is None:
            return None
        rec.front_face = not rec.front_face
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> Optional[AABB]:
        return self.obj.bounding_box(time0, time1)

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        return self.obj.pdf_value(origin, direction)

    def random(self, origin: Vector3) -> Vector3:
        return self.obj.random(origin)

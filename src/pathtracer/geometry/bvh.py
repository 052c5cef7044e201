# geometry/bvh.py
import logging
import random
import time
from typing import List, Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)


def _box_of(obj: Hittable, time0: float, time1: float) -> AABB:
    box = obj.bounding_box(time0, time1)
    if box is None:
        raise ValueError("No bounding box in BVHNode constructor")
    return box


class BVHNode(Hittable):
    """
    Binary bounding volume hierarchy over a list of hittables.

    At every level the objects are sorted by the minimum of their boxes along
    a randomly chosen axis and split at the median index. A node holding a
    single object points both children at it.
    """
    def __init__(self, objects: List[Hittable], time0: float = 0.0, time1: float = 1.0):
        objects = list(objects)
        span = len(objects)
        if span == 0:
            raise ValueError("BVHNode needs at least one object")

        axis = random.randint(0, 2)
        key = lambda obj: _box_of(obj, time0, time1).minimum[axis]

        if span == 1:
            self.left = self.right = objects[0]
        elif span == 2:
            self.left, self.right = sorted(objects, key=key)
        else:
            objects.sort(key=key)
            mid = span // 2
            self.left = BVHNode(objects[:mid], time0, time1)
            self.right = BVHNode(objects[mid:], time0, time1)

        self.box = AABB.surrounding_box(_box_of(self.left, time0, time1),
                                        _box_of(self.right, time0, time1))

    @classmethod
    def build(cls, objects: List[Hittable], time0: float = 0.0, time1: float = 1.0) -> "BVHNode":
        """Build a tree and report how long it took."""
        start = time.perf_counter()
        node = cls(objects, time0, time1)
        logger.debug("Built BVH over %d objects in %.3fs",
                     len(objects), time.perf_counter() - start)
        return node

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if not self.box.hit(ray, t_min, t_max):
            return None

        hit_left = self.left.hit(ray, t_min, t_max)
        if hit_left is not None:
            # Only a closer hit on the right can replace the left one
            hit_right = self.right.hit(ray, t_min, hit_left.t)
            return hit_right if hit_right is not None else hit_left
        return self.right.hit(ray, t_min, t_max)

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        return self.box

    def depth(self) -> int:
        left = self.left.depth() if isinstance(self.left, BVHNode) else 0
        right = self.right.depth() if isinstance(self.right, BVHNode) else 0
        return 1 + max(left, right)

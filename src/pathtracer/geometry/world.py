# src/geometry/world.py
import logging
from typing import Iterable, List, Optional

import numpy as np

from pathtracer.core.aabb import AABB, EMPTY_BOX
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.geometry.bvh import BVHNode
from pathtracer.geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)

# Seed used for BVH axis selection when the caller does not pass a generator.
DEFAULT_BVH_SEED = 0

class HittableList(Hittable):
    """
    A list of Hittable objects. hit() scans every object and keeps the
    closest intersection; build_bvh() returns an accelerated view of the
    same objects.
    """
    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: List[Hittable] = []
        self.bbox = EMPTY_BOX
        if objects is not None:
            self.extend(objects)

    def add(self, obj: Hittable):
        self.objects.append(obj)
        self.bbox = AABB.surrounding_box(self.bbox, obj.bounding_box())

    def extend(self, objects: Iterable[Hittable]):
        for obj in objects:
            self.add(obj)

    def clear(self):
        self.objects.clear()
        self.bbox = EMPTY_BOX

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)

    def build_bvh(self, rng: Optional[np.random.Generator] = None) -> BVHNode:
        if rng is None:
            rng = np.random.default_rng(DEFAULT_BVH_SEED)
        root = BVHNode.from_objects(self.objects, rng)
        logger.debug("Built BVH over %d objects (depth %d)", len(self.objects), root.depth())
        return root

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = ray_t.max

        for obj in self.objects:
            rec = obj.hit(ray, Interval(ray_t.min, closest_so_far))
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec

        return hit_record

    def bounding_box(self) -> AABB:
        return self.bbox

    def __repr__(self) -> str:
        return f"HittableList({len(self.objects)} objects)"

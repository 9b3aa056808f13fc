# geometry/transform.py
import math
from typing import Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord

AXES = {"x": 0, "y": 1, "z": 2}

class Translation(Hittable):
    """
    Moves a wrapped object by a fixed offset without copying it.
    """
    def __init__(self, obj: Hittable, offset: Vector3):
        self.object = obj
        self.offset = offset
        box = obj.bounding_box()
        self.bbox = AABB(box.x.shift(offset.x), box.y.shift(offset.y), box.z.shift(offset.z))

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        # Move the ray into object space instead of moving the object.
        offset_ray = Ray(ray.origin - self.offset, ray.direction)
        rec = self.object.hit(offset_ray, ray_t)
        if rec is None:
            return None
        rec.p = rec.p + self.offset
        return rec

    def bounding_box(self) -> AABB:
        return self.bbox

    def __repr__(self) -> str:
        return f"Translation({self.object!r}, offset={self.offset})"

class Rotation(Hittable):
    """
    Rotates a wrapped object about the x, y or z axis through the origin.
    Angles are in degrees, counter-clockwise looking down the axis.
    """
    def __init__(self, obj: Hittable, axis: str, angle: float):
        if axis not in AXES:
            raise ValueError(f"Rotation axis must be one of x, y, z, got {axis!r}")
        self.object = obj
        self.axis = axis
        self.angle = angle
        radians = math.radians(angle)
        self.sin_theta = math.sin(radians)
        self.cos_theta = math.cos(radians)
        self.bbox = self._rotated_bbox(obj.bounding_box())

    def _rotate(self, p: Vector3, sin_theta: float) -> Vector3:
        c = self.cos_theta
        s = sin_theta
        if self.axis == "x":
            return Vector3(p.x, c * p.y - s * p.z, s * p.y + c * p.z)
        if self.axis == "y":
            return Vector3(s * p.z + c * p.x, p.y, c * p.z - s * p.x)
        return Vector3(c * p.x - s * p.y, s * p.x + c * p.y, p.z)

    def to_world(self, p: Vector3) -> Vector3:
        return self._rotate(p, self.sin_theta)

    def to_object(self, p: Vector3) -> Vector3:
        return self._rotate(p, -self.sin_theta)

    def _rotated_bbox(self, box: AABB) -> AABB:
        if box.is_empty():
            return box
        lo = Vector3(math.inf, math.inf, math.inf)
        hi = Vector3(-math.inf, -math.inf, -math.inf)
        for corner in box.corners():
            r = self.to_world(corner)
            lo = Vector3(min(lo.x, r.x), min(lo.y, r.y), min(lo.z, r.z))
            hi = Vector3(max(hi.x, r.x), max(hi.y, r.y), max(hi.z, r.z))
        return AABB.from_points(lo, hi)

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        rotated = Ray(self.to_object(ray.origin), self.to_object(ray.direction))
        rec = self.object.hit(rotated, ray_t)
        if rec is None:
            return None
        # Rotation preserves orientation, so front_face carries over unchanged.
        rec.p = self.to_world(rec.p)
        rec.normal = self.to_world(rec.normal)
        return rec

    def bounding_box(self) -> AABB:
        return self.bbox

    def __repr__(self) -> str:
        return f"Rotation({self.object!r}, axis={self.axis!r}, angle={self.angle})"

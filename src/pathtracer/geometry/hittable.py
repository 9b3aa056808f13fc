# geometry/hittable.py
from typing import Optional

from pathtracer.core.aabb import AABB, EMPTY_BOX
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3

class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    __slots__ = ("p", "normal", "t", "front_face", "material", "u", "v")

    def __init__(self, p: Optional[Vector3] = None, normal: Optional[Vector3] = None,
                 t: float = 0, front_face: bool = True, material = None,
                 u: float = 0.0, v: float = 0.0):
        self.p = p              # Intersection point
        self.normal = normal    # Unit normal, always facing the incoming ray
        self.t = t              # Ray parameter at intersection
        self.front_face = front_face  # Whether the hit was on the front side
        self.material = material
        self.u = u              # Surface coordinates for texture lookup
        self.v = v

    @classmethod
    def from_ray(cls, ray: Ray, t: float, outward_normal: Vector3, material,
                 u: float = 0.0, v: float = 0.0) -> "HitRecord":
        rec = cls(p=ray.at(t), t=t, material=material, u=u, v=v)
        rec.set_face_normal(ray, outward_normal)
        return rec

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        """
        Ensures that the normal always points against the ray.
        outward_normal is assumed to have unit length.
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal

    def __repr__(self) -> str:
        return (f"HitRecord(t={self.t}, p={self.p}, normal={self.normal}, "
                f"front_face={self.front_face})")

class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def bounding_box(self) -> AABB:
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")

class EmptyHittable(Hittable):
    """
    Placeholder that is never hit. Fills the single leaf of a BVH built
    over an empty scene.
    """
    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        return None

    def bounding_box(self) -> AABB:
        return EMPTY_BOX

    def __repr__(self) -> str:
        return "EmptyHittable()"

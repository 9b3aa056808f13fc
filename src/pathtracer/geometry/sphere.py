# geometry/sphere.py
import math
from typing import Optional, Tuple

from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord

class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.

    A negative radius keeps the same surface but flips the outward normal,
    which is how hollow glass shells are modelled. A zero radius is rejected.
    """
    def __init__(self, center: Vector3, radius: float, material):
        if radius == 0:
            raise ValueError(f"Sphere radius must be nonzero, got {radius}")
        self.center = center
        self.radius = radius
        self.material = material
        # The bounding box of a sphere is center ± radius
        r = abs(radius)
        offset = Vector3(r, r, r)
        self.bbox = AABB.from_points(center - offset, center + offset)

    @staticmethod
    def get_sphere_uv(p: Vector3) -> Tuple[float, float]:
        """
        Maps a point p on the unit sphere to (u, v) in [0, 1]^2.

        u is the angle around the Y axis starting from X=-1, v the angle
        from Y=-1 up to Y=+1:
            <1 0 0> -> <0.50 0.50>     <-1  0  0> -> <0.00 0.50>
            <0 1 0> -> <0.50 1.00>     < 0 -1  0> -> <0.50 0.00>
            <0 0 1> -> <0.25 0.50>     < 0  0 -1> -> <0.75 0.50>
        """
        theta = math.acos(max(-1.0, min(1.0, -p.y)))
        phi = math.atan2(-p.z, p.x) + math.pi
        return phi / (2 * math.pi), theta / math.pi

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        if discriminant < 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = (-half_b - sqrt_disc) / a
        if not ray_t.surrounds(root):
            root = (-half_b + sqrt_disc) / a
            if not ray_t.surrounds(root):
                return None

        p = ray.at(root)
        outward_normal = (p - self.center) / self.radius
        u, v = self.get_sphere_uv(outward_normal)
        rec = HitRecord(p=p, t=root, material=self.material, u=u, v=v)
        rec.set_face_normal(ray, outward_normal)
        return rec

    def bounding_box(self) -> AABB:
        return self.bbox

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"

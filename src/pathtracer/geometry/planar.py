# geometry/planar.py
"""
Flat primitives sharing one ray/plane intersection step.

A planar primitive is anchored at a point Q and spanned by two edge vectors
u and v. A point on the plane is written P = Q + alpha * u + beta * v; each
shape only decides which (alpha, beta) pairs belong to it and how they map
to texture coordinates.
"""
import math
from typing import NamedTuple, Optional, Tuple

from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.geometry.world import HittableList

# Rays closer than this to parallel with the plane never hit it.
PARALLEL_EPSILON = 1e-8


class PlaneHit(NamedTuple):
    t: float
    alpha: float
    beta: float


class Planar(Hittable):
    """
    Base class for Quad, Triangle and Disk.
    """
    def __init__(self, Q: Vector3, u: Vector3, v: Vector3, material):
        self.Q = Q
        self.u = u
        self.v = v
        self.material = material

        n = u.cross(v)
        if n.near_zero():
            raise ValueError(f"Edge vectors {u} and {v} do not span a plane")
        self.normal = n.normalize()
        self.D = self.normal.dot(Q)
        self.w = n / n.dot(n)
        self.bbox = self._compute_bbox()

    def _compute_bbox(self) -> AABB:
        raise NotImplementedError("_compute_bbox() must be implemented by subclasses.")

    def is_interior(self, alpha: float, beta: float) -> bool:
        raise NotImplementedError("is_interior() must be implemented by subclasses.")

    def map_uv(self, alpha: float, beta: float) -> Tuple[float, float]:
        return alpha, beta

    def hit_plane(self, ray: Ray, ray_t: Interval) -> Optional[PlaneHit]:
        denom = self.normal.dot(ray.direction)
        if abs(denom) < PARALLEL_EPSILON:
            return None

        t = (self.D - self.normal.dot(ray.origin)) / denom
        if not ray_t.contains(t):
            return None

        planar_hitpt = ray.at(t) - self.Q
        alpha = self.w.dot(planar_hitpt.cross(self.v))
        beta = self.w.dot(self.u.cross(planar_hitpt))
        return PlaneHit(t, alpha, beta)

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        plane_hit = self.hit_plane(ray, ray_t)
        if plane_hit is None:
            return None
        if not self.is_interior(plane_hit.alpha, plane_hit.beta):
            return None

        u, v = self.map_uv(plane_hit.alpha, plane_hit.beta)
        return HitRecord.from_ray(ray, plane_hit.t, self.normal, self.material, u, v)

    def bounding_box(self) -> AABB:
        return self.bbox


class Quad(Planar):
    """
    Parallelogram with corners Q, Q+u, Q+v and Q+u+v.
    """
    def _compute_bbox(self) -> AABB:
        diagonal = AABB.from_points(self.Q, self.Q + self.u + self.v)
        other = AABB.from_points(self.Q + self.u, self.Q + self.v)
        return AABB.surrounding_box(diagonal, other).pad()

    def is_interior(self, alpha: float, beta: float) -> bool:
        return 0.0 <= alpha <= 1.0 and 0.0 <= beta <= 1.0

    def __repr__(self) -> str:
        return f"Quad(Q={self.Q}, u={self.u}, v={self.v})"


class Triangle(Planar):
    """
    Triangle with vertices Q, Q+u and Q+v. Texture coordinates are the
    barycentric weights of the u and v vertices.
    """
    def _compute_bbox(self) -> AABB:
        a = AABB.from_points(self.Q, self.Q + self.u)
        b = AABB.from_points(self.Q, self.Q + self.v)
        return AABB.surrounding_box(a, b).pad()

    def is_interior(self, alpha: float, beta: float) -> bool:
        return alpha >= 0.0 and beta >= 0.0 and alpha + beta <= 1.0

    def __repr__(self) -> str:
        return f"Triangle(Q={self.Q}, u={self.u}, v={self.v})"


class Disk(Planar):
    """
    Disk centered at Q. The in-plane axes u and v are normalized, so radius
    is measured in world units along them.
    """
    def __init__(self, center: Vector3, u: Vector3, v: Vector3, radius: float, material):
        if radius <= 0:
            raise ValueError(f"Disk radius must be positive, got {radius}")
        self.radius = radius
        super().__init__(center, u.normalize(), v.normalize(), material)

    def _compute_bbox(self) -> AABB:
        # Extent along each world axis of {alpha*u + beta*v : alpha^2 + beta^2 <= r^2}.
        r = self.radius
        extent = Vector3(
            r * math.hypot(self.u.x, self.v.x),
            r * math.hypot(self.u.y, self.v.y),
            r * math.hypot(self.u.z, self.v.z),
        )
        return AABB.from_points(self.Q - extent, self.Q + extent).pad()

    def is_interior(self, alpha: float, beta: float) -> bool:
        return alpha * alpha + beta * beta <= self.radius * self.radius

    def map_uv(self, alpha: float, beta: float) -> Tuple[float, float]:
        #     <r 0> -> <1.0 0.5>     <-r  0> -> <0.0 0.5>
        #     <0 r> -> <0.5 1.0>     < 0 -r> -> <0.5 0.0>
        diameter = 2.0 * self.radius
        return (alpha + self.radius) / diameter, (beta + self.radius) / diameter

    def __repr__(self) -> str:
        return f"Disk(center={self.Q}, radius={self.radius})"


def box(a: Vector3, b: Vector3, material):
    """
    Returns the six quads of the axis-aligned box with opposite corners a and b.
    """
    sides = HittableList()

    lo = Vector3(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z))
    hi = Vector3(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z))

    dx = Vector3(hi.x - lo.x, 0, 0)
    dy = Vector3(0, hi.y - lo.y, 0)
    dz = Vector3(0, 0, hi.z - lo.z)

    sides.add(Quad(Vector3(lo.x, lo.y, hi.z), dx, dy, material))   # front
    sides.add(Quad(Vector3(hi.x, lo.y, hi.z), -dz, dy, material))  # right
    sides.add(Quad(Vector3(hi.x, lo.y, lo.z), -dx, dy, material))  # back
    sides.add(Quad(Vector3(lo.x, lo.y, lo.z), dz, dy, material))   # left
    sides.add(Quad(Vector3(lo.x, hi.y, hi.z), dx, -dz, material))  # top
    sides.add(Quad(Vector3(lo.x, lo.y, lo.z), dx, dz, material))   # bottom

    return sides

# src/core/aabb.py
from typing import Optional

from pathtracer.core.interval import EMPTY, Interval
from pathtracer.core.vector import Vector3

# Below this magnitude a direction component counts as parallel to the slab.
PARALLEL_EPSILON = 1e-12

class AABB:
    """
    Axis-aligned bounding box stored as one Interval per axis.
    """
    __slots__ = ("x", "y", "z")

    def __init__(self, x: Optional[Interval] = None, y: Optional[Interval] = None,
                 z: Optional[Interval] = None):
        self.x = x if x is not None else EMPTY
        self.y = y if y is not None else EMPTY
        self.z = z if z is not None else EMPTY

    @classmethod
    def from_points(cls, a: Vector3, b: Vector3) -> "AABB":
        """
        Box spanning two opposite corners, given in any order.
        """
        return cls(
            Interval(min(a.x, b.x), max(a.x, b.x)),
            Interval(min(a.y, b.y), max(a.y, b.y)),
            Interval(min(a.z, b.z), max(a.z, b.z)),
        )

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        return AABB(
            Interval.union(box0.x, box1.x),
            Interval.union(box0.y, box1.y),
            Interval.union(box0.z, box1.z),
        )

    def pad(self, delta: float = 0.0001) -> "AABB":
        """
        Returns a copy where no axis is thinner than delta. Flat primitives
        (quads, disks) would otherwise produce zero-volume boxes.
        """
        x = self.x if self.x.size() >= delta else self.x.expand(delta)
        y = self.y if self.y.size() >= delta else self.y.expand(delta)
        z = self.z if self.z.size() >= delta else self.z.expand(delta)
        return AABB(x, y, z)

    def axis(self, n: int) -> Interval:
        if n == 0:
            return self.x
        if n == 1:
            return self.y
        if n == 2:
            return self.z
        raise IndexError(f"AABB axis out of range: {n}")

    def is_empty(self) -> bool:
        return self.x.is_empty() or self.y.is_empty() or self.z.is_empty()

    def corners(self):
        for x in (self.x.min, self.x.max):
            for y in (self.y.min, self.y.max):
                for z in (self.z.min, self.z.max):
                    yield Vector3(x, y, z)

    def hit(self, ray, ray_t: Interval) -> bool:
        # Slab method: for each axis, find intersection intervals.
        t_min = ray_t.min
        t_max = ray_t.max
        origin = ray.origin
        direction = ray.direction
        for a in range(3):
            slab = self.axis(a)
            d = direction.axis(a)
            o = origin.axis(a)
            if abs(d) < PARALLEL_EPSILON:
                # Parallel: the slab cannot narrow t, only reject.
                if not slab.contains(o):
                    return False
                continue
            invD = 1.0 / d
            t0 = (slab.min - o) * invD
            t1 = (slab.max - o) * invD
            if invD < 0:
                t0, t1 = t1, t0
            if t0 > t_min:
                t_min = t0
            if t1 < t_max:
                t_max = t1
            if t_max <= t_min:
                return False
        return True

    def __eq__(self, other) -> bool:
        if not isinstance(other, AABB):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __repr__(self) -> str:
        return f"AABB(x={self.x}, y={self.y}, z={self.z})"


EMPTY_BOX = AABB(EMPTY, EMPTY, EMPTY)

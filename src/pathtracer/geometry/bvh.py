# src/geometry/bvh.py
from typing import Optional, Sequence

import numpy as np

from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import EmptyHittable, Hittable, HitRecord


class BVHInvariantError(AssertionError):
    """
    Raised when a node has a shape that construction never produces.
    """


class BVHNode(Hittable):
    """
    Binary bounding volume hierarchy.

    A leaf holds exactly one object (an EmptyHittable for an empty scene) and
    no children; an internal node holds two children and no object. Nodes are
    never modified after construction, so one tree can serve any number of
    concurrent queries.
    """
    __slots__ = ("left", "right", "object", "box")

    def __init__(self, left: Optional["BVHNode"] = None, right: Optional["BVHNode"] = None,
                 obj: Optional[Hittable] = None, box: Optional[AABB] = None):
        self.left = left
        self.right = right
        self.object = obj
        if box is None:
            if obj is not None:
                box = obj.bounding_box()
            elif left is not None and right is not None:
                box = AABB.surrounding_box(left.box, right.box)
            else:
                raise BVHInvariantError("BVH node has neither an object nor two children")
        self.box = box

    @classmethod
    def leaf(cls, obj: Hittable) -> "BVHNode":
        return cls(obj=obj)

    @classmethod
    def from_objects(cls, objects: Sequence[Hittable], rng: np.random.Generator) -> "BVHNode":
        """
        Builds a tree over objects. The input sequence is not reordered;
        sorting happens on a private copy.
        """
        objects = list(objects)
        return cls._build(objects, 0, len(objects), rng)

    @classmethod
    def _build(cls, objects: list, start: int, end: int, rng: np.random.Generator) -> "BVHNode":
        axis = int(rng.integers(0, 3))
        object_span = end - start

        if object_span == 0:
            return cls.leaf(EmptyHittable())

        if object_span == 1:
            return cls.leaf(objects[start])

        if object_span == 2:
            return cls(cls.leaf(objects[start]), cls.leaf(objects[start + 1]))

        # Sort only this node's slice along the chosen axis
        objects[start:end] = sorted(objects[start:end],
                                    key=lambda obj: obj.bounding_box().axis(axis).min)

        mid = start + object_span // 2
        left = cls._build(objects, start, mid, rng)
        right = cls._build(objects, mid, end, rng)
        return cls(left, right)

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        if self.is_leaf():
            if self.object is None:
                raise BVHInvariantError("BVH leaf has no object")
            return self.object.hit(ray, ray_t)

        if self.left is None or self.right is None or self.object is not None:
            raise BVHInvariantError("BVH internal node must have exactly two children and no object")

        if not self.box.hit(ray, ray_t):
            return None

        hit_left = self.left.hit(ray, ray_t)
        if hit_left is None:
            return self.right.hit(ray, ray_t)

        # Anything the right subtree reports is now no farther than hit_left.
        hit_right = self.right.hit(ray, Interval(ray_t.min, hit_left.t))
        return hit_right if hit_right is not None else hit_left

    def bounding_box(self) -> AABB:
        return self.box

    def leaf_count(self, include_empty: bool = False) -> int:
        """
        Number of leaves holding a real object (the empty-scene placeholder
        is only counted when include_empty is set).
        """
        if self.is_leaf():
            if isinstance(self.object, EmptyHittable):
                return 1 if include_empty else 0
            return 1
        return self.left.leaf_count(include_empty) + self.right.leaf_count(include_empty)

    def depth(self) -> int:
        if self.is_leaf():
            return 1
        return 1 + max(self.left.depth(), self.right.depth())

    def describe(self, indent: int = 0) -> str:
        """
        Pre-order dump of the tree, one node per line.
        """
        line = "  " * indent + repr(self.box)
        if self.object is not None:
            line += " " + repr(self.object)
        lines = [line]
        if self.left is not None:
            lines.append(self.left.describe(indent + 1))
        if self.right is not None:
            lines.append(self.right.describe(indent + 1))
        return "\n".join(lines)

    def __repr__(self) -> str:
        kind = "leaf" if self.is_leaf() else "node"
        return f"BVHNode({kind}, box={self.box})"

from .bvh import BVHInvariantError, BVHNode
from .hittable import EmptyHittable, Hittable, HitRecord
from .planar import Disk, Planar, Quad, Triangle, box
from .sphere import Sphere
from .transform import Rotation, Translation
from .world import HittableList

__all__ = [
    "BVHInvariantError",
    "BVHNode",
    "EmptyHittable",
    "Hittable",
    "HitRecord",
    "Disk",
    "Planar",
    "Quad",
    "Triangle",
    "box",
    "Sphere",
    "Rotation",
    "Translation",
    "HittableList",
]

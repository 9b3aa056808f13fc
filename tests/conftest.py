"""Pytest configuration for pathtracer tests.

Shared fixtures: a seeded random generator, common materials, and a helper
for building hit records without going through a primitive.
"""

import numpy as np
import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.lambertian import Lambertian


@pytest.fixture
def rng():
    """Fresh generator with a fixed seed for every test."""
    return np.random.default_rng(12345)


@pytest.fixture
def gray():
    return Lambertian(Color(0.5, 0.5, 0.5))


@pytest.fixture
def make_hit():
    """Build a HitRecord at the origin for an incoming direction and outward normal."""

    def _make_hit(direction: Vector3, outward_normal: Vector3, material=None,
                  p: Vector3 = None, u: float = 0.0, v: float = 0.0):
        origin = p if p is not None else Vector3(0.0, 0.0, 0.0)
        ray = Ray(origin - direction, direction)
        rec = HitRecord.from_ray(ray, 1.0, outward_normal.normalize(), material, u, v)
        return ray, rec

    return _make_hit

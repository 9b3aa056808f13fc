# core/utils.py
import math

import numpy as np

from pathtracer.core.vector import Vector3


def random_in_unit_sphere(rng: np.random.Generator) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        x, y, z = rng.uniform(-1.0, 1.0, 3)
        p = Vector3(float(x), float(y), float(z))
        if p.dot(p) < 1.0:
            return p

def random_unit_vector(rng: np.random.Generator) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    while True:
        p = random_in_unit_sphere(rng)
        # Points too close to the center lose precision when normalized.
        if p.length_squared() > 1e-160:
            return p.normalize()

def random_in_unit_disk(rng: np.random.Generator) -> Vector3:
    """
    Returns a random point inside the unit disk on the z=0 plane.
    """
    while True:
        x, y = rng.uniform(-1.0, 1.0, 2)
        p = Vector3(float(x), float(y), 0.0)
        if p.dot(p) < 1.0:
            return p

def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0

def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)

def refract(uv: Vector3, n: Vector3, etai_over_etat: float) -> Vector3:
    """
    Refracts the unit vector uv through a surface with unit normal n
    (Snell's law, split into perpendicular and parallel parts).
    """
    cos_theta = min(-uv.dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * etai_over_etat
    r_out_parallel = n * (-math.sqrt(abs(1.0 - r_out_perp.length_squared())))
    return r_out_perp + r_out_parallel

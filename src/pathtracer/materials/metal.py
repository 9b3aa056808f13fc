# materials/metal.py
from typing import Optional, Union

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_sphere, reflect
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, Scattered, as_texture
from pathtracer.materials.textures import Texture

class Metal(Material):
    """
    Metal material with reflective properties and optional texture support.
    """
    def __init__(self, albedo: Union[Vector3, Texture], fuzz: float = 0.0):
        super().__init__()
        self.texture = as_texture(albedo)
        self.fuzz = min(max(fuzz, 0.0), 1.0)

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: np.random.Generator) -> Optional[Scattered]:
        reflected = reflect(ray_in.direction.normalize(), rec.normal)
        if self.fuzz > 0:
            reflected = reflected + random_in_unit_sphere(rng) * self.fuzz

        if reflected.dot(rec.normal) > 0:
            return Scattered(self.get_texture_color(rec), Ray(rec.p, reflected))

        return None  # Absorb the ray if it does not scatter forward

    def __repr__(self) -> str:
        return f"Metal({self.texture!r}, fuzz={self.fuzz})"

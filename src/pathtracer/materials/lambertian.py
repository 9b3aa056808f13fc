# materials/lambertian.py
from typing import Optional, Union

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_sphere
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, Scattered, as_texture
from pathtracer.materials.textures import Texture

class Lambertian(Material):
    """
    Lambertian diffuse material with optional texture support.
    """

    def __init__(self, albedo: Union[Vector3, Texture]):
        super().__init__()
        # Store either a solid color or a texture.
        self.texture = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: np.random.Generator) -> Optional[Scattered]:
        """
        Scatter a ray according to a Lambertian reflection model.
        """
        # Pick a random scatter direction by adding a random vector to the normal.
        scatter_direction = rec.normal + random_in_unit_sphere(rng)

        # If scatter_direction is degenerate (very small), just use the normal.
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        attenuation = self.get_texture_color(rec)
        return Scattered(attenuation, Ray(rec.p, scatter_direction))

    def __repr__(self) -> str:
        return f"Lambertian({self.texture!r})"

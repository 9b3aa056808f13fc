# materials/dielectric.py
import math
from typing import Optional

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.utils import reflect, refract
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, Scattered

class Dielectric(Material):
    """
    Clear refractive material (glass, water). Never tints the ray.
    """
    def __init__(self, ref_idx: float):
        super().__init__()
        if ref_idx <= 0:
            raise ValueError(f"Refractive index must be positive, got {ref_idx}")
        self.ref_idx = ref_idx

    @staticmethod
    def reflectance(cos_theta: float, refraction_ratio: float) -> float:
        """
        Schlick's approximation of the Fresnel reflectance.
        """
        r0 = (1.0 - refraction_ratio) / (1.0 + refraction_ratio)
        r0 = r0 * r0
        return r0 + (1.0 - r0) * math.pow((1.0 - cos_theta), 5)

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: np.random.Generator) -> Optional[Scattered]:
        attenuation = Color(1.0, 1.0, 1.0)  # Glass doesn't absorb light

        # Determine if we're entering or exiting the material
        refraction_ratio = 1.0 / self.ref_idx if rec.front_face else self.ref_idx

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = refraction_ratio * sin_theta > 1.0
        if cannot_refract or self.reflectance(cos_theta, refraction_ratio) > rng.random():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, refraction_ratio)

        return Scattered(attenuation, Ray(rec.p, direction))

    def __repr__(self) -> str:
        return f"Dielectric({self.ref_idx})"

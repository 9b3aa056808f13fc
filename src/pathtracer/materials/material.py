# materials/material.py
from typing import NamedTuple, Optional, Union

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.textures import SolidTexture, Texture


class Scattered(NamedTuple):
    """
    Outgoing ray of a scatter event and the color it is filtered by.
    """
    attenuation: Color
    ray: Ray


class Material:
    """
    Abstract material class. Subclasses must implement scatter().
    Materials are read-only once built and may be shared by any number of
    primitives.
    """
    def __init__(self):
        self.texture = None

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: np.random.Generator) -> Optional[Scattered]:
        """
        Computes the scattered ray and attenuation.
        Returns None if the ray is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

    def get_texture_color(self, rec: HitRecord) -> Optional[Color]:
        """
        Get the color from the texture at the hit's surface coordinates.
        If no texture is set, returns None.
        """
        if self.texture is None:
            return None
        return self.texture.value(rec.u, rec.v, rec.p)


class NoMaterial(Material):
    """
    Absorbs every ray.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: np.random.Generator) -> Optional[Scattered]:
        return None

    def __repr__(self) -> str:
        return "NoMaterial()"


def as_texture(albedo: Union[Vector3, Texture]) -> Texture:
    if isinstance(albedo, Texture):
        return albedo
    return SolidTexture(albedo)

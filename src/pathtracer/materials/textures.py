# materials/textures.py
import logging
import math
from typing import Optional, Union

import numpy as np

from pathtracer.core.vector import Color, Vector3
from pathtracer.materials.texture_loader import load_image

logger = logging.getLogger(__name__)

WHITE = Color(1.0, 1.0, 1.0)

class Texture:
    """Base class for all textures."""
    def value(self, u: float, v: float, p: Vector3) -> Color:
        """Color at surface coordinates (u, v) and world-space point p."""
        raise NotImplementedError("value() must be implemented by texture subclasses.")

class SolidTexture(Texture):
    """A solid color texture."""
    def __init__(self, color: Color):
        self.color = color

    def value(self, u: float, v: float, p: Vector3) -> Color:
        return self.color

    def __repr__(self) -> str:
        return f"SolidTexture({self.color})"

def _as_texture(c: Union[Color, Texture]) -> Texture:
    return c if isinstance(c, Texture) else SolidTexture(c)

class CheckerTexture(Texture):
    """A checker pattern in surface (u, v) space, scale cells per unit."""
    def __init__(self, scale: float, even: Union[Color, Texture], odd: Union[Color, Texture]):
        self.scale = scale
        self.even = _as_texture(even)
        self.odd = _as_texture(odd)

    def value(self, u: float, v: float, p: Vector3) -> Color:
        x = math.floor(u * self.scale)
        y = math.floor(v * self.scale)
        is_even = (x + y) % 2 == 0
        return self.even.value(u, v, p) if is_even else self.odd.value(u, v, p)

class SpatialCheckerTexture(Texture):
    """A 3D checker pattern in world space; each cell is scale units wide."""
    def __init__(self, scale: float, even: Union[Color, Texture], odd: Union[Color, Texture]):
        if scale <= 0:
            raise ValueError(f"Checker scale must be positive, got {scale}")
        self.inv_scale = 1.0 / scale
        self.even = _as_texture(even)
        self.odd = _as_texture(odd)

    def value(self, u: float, v: float, p: Vector3) -> Color:
        x = math.floor(self.inv_scale * p.x)
        y = math.floor(self.inv_scale * p.y)
        z = math.floor(self.inv_scale * p.z)
        is_even = (x + y + z) % 2 == 0
        return self.even.value(u, v, p) if is_even else self.odd.value(u, v, p)

class ImageTexture(Texture):
    """
    A texture from an image file, multiplied by a tint.

    When the file cannot be read the texture falls back to the plain tint
    instead of failing the render.
    """
    def __init__(self, image_path: str, tint: Optional[Color] = None, scale: float = 1.0):
        self.image_path = image_path
        self.tint = tint if tint is not None else WHITE
        self.scale = scale
        self.data: Optional[np.ndarray] = None
        try:
            self.data = load_image(image_path)
        except (FileNotFoundError, ValueError) as e:
            logger.warning("Using fallback tint %s for texture %s: %s", self.tint, image_path, e)
        if self.data is not None:
            self.height, self.width = self.data.shape[:2]
        else:
            self.height = self.width = 0

    def value(self, u: float, v: float, p: Vector3) -> Color:
        if self.data is None:
            return self.tint

        # Handle texture wrapping
        u = (u * self.scale) % 1.0
        v = 1.0 - ((v * self.scale) % 1.0)  # Image rows run top to bottom

        # Convert to pixel coordinates
        x = min(int(u * self.width), self.width - 1)
        y = min(int(v * self.height), self.height - 1)

        r, g, b = self.data[y, x]
        return Color(float(r), float(g), float(b)) * self.tint

    def __repr__(self) -> str:
        return f"ImageTexture({self.image_path!r}, tint={self.tint})"

# materials/presets.py
from pathtracer.core.vector import Color
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.textures import CheckerTexture, SpatialCheckerTexture

class MetalPresets:
    """Predefined metal materials."""

    @staticmethod
    def gold() -> Metal:
        return Metal(Color(1.0, 0.78, 0.34), fuzz=0.1)

    @staticmethod
    def silver() -> Metal:
        return Metal(Color(0.95, 0.93, 0.88), fuzz=0.05)

    @staticmethod
    def copper() -> Metal:
        return Metal(Color(0.95, 0.64, 0.54), fuzz=0.1)

    @staticmethod
    def mirror() -> Metal:
        return Metal(Color(0.9, 0.9, 0.9), fuzz=0.0)

    @staticmethod
    def brushed_metal() -> Metal:
        return Metal(Color(0.8, 0.8, 0.8), fuzz=0.3)

class DielectricPresets:
    """Predefined dielectric materials with realistic refractive indices."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.5)

    @staticmethod
    def water() -> Dielectric:
        return Dielectric(1.33)

    @staticmethod
    def diamond() -> Dielectric:
        return Dielectric(2.42)

    @staticmethod
    def air_bubble() -> Dielectric:
        # Air inside water: the ratio of the two indices.
        return Dielectric(1.00 / 1.33)

class ColorPresets:
    """Common color presets for materials."""

    RED = Color(0.9, 0.2, 0.2)
    ORANGE = Color(0.9, 0.6, 0.1)
    YELLOW = Color(0.8, 0.8, 0.0)

    BLUE = Color(0.1, 0.2, 0.5)
    GREEN = Color(0.2, 0.3, 0.1)

    WHITE = Color(0.9, 0.9, 0.9)
    GRAY = Color(0.5, 0.5, 0.5)
    BLACK = Color(0.1, 0.1, 0.1)

    @staticmethod
    def matte(color: Color) -> Lambertian:
        """Create a matte material with the given color."""
        return Lambertian(color)

class TexturePresets:
    """Predefined texture presets."""

    @staticmethod
    def checkerboard(color1: Color = None, color2: Color = None, scale: float = 10.0) -> CheckerTexture:
        """UV checkerboard with default or custom colors."""
        if color1 is None:
            color1 = ColorPresets.GREEN
        if color2 is None:
            color2 = ColorPresets.WHITE
        return CheckerTexture(scale, color1, color2)

    @staticmethod
    def floor_tiles(color1: Color = None, color2: Color = None, size: float = 0.32) -> SpatialCheckerTexture:
        """World-space checkerboard, size units per tile."""
        if color1 is None:
            color1 = ColorPresets.GREEN
        if color2 is None:
            color2 = ColorPresets.WHITE
        return SpatialCheckerTexture(size, color1, color2)

# camera/camera.py
import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.utils import degrees_to_radians, random_in_unit_disk
from pathtracer.core.vector import Vector3


@dataclass(frozen=True)
class CameraParams:
    """
    User-facing camera settings. Every field has a default, so callers only
    name what they want to change; use dataclasses.replace() to derive
    variants.

    Attributes:
        aspect_ratio: Width over height, used when image_height is not given.
        image_width: Rendered image width in pixels.
        image_height: Optional explicit height; derived from aspect_ratio if None.
        samples_per_pixel: Random rays averaged per pixel.
        max_depth: Maximum number of bounces per path.
        fov_degrees: Vertical field of view in degrees.
        look_from: Camera position.
        look_at: Point the camera looks at.
        up: World up vector; only its component orthogonal to the view matters.
        focus_angle_degrees: Cone angle in degrees of rays through each pixel
            (0 disables depth of field).
        focus_distance: Distance from look_from to the plane of perfect focus.
        seed: Seed of the per-pixel sampling streams.
    """
    aspect_ratio: float = 16.0 / 9.0
    image_width: int = 400
    image_height: Optional[int] = None
    samples_per_pixel: int = 100
    max_depth: int = 50
    fov_degrees: float = 90.0
    look_from: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, 0.0))
    look_at: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, -1.0))
    up: Vector3 = field(default_factory=lambda: Vector3(0.0, 1.0, 0.0))
    focus_angle_degrees: float = 0.0
    focus_distance: float = 10.0
    seed: int = 0

    def __post_init__(self):
        if self.image_width < 1:
            raise ValueError(f"image_width must be at least 1, got {self.image_width}")
        if self.image_height is not None and self.image_height < 1:
            raise ValueError(f"image_height must be at least 1, got {self.image_height}")
        if self.aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth cannot be negative, got {self.max_depth}")
        if not 0.0 < self.fov_degrees < 180.0:
            raise ValueError(f"fov_degrees must be between 0 and 180, got {self.fov_degrees}")
        if self.focus_angle_degrees < 0:
            raise ValueError(f"focus_angle_degrees cannot be negative, got {self.focus_angle_degrees}")
        if self.focus_distance <= 0:
            raise ValueError(f"focus_distance must be positive, got {self.focus_distance}")

    def resolved_height(self) -> int:
        if self.image_height is not None:
            return self.image_height
        return max(1, int(self.image_width / self.aspect_ratio))


class Camera:
    """
    Derives the viewport from CameraParams once and generates sample rays.
    """
    def __init__(self, params: Optional[CameraParams] = None):
        self.params = params if params is not None else CameraParams()
        self.update_camera()

    @property
    def image_width(self) -> int:
        return self.params.image_width

    @property
    def samples_per_pixel(self) -> int:
        return self.params.samples_per_pixel

    @property
    def max_depth(self) -> int:
        return self.params.max_depth

    def update_camera(self):
        """Computes the camera's basis vectors and viewport."""
        params = self.params
        self.image_height = params.resolved_height()
        self.center = params.look_from

        # Compute viewport dimensions based on fov, scaled to the focus plane
        theta = degrees_to_radians(params.fov_degrees)
        h = math.tan(theta / 2)
        self.viewport_height = 2.0 * h * params.focus_distance
        self.viewport_width = self.viewport_height * (params.image_width / self.image_height)

        # Orthonormal basis: w points backwards, u right, v up
        view = params.look_from - params.look_at
        if view.near_zero():
            raise ValueError("look_from and look_at must be different points")
        self.w = view.normalize()
        right = params.up.cross(self.w)
        if right.near_zero():
            raise ValueError("up vector must not be parallel to the view direction")
        self.u = right.normalize()
        self.v = self.w.cross(self.u)

        # Viewport edges; vertical runs down the image rows
        viewport_u = self.u * self.viewport_width
        viewport_v = -self.v * self.viewport_height

        self.pixel_delta_u = viewport_u / params.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        viewport_upper_left = (self.center -
                               self.w * params.focus_distance -
                               viewport_u / 2 -
                               viewport_v / 2)
        self.pixel00_loc = viewport_upper_left + (self.pixel_delta_u + self.pixel_delta_v) * 0.5

        defocus_radius = params.focus_distance * math.tan(degrees_to_radians(params.focus_angle_degrees / 2))
        self.defocus_disk_u = self.u * defocus_radius
        self.defocus_disk_v = self.v * defocus_radius

    def pixel_sample_square(self, rng: np.random.Generator) -> Vector3:
        """Random offset within the square around a pixel center."""
        px, py = rng.random(2) - 0.5
        return self.pixel_delta_u * float(px) + self.pixel_delta_v * float(py)

    def defocus_disk_sample(self, rng: np.random.Generator) -> Vector3:
        p = random_in_unit_disk(rng)
        return self.center + self.defocus_disk_u * p.x + self.defocus_disk_v * p.y

    def get_ray(self, i: int, j: int, rng: np.random.Generator) -> Ray:
        """
        Random sample ray through pixel column i, row j. With depth of field
        enabled the ray starts on the defocus disk instead of the center.
        """
        pixel_center = self.pixel00_loc + self.pixel_delta_u * i + self.pixel_delta_v * j
        pixel_sample = pixel_center + self.pixel_sample_square(rng)

        if self.params.focus_angle_degrees <= 0:
            ray_origin = self.center
        else:
            ray_origin = self.defocus_disk_sample(rng)
        return Ray(ray_origin, pixel_sample - ray_origin)

    def __repr__(self) -> str:
        return (f"Camera({self.image_width}x{self.image_height}, "
                f"spp={self.samples_per_pixel}, depth={self.max_depth}, "
                f"from={self.params.look_from}, at={self.params.look_at})")

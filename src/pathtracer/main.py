# main.py
import logging
import os
from dataclasses import replace

import numpy as np
from PIL import Image

from pathtracer.camera.camera import Camera, CameraParams
from pathtracer.core.vector import Color, Vector3
from pathtracer.geometry.planar import Disk, Quad, Triangle, box
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.transform import Rotation, Translation
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.presets import ColorPresets, DielectricPresets, MetalPresets, TexturePresets
from pathtracer.materials.textures import ImageTexture
from pathtracer.renderer.raytracer import Renderer
from pathtracer.renderer.tone_mapping import to_rgb8

logger = logging.getLogger(__name__)


def three_spheres_scene():
    """Blue diffuse, fuzzy metal and hollow glass spheres on a yellow ground."""
    material_ground = Lambertian(ColorPresets.YELLOW)
    material_center = Lambertian(ColorPresets.BLUE)
    material_metal = Metal(Color(0.8, 0.6, 0.2), fuzz=0.1)
    material_glass = Dielectric(1.5)

    world = HittableList()
    world.add(Sphere(Vector3(0.0, -100.5, -1.0), 100.0, material_ground))
    world.add(Sphere(Vector3(0.0, 0.0, -1.2), 0.5, material_center))
    world.add(Sphere(Vector3(-1.0, 0.0, -1.0), 0.5, material_glass))
    # Negative radius: inner surface of a hollow glass bubble
    world.add(Sphere(Vector3(-1.0, 0.0, -1.0), -0.4, material_glass))
    world.add(Sphere(Vector3(1.0, 0.0, -1.0), 0.5, material_metal))

    params = CameraParams(
        image_width=400,
        samples_per_pixel=50,
        max_depth=50,
        fov_degrees=20.0,
        look_from=Vector3(-2.0, 2.0, 1.0),
        look_at=Vector3(0.0, 0.0, -1.0),
        focus_angle_degrees=2.0,
        focus_distance=3.4,
    )
    return world, params


def shapes_scene():
    """Every primitive kind, including transformed boxes, on a tiled floor."""
    floor = Lambertian(TexturePresets.floor_tiles())
    white = Lambertian(ColorPresets.WHITE)

    world = HittableList()
    world.add(Quad(Vector3(-5.0, 0.0, -5.0), Vector3(10.0, 0.0, 0.0), Vector3(0.0, 0.0, 10.0), floor))
    world.add(Sphere(Vector3(-1.5, 0.5, 0.0), 0.5, MetalPresets.gold()))
    world.add(Sphere(Vector3(0.0, 0.5, 1.0), 0.5, DielectricPresets.glass()))
    world.add(Disk(Vector3(1.5, 0.6, 0.0), Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0), 0.5,
                   Lambertian(TexturePresets.checkerboard())))
    world.add(Triangle(Vector3(-0.5, 0.0, -1.5), Vector3(1.0, 0.0, 0.0), Vector3(0.5, 1.0, 0.0),
                       Lambertian(ColorPresets.RED)))
    cube = box(Vector3(0.0, 0.0, 0.0), Vector3(0.6, 0.6, 0.6), white)
    world.add(Translation(Rotation(cube.build_bvh(), "y", 30.0), Vector3(0.8, 0.0, -2.0)))

    params = CameraParams(
        image_width=400,
        samples_per_pixel=50,
        fov_degrees=40.0,
        look_from=Vector3(0.0, 2.0, 5.0),
        look_at=Vector3(0.0, 0.4, 0.0),
    )
    return world, params


def earth_scene(texture_path: str = "assets/earthmap.jpg"):
    """Two image-textured spheres; a missing image shows as the cyan tint."""
    earth = Lambertian(ImageTexture(texture_path, tint=Color(0.0, 1.0, 1.0)))

    world = HittableList()
    world.add(Sphere(Vector3(0.0, -10.0, 0.0), 10.0, earth))
    world.add(Sphere(Vector3(0.0, 10.0, 0.0), 10.0, earth))

    params = CameraParams(
        samples_per_pixel=100,
        fov_degrees=20.0,
        look_from=Vector3(13.0, 2.0, 3.0),
        look_at=Vector3(0.0, 0.0, 0.0),
    )
    return world, params


SCENES = {
    "three_spheres": three_spheres_scene,
    "shapes": shapes_scene,
    "earth": earth_scene,
}


def save_image(image: np.ndarray, path: str):
    """Gamma correct a linear buffer and write it with Pillow."""
    Image.fromarray(to_rgb8(image)).save(path)
    logger.info("Image saved to %s", path)


def render_scene(name: str, output_path: str, workers: int = 1, **overrides) -> np.ndarray:
    world, params = SCENES[name]()
    if overrides:
        params = replace(params, **overrides)

    # Axis choice for the BVH uses the same seed as pixel sampling
    root = world.build_bvh(np.random.default_rng(params.seed))
    logger.info("Scene %r: %d objects", name, len(world))

    camera = Camera(params)
    logger.debug("%r", camera)
    image = Renderer(camera, workers=workers).render(root)
    save_image(image, output_path)
    return image


def main():
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    workers = os.cpu_count() or 1
    for name in SCENES:
        render_scene(name, f"{name}.png", workers=workers)


if __name__ == "__main__":
    main()

# renderer/raytracer.py
import logging
import math
import time
from concurrent.futures import ProcessPoolExecutor
from typing import Optional

import numpy as np

from pathtracer.camera.camera import Camera
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import Hittable

logger = logging.getLogger(__name__)

# Lower bound on hit distance; keeps a bounced ray from re-hitting its origin.
T_MIN = 0.001

BLACK = Color(0.0, 0.0, 0.0)
SKY_WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)


def background(ray: Ray) -> Color:
    """
    Vertical gradient from white at the horizon to light blue overhead.
    """
    unit_direction = ray.direction.normalize()
    a = 0.5 * (unit_direction.y + 1.0)
    return SKY_WHITE * (1.0 - a) + SKY_BLUE * a


def ray_color(ray: Ray, world: Hittable, depth: int, rng: np.random.Generator) -> Color:
    """
    Returns the color seen along the ray. Each hit scatters the ray and scales the
    running throughput by the material attenuation, for at most 'depth' bounces.
    A path that is absorbed or runs out of bounces contributes black.
    """
    throughput = Color(1.0, 1.0, 1.0)
    for _ in range(depth):
        rec = world.hit(ray, Interval(T_MIN, math.inf))
        if rec is None:
            return throughput * background(ray)

        scattered = rec.material.scatter(ray, rec, rng)
        if scattered is None:
            return BLACK
        throughput = throughput * scattered.attenuation
        ray = scattered.ray
    return BLACK


def row_rng(seed: int, row: int) -> np.random.Generator:
    """
    Independent generator for one image row. Equivalent to child `row` of
    SeedSequence(seed).spawn(), so results do not depend on how rows are
    split between workers.
    """
    return np.random.default_rng(np.random.SeedSequence(seed, spawn_key=(row,)))


def render_rows(camera: Camera, world: Hittable, row_start: int, row_end: int) -> np.ndarray:
    """
    Renders rows [row_start, row_end) and returns them as a
    (rows, width, 3) float64 array of averaged linear colors.
    """
    width = camera.image_width
    spp = camera.samples_per_pixel
    max_depth = camera.max_depth
    seed = camera.params.seed
    out = np.zeros((row_end - row_start, width, 3), dtype=np.float64)

    for j in range(row_start, row_end):
        rng = row_rng(seed, j)
        for i in range(width):
            r = g = b = 0.0
            for _ in range(spp):
                c = ray_color(camera.get_ray(i, j, rng), world, max_depth, rng)
                r += c.x
                g += c.y
                b += c.z
            out[j - row_start, i] = (r / spp, g / spp, b / spp)

    return np.clip(out, 0.0, 1.0, out=out)


# Scene state of a worker process, installed once by _init_worker.
_worker_scene = None


def _init_worker(camera: Camera, world: Hittable):
    global _worker_scene
    _worker_scene = (camera, world)


def _render_chunk(row_start: int, row_end: int):
    camera, world = _worker_scene
    return row_start, render_rows(camera, world, row_start, row_end)


class Renderer:
    """
    Produces a (height, width, 3) buffer of linear RGB in [0, 1], row-major
    with row 0 at the top of the image.

    With workers > 1 rows are split into chunks rendered by separate
    processes. Each chunk writes a disjoint slice of the output, and every
    row draws from its own seeded stream, so the image is identical for any
    worker count.
    """
    def __init__(self, camera: Camera, workers: int = 1, rows_per_chunk: Optional[int] = None):
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.camera = camera
        self.workers = workers
        self.rows_per_chunk = rows_per_chunk

    def _chunks(self):
        height = self.camera.image_height
        # 4 chunks per worker for load balancing
        size = self.rows_per_chunk or max(1, height // (self.workers * 4))
        for start in range(0, height, size):
            yield start, min(start + size, height)

    def render(self, world: Hittable) -> np.ndarray:
        camera = self.camera
        height = camera.image_height
        width = camera.image_width
        logger.info("Rendering %dx%d, %d samples/pixel, max depth %d, %d worker(s)",
                    width, height, camera.samples_per_pixel, camera.max_depth, self.workers)
        start_time = time.perf_counter()

        image = np.zeros((height, width, 3), dtype=np.float64)
        if self.workers == 1:
            for row_start, row_end in self._chunks():
                image[row_start:row_end] = render_rows(camera, world, row_start, row_end)
                logger.debug("Rows %d-%d done", row_start, row_end - 1)
        else:
            with ProcessPoolExecutor(max_workers=self.workers,
                                     initializer=_init_worker,
                                     initargs=(camera, world)) as pool:
                futures = [pool.submit(_render_chunk, s, e) for s, e in self._chunks()]
                for future in futures:
                    row_start, rows = future.result()
                    image[row_start:row_start + rows.shape[0]] = rows
                    logger.debug("Rows %d-%d done", row_start, row_start + rows.shape[0] - 1)

        logger.info("Render finished in %.2fs", time.perf_counter() - start_time)
        return image

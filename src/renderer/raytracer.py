# renderer/raytracer.py
import logging
import os
import random
from dataclasses import dataclass
from multiprocessing import Pool
from typing import Optional, Tuple
import numpy as np
from core.utils import sample_square
from core.vector import Vector3
from camera.camera import Camera
from materials.material import BLACK
from renderer.integrator import ray_color

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class RenderSettings:
    """
    Sampling options for one render.

    workers=None uses every CPU; workers=1 renders in the calling process.
    The same seed always produces the same image, whatever the worker count.
    """
    samples_per_pixel: int = 10
    max_depth: int = 10
    background: Vector3 = BLACK
    seed: int = 0
    workers: Optional[int] = None

    def __post_init__(self):
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")
        if self.seed < 0:
            raise ValueError(f"seed must not be negative, got {self.seed}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

    def resolved_workers(self) -> int:
        return self.workers or os.cpu_count() or 1

def pixel_rng(seed: int, index: int) -> random.Random:
    """
    Independent random stream for one pixel, derived from the global seed.
    """
    state = np.random.SeedSequence([seed, index]).generate_state(2)
    return random.Random((int(state[0]) << 32) | int(state[1]))

def render_pixel(world, camera: Camera, settings: RenderSettings, index: int) -> Vector3:
    """
    Average of samples_per_pixel jittered paths through pixel number index
    (row-major).
    """
    rng = pixel_rng(settings.seed, index)
    row, col = divmod(index, camera.image_width)
    total = BLACK
    for _ in range(settings.samples_per_pixel):
        ray = camera.get_ray(col, row, sample_square(rng), rng)
        total = total + ray_color(ray, world, settings.max_depth, settings.background, rng)
    return total / settings.samples_per_pixel

# Per-process scene, installed once by the pool initializer.
_worker_scene = None

def _init_worker(world, camera: Camera, settings: RenderSettings) -> None:
    global _worker_scene
    _worker_scene = (world, camera, settings)

def _render_pixel_task(index: int) -> Tuple[int, Tuple[float, float, float]]:
    world, camera, settings = _worker_scene
    color = render_pixel(world, camera, settings, index)
    return index, (color.x, color.y, color.z)

class Renderer:
    """
    Monte Carlo renderer. Every pixel is an independent task; tasks are
    handed out dynamically to a process pool and each result is written to
    its own slot of the accumulation buffer.
    """
    def __init__(self, camera: Camera, settings: Optional[RenderSettings] = None):
        self.camera = camera
        self.settings = settings or RenderSettings()
        self.width = camera.image_width
        self.height = camera.image_height

    def render(self, world) -> np.ndarray:
        """
        Render world and return the linear (height, width, 3) float64 image.
        """
        pixel_count = self.width * self.height
        accumulation_buffer = np.zeros((pixel_count, 3), dtype=np.float64)
        workers = min(self.settings.resolved_workers(), pixel_count)

        logger.info("rendering %dx%d, %d samples per pixel, max depth %d, %d worker(s)",
                    self.width, self.height, self.settings.samples_per_pixel,
                    self.settings.max_depth, workers)

        report_every = max(1, pixel_count // 10)
        done = 0
        for index, color in self._pixels(world, workers, pixel_count):
            accumulation_buffer[index] = color
            done += 1
            if done % report_every == 0:
                logger.debug("%d/%d pixels done", done, pixel_count)

        return accumulation_buffer.reshape(self.height, self.width, 3)

    def _pixels(self, world, workers: int, pixel_count: int):
        if workers <= 1:
            for index in range(pixel_count):
                color = render_pixel(world, self.camera, self.settings, index)
                yield index, (color.x, color.y, color.z)
            return

        # Small chunks keep the scheduling dynamic; per-pixel cost varies a lot.
        chunksize = max(1, pixel_count // (workers * 16))
        with Pool(processes=workers, initializer=_init_worker,
                  initargs=(world, self.camera, self.settings)) as pool:
            yield from pool.imap_unordered(_render_pixel_task, range(pixel_count), chunksize)

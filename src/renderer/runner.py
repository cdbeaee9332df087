# renderer/runner.py
import logging
import time
from typing import Iterable, Optional
import numpy as np
from camera.camera import Camera
from geometry.bvh import BVH
from geometry.partition import PartitionBy, SurfaceAreaHeuristic
from geometry.surface import Surface
from renderer.raytracer import Renderer, RenderSettings
from renderer.tone_mapping import to_rgb8

logger = logging.getLogger(__name__)

class RenderRunner:
    """
    Builds the BVH for a scene, renders it, and returns 8-bit pixels.
    Timings of the last run are kept in bvh_seconds, render_seconds and
    total_seconds.
    """
    def __init__(self, camera: Camera, settings: Optional[RenderSettings] = None,
                 partition_by: Optional[PartitionBy] = None):
        self.camera = camera
        self.settings = settings or RenderSettings()
        self.partition_by = partition_by or SurfaceAreaHeuristic.per_surface()
        self.bvh_seconds = 0.0
        self.render_seconds = 0.0
        self.total_seconds = 0.0

    def run(self, surfaces: Iterable[Surface]) -> np.ndarray:
        start_time = time.perf_counter()

        surfaces = list(surfaces)
        world = BVH.build(surfaces, self.partition_by)
        self.bvh_seconds = time.perf_counter() - start_time
        logger.info("BVH over %d surfaces (%s): %d nodes in %.3fs",
                    len(surfaces), self.partition_by, len(world), self.bvh_seconds)

        render_start = time.perf_counter()
        image = Renderer(self.camera, self.settings).render(world)
        self.render_seconds = time.perf_counter() - render_start

        rgb8 = to_rgb8(image)
        self.total_seconds = time.perf_counter() - start_time
        logger.info("Done! Total runtime %.3fs (BVH construction %.3fs, rendering %.3fs)",
                    self.total_seconds, self.bvh_seconds, self.render_seconds)
        return rgb8

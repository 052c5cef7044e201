# renderer/raytracer.py
import logging
import multiprocessing as mp
import random
import sys
import time

import numpy as np
from tqdm import tqdm

from pathtracer.camera.camera import Camera
from pathtracer.config import RenderSettings
from pathtracer.renderer.integrator import ray_color
from pathtracer.renderer.tone_mapping import to_rgb8

logger = logging.getLogger(__name__)

# Renderer installed in each worker process by the pool initializer
_worker_renderer = None


def _init_worker(renderer: "Renderer"):
    global _worker_renderer
    _worker_renderer = renderer


def _render_row_in_worker(row: int):
    return row, _worker_renderer.render_row(row)


class Renderer:
    """
    CPU path tracer over image rows.

    Every row reseeds the module-level random stream from (seed, row), so an
    image is reproducible for a given seed whatever the worker count.
    """
    def __init__(self, scene, camera: Camera, settings: RenderSettings):
        self.scene = scene
        self.camera = camera
        self.settings = settings
        self.width = settings.width
        self.height = settings.height
        self.seed = settings.seed if settings.seed is not None else random.randrange(2 ** 31)

    def _row_seed(self, row: int) -> int:
        return self.seed * 1_000_003 + row

    def render_row(self, row: int) -> np.ndarray:
        """
        Summed sample colors for image row `row` (0 is the top row),
        shape (width, 3).
        """
        random.seed(self._row_seed(row))
        j = self.height - 1 - row
        samples = self.settings.samples_per_pixel
        max_depth = self.settings.max_depth
        u_span = max(self.width - 1, 1)
        v_span = max(self.height - 1, 1)

        colors = np.zeros((self.width, 3), dtype=np.float64)
        for i in range(self.width):
            r = g = b = 0.0
            for _ in range(samples):
                u = (i + random.random()) / u_span
                v = (j + random.random()) / v_span
                color = ray_color(self.camera.get_ray(u, v), self.scene, max_depth)
                r += color.x
                g += color.y
                b += color.z
            colors[i] = (r, g, b)
        return colors

    def _rows(self, progress):
        if self.settings.workers == 1:
            for row in range(self.height):
                yield row, self.render_row(row)
                progress.update()
            return

        with mp.Pool(self.settings.workers, initializer=_init_worker, initargs=(self,)) as pool:
            for row, colors in pool.imap_unordered(_render_row_in_worker, range(self.height)):
                yield row, colors
                progress.update()

    def render(self, show_progress: bool = True) -> np.ndarray:
        """Render the whole image; returns summed colors of shape (height, width, 3)."""
        logger.info("Rendering %dx%d, %d samples per pixel, max depth %d, %d worker(s), seed %d",
                    self.width, self.height, self.settings.samples_per_pixel,
                    self.settings.max_depth, self.settings.workers, self.seed)
        start = time.perf_counter()

        image = np.zeros((self.height, self.width, 3), dtype=np.float64)
        with tqdm(total=self.height, desc="Scanlines", unit="row", file=sys.stderr,
                  disable=not show_progress) as progress:
            for row, colors in self._rows(progress):
                image[row] = colors

        logger.info("Rendering complete in %.1fs", time.perf_counter() - start)
        return image

    def render_rgb8(self, show_progress: bool = True) -> np.ndarray:
        return to_rgb8(self.render(show_progress), self.settings.samples_per_pixel)

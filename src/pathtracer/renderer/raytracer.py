# renderer/raytracer.py
import sys
import time
from multiprocessing import Pool
from typing import Tuple

import numpy as np
from tqdm import tqdm

from pathtracer.config import RenderSettings, validate_world
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import Hittable
from pathtracer.renderer.integrator import ray_to_color
from pathtracer.renderer.sampler import ColorSampler
from pathtracer.renderer.tone_mapping import clamp_color, gamma_correct

# Set by the pool initializer in each render process
_worker_data = {}


def _init_worker(renderer: "Renderer"):
    _worker_data["renderer"] = renderer


def _render_row(task: Tuple[int, np.random.SeedSequence]) -> Tuple[int, np.ndarray]:
    row, seed_seq = task
    renderer = _worker_data["renderer"]
    return row, renderer.render_row(row, np.random.default_rng(seed_seq))


class Renderer:
    """
    Renders a world through a camera into a float image in [0, 1].

    Scanlines are independent: each gets its own random generator spawned
    from the settings' seed, so the picture depends only on the seed and
    not on how many processes render it or in which order rows finish.
    """
    def __init__(self, world: Hittable, camera, settings: RenderSettings, verbose: bool = False):
        settings.validate()
        validate_world(world)
        self.world = world
        self.camera = camera
        self.settings = settings
        self.verbose = verbose
        self.last_render_time = None

    @property
    def width(self) -> int:
        return self.settings.image_width

    @property
    def height(self) -> int:
        return self.settings.image_height

    def log(self, message: str):
        if self.verbose:
            print(message, file=sys.stderr)

    def sample_pixel(self, col: int, row: int, rng: np.random.Generator, sampler: ColorSampler) -> Color:
        """
        Average samples_per_pixel jittered primary rays for one pixel.
        row counts up from the bottom of the picture.
        """
        settings = self.settings
        for _ in range(settings.samples_per_pixel):
            s = (col + rng.random()) / (self.width - 1)
            t = (row + rng.random()) / (self.height - 1)
            ray = self.camera.get_ray(s, t, rng)
            sampler.add(ray_to_color(ray, self.world, settings.max_depth, rng, settings.t_min))
        return sampler.get_and_reset()

    def render_pixel(self, col: int, row: int, rng: np.random.Generator, sampler: ColorSampler) -> Color:
        """
        Mean radiance, gamma corrected and clamped to [0, 1]. In strict mode
        a mean outside [0, 1] raises instead of being clamped.
        """
        mean = self.sample_pixel(col, row, rng, sampler)
        if self.settings.strict and not all(0.0 <= channel <= 1.0 for channel in mean):
            raise ValueError(f"pixel ({col}, {row}) has color {mean!r} outside [0, 1]")
        return clamp_color(gamma_correct(mean, self.settings.gamma))

    def render_row(self, row: int, rng: np.random.Generator) -> np.ndarray:
        """Render one scanline, left to right, as a (width, 3) array."""
        sampler = ColorSampler()
        pixels = np.empty((self.width, 3), dtype=np.float64)
        for col in range(self.width):
            pixels[col] = tuple(self.render_pixel(col, row, rng, sampler))
        return pixels

    def row_seeds(self):
        return np.random.SeedSequence(self.settings.seed).spawn(self.height)

    def render(self) -> np.ndarray:
        """
        Render the full image as a (height, width, 3) array whose first row
        is the top of the picture.
        """
        settings = self.settings
        workers = min(settings.worker_count, self.height)
        self.log("\n=== Rendering ===")
        self.log(f"Resolution: {self.width}x{self.height}")
        self.log(f"Samples per pixel: {settings.samples_per_pixel}")
        self.log(f"Max depth: {settings.max_depth}")
        self.log(f"Workers: {workers}")

        image = np.zeros((self.height, self.width, 3), dtype=np.float64)
        tasks = list(enumerate(self.row_seeds()))
        start = time.perf_counter()

        with tqdm(total=self.height, desc="Rendering", unit="row",
                  file=sys.stderr, disable=not self.verbose) as progress:
            if workers <= 1:
                for row, seed_seq in tasks:
                    image[self.height - 1 - row] = self.render_row(row, np.random.default_rng(seed_seq))
                    progress.update(1)
            else:
                with Pool(processes=workers, initializer=_init_worker, initargs=(self,)) as pool:
                    # Rows finish out of order; place each by its index.
                    for row, pixels in pool.imap_unordered(_render_row, tasks):
                        image[self.height - 1 - row] = pixels
                        progress.update(1)

        self.last_render_time = time.perf_counter() - start
        self.log(f"Rendering time: {self.last_render_time:.2f} seconds")
        return image

"""
Renderer module - the heart of the ray tracer.

Implements:
- The recursive Monte Carlo path integrator (`sample`)
- Jittered anti-aliasing and multi-sample accumulation per pixel
- Multi-threaded tile-based rendering with per-tile random generators
- Gamma-encoded 8-bit RGBA output
"""

from __future__ import annotations
import dataclasses
import logging
import numbers
import os
import platform
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional, Callable, Tuple

import numpy as np
from PIL import Image

from .vec3 import Color
from .ray import Ray
from .camera import Camera
from .shapes import Scene, DEFAULT_EPSILON

logger = logging.getLogger(__name__)

Tile = Tuple[int, int, int, int]


@dataclass(frozen=True)
class RenderSettings:
    """Immutable configuration for a render.

    Attributes:
        width, height: Output resolution in pixels
        samples_per_pixel: Radiance samples traced per camera ray
        aa_samples: Jittered camera rays per pixel
        max_bounces: Paths deeper than this return black
        epsilon: Minimum hit distance, guards against self-intersection
        background_color: Linear radiance returned by rays that escape
        gamma: Display gamma used when encoding 8-bit output
        tile_size: Edge length of the square tiles handed to workers
        num_threads: Worker threads (0 = one per CPU)
        seed: Seed for the random generators (None = fresh entropy)
    """
    width: int = 800
    height: int = 600
    samples_per_pixel: int = 16
    aa_samples: int = 4
    max_bounces: int = 3
    epsilon: float = DEFAULT_EPSILON
    background_color: Color = field(default_factory=lambda: Color(0.9, 0.9, 0.9))
    gamma: float = 2.2
    tile_size: int = 32
    num_threads: int = 0
    seed: Optional[int] = None

    def __post_init__(self):
        for name in ('width', 'height', 'samples_per_pixel', 'aa_samples',
                     'tile_size', 'max_bounces', 'num_threads'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            object.__setattr__(self, name, int(value))
        for name in ('width', 'height', 'samples_per_pixel', 'aa_samples', 'tile_size'):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name} must be at least 1, got {value}")
        if self.max_bounces < 0:
            raise ValueError(f"max_bounces must be non-negative, got {self.max_bounces}")
        if self.num_threads < 0:
            raise ValueError(f"num_threads must be non-negative, got {self.num_threads}")
        if not self.epsilon > 0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        if not self.gamma > 0:
            raise ValueError(f"gamma must be positive, got {self.gamma}")
        if self.num_threads == 0:
            object.__setattr__(self, 'num_threads', os.cpu_count() or 4)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def replace(self, **changes) -> RenderSettings:
        """Return a copy of these settings with some fields changed."""
        return dataclasses.replace(self, **changes)


def sample(
    scene: Scene,
    ray: Ray,
    depth: int = 0,
    settings: Optional[RenderSettings] = None,
    rng: Optional[np.random.Generator] = None,
) -> Color:
    """Estimate the radiance arriving along a ray.

    The ray is intersected with the scene; on a hit the material picks
    a scattered ray, the radiance along it is estimated recursively and
    filtered by the surface texture. There is no emission and no direct
    lighting: every path ends either in the background or in black once
    it goes deeper than `settings.max_bounces`.

    Args:
        scene: The scene to trace against
        ray: The ray to trace
        depth: Number of bounces already taken
        settings: Render configuration (defaults if None)
        rng: Random generator for scattering (fresh one if None)

    Returns:
        Linear radiance along the ray
    """
    if settings is None:
        settings = RenderSettings()
    if rng is None:
        rng = np.random.default_rng()

    if depth > settings.max_bounces:
        return Color(0, 0, 0)

    hit = scene.intersect(ray, settings.epsilon)
    if hit is None:
        return settings.background_color

    material = hit.obj.material
    scattered = material.brdf(hit, rng)
    indirect = sample(scene, scattered, depth + 1, settings, rng)
    return material.texture.sample(hit.uv.x, hit.uv.y) * indirect


def to_rgba(image: np.ndarray, gamma: float = 2.2) -> np.ndarray:
    """Encode a linear image as 8-bit RGBA.

    Args:
        image: Linear color array of shape (height, width, 3)
        gamma: Display gamma; channels are raised to 1 / gamma

    Returns:
        uint8 array of shape (height, width, 4) with alpha 255
    """
    corrected = np.power(np.clip(image, 0.0, None), 1.0 / gamma)
    rgb = np.clip(np.rint(corrected * 255.0), 0, 255).astype(np.uint8)
    alpha = np.full(image.shape[:2] + (1,), 255, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=2)


class Renderer:
    """Frame assembler: turns many noisy path samples into pixels."""

    def __init__(self, settings: Optional[RenderSettings] = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Scene, camera: Camera) -> np.ndarray:
        """Render the scene and return the linear image.

        Row 0 of the returned array is the top of the picture; the
        camera's v = 0 edge lands on the last row.

        Args:
            scene: The scene to render
            camera: The camera to render from

        Returns:
            Linear image as numpy array of shape (height, width, 3)

        Raises:
            ValueError: if an object in the scene has no material
        """
        settings = self.settings
        width = settings.width
        height = settings.height

        for obj in scene:
            if obj.material is None:
                raise ValueError(f"{obj!r} has no material")

        image = np.zeros((height, width, 3), dtype=np.float64)

        tiles = self._generate_tiles(width, height)
        total_tiles = len(tiles)
        seeds = np.random.SeedSequence(settings.seed).spawn(total_tiles)
        completed_tiles = [0]
        lock = threading.Lock()

        logger.info(
            "Rendering %dx%d, %d spp x %d aa, %d bounces, %d tiles on %d threads",
            width, height, settings.samples_per_pixel, settings.aa_samples,
            settings.max_bounces, total_tiles, settings.num_threads,
        )
        start = time.perf_counter()

        def render_tile(job: Tuple[Tile, np.random.SeedSequence]) -> None:
            """Render a single tile into its own slice of the image."""
            (x0, y0, x1, y1), seed = job
            rng = np.random.default_rng(seed)

            for row in range(y0, y1):
                y = height - 1 - row
                for x in range(x0, x1):
                    pixel = self._render_pixel(scene, camera, x, y, rng)
                    image[row, x] = pixel.to_array()

            with lock:
                completed_tiles[0] += 1
                done = completed_tiles[0]
            logger.debug("Tile (%d, %d)-(%d, %d) done [%d/%d]", x0, y0, x1, y1, done, total_tiles)
            if self._progress_callback:
                self._progress_callback(done / total_tiles)

        jobs = list(zip(tiles, seeds))
        if settings.num_threads > 1:
            with ThreadPoolExecutor(max_workers=settings.num_threads) as executor:
                list(executor.map(render_tile, jobs))
        else:
            for job in jobs:
                render_tile(job)

        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return image

    def _render_pixel(
        self, scene: Scene, camera: Camera, x: int, y: int, rng: np.random.Generator
    ) -> Color:
        """Average all samples for pixel (x, y), with y = 0 at the bottom."""
        settings = self.settings
        color = Color(0, 0, 0)

        for _ in range(settings.aa_samples):
            jitter_x = rng.random()
            jitter_y = rng.random()
            u = (x + jitter_x) / settings.width
            v = (y + jitter_y) / settings.height
            ray = camera.get_ray(u, v)
            for _ in range(settings.samples_per_pixel):
                color = color + sample(scene, ray, 0, settings, rng)

        return color / (settings.samples_per_pixel * settings.aa_samples)

    def _generate_tiles(self, width: int, height: int) -> list[Tile]:
        """Generate tiles for parallel rendering.

        Args:
            width: Image width
            height: Image height

        Returns:
            List of tiles as (x0, y0, x1, y1) tuples in output rows
        """
        tile_size = self.settings.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles

    def to_rgba(self, image: np.ndarray) -> np.ndarray:
        """Gamma-encode a linear image into an 8-bit RGBA buffer."""
        return to_rgba(image, self.settings.gamma)

    def render_rgba(self, scene: Scene, camera: Camera) -> np.ndarray:
        """Render straight to a row-major 8-bit RGBA buffer."""
        return self.to_rgba(self.render(scene, camera))

    @staticmethod
    def to_image(rgba: np.ndarray) -> Image.Image:
        """Wrap an RGBA buffer in a Pillow image for the caller."""
        return Image.fromarray(rgba)


def get_platform_info() -> dict:
    """Get information about the current platform.

    Returns:
        Dictionary with platform details
    """
    return {
        'system': platform.system(),
        'machine': platform.machine(),
        'python_version': platform.python_version(),
        'cpu_count': os.cpu_count(),
        'numpy_version': np.__version__,
    }

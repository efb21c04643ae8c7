"""
Renderer module - drives the path tracer over every pixel.

Implements:
- Jittered multi-sample pixel accumulation
- Scanline progress reporting
- Reproducible sampling through a seeded numpy Generator
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Callable
import numpy as np

from .vec3 import Color
from .camera import Camera
from .shapes import Hittable
from .integrator import ray_color, MAX_DEPTH

logger = logging.getLogger(__name__)


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 400
    height: int = 225
    samples_per_pixel: int = 100
    max_depth: int = MAX_DEPTH
    seed: Optional[int] = None

    def __post_init__(self):
        if self.width < 2 or self.height < 2:
            raise ValueError(f"Image must be at least 2x2 pixels, got {self.width}x{self.height}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


class Renderer:
    """Single-threaded path tracing renderer."""

    def __init__(self, settings: RenderSettings = None):
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

    def render(self, scene: Hittable, camera: Camera) -> np.ndarray:
        """Render the scene and return the image as a numpy array.

        Args:
            scene: The scene to render (any Hittable)
            camera: The camera to render from

        Returns:
            Linear image as numpy array of shape (height, width, 3),
            first row at the top. Each pixel is the mean of its samples.
        """
        width = self.settings.width
        height = self.settings.height
        samples = self.settings.samples_per_pixel
        max_depth = self.settings.max_depth
        rng = np.random.default_rng(self.settings.seed)

        image = np.zeros((height, width, 3), dtype=np.float64)

        for row in range(height):
            j = height - 1 - row
            logger.debug("Scanlines remaining: %d", j)

            for i in range(width):
                pixel_color = Color(0, 0, 0)

                for _ in range(samples):
                    u = (i + rng.random()) / (width - 1)
                    v = (j + rng.random()) / (height - 1)

                    ray = camera.get_ray(u, v)
                    pixel_color = pixel_color + ray_color(ray, scene, max_depth, rng)

                image[row, i] = pixel_color.to_array() / samples

            if self._progress_callback:
                self._progress_callback((row + 1) / height)

        logger.info("Rendered %dx%d image at %d samples per pixel", width, height, samples)
        return image

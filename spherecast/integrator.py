"""
Recursive radiance integrator.

Traces a ray through the scene: the nearest hit delegates to its material,
the scattered ray is traced again with one less bounce, and rays that leave
the scene pick up the sky gradient. Attenuation compounds multiplicatively
along the path, and the result stays energy-linear (no gamma).
"""

from __future__ import annotations

import numpy as np

from .vec3 import Color
from .ray import Ray
from .shapes import Hittable

# Minimum hit distance; keeps scattered rays from re-hitting their own surface
T_MIN = 0.001
MAX_DEPTH = 50

BLACK = Color(0.0, 0.0, 0.0)
SKY_HORIZON = Color(1.0, 1.0, 1.0)
SKY_ZENITH = Color(0.5, 0.7, 1.0)


def sky_color(ray: Ray) -> Color:
    """Vertical white-to-blue gradient keyed on the ray direction's y."""
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return SKY_HORIZON * (1.0 - t) + SKY_ZENITH * t


def ray_color(ray: Ray, world: Hittable, depth: int, rng: np.random.Generator) -> Color:
    """Compute the color carried back along a ray.

    Args:
        ray: The ray to trace
        world: The scene to trace against
        depth: Remaining bounces; zero or less returns black
        rng: Random source handed to the materials

    Returns:
        The linear color for this ray
    """
    if depth <= 0:
        return BLACK

    rec = world.hit(ray, T_MIN, float('inf'))
    if rec is None:
        return sky_color(ray)

    if rec.material is None:
        return BLACK

    result = rec.material.scatter(ray, rec, rng)
    if result is None:
        return BLACK

    return result.attenuation * ray_color(result.scattered_ray, world, depth - 1, rng)

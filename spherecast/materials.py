"""
Materials system.

Implements:
- Lambertian diffuse
- Metal (specular reflection with fuzz)
- Absorbing (terminates every path that reaches it)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

import numpy as np

from .vec3 import Vec3, Color
from .ray import Ray

if TYPE_CHECKING:
    from .shapes import HitRecord


@dataclass
class ScatterResult:
    """Result of a material scatter operation."""
    attenuation: Color
    scattered_ray: Ray


class Material(ABC):
    """Abstract base class for materials."""

    @abstractmethod
    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        """Compute the scattered ray and attenuation.

        Args:
            ray_in: The incoming ray
            rec: The hit record produced by the intersection test
            rng: Random source for stochastic sampling

        Returns:
            ScatterResult if ray scatters, None if absorbed
        """
        pass


class Lambertian(Material):
    """Diffuse material with Lambertian (ideal matte) scattering."""

    def __init__(self, albedo: Color):
        """Create a Lambertian material.

        Args:
            albedo: The base color (RGB, each component 0-1)
        """
        self.albedo = albedo

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        scatter_direction = rec.normal + Vec3.random_unit_vector(rng)

        # Catch degenerate scatter direction
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return ScatterResult(
            attenuation=self.albedo,
            scattered_ray=Ray(rec.point, scatter_direction)
        )

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo})"


class Metal(Material):
    """Metallic material with specular reflection."""

    def __init__(self, albedo: Color, fuzz: float = 0.0):
        """Create a metal material.

        Args:
            albedo: The reflection color
            fuzz: Radius of the perturbation applied to the mirror direction
                (0 = mirror). Values above 1 are accepted as given.
        """
        self.albedo = albedo
        self.fuzz = fuzz

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        reflected = ray_in.direction.normalize().reflect(rec.normal)
        scattered = Ray(rec.point, reflected + Vec3.random_in_unit_sphere(rng) * self.fuzz)

        # Only scatter if reflection is in the correct hemisphere
        if scattered.direction.dot(rec.normal) > 0:
            return ScatterResult(
                attenuation=self.albedo,
                scattered_ray=scattered
            )
        return None

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo}, fuzz={self.fuzz})"


class Absorbing(Material):
    """Material that absorbs all incoming light."""

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        return None

    def __repr__(self) -> str:
        return "Absorbing()"

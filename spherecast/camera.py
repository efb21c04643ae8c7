"""
Camera module for generating primary rays.

A pinhole camera positioned with look-at and a vertical field of view.
The defaults place the eye at the origin looking down -Z with a 2-unit
tall viewport one unit away, at a 16:9 aspect ratio.
"""

from __future__ import annotations
import math
from .vec3 import Vec3, Point3
from .ray import Ray


class Camera:
    """A pinhole camera with perspective projection."""

    def __init__(
        self,
        look_from: Point3 = Point3(0, 0, 0),
        look_at: Point3 = Point3(0, 0, -1),
        vup: Vec3 = Vec3(0, 1, 0),
        vfov: float = 90.0,
        aspect_ratio: float = 16.0 / 9.0
    ):
        """Create a camera.

        Args:
            look_from: Camera position in world space
            look_at: Point the camera is looking at
            vup: World up vector (usually (0, 1, 0))
            vfov: Vertical field of view in degrees
            aspect_ratio: Width / Height ratio
        """
        theta = math.radians(vfov)
        h = math.tan(theta / 2)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        # Compute orthonormal camera basis
        self.w = (look_from - look_at).normalize()  # Points backward from camera
        self.u = vup.cross(self.w).normalize()       # Points right
        self.v = self.w.cross(self.u)                # Points up

        self.origin = look_from
        self.horizontal = self.u * viewport_width
        self.vertical = self.v * viewport_height
        self.lower_left_corner = (
            self.origin
            - self.horizontal / 2
            - self.vertical / 2
            - self.w
        )

    def get_ray(self, s: float, t: float) -> Ray:
        """Generate a ray for the given UV coordinates on the image plane.

        Args:
            s: Horizontal coordinate [0, 1] (0 = left, 1 = right)
            t: Vertical coordinate [0, 1] (0 = bottom, 1 = top)

        Returns:
            A ray from the camera through the specified point
        """
        direction = (
            self.lower_left_corner
            + self.horizontal * s
            + self.vertical * t
            - self.origin
        )
        return Ray(self.origin, direction)

    def __repr__(self) -> str:
        return f"Camera(origin={self.origin}, looking_at={self.lower_left_corner + self.horizontal/2 + self.vertical/2})"

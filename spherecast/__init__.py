"""
spherecast - A Python Monte-Carlo path tracer for sphere scenes

Renders scenes built from spheres with:
- Nearest-hit ray/sphere intersection
- Lambertian diffuse and fuzzy metal materials
- Depth-limited recursive radiance integration under a sky gradient
- Reproducible sampling from a seeded random generator
- PPM and PNG output
"""

__version__ = "0.1.0"

from .vec3 import Vec3, Point3, Color, unit_vector
from .ray import Ray
from .shapes import Sphere, HittableList, HitRecord, Hittable
from .materials import Material, ScatterResult, Lambertian, Metal, Absorbing
from .integrator import ray_color, sky_color, T_MIN, MAX_DEPTH
from .camera import Camera
from .renderer import Renderer, RenderSettings
from .image import to_ldr, write_ppm, save_image
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene, default_scene

"""
Scene description language parser.

Supports a YAML (or JSON) scene description format with:
- Camera configuration
- Render settings
- Materials library
- Sphere objects

Example scene file:
```yaml
camera:
  look_from: [0, 0, 0]
  look_at: [0, 0, -1]
  vfov: 90

render:
  width: 400
  height: 225
  samples: 100
  max_depth: 50
  seed: 7

materials:
  ground:
    type: lambertian
    albedo: [0.8, 0.8, 0.0]

  gold:
    type: metal
    albedo: [0.8, 0.6, 0.2]
    fuzz: 0.3

objects:
  - type: sphere
    center: [0, -100.5, -1]
    radius: 100
    material: ground

  - type: sphere
    center: [1, 0, -1]
    radius: 0.5
    material: gold
```
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Tuple, Union

import yaml

from .vec3 import Vec3, Point3, Color
from .camera import Camera
from .shapes import Sphere, HittableList
from .materials import Material, Lambertian, Metal, Absorbing
from .renderer import RenderSettings

logger = logging.getLogger(__name__)


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.objects: HittableList = HittableList()
        self.camera: Optional[Camera] = None
        self.settings: Optional[RenderSettings] = None
        self._camera_fields: Dict[str, Any] = {}

    def parse_file(self, filepath: Union[str, Path]) -> Tuple[HittableList, Camera, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (scene, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()

        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                # YAML is a superset of JSON, so this also covers unknown suffixes
                data = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping: {filepath}")

        result = self.parse_dict(data)
        logger.info("Loaded scene %s with %d objects", path, len(self.objects))
        return result

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[HittableList, Camera, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, camera, settings)
        """
        # Parse materials first (objects reference them)
        if 'materials' in data:
            self._parse_materials(self._require_mapping(data['materials'], 'materials'))

        if 'objects' in data:
            self._parse_objects(data['objects'])

        if 'render' in data:
            self._parse_settings(self._require_mapping(data['render'], 'render'))
        else:
            self.settings = RenderSettings()

        if 'camera' in data:
            self._parse_camera(self._require_mapping(data['camera'], 'camera'))
        self.camera = self.camera_for(self.settings)

        return self.objects, self.camera, self.settings

    def camera_for(self, settings: RenderSettings) -> Camera:
        """Build the scene camera for the given output size.

        The aspect ratio follows `settings` unless the scene file fixed
        `camera.aspect_ratio` explicitly.
        """
        fields = dict(self._camera_fields)
        fields.setdefault('aspect_ratio', settings.aspect_ratio)
        return Camera(**fields)

    @staticmethod
    def _require_mapping(data: Any, section: str) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise SceneParseError(f"'{section}' must be a mapping, got {type(data).__name__}")
        return data

    @staticmethod
    def _parse_float(value: Any, what: str) -> float:
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Cannot parse {what} from: {value!r}") from e

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from various formats."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
            return Vec3(*(self._parse_float(c, 'Vec3 component') for c in data))
        elif isinstance(data, dict):
            return Vec3(
                self._parse_float(data.get('x', 0), 'Vec3 component'),
                self._parse_float(data.get('y', 0), 'Vec3 component'),
                self._parse_float(data.get('z', 0), 'Vec3 component')
            )
        else:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from various formats."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Color must have 3 components, got {len(data)}")
            return Color(*(self._parse_float(c, 'color component') for c in data))
        elif isinstance(data, dict):
            return Color(
                self._parse_float(data.get('r', 0), 'color component'),
                self._parse_float(data.get('g', 0), 'color component'),
                self._parse_float(data.get('b', 0), 'color component')
            )
        elif isinstance(data, str):
            # Handle hex colors
            if data.startswith('#') and len(data) == 7:
                try:
                    r = int(data[1:3], 16) / 255.0
                    g = int(data[3:5], 16) / 255.0
                    b = int(data[5:7], 16) / 255.0
                except ValueError as e:
                    raise SceneParseError(f"Cannot parse color from string: {data}") from e
                return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        else:
            raise SceneParseError(f"Cannot parse Color from: {data}")

    def _parse_material(self, mat_data: Any) -> Material:
        """Build a single material from its description."""
        mat_data = self._require_mapping(mat_data, 'material')
        mat_type = str(mat_data.get('type', 'lambertian')).lower()

        if mat_type == 'lambertian':
            albedo = self._parse_color(mat_data.get('albedo', [0.5, 0.5, 0.5]))
            return Lambertian(albedo)

        elif mat_type == 'metal':
            albedo = self._parse_color(mat_data.get('albedo', [0.8, 0.8, 0.8]))
            fuzz = self._parse_float(mat_data.get('fuzz', 0.0), 'fuzz')
            return Metal(albedo, fuzz)

        elif mat_type == 'absorbing':
            return Absorbing()

        raise SceneParseError(f"Unknown material type: {mat_type}")

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        for name, mat_data in materials_data.items():
            self.materials[name] = self._parse_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Optional[Material]:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            return None
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._parse_material(mat_ref)
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: Any) -> None:
        """Parse objects section."""
        if not isinstance(objects_data, list):
            raise SceneParseError(f"'objects' must be a list, got {type(objects_data).__name__}")

        for obj_data in objects_data:
            obj_data = self._require_mapping(obj_data, 'object')
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            if obj_type != 'sphere':
                raise SceneParseError(f"Unknown object type: {obj_type}")

            material = self._get_material(obj_data.get('material'))
            center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
            radius = self._parse_float(obj_data.get('radius', 1.0), 'radius')
            self.objects.add(Sphere(center, radius, material))

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse camera section."""
        self._camera_fields = {
            'look_from': self._parse_vec3(camera_data.get('look_from', [0, 0, 0])),
            'look_at': self._parse_vec3(camera_data.get('look_at', [0, 0, -1])),
            'vup': self._parse_vec3(camera_data.get('vup', [0, 1, 0])),
            'vfov': self._parse_float(camera_data.get('vfov', 90), 'vfov'),
        }
        if 'aspect_ratio' in camera_data:
            self._camera_fields['aspect_ratio'] = self._parse_float(
                camera_data['aspect_ratio'], 'aspect_ratio'
            )

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse render settings section."""
        seed = settings_data.get('seed')
        try:
            self.settings = RenderSettings(
                width=int(settings_data.get('width', 400)),
                height=int(settings_data.get('height', 225)),
                samples_per_pixel=int(settings_data.get('samples', 100)),
                max_depth=int(settings_data.get('max_depth', 50)),
                seed=int(seed) if seed is not None else None
            )
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Invalid render settings: {e}") from e


def default_scene() -> HittableList:
    """Ground, a diffuse center sphere and two mirror spheres either side."""
    material_ground = Lambertian(Color(0.8, 0.8, 0.0))
    material_center = Lambertian(Color(0.7, 0.3, 0.3))
    material_left = Metal(Color(0.8, 0.8, 0.8), 0.0)
    material_right = Metal(Color(0.8, 0.6, 0.2), 0.0)

    world = HittableList()
    world.add(Sphere(Point3(0.0, -100.5, -1.0), 100.0, material_ground))
    world.add(Sphere(Point3(0.0, 0.0, -1.0), 0.5, material_center))
    world.add(Sphere(Point3(-1.0, 0.0, -1.0), 0.5, material_left))
    world.add(Sphere(Point3(1.0, 0.0, -1.0), 0.5, material_right))
    return world


def load_scene(filepath: Union[str, Path]) -> Tuple[HittableList, Camera, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[HittableList, Camera, RenderSettings]:
    """Convenience function to parse a scene from a dictionary."""
    parser = SceneParser()
    return parser.parse_dict(data)

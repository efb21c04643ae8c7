"""Tests for scene description parsing."""

import json
from pathlib import Path
import pytest

from spherecast.vec3 import Point3, Color
from spherecast.shapes import Sphere, HittableList
from spherecast.materials import Lambertian, Metal, Absorbing
from spherecast.camera import Camera
from spherecast.renderer import RenderSettings
from spherecast.scene_parser import (
    SceneParser, SceneParseError, load_scene, parse_scene, default_scene
)


SCENE = {
    'render': {'width': 40, 'height': 20, 'samples': 4, 'max_depth': 8, 'seed': 5},
    'camera': {'look_from': [0, 0, 0], 'look_at': [0, 0, -1], 'vfov': 90},
    'materials': {
        'ground': {'type': 'lambertian', 'albedo': [0.8, 0.8, 0.0]},
        'mirror': {'type': 'metal', 'albedo': '#cc9933', 'fuzz': 1.5},
    },
    'objects': [
        {'type': 'sphere', 'center': [0, -100.5, -1], 'radius': 100, 'material': 'ground'},
        {'type': 'sphere', 'center': {'x': 1, 'z': -1}, 'radius': 0.5, 'material': 'mirror'},
        {'type': 'sphere', 'center': [-1, 0, -1], 'radius': 0.5, 'material': {'type': 'absorbing'}},
    ],
}


class TestParseDict:
    """Test parsing scene dictionaries."""

    def test_full_scene(self):
        world, camera, settings = parse_scene(SCENE)

        assert isinstance(world, HittableList)
        assert len(world) == 3
        assert isinstance(camera, Camera)
        assert settings == RenderSettings(width=40, height=20, samples_per_pixel=4, max_depth=8, seed=5)

    def test_materials_are_shared(self):
        data = dict(SCENE, objects=[
            {'center': [0, 0, -1], 'radius': 0.5, 'material': 'ground'},
            {'center': [0, 0, -3], 'radius': 0.5, 'material': 'ground'},
        ])
        world, _, _ = parse_scene(data)
        first, second = world
        assert first.material is second.material
        assert isinstance(first.material, Lambertian)

    def test_metal_fuzz_and_hex_color(self):
        world, _, _ = parse_scene(SCENE)
        metal = world.objects[1].material
        assert isinstance(metal, Metal)
        assert metal.fuzz == 1.5
        assert metal.albedo == Color(0.8, 0.6, 0.2)
        assert world.objects[1].center == Point3(1, 0, -1)

    def test_inline_material(self):
        world, _, _ = parse_scene(SCENE)
        assert isinstance(world.objects[2].material, Absorbing)

    def test_defaults(self):
        world, camera, settings = parse_scene({})
        assert len(world) == 0
        assert settings == RenderSettings()
        assert camera.origin == Point3(0, 0, 0)

    def test_camera_uses_render_aspect(self):
        _, camera, _ = parse_scene({'render': {'width': 300, 'height': 100}, 'camera': {}})
        assert abs(camera.horizontal.length() / camera.vertical.length() - 3.0) < 1e-9


class TestCameraFor:
    """Test rebuilding the scene camera for a different output size."""

    def test_follows_new_size(self):
        parser = SceneParser()
        parser.parse_dict({'render': {'width': 400, 'height': 225}, 'camera': {'vfov': 60}})
        camera = parser.camera_for(RenderSettings(width=200, height=200))
        assert abs(camera.horizontal.length() / camera.vertical.length() - 1.0) < 1e-9

    def test_keeps_scene_view(self):
        parser = SceneParser()
        parser.parse_dict({'camera': {'look_from': [1, 2, 3], 'look_at': [1, 2, 0]}})
        camera = parser.camera_for(RenderSettings(width=100, height=50))
        assert camera.origin == Point3(1, 2, 3)

    def test_explicit_aspect_ratio_is_kept(self):
        parser = SceneParser()
        parser.parse_dict({'camera': {'aspect_ratio': 2.0}})
        camera = parser.camera_for(RenderSettings(width=200, height=200))
        assert abs(camera.horizontal.length() / camera.vertical.length() - 2.0) < 1e-9

    def test_without_camera_section(self):
        parser = SceneParser()
        parser.parse_dict({})
        camera = parser.camera_for(RenderSettings(width=300, height=100))
        assert abs(camera.horizontal.length() / camera.vertical.length() - 3.0) < 1e-9


class TestParseErrors:
    """Test error reporting."""

    def test_unknown_material_type(self):
        with pytest.raises(SceneParseError, match="Unknown material type"):
            parse_scene({'materials': {'glass': {'type': 'dielectric'}}})

    def test_unknown_material_reference(self):
        with pytest.raises(SceneParseError, match="Unknown material"):
            parse_scene({'objects': [{'type': 'sphere', 'material': 'missing'}]})

    def test_unknown_object_type(self):
        with pytest.raises(SceneParseError, match="Unknown object type"):
            parse_scene({'objects': [{'type': 'triangle'}]})

    def test_bad_vector(self):
        with pytest.raises(SceneParseError, match="3 components"):
            parse_scene({'objects': [{'type': 'sphere', 'center': [1, 2]}]})

    def test_bad_hex_color(self):
        with pytest.raises(SceneParseError):
            parse_scene({'materials': {'m': {'type': 'lambertian', 'albedo': '#zzzzzz'}}})

    def test_invalid_render_settings(self):
        with pytest.raises(SceneParseError, match="Invalid render settings"):
            parse_scene({'render': {'samples': 0}})

    def test_non_numeric_vector_component(self):
        with pytest.raises(SceneParseError, match="Vec3 component"):
            parse_scene({'objects': [{'type': 'sphere', 'center': ['a', 0, 0]}]})

    def test_non_numeric_radius(self):
        with pytest.raises(SceneParseError, match="radius"):
            parse_scene({'objects': [{'type': 'sphere', 'radius': 'big'}]})

    def test_non_numeric_fuzz(self):
        with pytest.raises(SceneParseError, match="fuzz"):
            parse_scene({'materials': {'m': {'type': 'metal', 'fuzz': 'rough'}}})

    def test_non_numeric_color_component(self):
        with pytest.raises(SceneParseError, match="color component"):
            parse_scene({'materials': {'m': {'type': 'lambertian', 'albedo': [0.5, None, 0.5]}}})

    def test_object_entry_not_mapping(self):
        with pytest.raises(SceneParseError, match="'object' must be a mapping"):
            parse_scene({'objects': ['sphere']})

    def test_objects_not_list(self):
        with pytest.raises(SceneParseError, match="'objects' must be a list"):
            parse_scene({'objects': None})

    def test_materials_not_mapping(self):
        with pytest.raises(SceneParseError, match="'materials' must be a mapping"):
            parse_scene({'materials': ['m']})

    def test_material_entry_not_mapping(self):
        with pytest.raises(SceneParseError, match="'material' must be a mapping"):
            parse_scene({'materials': {'m': 'lambertian'}})

    def test_render_not_mapping(self):
        with pytest.raises(SceneParseError, match="'render' must be a mapping"):
            parse_scene({'render': None})

    def test_camera_not_mapping(self):
        with pytest.raises(SceneParseError, match="'camera' must be a mapping"):
            parse_scene({'camera': [0, 0, 0]})

    def test_non_numeric_render_value(self):
        with pytest.raises(SceneParseError, match="Invalid render settings"):
            parse_scene({'render': {'width': 'wide'}})

    def test_missing_file(self, tmp_path):
        with pytest.raises(SceneParseError, match="not found"):
            load_scene(tmp_path / "nope.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("objects: [unclosed\n")
        with pytest.raises(SceneParseError):
            load_scene(path)

    def test_non_mapping_document(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(SceneParseError, match="mapping"):
            load_scene(path)


class TestLoadScene:
    """Test reading scene files."""

    def test_json_file(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_text(json.dumps(SCENE))
        world, _, settings = load_scene(path)
        assert len(world) == 3
        assert settings.seed == 5

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_text(
            "render:\n"
            "  width: 16\n"
            "  height: 9\n"
            "materials:\n"
            "  red:\n"
            "    type: lambertian\n"
            "    albedo: [0.7, 0.3, 0.3]\n"
            "objects:\n"
            "  - type: sphere\n"
            "    center: [0, 0, -1]\n"
            "    radius: 0.5\n"
            "    material: red\n"
        )
        world, _, settings = SceneParser().parse_file(path)
        assert len(world) == 1
        assert settings.width == 16
        assert world.objects[0].material.albedo == Color(0.7, 0.3, 0.3)


class TestDefaultScene:
    """Test the built-in scene."""

    def test_four_spheres(self):
        world = default_scene()
        assert len(world) == 4
        assert all(isinstance(obj, Sphere) for obj in world)

    def test_materials(self):
        ground, center, left, right = default_scene()
        assert isinstance(ground.material, Lambertian)
        assert isinstance(center.material, Lambertian)
        assert isinstance(left.material, Metal)
        assert isinstance(right.material, Metal)
        assert ground.radius == 100.0

    def test_metals_are_mirrors(self):
        _, _, left, right = default_scene()
        assert left.material.fuzz == 0.0
        assert right.material.fuzz == 0.0
        assert left.material.albedo == Color(0.8, 0.8, 0.8)
        assert right.material.albedo == Color(0.8, 0.6, 0.2)

    def test_matches_scene_file(self):
        scene_file = Path(__file__).resolve().parent.parent / "scenes" / "default.yaml"
        world, _, _ = load_scene(scene_file)
        for parsed, built in zip(world, default_scene()):
            assert parsed.center == built.center
            assert parsed.radius == built.radius
            assert type(parsed.material) is type(built.material)
            assert parsed.material.albedo == built.material.albedo
            if isinstance(built.material, Metal):
                assert parsed.material.fuzz == built.material.fuzz

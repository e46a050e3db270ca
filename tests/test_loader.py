"""Tests for JSON scene loading and serialization."""

import json

import pytest


def _scene_data():
    return {
        "camera": {"point": {"x": 0, "y": 1.8, "z": 10}, "vector": [0, 0, 0], "fov": 45},
        "objects": [
            {
                "type": "Sphere",
                "point": {"x": -3, "y": 0, "z": 0},
                "color": {"x": 155, "y": 200, "z": 155},
                "specular": 0.2,
                "lambert": 0.7,
                "ambient": 0.1,
                "radius": 1,
            },
            {
                "type": "Plane",
                "point": [0, -5, 0],
                "normal": {"x": 0, "y": 1, "z": 0},
                "color": {"x": 100, "y": 100, "z": 100},
                "specular": 0.0,
                "lambert": 0.9,
                "ambient": 0.2,
            },
        ],
        "lights": [{"x": -30, "y": -10, "z": 20}],
        "checker": [{"x": 50, "y": 0, "z": 89}, [92, 209, 92]],
    }


class TestParseScene:
    """Tests for parse_scene."""

    def test_parses_objects_in_order(self):
        """Test both primitive kinds are parsed with their parameters."""
        from src.tracer.scene.loader import parse_scene
        from src.tracer.scene.model import Plane, Sphere

        scene = parse_scene(_scene_data())

        assert scene.camera.point == (0.0, 1.8, 10.0)
        assert scene.camera.vector == (0.0, 0.0, 0.0)
        assert scene.camera.fov == 45.0
        assert isinstance(scene.objects[0], Sphere)
        assert isinstance(scene.objects[1], Plane)
        assert scene.objects[0].radius == 1.0
        assert scene.objects[1].normal == (0.0, 1.0, 0.0)
        assert scene.lights == ((-30.0, -10.0, 20.0),)
        assert scene.checker == ((50.0, 0.0, 89.0), (92.0, 209.0, 92.0))

    def test_round_trip_through_dict(self):
        """Test scene_to_dict output parses back to an equal scene."""
        from src.tracer.scene.loader import parse_scene, scene_to_dict

        scene = parse_scene(_scene_data())
        data = scene_to_dict(scene)

        assert data["objects"][1]["type"] == "Plane"
        assert data["camera"]["point"] == {"x": 0.0, "y": 1.8, "z": 10.0}
        assert parse_scene(data) == scene

    @pytest.mark.parametrize(
        "mutate,path",
        [
            (lambda d: d.pop("camera"), "camera"),
            (lambda d: d["camera"].pop("fov"), "camera.fov"),
            (lambda d: d["objects"][1].update(type="Cube"), "objects[1].type"),
            (lambda d: d["objects"][0].pop("radius"), "objects[0].radius"),
            (lambda d: d["objects"][0].update(radius="big"), "objects[0].radius"),
            (lambda d: d["objects"][0].update(lambert=True), "objects[0].lambert"),
            (lambda d: d["objects"][1].update(normal=[0, 1]), "objects[1].normal"),
            (lambda d: d["objects"][1]["point"].__setitem__(1, None), "objects[1].point[1]"),
            (lambda d: d["lights"][0].pop("z"), "lights[0]"),
            (lambda d: d.update(objects={}), "objects"),
            (lambda d: d["checker"].pop(), "checker"),
        ],
    )
    def test_malformed_input_names_field(self, mutate, path):
        """Test that validation errors carry the offending field path."""
        from src.tracer.scene.loader import SceneValidationError, parse_scene

        data = _scene_data()
        mutate(data)
        with pytest.raises(SceneValidationError) as exc_info:
            parse_scene(data)
        assert exc_info.value.path == path

    def test_validation_error_is_value_error(self):
        """Test SceneValidationError can be caught as a ValueError."""
        from src.tracer.scene.loader import SceneValidationError, parse_scene

        with pytest.raises(ValueError):
            parse_scene([])
        assert issubclass(SceneValidationError, ValueError)


class TestSceneFiles:
    """Tests for reading and writing JSON files."""

    def test_load_scene_json(self, tmp_path):
        """Test loading a scene file from disk."""
        from src.tracer.scene.loader import load_scene_json

        path = tmp_path / "scene.json"
        path.write_text(json.dumps(_scene_data()))

        scene = load_scene_json(path)
        assert len(scene.objects) == 2

    def test_save_and_reload(self, tmp_path):
        """Test saving a scene and loading it back."""
        from src.tracer.scene.demo import create_demo_scene
        from src.tracer.scene.loader import load_scene_json, save_scene_json

        scene = create_demo_scene(orbit=0.25)
        path = tmp_path / "demo.json"
        save_scene_json(scene, path)
        assert load_scene_json(path) == scene

    def test_invalid_json_raises(self, tmp_path):
        """Test a file that is not JSON raises SceneValidationError."""
        from src.tracer.scene.loader import SceneValidationError, load_scene_json

        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(SceneValidationError, match="invalid JSON"):
            load_scene_json(path)

    def test_bundled_example_scene_loads(self):
        """Test the example scene shipped with the repository is valid."""
        from pathlib import Path

        from src.tracer.scene.loader import load_scene_json

        path = Path(__file__).resolve().parent.parent / "examples" / "scenes" / "mirrors.json"
        scene = load_scene_json(path)
        assert len(scene.objects) == 3
        assert len(scene.lights) == 2

"""JSON scene loading and serialization.

Scenes are exchanged as plain mappings of the following shape::

    {
        "camera": {"point": V, "vector": V, "fov": 45},
        "objects": [
            {"type": "Sphere", "point": V, "color": V, "specular": 0.2,
             "lambert": 0.7, "ambient": 0.1, "radius": 1},
            {"type": "Plane", "point": V, "normal": V, "color": V,
             "specular": 0.0, "lambert": 0.9, "ambient": 0.2},
        ],
        "lights": [V, ...],
        "checker": [V, V]
    }

where each ``V`` is either ``{"x": ..., "y": ..., "z": ...}`` or a list of
three numbers. Errors name the offending field, e.g. ``objects[2].radius``.
Only the structure and numeric types are checked here; geometric sanity
(positive radii, non-zero normals) is left to the caller.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from src.tracer.scene.model import Camera, Plane, Primitive, Scene, Sphere, Vector3

logger = logging.getLogger(__name__)

_AXES = ("x", "y", "z")


class SceneValidationError(ValueError):
    """Raised when scene data is missing fields or has the wrong shape.

    Attributes:
        path: Dotted path of the offending field, e.g. ``objects[2].radius``.
    """

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


def _to_float(value: Any, label: str) -> float:
    # bool is an int subclass but never a meaningful coefficient
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneValidationError(label, f"expected a number, got {value!r}")
    return float(value)


def _to_vector3(value: Any, label: str) -> Vector3:
    if isinstance(value, Mapping):
        missing = [axis for axis in _AXES if axis not in value]
        if missing:
            raise SceneValidationError(label, f"missing component(s) {', '.join(missing)}")
        return (
            _to_float(value["x"], f"{label}.x"),
            _to_float(value["y"], f"{label}.y"),
            _to_float(value["z"], f"{label}.z"),
        )
    if isinstance(value, (list, tuple)) and len(value) == 3:
        return (
            _to_float(value[0], f"{label}[0]"),
            _to_float(value[1], f"{label}[1]"),
            _to_float(value[2], f"{label}[2]"),
        )
    raise SceneValidationError(
        label, "must be an {x, y, z} mapping or a sequence of three numbers"
    )


def _require(data: Mapping[str, Any], key: str, label: str) -> Any:
    if key not in data:
        raise SceneValidationError(f"{label}.{key}" if label else key, "is required")
    return data[key]


def _require_mapping(value: Any, label: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise SceneValidationError(label, f"must be a mapping, got {type(value).__name__}")
    return value


def _require_list(value: Any, label: str) -> list[Any]:
    if not isinstance(value, (list, tuple)):
        raise SceneValidationError(label, f"must be a list, got {type(value).__name__}")
    return list(value)


def _parse_camera(data: Any) -> Camera:
    camera = _require_mapping(data, "camera")
    return Camera(
        point=_to_vector3(_require(camera, "point", "camera"), "camera.point"),
        vector=_to_vector3(_require(camera, "vector", "camera"), "camera.vector"),
        fov=_to_float(_require(camera, "fov", "camera"), "camera.fov"),
    )


def _parse_object(data: Any, label: str) -> Primitive:
    obj = _require_mapping(data, label)
    kind = _require(obj, "type", label)

    def vector(key: str) -> Vector3:
        return _to_vector3(_require(obj, key, label), f"{label}.{key}")

    def number(key: str) -> float:
        return _to_float(_require(obj, key, label), f"{label}.{key}")

    if kind == "Sphere":
        return Sphere(
            point=vector("point"),
            color=vector("color"),
            specular=number("specular"),
            lambert=number("lambert"),
            ambient=number("ambient"),
            radius=number("radius"),
        )
    if kind == "Plane":
        return Plane(
            point=vector("point"),
            color=vector("color"),
            normal=vector("normal"),
            specular=number("specular"),
            lambert=number("lambert"),
            ambient=number("ambient"),
        )
    raise SceneValidationError(f"{label}.type", f"unknown object type {kind!r}")


def parse_scene(data: Mapping[str, Any]) -> Scene:
    """Build a Scene from its mapping form.

    Args:
        data: Decoded JSON scene.

    Returns:
        The parsed Scene with objects in their listed order.

    Raises:
        SceneValidationError: If a field is missing or malformed.
    """
    root = _require_mapping(data, "scene")

    camera = _parse_camera(_require(root, "camera", ""))

    objects = tuple(
        _parse_object(item, f"objects[{i}]")
        for i, item in enumerate(_require_list(_require(root, "objects", ""), "objects"))
    )

    lights = tuple(
        _to_vector3(item, f"lights[{i}]")
        for i, item in enumerate(_require_list(_require(root, "lights", ""), "lights"))
    )

    checker_items = _require_list(_require(root, "checker", ""), "checker")
    if len(checker_items) != 2:
        raise SceneValidationError(
            "checker", f"requires exactly two colors, got {len(checker_items)}"
        )
    checker = (
        _to_vector3(checker_items[0], "checker[0]"),
        _to_vector3(checker_items[1], "checker[1]"),
    )

    return Scene(camera=camera, objects=objects, lights=lights, checker=checker)


def _vector_to_dict(v: Vector3) -> dict[str, float]:
    return {"x": v[0], "y": v[1], "z": v[2]}


def scene_to_dict(scene: Scene) -> dict[str, Any]:
    """Serialize a Scene to its mapping form (vectors as {x, y, z})."""
    objects: list[dict[str, Any]] = []
    for obj in scene.objects:
        if isinstance(obj, Sphere):
            objects.append(
                {
                    "type": "Sphere",
                    "point": _vector_to_dict(obj.point),
                    "color": _vector_to_dict(obj.color),
                    "specular": obj.specular,
                    "lambert": obj.lambert,
                    "ambient": obj.ambient,
                    "radius": obj.radius,
                }
            )
        elif isinstance(obj, Plane):
            objects.append(
                {
                    "type": "Plane",
                    "point": _vector_to_dict(obj.point),
                    "color": _vector_to_dict(obj.color),
                    "normal": _vector_to_dict(obj.normal),
                    "specular": obj.specular,
                    "lambert": obj.lambert,
                    "ambient": obj.ambient,
                }
            )
        else:
            raise TypeError(f"Unsupported scene object: {type(obj).__name__}")

    return {
        "camera": {
            "point": _vector_to_dict(scene.camera.point),
            "vector": _vector_to_dict(scene.camera.vector),
            "fov": scene.camera.fov,
        },
        "objects": objects,
        "lights": [_vector_to_dict(light) for light in scene.lights],
        "checker": [_vector_to_dict(color) for color in scene.checker],
    }


def load_scene_json(path: str | Path) -> Scene:
    """Read and parse a JSON scene file.

    Args:
        path: Path to the JSON file.

    Returns:
        The parsed Scene.

    Raises:
        OSError: If the file cannot be read.
        SceneValidationError: If the file is not valid JSON or not a valid scene.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SceneValidationError(str(path), f"invalid JSON ({exc})") from exc

    scene = parse_scene(data)
    logger.info(
        f"Loaded scene {path} ({len(scene.objects)} objects, {len(scene.lights)} lights)"
    )
    return scene


def save_scene_json(scene: Scene, path: str | Path) -> None:
    """Write a Scene to a JSON file.

    Args:
        scene: The scene to save.
        path: Destination path.
    """
    path = Path(path)
    path.write_text(json.dumps(scene_to_dict(scene), indent=2), encoding="utf-8")
    logger.info(f"Saved scene to {path}")

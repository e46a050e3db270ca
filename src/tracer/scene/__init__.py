"""Scene module for scene description, storage and queries.

Components:
    model: Immutable host-side Scene, Camera, Sphere and Plane
    storage: Structure-of-Arrays Taichi fields holding the active scene
    intersection: Nearest-hit queries over the active scene
    loader: JSON scene loading and validation
    demo: Three spheres in a checkered room
"""

from .demo import DemoSceneParams, create_demo_scene, orbit_positions
from .intersection import SceneHit, intersect_object, intersect_scene, surface_normal
from .loader import (
    SceneValidationError,
    load_scene_json,
    parse_scene,
    save_scene_json,
    scene_to_dict,
)
from .model import Camera, Plane, Primitive, Scene, Sphere, Vector3
from .storage import (
    MAX_LIGHTS,
    MAX_OBJECTS,
    add_light,
    add_plane,
    add_sphere,
    clear_scene,
    get_light_count,
    get_object_count,
    set_checker,
    upload_scene,
)

__all__ = [
    # Model
    "Camera",
    "Sphere",
    "Plane",
    "Primitive",
    "Scene",
    "Vector3",
    # Storage
    "MAX_OBJECTS",
    "MAX_LIGHTS",
    "clear_scene",
    "add_sphere",
    "add_plane",
    "add_light",
    "set_checker",
    "upload_scene",
    "get_object_count",
    "get_light_count",
    # Intersection
    "SceneHit",
    "intersect_object",
    "intersect_scene",
    "surface_normal",
    # Loader
    "SceneValidationError",
    "parse_scene",
    "scene_to_dict",
    "load_scene_json",
    "save_scene_json",
    # Demo
    "DemoSceneParams",
    "create_demo_scene",
    "orbit_positions",
]

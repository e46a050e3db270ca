"""Taichi field storage for the active scene.

The scene is stored in a Structure of Arrays layout: one row per object across
a set of preallocated fields, tagged by ``object_kinds``. Rows are written in
``Scene.objects`` order, so row index doubles as scan order during
intersection. Fields that a kind does not use (radius for planes, normal for
spheres) are zeroed.

Only one scene is active at a time; uploading a new scene replaces it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.scene.demo import create_demo_scene
    >>> from src.tracer.scene.storage import upload_scene, get_object_count
    >>> upload_scene(create_demo_scene())
    >>> get_object_count()
    9
"""

import logging

import taichi as ti

from src.tracer.geometry.primitive import PrimitiveKind
from src.tracer.scene.model import Plane, Scene, Sphere, Vector3

logger = logging.getLogger(__name__)

# Maximum number of primitives and lights supported in the scene
MAX_OBJECTS = 1024
MAX_LIGHTS = 64

# Object storage: Structure of Arrays layout
object_kinds = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
object_points = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
object_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
object_normals = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
object_radii = ti.field(dtype=ti.f32, shape=MAX_OBJECTS)
object_speculars = ti.field(dtype=ti.f32, shape=MAX_OBJECTS)
object_lamberts = ti.field(dtype=ti.f32, shape=MAX_OBJECTS)
object_ambients = ti.field(dtype=ti.f32, shape=MAX_OBJECTS)
num_objects = ti.field(dtype=ti.i32, shape=())

# Point light positions
light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())

# The two checker colors used to texture planes
checker_colors = ti.Vector.field(3, dtype=ti.f32, shape=2)


def clear_scene() -> None:
    """Remove all objects and lights from the active scene.

    Resets the counts to zero. Field data is overwritten by the next upload.
    """
    num_objects[None] = 0
    num_lights[None] = 0


def _add_object(
    kind: PrimitiveKind,
    point: Vector3,
    color: Vector3,
    normal: Vector3,
    radius: float,
    specular: float,
    lambert: float,
    ambient: float,
) -> int:
    idx = num_objects[None]
    if idx >= MAX_OBJECTS:
        raise RuntimeError(f"Maximum number of objects ({MAX_OBJECTS}) exceeded")
    object_kinds[idx] = int(kind)
    object_points[idx] = [point[0], point[1], point[2]]
    object_colors[idx] = [color[0], color[1], color[2]]
    object_normals[idx] = [normal[0], normal[1], normal[2]]
    object_radii[idx] = radius
    object_speculars[idx] = specular
    object_lamberts[idx] = lambert
    object_ambients[idx] = ambient
    num_objects[None] = idx + 1
    return idx


def add_sphere(sphere: Sphere) -> int:
    """Append a sphere to the active scene.

    Args:
        sphere: The sphere description.

    Returns:
        The row index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of objects is exceeded.
    """
    return _add_object(
        PrimitiveKind.SPHERE,
        sphere.point,
        sphere.color,
        (0.0, 0.0, 0.0),
        sphere.radius,
        sphere.specular,
        sphere.lambert,
        sphere.ambient,
    )


def add_plane(plane: Plane) -> int:
    """Append a plane to the active scene.

    Args:
        plane: The plane description.

    Returns:
        The row index of the added plane.

    Raises:
        RuntimeError: If the maximum number of objects is exceeded.
    """
    return _add_object(
        PrimitiveKind.PLANE,
        plane.point,
        plane.color,
        plane.normal,
        0.0,
        plane.specular,
        plane.lambert,
        plane.ambient,
    )


def add_light(position: Vector3) -> int:
    """Append a point light to the active scene.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_positions[idx] = [position[0], position[1], position[2]]
    num_lights[None] = idx + 1
    return idx


def set_checker(colors: tuple[Vector3, Vector3]) -> None:
    """Set the two plane texture colors.

    Raises:
        ValueError: If ``colors`` does not hold exactly two colors.
    """
    if len(colors) != 2:
        raise ValueError(f"Checker palette needs exactly 2 colors, got {len(colors)}")
    for i, color in enumerate(colors):
        checker_colors[i] = [color[0], color[1], color[2]]


def upload_scene(scene: Scene) -> None:
    """Replace the active scene with ``scene``.

    Objects are written in order, followed by lights and the checker palette.

    Args:
        scene: The scene to make active.

    Raises:
        RuntimeError: If object or light capacity is exceeded.
        TypeError: If an object is neither a Sphere nor a Plane.
        ValueError: If the checker palette does not hold two colors.
    """
    clear_scene()

    for obj in scene.objects:
        if isinstance(obj, Sphere):
            add_sphere(obj)
        elif isinstance(obj, Plane):
            add_plane(obj)
        else:
            raise TypeError(f"Unsupported primitive: {type(obj).__name__}")

    for light in scene.lights:
        add_light(light)

    set_checker(scene.checker)

    logger.debug(
        f"Uploaded scene: {get_object_count()} objects, {get_light_count()} lights"
    )


def get_object_count() -> int:
    """Get the number of objects in the active scene."""
    return int(num_objects[None])


def get_light_count() -> int:
    """Get the number of lights in the active scene."""
    return int(num_lights[None])

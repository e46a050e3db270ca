"""Scene-level nearest-hit queries.

This module dispatches per-object intersection and normal evaluation on the
stored ``PrimitiveKind`` and scans the active scene for the closest hit.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.scene.intersection import intersect_scene
    >>> # Use intersect_scene within a Taichi kernel after upload_scene()
"""

import taichi as ti

from src.tracer.core.ray import Ray
from src.tracer.core.vector import vec3
from src.tracer.geometry.plane import intersect_plane, plane_normal
from src.tracer.geometry.primitive import (
    SELF_INTERSECTION_THRESHOLD,
    Intersection,
    PrimitiveKind,
    make_miss,
)
from src.tracer.geometry.sphere import intersect_sphere, sphere_normal
from src.tracer.scene.storage import (
    num_objects,
    object_kinds,
    object_normals,
    object_points,
    object_radii,
)


@ti.dataclass
class SceneHit:
    """Nearest intersection of a ray with the active scene.

    Attributes:
        hit: 1 if any object was hit, 0 otherwise.
        distance: Distance along the ray to the hit. Only valid if hit == 1.
        index: Row of the hit object in scene storage, -1 on a miss.
    """

    hit: ti.i32
    distance: ti.f32
    index: ti.i32


@ti.func
def intersect_object(index: ti.i32, ray: Ray) -> Intersection:
    """Intersect a ray with one stored object.

    Args:
        index: Row of the object in scene storage.
        ray: The ray to test.

    Returns:
        The primitive's candidate distance, or a miss.
    """
    kind = object_kinds[index]
    result = make_miss()
    if kind == int(PrimitiveKind.SPHERE):
        result = intersect_sphere(object_points[index], object_radii[index], ray)
    elif kind == int(PrimitiveKind.PLANE):
        result = intersect_plane(object_points[index], object_normals[index], ray)
    return result


@ti.func
def surface_normal(index: ti.i32, point: vec3) -> vec3:
    """Unit surface normal of a stored object at a point on its surface."""
    kind = object_kinds[index]
    normal = vec3(0.0, 0.0, 0.0)
    if kind == int(PrimitiveKind.SPHERE):
        normal = sphere_normal(object_points[index], point)
    elif kind == int(PrimitiveKind.PLANE):
        normal = plane_normal(object_normals[index])
    return normal


@ti.func
def intersect_scene(ray: Ray) -> SceneHit:
    """Find the closest object hit by a ray.

    Objects are scanned in storage order. A candidate replaces the current
    best only if it lies beyond SELF_INTERSECTION_THRESHOLD and is strictly
    closer, so on equal distances the earlier object wins.

    Args:
        ray: The ray to test.

    Returns:
        A SceneHit for the nearest accepted candidate, or a miss.
    """
    result = SceneHit(hit=0, distance=0.0, index=-1)

    for i in range(num_objects[None]):
        candidate = intersect_object(i, ray)
        if candidate.hit == 1 and candidate.distance > SELF_INTERSECTION_THRESHOLD:
            if result.hit == 0 or candidate.distance < result.distance:
                result = SceneHit(hit=1, distance=candidate.distance, index=i)

    return result

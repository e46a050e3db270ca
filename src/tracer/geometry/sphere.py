"""Ray-sphere intersection.

Only the near root of the quadratic is considered. A ray that starts on or
inside the sphere therefore produces a non-positive near root and misses,
which is what suppresses surface acne on shadow and reflection rays.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.geometry.sphere import intersect_sphere
    >>> # Use intersect_sphere within a Taichi kernel
"""

import taichi as ti

from src.tracer.core.ray import Ray
from src.tracer.core.vector import dot, subtract, unit, vec3
from src.tracer.geometry.primitive import (
    SELF_INTERSECTION_THRESHOLD,
    Intersection,
    make_hit,
    make_miss,
)


@ti.func
def intersect_sphere(center: vec3, radius: ti.f32, ray: Ray) -> Intersection:
    """Test for ray-sphere intersection.

    With L = center - origin and v = dot(L, direction), the ray meets the
    sphere where the discriminant radius^2 - dot(L, L) + v^2 is non-negative,
    and the near hit lies at v - sqrt(discriminant). The direction must be
    unit length.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
        ray: The ray to test, with a unit-length direction.

    Returns:
        A hit carrying the near distance if it exceeds
        SELF_INTERSECTION_THRESHOLD, otherwise a miss.
    """
    eye_to_center = subtract(center, ray.origin)
    v = dot(eye_to_center, ray.direction)
    discriminant = radius * radius - dot(eye_to_center, eye_to_center) + v * v

    result = make_miss()
    if discriminant >= 0.0:
        distance = v - ti.sqrt(discriminant)
        if distance > SELF_INTERSECTION_THRESHOLD:
            result = make_hit(distance)
    return result


@ti.func
def sphere_normal(center: vec3, point: vec3) -> vec3:
    """Outward unit normal of a sphere at a surface point."""
    return unit(subtract(point, center))

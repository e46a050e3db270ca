"""Single-sided infinite plane primitive.

A plane is given by a point on it and a normal that need not be unit length.
It is only visible from the side its normal points toward: rays travelling
along the normal pass through it.
"""

import taichi as ti

from src.tracer.core.ray import Ray
from src.tracer.core.vector import dot, negate, subtract, unit, vec3
from src.tracer.geometry.primitive import Intersection, make_hit, make_miss


@ti.func
def intersect_plane(point: vec3, normal: vec3, ray: Ray) -> Intersection:
    """Test for ray-plane intersection.

    The distance is dot(point - origin, -normal) / dot(-normal, direction).
    The ratio is invariant to the length of the normal, so it is used as
    stored. No self-intersection filtering is applied here; the scene scan
    rejects distances at or below the threshold.

    Args:
        point: Any point on the plane.
        normal: The plane's facing direction (any non-zero length).
        ray: The ray to test.

    Returns:
        A hit with the signed distance if the ray faces the plane's front
        side, otherwise a miss.
    """
    towards = negate(normal)
    denom = dot(towards, ray.direction)

    result = make_miss()
    if denom > 0.0:
        result = make_hit(dot(subtract(point, ray.origin), towards) / denom)
    return result


@ti.func
def plane_normal(normal: vec3) -> vec3:
    """Unit normal of a plane, normalizing the stored normal."""
    return unit(normal)

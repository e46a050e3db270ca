"""Ray data structure for kernel-side ray casting.

Rays are transient: one is built for every primary, shadow, and reflection
cast and never stored in a field.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> camera_ray = make_ray(vec3(0.0, 1.8, 10.0), vec3(0.0, 0.0, -1.0))
    >>> hit_point = ray_at(camera_ray, 10.0)  # (0, 1.8, 0), inside a kernel
"""

import taichi as ti

from src.tracer.core.vector import add, scale, vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction of the ray (vec3). Every ray built by the
            renderer has a unit-length direction; intersection distances are
            only meaningful under that assumption.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at distance t.

    Args:
        ray: The ray to evaluate.
        t: The distance along the ray.

    Returns:
        The point ray.origin + ray.direction * t.
    """
    return add(ray.origin, scale(ray.direction, t))


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)

"""Vector utilities for Taichi kernels.

All operations take and return ``vec3`` values (three f32 components) and
never mutate their arguments. Degenerate inputs are not trapped: normalizing
a zero-length vector yields non-finite components, which propagate into the
rendered buffer.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.core.vector import reflect, unit, vec3
    >>> @ti.kernel
    ... def bounce() -> vec3:
    ...     return reflect(unit(vec3(1.0, -1.0, 0.0)), vec3(0.0, 1.0, 0.0))
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# World up direction used to build the viewport basis
WORLD_UP = (0.0, 1.0, 0.0)


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product a . b."""
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the cross product a x b."""
    return vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


@ti.func
def scale(v: vec3, factor: ti.f32) -> vec3:
    """Multiply every component of v by factor."""
    return vec3(v.x * factor, v.y * factor, v.z * factor)


@ti.func
def add(a: vec3, b: vec3) -> vec3:
    """Component-wise sum of two vectors."""
    return vec3(a.x + b.x, a.y + b.y, a.z + b.z)


@ti.func
def add3(a: vec3, b: vec3, c: vec3) -> vec3:
    """Component-wise sum of three vectors, evaluated left to right."""
    return vec3(a.x + b.x + c.x, a.y + b.y + c.y, a.z + b.z + c.z)


@ti.func
def subtract(a: vec3, b: vec3) -> vec3:
    """Component-wise difference a - b."""
    return vec3(a.x - b.x, a.y - b.y, a.z - b.z)


@ti.func
def negate(v: vec3) -> vec3:
    """Flip the sign of every component."""
    return vec3(-v.x, -v.y, -v.z)


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(dot(v, v))


@ti.func
def unit(v: vec3) -> vec3:
    """Scale a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        v scaled by 1 / length(v). A zero-length input produces
        non-finite components rather than an error.
    """
    return scale(v, 1.0 / length(v))


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal. Must be unit length; callers normalize.

    Returns:
        incident - 2 * dot(incident, normal) * normal.
    """
    return subtract(incident, scale(normal, 2.0 * dot(incident, normal)))

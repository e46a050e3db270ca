"""Geometry module for shape primitives.

Components:
    primitive: Primitive kinds, intersection result and self-hit threshold
    sphere: Ray-sphere intersection and normals
    plane: Single-sided ray-plane intersection and normals

All intersection routines are Taichi functions (@ti.func).
"""

from .plane import intersect_plane, plane_normal
from .primitive import (
    SELF_INTERSECTION_THRESHOLD,
    Intersection,
    PrimitiveKind,
    make_hit,
    make_miss,
)
from .sphere import intersect_sphere, sphere_normal

__all__ = [
    "PrimitiveKind",
    "Intersection",
    "SELF_INTERSECTION_THRESHOLD",
    "make_hit",
    "make_miss",
    "intersect_sphere",
    "sphere_normal",
    "intersect_plane",
    "plane_normal",
]

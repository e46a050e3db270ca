"""Primitive discriminant and intersection result shared by all shapes.

Kernel code never sees Python primitive objects. Each object in the active
scene is stored as a row of flat fields tagged with a ``PrimitiveKind``, and
every operation that depends on the shape dispatches on that tag with a
closed ``if/elif`` chain. Adding a primitive means adding a kind here and a
branch at each dispatch site.
"""

from enum import IntEnum

import taichi as ti


class PrimitiveKind(IntEnum):
    """Enumeration of supported surface primitives."""

    SPHERE = 0
    PLANE = 1


# Minimum accepted hit distance; rays restarting on a surface must not re-hit it
SELF_INTERSECTION_THRESHOLD = 0.001


@ti.dataclass
class Intersection:
    """Result of intersecting a ray with a single primitive.

    Attributes:
        hit: 1 if the primitive produced a candidate distance, 0 otherwise.
        distance: Distance along the ray. Only valid if hit == 1.
    """

    hit: ti.i32
    distance: ti.f32


@ti.func
def make_hit(distance: ti.f32) -> Intersection:
    """Create an Intersection carrying a candidate distance."""
    return Intersection(hit=1, distance=distance)


@ti.func
def make_miss() -> Intersection:
    """Create an Intersection indicating no hit."""
    return Intersection(hit=0, distance=0.0)

"""Core rendering module.

Components:
    vector: Named vector helpers over taichi.math.vec3
    ray: Ray data structure
    integrator: Whitted-style shading and the render kernel
    renderer: Banded rendering with progress and cancellation

All per-pixel work runs inside Taichi kernels.
"""

from .ray import Ray, make_ray, ray_at
from .vector import (
    WORLD_UP,
    add,
    add3,
    cross,
    dot,
    length,
    negate,
    reflect,
    scale,
    subtract,
    unit,
    vec3,
)

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from src.tracer.core.integrator or src.tracer.core.renderer.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "WORLD_UP",
    "dot",
    "cross",
    "scale",
    "add",
    "add3",
    "subtract",
    "negate",
    "length",
    "unit",
    "reflect",
]

"""Whitted-style shading and the per-pixel render kernel.

This module implements the render pipeline: one primary ray per pixel,
nearest-hit intersection, Lambertian diffuse with hard shadows, an ambient
term, and specular reflection with a fixed recursion bound.

Shading model, for a hit on an object with base color b:

    color = c + b * (lambert_amount * lambert) + b * ambient
    c     = specular * trace(reflected_ray, depth + 1)

where lambert_amount is the saturating sum of cosine terms over visible
lights (see ``src.tracer.shading.lighting``) and b is either the sphere's
color or the checker color of a plane at the hit point.

``trace`` at depth > MAX_DEPTH yields no color. The primary ray is depth 0,
so at most two reflection bounces contribute. Taichi functions cannot
recurse; ``trace`` unrolls the reflection chain into a bounded loop whose
counter is the depth, carrying the product of specular coefficients
accumulated so far. The output channels are not clamped.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.core.integrator import render
    >>> from src.tracer.scene.demo import create_demo_scene
    >>> buffer = render(create_demo_scene(), 480, 360)
    >>> buffer.shape
    (691200,)
"""

import logging
import time

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.tracer.camera.viewport import compute_viewport, get_ray, setup_viewport
from src.tracer.core.ray import Ray, make_ray, ray_at
from src.tracer.core.vector import add, reflect, scale, vec3
from src.tracer.geometry.primitive import PrimitiveKind
from src.tracer.scene.intersection import intersect_scene, surface_normal
from src.tracer.scene.model import Scene
from src.tracer.scene.storage import (
    object_ambients,
    object_colors,
    object_kinds,
    object_lamberts,
    object_speculars,
    upload_scene,
)
from src.tracer.shading.checker import plane_color_at
from src.tracer.shading.lighting import lambert_amount_at

logger = logging.getLogger(__name__)

# =============================================================================
# Rendering Constants
# =============================================================================

# Deepest trace depth that still produces color (primary ray is depth 0)
MAX_DEPTH = 2

# Alpha channel written for every pixel
ALPHA = 255.0

# Smallest supported image side; pixel spacing divides by (side - 1)
MIN_IMAGE_SIZE = 2

# =============================================================================
# Render Target (Pixel Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# RGBA per pixel, indexed [y, x]
_pixel_buffer = ti.Vector.field(4, dtype=ti.f32, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def _to_pixel_count(value: float, name: str) -> int:
    count = int(value)
    if count != value:
        raise ValueError(f"Image {name} must be a whole number of pixels, got {value}")
    return count


def setup_render_target(width: float, height: float) -> tuple[int, int]:
    """Set the active image dimensions.

    Args:
        width: Image width in pixels. Floats with integral values are accepted.
        height: Image height in pixels. Floats with integral values are accepted.

    Returns:
        The dimensions as integers.

    Raises:
        ValueError: If a dimension is fractional, below MIN_IMAGE_SIZE, or
            above the preallocated maximum.
    """
    width_px = _to_pixel_count(width, "width")
    height_px = _to_pixel_count(height, "height")

    if width_px < MIN_IMAGE_SIZE or height_px < MIN_IMAGE_SIZE:
        raise ValueError(
            f"Image dimensions ({width_px}x{height_px}) must be at least "
            f"{MIN_IMAGE_SIZE}x{MIN_IMAGE_SIZE}"
        )
    if width_px > MAX_IMAGE_WIDTH or height_px > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width_px}x{height_px}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width_px
    _image_height[None] = height_px
    _render_target_initialized[None] = 1
    return width_px, height_px


def clear_render_target() -> None:
    """Forget the active image dimensions and zero the pixel buffer."""
    _pixel_buffer.fill(0.0)
    _render_target_initialized[None] = 0


def get_image_dimensions() -> tuple[int, int]:
    """Get the active render target dimensions as (width, height)."""
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call prepare_render() first.")


# =============================================================================
# Shading
# =============================================================================


@ti.func
def surface(direction: vec3, index: ti.i32, point: vec3, normal: vec3):
    """Shade the local terms of a hit and prepare its reflection.

    Args:
        direction: Direction of the incoming ray.
        index: Row of the hit object in scene storage.
        point: The hit point.
        normal: Unit surface normal at the hit point.

    Returns:
        A tuple of (local_color, specular, reflected_direction) where:
        - local_color: b * (lambert_amount * lambert) + b * ambient.
        - specular: The object's specular coefficient; the caller adds
          specular * trace(reflected ray, depth + 1) when it is positive.
        - reflected_direction: The incoming direction mirrored about normal.
    """
    base = object_colors[index]
    if object_kinds[index] == int(PrimitiveKind.PLANE):
        base = plane_color_at(point, index)

    lambert = object_lamberts[index]
    specular = object_speculars[index]
    ambient = object_ambients[index]

    lambert_amount = 0.0
    if lambert > 0.0:
        lambert_amount = lambert_amount_at(point, normal)

    local_color = add(scale(base, lambert_amount * lambert), scale(base, ambient))
    return local_color, specular, reflect(direction, normal)


@ti.func
def trace(ray: Ray, depth: ti.i32):
    """Trace a ray and its specular reflections.

    Equivalent to the recursive definition

        trace(ray, depth) = none                 if depth > MAX_DEPTH
                          = (0, 0, 0)            if nothing is hit
                          = local + specular * trace(reflected, depth + 1)

    where a "none" result from the recursive call contributes nothing.

    Args:
        ray: The ray to trace, with a unit-length direction.
        depth: Recursion depth of this ray; 0 for primary rays.

    Returns:
        A tuple of (has_color, color). has_color is 0 only when depth
        exceeds MAX_DEPTH.
    """
    has_color = 0
    color = vec3(0.0, 0.0, 0.0)

    if depth <= MAX_DEPTH:
        has_color = 1
        origin = ray.origin
        direction = ray.direction
        # Product of specular coefficients along the reflection chain
        weight = 1.0
        active = 1

        for _ in range(depth, MAX_DEPTH + 1):
            if active == 1:
                current = make_ray(origin, direction)
                hit = intersect_scene(current)

                if hit.hit == 0:
                    # Escaped rays see a black background
                    active = 0
                else:
                    point = ray_at(current, hit.distance)
                    normal = surface_normal(hit.index, point)
                    local_color, specular, reflected = surface(
                        direction, hit.index, point, normal
                    )
                    color = add(color, scale(local_color, weight))

                    if specular > 0.0:
                        weight *= specular
                        origin = point
                        direction = reflected
                    else:
                        active = 0

    return has_color, color


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_rows(y_start: ti.i32, y_end: ti.i32, width: ti.i32):
    """Render rows [y_start, y_end) into the pixel buffer.

    The outermost loop is parallelized by Taichi. Each pixel writes only its
    own slot, so the result does not depend on scheduling.
    """
    for y, x in ti.ndrange((y_start, y_end), width):
        _, color = trace(get_ray(x, y), 0)
        _pixel_buffer[y, x] = ti.Vector([color.x, color.y, color.z, ALPHA])


@ti.kernel
def _render_single_pixel(x: ti.i32, y: ti.i32) -> vec3:
    """Render one pixel without touching the pixel buffer."""
    _, color = trace(get_ray(x, y), 0)
    return color


# =============================================================================
# Public Rendering API
# =============================================================================


def prepare_render(scene: Scene, width: float, height: float) -> tuple[int, int]:
    """Make ``scene`` active and configure the viewport and render target.

    Args:
        scene: The scene to render.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The image dimensions as integers (width, height).

    Raises:
        ValueError: If the dimensions are unsupported.
    """
    width_px, height_px = setup_render_target(width, height)
    upload_scene(scene)
    setup_viewport(compute_viewport(scene.camera, width_px, height_px))
    return width_px, height_px


def render_rows(y_start: int, y_end: int) -> None:
    """Render a band of rows of the prepared image.

    Args:
        y_start: First row to render (inclusive).
        y_end: Row after the last one to render (exclusive).

    Raises:
        RuntimeError: If ``prepare_render`` has not been called.
    """
    _check_render_target_initialized()
    width, height = get_image_dimensions()
    _render_rows(max(y_start, 0), min(y_end, height), width)


def get_pixel_buffer() -> npt.NDArray[np.float32]:
    """Get the prepared image as a flat RGBA sequence.

    Returns:
        Float32 array of length width * height * 4 holding [R, G, B, 255.0]
        per pixel, row-major with y as the outer index and x the inner.

    Raises:
        RuntimeError: If ``prepare_render`` has not been called.
    """
    _check_render_target_initialized()
    width, height = get_image_dimensions()
    full = _pixel_buffer.to_numpy()
    return np.ascontiguousarray(full[:height, :width, :]).reshape(-1)


def render(scene: Scene, width: float, height: float) -> npt.NDArray[np.float32]:
    """Render a scene to a flat RGBA buffer.

    Args:
        scene: The scene to render; treated as read-only.
        width: Image width in pixels (at least 2).
        height: Image height in pixels (at least 2).

    Returns:
        Float32 array of length width * height * 4. See ``get_pixel_buffer``.
        Color channels are unclamped and may be negative, above 255, or
        non-finite for degenerate scenes.

    Raises:
        ValueError: If the dimensions are unsupported.
    """
    start_time = time.perf_counter()

    width_px, height_px = prepare_render(scene, width, height)
    render_rows(0, height_px)
    buffer = get_pixel_buffer()

    logger.info(
        f"Rendered {width_px}x{height_px} ({len(scene.objects)} objects, "
        f"{len(scene.lights)} lights) in {time.perf_counter() - start_time:.3f}s"
    )
    return buffer


def render_pixel(x: int, y: int) -> tuple[float, float, float]:
    """Render a single pixel of the prepared image.

    This is a Python-callable function for debugging; it does not write to
    the pixel buffer.

    Args:
        x: Pixel column.
        y: Pixel row.

    Returns:
        Tuple of (R, G, B) color values.

    Raises:
        RuntimeError: If ``prepare_render`` has not been called.
    """
    _check_render_target_initialized()
    color = _render_single_pixel(x, y)
    return (float(color[0]), float(color[1]), float(color[2]))

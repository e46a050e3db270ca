"""Viewport geometry and primary ray generation.

The camera looks from ``Camera.point`` toward the target ``Camera.vector``.
From that the renderer builds an orthonormal viewing basis and a virtual
image plane at unit distance along the eye direction:

- eye:   unit(target - point)
- right: unit(cross(eye, world_up)), with world_up = (0, 1, 0)
- up:    unit(cross(right, eye))

The image plane spans [-half_width, half_width] along ``right`` and
[-half_height, half_height] along ``up``, where half_width = tan(fov / 2)
and half_height scales it by height / width. Pixel (0, 0) maps to the
(-half_width, -half_height) corner and the last pixel on each axis maps to
the opposite edge, so the step size divides by (n - 1).

The basis is computed host-side in float32 with NumPy and written into Taichi
fields. A camera whose target equals its position, or that looks straight
along world_up, produces non-finite basis vectors; these propagate into the
image rather than raising.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.camera.viewport import compute_viewport, setup_viewport
    >>> from src.tracer.scene.model import Camera
    >>> viewport = compute_viewport(Camera((0, 0, 0), (0, 0, -1), 90.0), 640, 480)
    >>> setup_viewport(viewport)
"""

import logging
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.tracer.core.ray import Ray, make_ray
from src.tracer.core.vector import WORLD_UP, add3, scale, unit
from src.tracer.scene.model import Camera

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Viewport:
    """Viewing basis and image-plane extents for one camera and resolution.

    Attributes:
        origin: Camera position; origin of every primary ray.
        eye: Unit view direction.
        right: Unit vector spanning the image plane horizontally.
        up: Unit vector spanning the image plane vertically.
        half_width: Half the image-plane width at unit distance.
        half_height: Half the image-plane height at unit distance.
        pixel_width: Horizontal step between adjacent pixel rays.
        pixel_height: Vertical step between adjacent pixel rays.
    """

    origin: npt.NDArray[np.float32]
    eye: npt.NDArray[np.float32]
    right: npt.NDArray[np.float32]
    up: npt.NDArray[np.float32]
    half_width: np.float32
    half_height: np.float32
    pixel_width: np.float32
    pixel_height: np.float32


# =============================================================================
# Taichi Fields for Viewport State
# =============================================================================

_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_eye = ti.Vector.field(3, dtype=ti.f32, shape=())
_right = ti.Vector.field(3, dtype=ti.f32, shape=())
_up = ti.Vector.field(3, dtype=ti.f32, shape=())
_half_width = ti.field(dtype=ti.f32, shape=())
_half_height = ti.field(dtype=ti.f32, shape=())
_pixel_width = ti.field(dtype=ti.f32, shape=())
_pixel_height = ti.field(dtype=ti.f32, shape=())


# =============================================================================
# Viewport Setup (Python-side)
# =============================================================================


def _unit(v: npt.NDArray[np.float32]) -> npt.NDArray[np.float32]:
    return v * (np.float32(1.0) / np.sqrt(np.dot(v, v)))


def compute_viewport(camera: Camera, width: float, height: float) -> Viewport:
    """Compute the viewing basis and pixel spacing for a camera.

    Args:
        camera: The scene camera.
        width: Image width in pixels (at least 2).
        height: Image height in pixels (at least 2).

    Returns:
        The float32 viewport geometry.
    """
    point = np.array(camera.point, dtype=np.float32)
    target = np.array(camera.vector, dtype=np.float32)
    world_up = np.array(WORLD_UP, dtype=np.float32)
    width_f = np.float32(width)
    height_f = np.float32(height)

    # Degenerate cameras are allowed to produce NaN/Inf
    with np.errstate(divide="ignore", invalid="ignore"):
        eye = _unit(target - point)
        right = _unit(np.cross(eye, world_up).astype(np.float32))
        up = _unit(np.cross(right, eye).astype(np.float32))

        half_fov = np.float32(camera.fov) / np.float32(2.0)
        fov_radians = np.float32(np.pi) * half_fov / np.float32(180.0)
        half_width = np.tan(fov_radians)
        half_height = (height_f / width_f) * half_width
        pixel_width = (half_width * np.float32(2.0)) / (width_f - np.float32(1.0))
        pixel_height = (half_height * np.float32(2.0)) / (height_f - np.float32(1.0))

    return Viewport(
        origin=point,
        eye=eye,
        right=right,
        up=up,
        half_width=half_width,
        half_height=half_height,
        pixel_width=pixel_width,
        pixel_height=pixel_height,
    )


def setup_viewport(viewport: Viewport) -> None:
    """Write viewport state into the Taichi fields read by ``get_ray``.

    Args:
        viewport: Geometry from ``compute_viewport``.
    """
    _origin[None] = viewport.origin.tolist()
    _eye[None] = viewport.eye.tolist()
    _right[None] = viewport.right.tolist()
    _up[None] = viewport.up.tolist()
    _half_width[None] = float(viewport.half_width)
    _half_height[None] = float(viewport.half_height)
    _pixel_width[None] = float(viewport.pixel_width)
    _pixel_height[None] = float(viewport.pixel_height)

    logger.debug(
        f"Viewport: eye={viewport.eye.tolist()}, right={viewport.right.tolist()}, "
        f"up={viewport.up.tolist()}, half extents=({viewport.half_width}, "
        f"{viewport.half_height})"
    )


# =============================================================================
# Ray Generation (Taichi-side)
# =============================================================================


@ti.func
def get_ray(x: ti.i32, y: ti.i32) -> Ray:
    """Generate the primary ray for pixel (x, y).

    Args:
        x: Pixel column, 0 at the -right edge of the image plane.
        y: Pixel row, 0 at the -up edge of the image plane.

    Returns:
        A ray from the camera position with a unit direction.
    """
    x_offset = scale(_right[None], ti.cast(x, ti.f32) * _pixel_width[None] - _half_width[None])
    y_offset = scale(_up[None], ti.cast(y, ti.f32) * _pixel_height[None] - _half_height[None])
    return make_ray(_origin[None], unit(add3(_eye[None], x_offset, y_offset)))


# =============================================================================
# Utility Functions
# =============================================================================


def get_viewport_info() -> dict[str, tuple[float, float, float] | float]:
    """Get the active viewport state for debugging.

    Returns:
        Dictionary with origin, eye, right, up, and the four extents.
    """
    def _triple(field: "ti.MatrixField") -> tuple[float, float, float]:
        v = field[None]
        return (float(v[0]), float(v[1]), float(v[2]))

    return {
        "origin": _triple(_origin),
        "eye": _triple(_eye),
        "right": _triple(_right),
        "up": _triple(_up),
        "half_width": float(_half_width[None]),
        "half_height": float(_half_height[None]),
        "pixel_width": float(_pixel_width[None]),
        "pixel_height": float(_pixel_height[None]),
    }

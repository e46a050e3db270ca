"""Procedural checker texture for planes.

The hit point is projected, relative to the plane's stored point, onto two
basis vectors picked from the plane normal's non-zero components. The basis
is only meaningful for axis-aligned normals; tilted planes get a skewed or
degenerate pattern.

Each projected coordinate gets a parity bit from its truncated (C-style)
remainder by CHECKER_CELL_WIDTH, and the two bits select one of the scene's
two checker colors:

    parity(c) = (c < 0 and c rem w < -w/2) or (c > 0 and c rem w < w/2)
    color     = checker[0] if parity(cx) xor parity(cy) else checker[1]

Because the test compares against half the width, colors alternate every
w/2 units along an axis and repeat every w units.
"""

import taichi as ti

from src.tracer.core.vector import dot, subtract, vec3
from src.tracer.scene.storage import checker_colors, object_normals, object_points

# Width passed to the parity test
CHECKER_CELL_WIDTH = 2.0


@ti.func
def checker_parity(c: ti.f32) -> ti.i32:
    """Parity bit of one projected coordinate.

    Args:
        c: Coordinate along one checker basis vector.

    Returns:
        1 or 0 per the truncated-remainder rule; 0 when c is exactly zero.
    """
    # rem keeps the sign of c; work on |c| and mirror the comparison
    remainder = ti.abs(c) % CHECKER_CELL_WIDTH
    half = CHECKER_CELL_WIDTH / 2.0

    result = 0
    if c < 0.0 and -remainder < -half:
        result = 1
    elif c > 0.0 and remainder < half:
        result = 1
    return result


@ti.func
def checker_basis(normal: vec3):
    """Pick the two projection axes for a plane normal.

    Args:
        normal: The stored (not necessarily unit) plane normal.

    Returns:
        A tuple (px, py) of basis vectors.
    """
    px = vec3(0.0, 1.0, 0.0)
    py = vec3(0.0, 0.0, 1.0)

    if normal.z != 0.0:
        py = vec3(1.0, 0.0, 1.0)

    if normal.y != 0.0:
        px = vec3(0.0, 0.0, 1.0)
        py = vec3(1.0, 0.0, 0.0)

    return px, py


@ti.func
def plane_color_at(point: vec3, index: ti.i32) -> vec3:
    """Checker color of a stored plane at a point on it.

    Args:
        point: The hit point.
        index: Row of the plane in scene storage.

    Returns:
        One of the two scene checker colors.
    """
    from_origin = subtract(point, object_points[index])
    px, py = checker_basis(object_normals[index])

    x_parity = checker_parity(dot(px, from_origin))
    y_parity = checker_parity(dot(py, from_origin))

    color = checker_colors[1]
    if x_parity != y_parity:
        color = checker_colors[0]
    return color

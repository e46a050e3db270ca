"""Shading module: checker texture and point-light lighting."""

from .checker import CHECKER_CELL_WIDTH, checker_basis, checker_parity, plane_color_at
from .lighting import is_light_visible, lambert_amount_at

__all__ = [
    "CHECKER_CELL_WIDTH",
    "checker_parity",
    "checker_basis",
    "plane_color_at",
    "is_light_visible",
    "lambert_amount_at",
]

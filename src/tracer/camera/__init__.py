"""Camera module: viewport basis and primary ray generation."""

from .viewport import (
    Viewport,
    compute_viewport,
    get_ray,
    get_viewport_info,
    setup_viewport,
)

__all__ = [
    "Viewport",
    "compute_viewport",
    "setup_viewport",
    "get_ray",
    "get_viewport_info",
]

"""Preview module for output and visualization.

Components:
    export: Buffer-to-image conversion and PNG export (Pillow)
    display: Matplotlib-based static preview

Example:
    >>> from src.tracer.preview import save_png, show_preview
    >>> save_png(buffer, 480, 360, "output.png")
    >>> show_preview(buffer, 480, 360)
"""

from src.tracer.preview.display import show_preview
from src.tracer.preview.export import buffer_to_image, compute_rmse, save_png

__all__ = [
    "show_preview",
    "buffer_to_image",
    "save_png",
    "compute_rmse",
]

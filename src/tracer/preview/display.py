"""Matplotlib-based preview display for rendered buffers.

Example:
    >>> from src.tracer.core.integrator import render
    >>> from src.tracer.preview.display import show_preview
    >>> from src.tracer.scene.demo import create_demo_scene
    >>>
    >>> buffer = render(create_demo_scene(), 480, 360)
    >>> show_preview(buffer, 480, 360)
"""

import numpy as np
import numpy.typing as npt

from src.tracer.preview.export import buffer_to_image


def show_preview(
    buffer: npt.NDArray[np.float32],
    width: int,
    height: int,
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a render buffer as a Matplotlib figure.

    The buffer is clamped and flipped exactly as for PNG export.

    Args:
        buffer: Flat RGBA buffer of length width * height * 4.
        width: Image width in pixels.
        height: Image height in pixels.
        title: Custom title (default shows the resolution).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = buffer_to_image(buffer, width, height)

    # Create figure
    fig, ax = plt.subplots(1, 1, figsize=figsize)

    # Display image
    ax.imshow(display_image)
    ax.axis("off")
    ax.set_title(title if title is not None else f"Render Preview - {width}x{height}")

    plt.tight_layout()
    plt.show(block=block)

"""Image export utilities for rendered buffers.

The renderer produces a flat, unclamped float32 RGBA buffer whose first row
is the bottom of the picture. This module converts such buffers into 8-bit
images and writes them to disk. Clamping happens here and nowhere else.

Supported formats:
    - PNG (8-bit RGBA via Pillow)

Example:
    >>> from src.tracer.core.integrator import render
    >>> from src.tracer.preview.export import save_png
    >>> from src.tracer.scene.demo import create_demo_scene
    >>>
    >>> buffer = render(create_demo_scene(), 480, 360)
    >>> save_png(buffer, 480, 360, "output.png")
"""

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)


def buffer_to_image(
    buffer: npt.NDArray[np.float32],
    width: int,
    height: int,
    *,
    flip_vertical: bool = True,
) -> npt.NDArray[np.uint8]:
    """Convert a flat RGBA render buffer into an 8-bit image array.

    Channels are clamped to [0, 255] and truncated toward zero, matching how
    a clamped byte array stores them. Non-finite values map to 0.

    Args:
        buffer: Flat buffer of length width * height * 4.
        width: Image width in pixels.
        height: Image height in pixels.
        flip_vertical: Reverse row order so row 0 is the top of the picture.

    Returns:
        Array of shape (height, width, 4) with dtype uint8.

    Raises:
        ValueError: If the buffer length does not match the dimensions.
    """
    expected = width * height * 4
    if buffer.size != expected:
        raise ValueError(
            f"Buffer has {buffer.size} values, expected {expected} for {width}x{height} RGBA"
        )

    image = np.nan_to_num(
        np.asarray(buffer, dtype=np.float32), nan=0.0, posinf=255.0, neginf=0.0
    )
    image = np.clip(image, 0.0, 255.0).reshape(height, width, 4)

    if flip_vertical:
        image = image[::-1]

    return np.ascontiguousarray(image).astype(np.uint8)


def save_png(
    buffer: npt.NDArray[np.float32],
    width: int,
    height: int,
    filepath: str | Path,
    *,
    flip_vertical: bool = True,
) -> None:
    """Save a render buffer as an RGBA PNG file.

    Args:
        buffer: Flat buffer of length width * height * 4.
        width: Image width in pixels.
        height: Image height in pixels.
        filepath: Output file path (should end in .png).
        flip_vertical: Reverse row order so row 0 is the top of the picture.
    """
    image_uint8 = buffer_to_image(buffer, width, height, flip_vertical=flip_vertical)

    # Save using Pillow
    pil_image = PILImage.fromarray(image_uint8, mode="RGBA")
    pil_image.save(filepath)

    logger.info(f"Saved {width}x{height} image to {filepath}")


def compute_rmse(
    image_a: npt.NDArray[np.floating[npt.NBitBase]],
    image_b: npt.NDArray[np.floating[npt.NBitBase]],
) -> float:
    """Compute root mean squared error between two buffers or images.

    Args:
        image_a: First array.
        image_b: Second array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))

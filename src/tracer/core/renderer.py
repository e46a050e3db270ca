"""Banded renderer with progress reporting and cancellation.

This module wraps the core integrator so that an image is rendered in bands
of rows rather than in a single kernel launch. Between bands the renderer can:
- Report progress through a callback or a generator
- Poll a cancellation predicate and abort the render

Within a band every pixel is traced in parallel by Taichi and written to its
own slot, so a completed banded render holds exactly the same values as
``integrator.render`` for the same scene and size.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.core.renderer import Renderer
    >>> from src.tracer.scene.demo import create_demo_scene
    >>>
    >>> renderer = Renderer(create_demo_scene(), 480, 360, band_height=32)
    >>> for done, total in renderer.render_progressive():
    ...     print(f"{done}/{total} rows")
    >>> buffer = renderer.get_buffer()
"""

import logging
import time
from collections.abc import Callable, Generator

import numpy as np
import numpy.typing as npt

from src.tracer.core.integrator import get_pixel_buffer, prepare_render, render_rows
from src.tracer.scene.model import Scene

logger = logging.getLogger(__name__)

# Rows rendered per kernel launch
DEFAULT_BAND_HEIGHT = 64

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]

# Polled between bands; returning True aborts the render
CancelPredicate = Callable[[], bool]


class RenderCancelledError(RuntimeError):
    """Raised when a banded render is aborted by its cancellation predicate."""

    def __init__(self, rows_done: int, total_rows: int) -> None:
        super().__init__(f"Render cancelled after {rows_done}/{total_rows} rows")
        self.rows_done = rows_done
        self.total_rows = total_rows


class Renderer:
    """Renders one scene at a fixed size, band by band.

    The renderer owns no pixel storage of its own; it prepares the shared
    integrator state for its scene at the start of every render, so several
    Renderer instances may exist but only one renders at a time.

    Attributes:
        scene: The scene being rendered.
        width: Image width in pixels.
        height: Image height in pixels.
        band_height: Number of rows per band.
    """

    def __init__(
        self,
        scene: Scene,
        width: int,
        height: int,
        band_height: int = DEFAULT_BAND_HEIGHT,
    ) -> None:
        """Initialize the renderer.

        Args:
            scene: The scene to render.
            width: Image width in pixels (2 to 2048).
            height: Image height in pixels (2 to 2048).
            band_height: Rows per band; must be positive.

        Raises:
            ValueError: If band_height is not positive or the dimensions
                are unsupported.
        """
        if band_height < 1:
            raise ValueError(f"band_height must be positive, got {band_height}")

        self._scene = scene
        self._band_height = band_height
        self._width, self._height = prepare_render(scene, width, height)
        self._rows_done = 0

    @property
    def scene(self) -> Scene:
        """Get the scene being rendered."""
        return self._scene

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def band_height(self) -> int:
        """Get the number of rows per band."""
        return self._band_height

    @property
    def rows_done(self) -> int:
        """Get the number of rows completed by the current or last render."""
        return self._rows_done

    def render_progressive(self) -> Generator[tuple[int, int], None, None]:
        """Render the image, yielding progress after each band.

        Closing the generator early leaves the remaining rows unrendered.

        Yields:
            Tuple of (rows_done, total_rows).
        """
        prepare_render(self._scene, self._width, self._height)
        self._rows_done = 0

        for y_start in range(0, self._height, self._band_height):
            y_end = min(y_start + self._band_height, self._height)
            render_rows(y_start, y_end)
            self._rows_done = y_end
            logger.debug(f"Rendered rows [{y_start}, {y_end}) of {self._height}")
            yield (self._rows_done, self._height)

    def render(
        self,
        callback: ProgressCallback | None = None,
        should_cancel: CancelPredicate | None = None,
    ) -> npt.NDArray[np.float32]:
        """Render the full image.

        Args:
            callback: Optional function called after each band with
                (rows_done, total_rows).
            should_cancel: Optional predicate polled between bands.

        Returns:
            The flat RGBA buffer, identical to ``integrator.render``.

        Raises:
            RenderCancelledError: If should_cancel returns True.
        """
        start_time = time.perf_counter()

        progress = self.render_progressive()
        try:
            for rows_done, total_rows in progress:
                if callback is not None:
                    callback(rows_done, total_rows)
                if rows_done < total_rows and should_cancel is not None and should_cancel():
                    raise RenderCancelledError(rows_done, total_rows)
        finally:
            progress.close()

        logger.info(
            f"Rendered {self._width}x{self._height} in bands of {self._band_height} "
            f"rows in {time.perf_counter() - start_time:.3f}s"
        )
        return self.get_buffer()

    def get_buffer(self) -> npt.NDArray[np.float32]:
        """Get the flat RGBA buffer of the current render.

        Rows not yet rendered hold whatever the pixel buffer held before.

        Returns:
            Float32 array of length width * height * 4.
        """
        return get_pixel_buffer()

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"band_height={self.band_height}, rows_done={self.rows_done})"
        )

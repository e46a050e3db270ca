#!/usr/bin/env python3
"""Render a scene to a PNG file.

Renders either the built-in demo scene (three spheres in a checkered room)
or a scene loaded from JSON, in bands of rows with progress output.

Usage:
    python -m examples.render_scene [options]

Options:
    --scene PATH        JSON scene file (default: built-in demo scene)
    --width WIDTH       Image width in pixels (default: 480)
    --height HEIGHT     Image height in pixels (default: 360)
    --output OUTPUT     Output file path (default: render.png)
    --orbit ANGLE       Orbit angle of the demo spheres in radians (default: 0.0)
    --band-height ROWS  Rows rendered per progress update (default: 64)
    --show              Open a Matplotlib preview after rendering
    --verbose           Enable debug logging
    --cpu               Force the CPU backend

Example:
    python -m examples.render_scene --width 640 --height 480 --orbit 0.8
    python -m examples.render_scene --scene examples/scenes/mirrors.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import taichi as ti

logger = logging.getLogger("examples.render_scene")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a sphere-and-plane scene to PNG.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file (default: built-in demo scene)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=480,
        help="Image width in pixels (default: 480)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=360,
        help="Image height in pixels (default: 360)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="render.png",
        help="Output file path (default: render.png)",
    )
    parser.add_argument(
        "--orbit",
        type=float,
        default=0.0,
        help="Orbit angle of the demo spheres in radians (default: 0.0)",
    )
    parser.add_argument(
        "--band-height",
        type=int,
        default=64,
        help="Rows rendered per progress update (default: 64)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Open a Matplotlib preview after rendering",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--cpu",
        action="store_true",
        help="Force the CPU backend",
    )
    return parser.parse_args()


def render_scene(
    scene_path: str | None = None,
    width: int = 480,
    height: int = 360,
    output_path: str = "render.png",
    orbit: float = 0.0,
    band_height: int = 64,
    show: bool = False,
) -> Path:
    """Render a scene and save it to file.

    Args:
        scene_path: JSON scene to load, or None for the demo scene.
        width: Image width in pixels.
        height: Image height in pixels.
        output_path: Output file path (PNG).
        orbit: Orbit angle for the demo scene; ignored for JSON scenes.
        band_height: Rows rendered between progress updates.
        show: If True, display the result with Matplotlib.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.tracer.core.renderer import Renderer
    from src.tracer.preview.export import save_png
    from src.tracer.scene.demo import create_demo_scene
    from src.tracer.scene.loader import load_scene_json

    if scene_path is not None:
        scene = load_scene_json(scene_path)
    else:
        scene = create_demo_scene(orbit=orbit)

    renderer = Renderer(scene, width, height, band_height=band_height)

    def progress_callback(rows_done: int, total_rows: int) -> None:
        print(
            f"\r  Progress: {rows_done}/{total_rows} rows "
            f"({rows_done / total_rows * 100:.1f}%)",
            end="",
            flush=True,
        )

    buffer = renderer.render(callback=progress_callback)
    print()  # Newline after progress

    output_file = Path(output_path)
    save_png(buffer, renderer.width, renderer.height, output_file)
    print(f"Saved to: {output_file.absolute()}")

    if show:
        from src.tracer.preview.display import show_preview

        show_preview(buffer, renderer.width, renderer.height)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Use GPU if available, fall back to CPU
    if args.cpu:
        ti.init(arch=ti.cpu)
    else:
        try:
            ti.init(arch=ti.gpu)
        except Exception:
            logger.warning("GPU backend unavailable, falling back to CPU")
            ti.init(arch=ti.cpu)

    try:
        render_scene(
            scene_path=args.scene,
            width=args.width,
            height=args.height,
            output_path=args.output,
            orbit=args.orbit,
            band_height=args.band_height,
            show=args.show,
        )
        return 0
    except Exception as e:
        logger.error(f"Render failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""Pytest configuration for tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear scene storage and the render target around each test.

    This ensures tests are isolated from each other.
    """
    # Import here so the Taichi fields are created after ti.init()
    from src.tracer.core.integrator import clear_render_target
    from src.tracer.scene.storage import clear_scene

    def _clear_all():
        clear_scene()
        clear_render_target()

    _clear_all()
    yield
    _clear_all()


@pytest.fixture
def unit_sphere_scene():
    """A fov-90 camera at the origin facing a red ambient-only sphere at z=-5."""
    from src.tracer.scene.model import Camera, Scene, Sphere

    return Scene(
        camera=Camera(point=(0.0, 0.0, 0.0), vector=(0.0, 0.0, -1.0), fov=90.0),
        objects=(
            Sphere(
                point=(0.0, 0.0, -5.0),
                color=(255.0, 0.0, 0.0),
                specular=0.0,
                lambert=0.0,
                ambient=1.0,
                radius=1.0,
            ),
        ),
        lights=(),
        checker=((255.0, 255.0, 255.0), (0.0, 0.0, 0.0)),
    )

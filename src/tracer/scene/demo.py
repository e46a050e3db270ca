"""Demo scene: three spheres inside a checkered room.

The demo consists of:
- 3 spheres. The outer two orbit the center sphere as ``orbit`` advances,
  tracing tilted circles of radius 3 around the origin.
- 6 inward-facing checkered planes forming a closed room spanning
  x, y in [-5, 5] and z in [-12, 12]
- 1 point light inside the room
- Camera at (0, 1.8, 10) looking at the origin

Rendering successive frames with an increasing ``orbit`` animates the scene.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.core.integrator import render
    >>> from src.tracer.scene.demo import DemoSceneParams, create_demo_scene
    >>>
    >>> scene = create_demo_scene(orbit=0.5)
    >>> glossy = create_demo_scene(params=DemoSceneParams(sphere_specular=0.6))
    >>> buffer = render(scene, 480, 360)
"""

import math
from dataclasses import dataclass

from src.tracer.scene.model import Camera, Plane, Scene, Sphere, Vector3

# Canvas size the demo is framed for
DEMO_WIDTH = 480
DEMO_HEIGHT = 360

# Half extents of the room along each axis
ROOM_HALF_WIDTH = 5.0
ROOM_HALF_HEIGHT = 5.0
ROOM_HALF_DEPTH = 12.0

# Orbit radius in the xz-plane and vertical amplitude of the orbiting spheres
ORBIT_RADIUS = 3.0
ORBIT_HEIGHT = 2.0


@dataclass
class DemoSceneParams:
    """Parameters for configuring the demo scene.

    All parameters have defaults that give a reasonably lit, mildly
    reflective render at the demo canvas size.

    Attributes:
        camera_point: Camera position. Default (0, 1.8, 10).
        camera_fov: Field of view in degrees. Default 45.
        sphere_colors: Base colors of the left, right and center spheres.
        sphere_radius: Radius shared by all spheres. Default 1.0.
        sphere_specular: Mirror strength of the spheres. Default 0.2.
        sphere_lambert: Diffuse strength of the spheres. Default 0.7.
        sphere_ambient: Ambient strength of the spheres. Default 0.1.
        light: Position of the single point light.
        checker: The two colors of the room's checker pattern.

    Example:
        >>> params = DemoSceneParams()
        >>> params.camera_fov
        45.0
        >>> params.sphere_colors[0]
        (155.0, 200.0, 155.0)
    """

    camera_point: Vector3 = (0.0, 1.8, 10.0)
    camera_fov: float = 45.0
    sphere_colors: tuple[Vector3, Vector3, Vector3] = (
        (155.0, 200.0, 155.0),
        (155.0, 155.0, 200.0),
        (255.0, 255.0, 255.0),
    )
    sphere_radius: float = 1.0
    sphere_specular: float = 0.2
    sphere_lambert: float = 0.7
    sphere_ambient: float = 0.1
    light: Vector3 = (-3.0, 3.0, 7.0)
    checker: tuple[Vector3, Vector3] = ((50.0, 0.0, 89.0), (92.0, 209.0, 92.0))


# Room walls as (point, inward normal, stored color)
_ROOM_WALLS: tuple[tuple[Vector3, Vector3, Vector3], ...] = (
    ((0.0, ROOM_HALF_HEIGHT, 0.0), (0.0, -1.0, 0.0), (200.0, 200.0, 200.0)),  # Ceiling
    ((0.0, -ROOM_HALF_HEIGHT, 0.0), (0.0, 1.0, 0.0), (100.0, 100.0, 100.0)),  # Floor
    ((-ROOM_HALF_WIDTH, 0.0, 0.0), (1.0, 0.0, 0.0), (100.0, 100.0, 100.0)),  # Left
    ((ROOM_HALF_WIDTH, 0.0, 0.0), (-1.0, 0.0, 0.0), (100.0, 100.0, 100.0)),  # Right
    ((0.0, 0.0, -ROOM_HALF_DEPTH), (0.0, 0.0, 1.0), (100.0, 100.0, 100.0)),  # Back
    ((0.0, 0.0, ROOM_HALF_DEPTH), (0.0, 0.0, -1.0), (100.0, 100.0, 100.0)),  # Front
)

# Shading shared by every wall
WALL_SPECULAR = 0.0
WALL_LAMBERT = 0.9
WALL_AMBIENT = 0.2


def orbit_positions(orbit: float) -> tuple[Vector3, Vector3]:
    """Centers of the two orbiting spheres at a given orbit parameter.

    The spheres stay on opposite sides of the origin; at orbit 0 they sit
    at (0, 0, 3) and (0, -2, -3).

    Args:
        orbit: Orbit angle in radians.

    Returns:
        Tuple of (first_center, second_center).
    """
    s = math.sin(orbit)
    c = math.cos(orbit)
    first = (s * ORBIT_RADIUS, s * ORBIT_HEIGHT, c * ORBIT_RADIUS)
    second = (s * -ORBIT_RADIUS, c * -ORBIT_HEIGHT, c * -ORBIT_RADIUS)
    return first, second


def create_demo_scene(
    orbit: float = 0.0,
    params: DemoSceneParams | None = None,
) -> Scene:
    """Create the demo scene.

    Args:
        orbit: Orbit angle in radians of the two moving spheres.
        params: Optional parameters. Uses defaults if not provided.

    Returns:
        The demo Scene: three spheres followed by six walls.
    """
    if params is None:
        params = DemoSceneParams()

    first, second = orbit_positions(orbit)
    centers = (first, second, (0.0, 0.0, 0.0))

    spheres = tuple(
        Sphere(
            point=center,
            color=color,
            specular=params.sphere_specular,
            lambert=params.sphere_lambert,
            ambient=params.sphere_ambient,
            radius=params.sphere_radius,
        )
        for center, color in zip(centers, params.sphere_colors)
    )

    walls = tuple(
        Plane(
            point=point,
            color=color,
            normal=normal,
            specular=WALL_SPECULAR,
            lambert=WALL_LAMBERT,
            ambient=WALL_AMBIENT,
        )
        for point, normal, color in _ROOM_WALLS
    )

    return Scene(
        camera=Camera(
            point=params.camera_point,
            vector=(0.0, 0.0, 0.0),
            fov=params.camera_fov,
        ),
        objects=spheres + walls,
        lights=(params.light,),
        checker=params.checker,
    )

"""Host-side scene description.

A ``Scene`` is built once per render call, never mutated, and uploaded into
Taichi fields by ``src.tracer.scene.storage.upload_scene``. Objects carry no
identity beyond their position in ``Scene.objects``; that position decides
ties between equally distant hits.

Example:
    >>> from src.tracer.scene.model import Camera, Scene, Sphere
    >>> scene = Scene(
    ...     camera=Camera(point=(0, 0, 0), vector=(0, 0, -1), fov=90.0),
    ...     objects=(
    ...         Sphere(point=(0, 0, -5), color=(255, 0, 0), specular=0.0,
    ...                lambert=0.0, ambient=1.0, radius=1.0),
    ...     ),
    ...     lights=(),
    ...     checker=((255, 255, 255), (0, 0, 0)),
    ... )
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from src.tracer.geometry.primitive import PrimitiveKind

# Plain 3-tuples on the host; converted to vec3 fields on upload
Vector3 = tuple[float, float, float]


@dataclass(frozen=True)
class Camera:
    """Viewpoint of the render.

    Attributes:
        point: Eye position in world space.
        vector: The point the camera looks at (a target, not a direction).
            The view direction is unit(vector - point).
        fov: Full vertical field of view in degrees, expected in (0, 180).
    """

    point: Vector3
    vector: Vector3
    fov: float


@dataclass(frozen=True)
class Sphere:
    """A sphere with its own shading coefficients.

    Attributes:
        point: Center of the sphere.
        color: Base color (channels typically 0-255).
        specular: Mirror reflection strength.
        lambert: Diffuse strength.
        ambient: Constant self-illumination strength.
        radius: Radius (positive).
    """

    kind: ClassVar[PrimitiveKind] = PrimitiveKind.SPHERE

    point: Vector3
    color: Vector3
    specular: float
    lambert: float
    ambient: float
    radius: float


@dataclass(frozen=True)
class Plane:
    """A single-sided infinite plane textured with the scene's checker colors.

    ``color`` is kept for completeness of the description but the shaded base
    color of a plane always comes from the checker pattern.

    Attributes:
        point: Any point on the plane.
        color: Stored base color (not used for shading).
        normal: Facing direction; need not be unit length.
        specular: Mirror reflection strength.
        lambert: Diffuse strength.
        ambient: Constant self-illumination strength.
    """

    kind: ClassVar[PrimitiveKind] = PrimitiveKind.PLANE

    point: Vector3
    color: Vector3
    normal: Vector3
    specular: float
    lambert: float
    ambient: float


Primitive = Union[Sphere, Plane]


@dataclass(frozen=True)
class Scene:
    """Everything the renderer needs for one frame.

    Attributes:
        camera: The viewpoint.
        objects: Primitives in scan order.
        lights: Point light positions (no color or intensity).
        checker: Exactly two colors used to texture planes.
    """

    camera: Camera
    objects: tuple[Primitive, ...]
    lights: tuple[Vector3, ...]
    checker: tuple[Vector3, Vector3]

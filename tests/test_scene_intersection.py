"""Tests for scene storage and nearest-hit queries.

Tests cover:
- Uploading scenes into Taichi fields and capacity limits
- Nearest-hit selection across several objects
- Tie-breaking by object order
- Self-intersection suppression
- Surface normal dispatch
"""

import pytest
import taichi as ti


def _sphere(center, radius=1.0, color=(255.0, 0.0, 0.0)):
    from src.tracer.scene.model import Sphere

    return Sphere(
        point=center, color=color, specular=0.0, lambert=0.0, ambient=1.0, radius=radius
    )


def _plane(point, normal):
    from src.tracer.scene.model import Plane

    return Plane(
        point=point,
        color=(100.0, 100.0, 100.0),
        normal=normal,
        specular=0.0,
        lambert=0.9,
        ambient=0.2,
    )


def _scene(objects, lights=()):
    from src.tracer.scene.model import Camera, Scene

    return Scene(
        camera=Camera(point=(0.0, 0.0, 0.0), vector=(0.0, 0.0, -1.0), fov=90.0),
        objects=tuple(objects),
        lights=tuple(lights),
        checker=((255.0, 255.0, 255.0), (0.0, 0.0, 0.0)),
    )


def _nearest(origin, direction):
    """Run intersect_scene for one ray and return (hit, distance, index)."""
    from src.tracer.core.ray import make_ray
    from src.tracer.core.vector import vec3
    from src.tracer.scene.intersection import intersect_scene

    hit = ti.field(dtype=ti.i32, shape=())
    distance = ti.field(dtype=ti.f32, shape=())
    index = ti.field(dtype=ti.i32, shape=())

    @ti.kernel
    def test_kernel(
        ox: ti.f32, oy: ti.f32, oz: ti.f32, dx: ti.f32, dy: ti.f32, dz: ti.f32
    ):
        result = intersect_scene(make_ray(vec3(ox, oy, oz), vec3(dx, dy, dz)))
        hit[None] = result.hit
        distance[None] = result.distance
        index[None] = result.index

    test_kernel(*origin, *direction)
    return hit[None], distance[None], index[None]


class TestSceneStorage:
    """Tests for uploading scenes into Taichi fields."""

    def test_upload_scene_counts(self):
        """Test object and light counts after upload."""
        from src.tracer.scene.storage import get_light_count, get_object_count, upload_scene

        upload_scene(
            _scene(
                [_sphere((0.0, 0.0, -5.0)), _plane((0.0, -1.0, 0.0), (0.0, 1.0, 0.0))],
                lights=[(0.0, 5.0, 0.0), (1.0, 5.0, 0.0)],
            )
        )
        assert get_object_count() == 2
        assert get_light_count() == 2

    def test_upload_replaces_previous_scene(self):
        """Test a second upload discards the first scene's objects."""
        from src.tracer.scene.storage import get_object_count, upload_scene

        upload_scene(_scene([_sphere((0.0, 0.0, -5.0)), _sphere((0.0, 0.0, -9.0))]))
        upload_scene(_scene([_sphere((0.0, 0.0, -5.0))]))
        assert get_object_count() == 1

    def test_upload_writes_fields_in_order(self):
        """Test the stored kind and parameters follow the object order."""
        from src.tracer.geometry.primitive import PrimitiveKind
        from src.tracer.scene.storage import (
            object_kinds,
            object_normals,
            object_radii,
            upload_scene,
        )

        upload_scene(
            _scene([_plane((0.0, -1.0, 0.0), (0.0, 2.0, 0.0)), _sphere((0.0, 0.0, -5.0), 1.5)])
        )
        assert object_kinds[0] == int(PrimitiveKind.PLANE)
        assert object_kinds[1] == int(PrimitiveKind.SPHERE)
        assert object_normals[0][1] == pytest.approx(2.0)
        assert object_radii[1] == pytest.approx(1.5)

    def test_unknown_object_type_raises(self):
        """Test that a non-primitive object is rejected."""
        from src.tracer.scene.storage import upload_scene

        with pytest.raises(TypeError, match="Unsupported primitive"):
            upload_scene(_scene(["not a primitive"]))

    def test_checker_requires_two_colors(self):
        """Test that a checker palette of the wrong size is rejected."""
        from src.tracer.scene.storage import set_checker

        with pytest.raises(ValueError, match="exactly 2 colors"):
            set_checker(((1.0, 1.0, 1.0),))

    def test_light_capacity_exceeded(self):
        """Test adding more lights than MAX_LIGHTS raises."""
        from src.tracer.scene.storage import MAX_LIGHTS, add_light

        for _ in range(MAX_LIGHTS):
            add_light((0.0, 0.0, 0.0))
        with pytest.raises(RuntimeError, match="Maximum number of lights"):
            add_light((0.0, 0.0, 0.0))

    def test_clear_scene(self):
        """Test clear_scene resets the counts."""
        from src.tracer.scene.storage import (
            clear_scene,
            get_light_count,
            get_object_count,
            upload_scene,
        )

        upload_scene(_scene([_sphere((0.0, 0.0, -5.0))], lights=[(0.0, 1.0, 0.0)]))
        clear_scene()
        assert get_object_count() == 0
        assert get_light_count() == 0


class TestNearestHit:
    """Tests for intersect_scene."""

    def test_empty_scene_misses(self):
        """Test that an empty scene reports no hit."""
        hit, _, index = _nearest((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert hit == 0
        assert index == -1

    def test_closest_object_wins_regardless_of_order(self):
        """Test the nearer sphere is reported even when listed second."""
        from src.tracer.scene.storage import upload_scene

        upload_scene(_scene([_sphere((0.0, 0.0, -10.0)), _sphere((0.0, 0.0, -5.0))]))
        hit, distance, index = _nearest((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert hit == 1
        assert index == 1
        assert distance == pytest.approx(4.0, abs=1e-5)

    def test_equal_distances_resolve_to_earlier_object(self):
        """Test that on a tie the first object in scene order wins."""
        from src.tracer.scene.storage import upload_scene

        upload_scene(
            _scene(
                [
                    _sphere((0.0, 0.0, -5.0), color=(255.0, 0.0, 0.0)),
                    _sphere((0.0, 0.0, -5.0), color=(0.0, 255.0, 0.0)),
                ]
            )
        )
        hit, _, index = _nearest((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert hit == 1
        assert index == 0

    def test_plane_behind_origin_is_rejected(self):
        """Test a plane hit with negative distance is never reported."""
        from src.tracer.scene.storage import upload_scene

        upload_scene(_scene([_plane((0.0, 2.0, 0.0), (0.0, 1.0, 0.0))]))
        hit, _, _ = _nearest((0.0, 0.0, 0.0), (0.0, -1.0, 0.0))
        assert hit == 0

    def test_plane_hit_at_origin_is_suppressed(self):
        """Test a ray starting on a plane does not hit that plane again."""
        from src.tracer.scene.storage import upload_scene

        upload_scene(_scene([_plane((0.0, 0.0, 0.0), (0.0, 1.0, 0.0))]))
        hit, _, _ = _nearest((0.0, 0.0, 0.0), (0.0, -1.0, 0.0))
        assert hit == 0

    def test_ray_from_sphere_surface_does_not_hit_itself(self):
        """Test rays leaving a sphere's surface in either direction miss it."""
        from src.tracer.scene.storage import upload_scene

        upload_scene(_scene([_sphere((0.0, 0.0, -5.0))]))
        outward, _, _ = _nearest((0.0, 0.0, -4.0), (0.0, 0.0, 1.0))
        inward, _, _ = _nearest((0.0, 0.0, -4.0), (0.0, 0.0, -1.0))
        assert outward == 0
        assert inward == 0


class TestSurfaceNormal:
    """Tests for surface_normal dispatch."""

    def test_normals_by_kind(self):
        """Test sphere and plane normals are evaluated per stored kind."""
        from src.tracer.core.vector import vec3
        from src.tracer.scene.intersection import surface_normal
        from src.tracer.scene.storage import upload_scene

        upload_scene(
            _scene([_sphere((0.0, 0.0, -5.0)), _plane((0.0, -1.0, 0.0), (0.0, 3.0, 0.0))])
        )
        normals = ti.Vector.field(3, dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel():
            normals[0] = surface_normal(0, vec3(1.0, 0.0, -5.0))
            normals[1] = surface_normal(1, vec3(7.0, -1.0, 2.0))

        test_kernel()
        result = normals.to_numpy()
        assert result[0] == pytest.approx([1.0, 0.0, 0.0], abs=1e-6)
        assert result[1] == pytest.approx([0.0, 1.0, 0.0], abs=1e-6)

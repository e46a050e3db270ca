"""Hard shadows and Lambertian diffuse lighting from point lights."""

import taichi as ti
import taichi.math as tm

from src.tracer.core.ray import make_ray
from src.tracer.core.vector import dot, length, subtract, unit, vec3
from src.tracer.scene.intersection import intersect_scene
from src.tracer.scene.storage import light_positions, num_lights


@ti.func
def is_light_visible(point: vec3, light: vec3) -> ti.i32:
    """Shadow test from a surface point toward a point light.

    A shadow ray is cast from the point toward the light. The light is
    visible when nothing is hit, or when the nearest hit lies at or beyond
    the light.

    Args:
        point: The surface point being shaded.
        light: The light position.

    Returns:
        1 if the light is visible, 0 if an occluder sits in front of it.
    """
    to_light = subtract(light, point)
    distance_to_light = length(to_light)
    hit = intersect_scene(make_ray(point, unit(to_light)))

    visible = 1
    if hit.hit == 1 and hit.distance < distance_to_light:
        visible = 0
    return visible


@ti.func
def lambert_amount_at(point: vec3, normal: vec3) -> ti.f32:
    """Diffuse light factor at a surface point.

    Sums the cosine term max(0, dot(unit(light - point), normal)) over every
    visible light and saturates the total at 1.0.

    Args:
        point: The surface point being shaded.
        normal: Unit surface normal at the point.

    Returns:
        The clamped diffuse factor in [0, 1].
    """
    amount = 0.0
    for i in range(num_lights[None]):
        light = light_positions[i]
        if is_light_visible(point, light) == 1:
            amount += tm.max(0.0, dot(unit(subtract(light, point)), normal))
    return tm.min(amount, 1.0)

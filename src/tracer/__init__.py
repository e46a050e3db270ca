"""Taichi-based Whitted-style ray tracer for spheres and checkered planes.

This package renders small analytic scenes with:
- One primary ray per pixel through a pinhole viewport
- Lambertian diffuse lighting with hard shadows from point lights
- Constant ambient term
- Mirror reflection with a fixed recursion bound
- Procedural checker texture on planes

Subpackages:
    core: Vector helpers, rays, the shading integrator and the banded renderer
    geometry: Sphere and plane intersection
    scene: Scene description, storage, loading and the demo scene
    shading: Checker texture and point-light lighting
    camera: Viewport basis and primary ray generation
    preview: PNG export and Matplotlib preview
"""

__version__ = "0.1.0"

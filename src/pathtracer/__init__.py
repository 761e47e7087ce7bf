"""Offline Monte Carlo path tracer built on Taichi.

This package renders scenes of spheres lit by a procedural sky into
plain-text PPM images, with support for:
- Diffuse, metal and dielectric (glass) materials
- Jittered multi-sample anti-aliasing
- Depth-limited light paths with a reproducible, seedable random source

Subpackages:
    core: Vector algebra, rays, random sampling, integrator and render loop
    geometry: Sphere primitive and hit records
    materials: Scattering models and the material registry
    scene: Hittable list (scene aggregate) and preset scenes
    camera: Axis-aligned pinhole camera
    output: PPM image writer
"""

__version__ = "0.1.0"

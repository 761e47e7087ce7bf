"""Scene module.

Components:
    hittable_list: HittableList aggregate and scene-level intersection
    presets: Ready-made scenes for the driver and tests

Scene data is stored in Taichi fields in Structure-of-Arrays layout;
materials are referenced by registry id so shared materials are stored
once.
"""

from .hittable_list import (
    MAX_SPHERES,
    HittableList,
    clear_scene,
    get_sphere_count,
    intersect_scene,
)
from .presets import create_single_sphere_scene, create_three_spheres_scene

__all__ = [
    "HittableList",
    "intersect_scene",
    "clear_scene",
    "get_sphere_count",
    "MAX_SPHERES",
    "create_single_sphere_scene",
    "create_three_spheres_scene",
]

"""
Recursive path tracing.

The radiance returned along a ray is the sum of:
- direct lighting: every point light not blocked by a shadow ray, weighted
  by the surface BRDF
- indirect lighting: whatever the material's secondary ray gathers, traced
  recursively while bounce budget remains
- the surface's own emission toward the viewer
"""

from __future__ import annotations

from .ray import Ray
from .radiance import Radiance
from .scene import Scene
from .shapes import EPSILON
from .materials import TraceCallback


def trace_path(scene: Scene, ray: Ray, bounce_budget: int) -> Radiance:
    """Compute the radiance arriving at the ray origin from along the ray.

    Args:
        scene: The scene to trace against
        ray: The ray to follow
        bounce_budget: Secondary rays still allowed below this one; at zero,
            reflective and refractive surfaces stop recursing

    Returns:
        Radiance carried back along the ray
    """
    if bounce_budget < 0:
        raise ValueError(f"bounce_budget must be non-negative, got {bounce_budget}")

    hit = scene.intersect(ray)
    if hit is None:
        return scene.background(ray.direction)

    obj, point = hit.object, hit.point
    outgoing = -ray.direction

    result = Radiance.zero()
    for source in scene.light_sources:
        to_light = source.direction_from(point)
        shadow_ray = Ray(point, to_light).offset(EPSILON)
        if scene.shadow_intersect(shadow_ray, source.distance_from(shadow_ray.origin)):
            continue
        reflectance = obj.reflectance(point, -to_light, outgoing)
        result = result + source.intensity(point).mul_light(reflectance)

    if bounce_budget > 0:
        result = result + obj.next_step(point, ray.direction, _continuation(scene, bounce_budget - 1))

    return result + obj.emittance(point, outgoing)


def _continuation(scene: Scene, bounce_budget: int) -> TraceCallback:
    def trace(new_ray: Ray) -> Radiance:
        return trace_path(scene, new_ray, bounce_budget)
    return trace

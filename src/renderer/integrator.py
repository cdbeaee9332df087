# renderer/integrator.py
import math
from core.interval import Interval
from core.ray import Ray
from core.vector import Vector3
from materials.material import BLACK

# Lower bound of every hit window. Keeps a bounce from re-hitting the surface
# it just left because of floating-point error in its origin.
SHADOW_ACNE_EPSILON = 0.001

def ray_color(ray: Ray, world, depth: int, background: Vector3, rng) -> Vector3:
    """
    Radiance arriving along ray, following at most depth bounces.

    world is anything with hit(ray, interval) -> (HitRecord, Material) | None.
    Paths that run out of bounces contribute nothing; rays that escape the
    scene see the flat background color.
    """
    if depth <= 0:
        return BLACK

    found = world.hit(ray, Interval(SHADOW_ACNE_EPSILON, math.inf))
    if found is None:
        return background

    rec, material = found
    emitted = material.emitted(ray, rec)
    scatter = material.scatter(ray, rec, rng)
    if scatter is None:
        return emitted

    scattered, attenuation = scatter
    return emitted + attenuation * ray_color(scattered, world, depth - 1, background, rng)

# geometry/surface.py
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union
from core.ray import Ray
from core.interval import Interval
from core.aabb import AABB
from geometry.hittable import HitRecord
from geometry.sphere import Sphere
from geometry.planar import Quadrilateral, Triangle
from materials.material import Material

# The closed set of primitives a surface can be made of.
Geometry = Union[Sphere, Quadrilateral, Triangle]

@dataclass(frozen=True)
class Surface:
    """
    One geometry paired with the material that shades it. This is the unit
    stored in BVH leaves.
    """
    geometry: Geometry
    material: Material

    def hit(self, ray: Ray, interval: Interval) -> Optional[Tuple[HitRecord, Material]]:
        rec = self.geometry.hit(ray, interval)
        if rec is None:
            return None
        return rec, self.material

    def bounding_box(self) -> AABB:
        return self.geometry.bounding_box()

def bounding_box_of(surfaces: Sequence[Surface]) -> AABB:
    return AABB.surrounding(s.bounding_box() for s in surfaces)

def hit_linear(surfaces: Sequence[Surface], ray: Ray,
               interval: Interval) -> Optional[Tuple[HitRecord, Material]]:
    """
    Nearest hit by testing every surface. On equal t the earlier surface wins.
    """
    best = None
    for surface in surfaces:
        found = surface.hit(ray, interval)
        if found is not None and (best is None or found[0].t < best[0].t):
            best = found
    return best

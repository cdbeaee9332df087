# materials/material.py
from typing import Optional, Tuple
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import HitRecord

BLACK = Vector3(0.0, 0.0, 0.0)

class Material:
    """
    Base material. Subclasses override scatter() and/or emitted().

    Materials are immutable values: the same instance may be shared by many
    surfaces and read concurrently by every render worker.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Optional[Tuple[Ray, Vector3]]:
        """
        Computes the scattered ray and attenuation.
        Returns a tuple (scattered_ray, attenuation) or None if the ray is absorbed.
        """
        return None

    def emitted(self, ray_in: Ray, rec: HitRecord) -> Vector3:
        """
        Radiance leaving the surface on its own. Black unless overridden.
        """
        return BLACK

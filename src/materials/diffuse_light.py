# materials/diffuse_light.py
from dataclasses import dataclass
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import HitRecord
from materials.material import Material

@dataclass(frozen=True)
class DiffuseLight(Material):
    """
    Emissive material that provides constant radiance. Never scatters.
    """
    emit: Vector3

    def emitted(self, ray_in: Ray, rec: HitRecord) -> Vector3:
        return self.emit

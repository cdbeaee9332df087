# materials/uv_gradient.py
import math
from dataclasses import dataclass
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import HitRecord
from materials.material import Material

@dataclass(frozen=True)
class UVGradient(Material):
    """
    Diagnostic emitter that paints a surface's (u, v) parametrisation:
    red follows u, green follows v, and blue fades radially away from (0, 0).
    """
    intensity: float = 1.0

    def emitted(self, ray_in: Ray, rec: HitRecord) -> Vector3:
        radius = min(1.0, math.hypot(rec.u, rec.v) / math.sqrt(2.0))
        return Vector3(rec.u, rec.v, 1.0 - radius) * self.intensity

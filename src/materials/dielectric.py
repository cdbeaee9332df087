# src/materials/dielectric.py
import math
from dataclasses import dataclass
from typing import Tuple
from core.ray import Ray
from core.vector import Vector3
from core.utils import reflect
from geometry.hittable import HitRecord
from materials.material import Material

CLEAR = Vector3(1.0, 1.0, 1.0)

@dataclass(frozen=True)
class Dielectric(Material):
    """
    Clear refractive material (glass, water). refraction_index is the index of
    the material relative to the medium outside it.
    """
    refraction_index: float

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Tuple[Ray, Vector3]:
        # Determine if we're entering or exiting the material
        ni_over_nt = 1.0 / self.refraction_index if rec.front_face else self.refraction_index

        unit_direction = ray_in.direction.normalize()

        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        # Total internal reflection, otherwise reflect with Schlick's probability
        if ni_over_nt * sin_theta > 1.0 or rng.random() < schlick(cos_theta, ni_over_nt):
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ni_over_nt)

        # Same length as the incoming direction
        return Ray(rec.p, direction * ray_in.direction.length()), CLEAR

def refract(uv: Vector3, n: Vector3, ni_over_nt: float) -> Vector3:
    cos_theta = min(-uv.dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * ni_over_nt
    r_out_parallel = n * (-math.sqrt(abs(1.0 - r_out_perp.length_squared())))
    return r_out_perp + r_out_parallel

def schlick(cos_theta: float, ref_idx: float) -> float:
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    # Index-matched boundary: nothing to reflect off.
    if r0 == 0.0:
        return 0.0
    return r0 + (1.0 - r0) * math.pow((1.0 - cos_theta), 5)

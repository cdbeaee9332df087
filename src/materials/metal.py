# materials/metal.py
from dataclasses import dataclass
from typing import Optional, Tuple
from core.ray import Ray
from core.vector import Vector3
from core.utils import reflect, random_unit_vector
from geometry.hittable import HitRecord
from materials.material import Material

@dataclass(frozen=True)
class Metal(Material):
    """
    Metal material with reflective properties. fuzz_radius perturbs the mirror
    direction; it is capped at 1.
    """
    albedo: Vector3
    fuzz_radius: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "fuzz_radius", min(self.fuzz_radius, 1.0))

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Optional[Tuple[Ray, Vector3]]:
        reflected = reflect(ray_in.direction, rec.normal).normalize()
        fuzzed = (reflected + random_unit_vector(rng) * self.fuzz_radius).normalize()

        if fuzzed.dot(rec.normal) > 0:
            return Ray(rec.p, fuzzed), self.albedo

        return None  # Absorb the ray if it does not scatter forward

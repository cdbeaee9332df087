# core/ray.py
from dataclasses import dataclass
from core.vector import Vector3

@dataclass
class Ray:
    """
    Half-line origin + t * direction. The direction is not normalised;
    hit distances are measured in units of its length.
    """
    origin: Vector3
    direction: Vector3

    def at(self, t: float) -> Vector3:
        return self.origin + self.direction * t

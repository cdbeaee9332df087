# geometry/hittable.py
from typing import Tuple
from core.vector import Vector3
from core.ray import Ray

class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    def __init__(self, t: float, p: Vector3, u: float, v: float,
                 front_face: bool, normal: Vector3):
        self.t = t                    # Ray parameter at intersection
        self.p = p                    # Intersection point
        self.u = u                    # Surface coordinates
        self.v = v
        self.front_face = front_face  # Whether the hit was on the outward side
        self.normal = normal          # Always opposes the incoming ray

    def __repr__(self) -> str:
        return (f"HitRecord(t={self.t}, p={self.p!r}, u={self.u}, v={self.v}, "
                f"front_face={self.front_face}, normal={self.normal!r})")

def face_normal(ray: Ray, outward_normal: Vector3) -> Tuple[bool, Vector3]:
    """
    Ensures that the normal always points against the ray.
    """
    front_face = ray.direction.dot(outward_normal) < 0
    return front_face, outward_normal if front_face else -outward_normal

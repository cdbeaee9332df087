# geometry/sphere.py
import math
from dataclasses import dataclass
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from core.interval import Interval
from core.aabb import AABB
from geometry.hittable import HitRecord, face_normal

class InvalidRadiusError(ValueError):
    """
    Raised when a sphere is constructed with a negative radius.
    """
    def __init__(self, radius: float):
        super().__init__(f"invalid radius {radius} (expected non-negative radius)")
        self.radius = radius

@dataclass(frozen=True)
class Sphere:
    """
    Represents a sphere defined by its center and radius.
    """
    center: Vector3
    radius: float

    def __post_init__(self):
        if self.radius < 0:
            raise InvalidRadiusError(self.radius)

    def hit(self, ray: Ray, interval: Interval) -> Optional[HitRecord]:
        oc = self.center - ray.origin
        a = ray.direction.length_squared()
        h = ray.direction.dot(oc)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = h * h - a * c

        # A point sphere has no surface to report a normal for.
        if discriminant < 0 or self.radius == 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = (h - sqrt_disc) / a
        if not interval.surrounds(root):
            root = (h + sqrt_disc) / a
            if not interval.surrounds(root):
                return None

        p = ray.at(root)
        outward_normal = (p - self.center) / self.radius
        front_face, normal = face_normal(ray, outward_normal)
        u, v = sphere_uv(outward_normal)
        return HitRecord(root, p, u, v, front_face, normal)

    def bounding_box(self) -> AABB:
        # The bounding box of a sphere is center ± radius
        offset = Vector3(self.radius, self.radius, self.radius)
        return AABB.from_points(self.center + offset, self.center - offset)

def sphere_uv(n: Vector3):
    """
    Map a point on the unit sphere to (u, v) in [0,1] x [0,1]: u is the angle
    around the Y axis from X=-1, v is the angle from Y=-1 to Y=+1.
    """
    theta = math.acos(max(-1.0, min(1.0, -n.y)))
    phi = math.atan2(-n.z, n.x) + math.pi
    return phi / (2 * math.pi), theta / math.pi

# geometry/planar.py
from dataclasses import dataclass, field
from typing import Optional, Tuple
from core.vector import Vector3
from core.ray import Ray
from core.interval import Interval
from core.aabb import AABB
from geometry.hittable import HitRecord, face_normal

# Flat primitives get this much thickness on their degenerate axis.
BOX_PADDING = 1e-4
PARALLEL_EPSILON = 1e-10

@dataclass(frozen=True)
class _PlanarGeometry:
    """
    Shared base for flat primitives spanned by a corner q and two edges u, v.

    The plane normal, the plane distance d and the projector w = n / (n . n)
    are computed once here; subclasses only decide which planar coordinates
    (alpha, beta) are inside the shape and what its bounding box is.
    """
    q: Vector3
    u: Vector3
    v: Vector3
    normal: Vector3 = field(init=False, repr=False, compare=False)
    d: float = field(init=False, repr=False, compare=False)
    w: Vector3 = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        n = self.u.cross(self.v)
        normal = n.normalize()
        nn = n.dot(n)
        # frozen dataclass: derived fields are written once, here
        object.__setattr__(self, "normal", normal)
        object.__setattr__(self, "d", normal.dot(self.q))
        # Collinear edges leave a zero normal, which every ray treats as parallel.
        object.__setattr__(self, "w", n / nn if nn > 0 else Vector3(0.0, 0.0, 0.0))

    def _plane_hit(self, ray: Ray, interval: Interval) -> Optional[Tuple[float, Vector3, float, float]]:
        denominator = self.normal.dot(ray.direction)
        if abs(denominator) < PARALLEL_EPSILON:
            return None

        t = (self.d - self.normal.dot(ray.origin)) / denominator
        if not interval.surrounds(t):
            return None

        p = ray.at(t)
        qp = p - self.q
        alpha = self.w.dot(qp.cross(self.v))
        beta = self.w.dot(self.u.cross(qp))
        return t, p, alpha, beta

    def accepts(self, alpha: float, beta: float) -> bool:
        raise NotImplementedError("accepts() must be implemented by subclasses.")

    def hit(self, ray: Ray, interval: Interval) -> Optional[HitRecord]:
        plane_hit = self._plane_hit(ray, interval)
        if plane_hit is None:
            return None

        t, p, alpha, beta = plane_hit
        if not self.accepts(alpha, beta):
            return None

        front_face, normal = face_normal(ray, self.normal)
        return HitRecord(t, p, alpha, beta, front_face, normal)

@dataclass(frozen=True)
class Quadrilateral(_PlanarGeometry):
    """
    Parallelogram with corners q, q+u, q+v and q+u+v.
    """
    def accepts(self, alpha: float, beta: float) -> bool:
        return Interval.UNIT.contains(alpha) and Interval.UNIT.contains(beta)

    def bounding_box(self) -> AABB:
        diagonal = AABB.from_points(self.q, self.q + self.u + self.v)
        anti_diagonal = AABB.from_points(self.q + self.u, self.q + self.v)
        return AABB.merge(diagonal, anti_diagonal).padded(BOX_PADDING)

@dataclass(frozen=True)
class Triangle(_PlanarGeometry):
    """
    Triangle with vertices q, q+u and q+v.
    """
    def accepts(self, alpha: float, beta: float) -> bool:
        return alpha >= 0.0 and beta >= 0.0 and alpha + beta <= 1.0

    def bounding_box(self) -> AABB:
        return AABB.merge(
            AABB.from_points(self.q, self.q + self.u),
            AABB.from_points(self.q, self.q + self.v)
        ).padded(BOX_PADDING)

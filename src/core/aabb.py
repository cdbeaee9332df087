# src/core/aabb.py
import math
from typing import Iterable
from core.interval import Interval
from core.vector import Vector3

AXES = "xyz"

class AABB:
    """
    Axis-aligned bounding box. AABB.EMPTY (min = +inf, max = -inf on every
    axis) is the identity element for merge.
    """
    def __init__(self, minimum: Vector3, maximum: Vector3):
        self.minimum = minimum
        self.maximum = maximum

    @staticmethod
    def from_points(a: Vector3, b: Vector3) -> "AABB":
        """
        Box spanned by two opposite corners given in any order.
        """
        return AABB(
            Vector3(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z)),
            Vector3(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z))
        )

    @staticmethod
    def merge(box0: "AABB", box1: "AABB") -> "AABB":
        small = Vector3(
            min(box0.minimum.x, box1.minimum.x),
            min(box0.minimum.y, box1.minimum.y),
            min(box0.minimum.z, box1.minimum.z)
        )
        big = Vector3(
            max(box0.maximum.x, box1.maximum.x),
            max(box0.maximum.y, box1.maximum.y),
            max(box0.maximum.z, box1.maximum.z)
        )
        return AABB(small, big)

    @staticmethod
    def surrounding(boxes: Iterable["AABB"]) -> "AABB":
        box = AABB.EMPTY
        for other in boxes:
            box = AABB.merge(box, other)
        return box

    def hit(self, ray, interval: Interval) -> bool:
        # Slab method: clamp every axis' entry/exit into the interval, then
        # the latest entry must come strictly before the earliest exit.
        lowers = []
        uppers = []
        for a in AXES:
            lo = getattr(self.minimum, a) - getattr(ray.origin, a)
            hi = getattr(self.maximum, a) - getattr(ray.origin, a)
            if lo > hi:
                return False
            d = getattr(ray.direction, a)
            if d == 0.0:
                # 0/0 is NaN: a boundary exactly at the origin never hits.
                if lo == 0.0 or hi == 0.0:
                    return False
                if lo < 0.0 < hi:
                    lowers.append(-math.inf)
                    uppers.append(math.inf)
                    continue
                return False
            inv_d = 1.0 / d
            t0 = lo * inv_d
            t1 = hi * inv_d
            if math.isnan(t0) or math.isnan(t1):
                return False
            if t0 > t1:
                t0, t1 = t1, t0
            lowers.append(t0)
            uppers.append(t1)

        lowers_max = max(interval.clamp(t) for t in lowers)
        uppers_min = min(interval.clamp(t) for t in uppers)
        return lowers_max < uppers_min

    def padded(self, delta: float) -> "AABB":
        """
        Widen every axis thinner than delta by delta/2 on each side, so that
        flat primitives still have a box the slab test can enter.
        """
        low = []
        high = []
        for a in AXES:
            lo = getattr(self.minimum, a)
            hi = getattr(self.maximum, a)
            if hi - lo < delta:
                lo -= delta / 2
                hi += delta / 2
            low.append(lo)
            high.append(hi)
        return AABB(Vector3(*low), Vector3(*high))

    def centroid(self) -> Vector3:
        return (self.minimum + self.maximum) * 0.5

    def dimensions(self) -> Vector3:
        return self.maximum - self.minimum

    def surface_area_factor(self) -> float:
        """
        Half of the box's surface area, which is all the SAH ratios need.
        """
        d = self.dimensions()
        return d.x * d.y + d.x * d.z + d.y * d.z

    def surface_area(self) -> float:
        return 2 * self.surface_area_factor()

    def longest_axis(self) -> int:
        # Ties go to the later axis.
        d = self.dimensions()
        best = 0
        for axis in range(1, 3):
            if getattr(d, AXES[axis]) >= getattr(d, AXES[best]):
                best = axis
        return best

    def contains_point(self, p: Vector3, tolerance: float = 0.0) -> bool:
        return all(
            getattr(self.minimum, a) - tolerance <= getattr(p, a) <= getattr(self.maximum, a) + tolerance
            for a in AXES
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, AABB):
            return NotImplemented
        return self.minimum == other.minimum and self.maximum == other.maximum

    def __repr__(self) -> str:
        return f"AABB({self.minimum!r}, {self.maximum!r})"

AABB.EMPTY = AABB(
    Vector3(math.inf, math.inf, math.inf),
    Vector3(-math.inf, -math.inf, -math.inf)
)

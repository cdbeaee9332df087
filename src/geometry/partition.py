# src/geometry/partition.py
"""
Strategies for splitting a group of surfaces into the two children of a BVH
node.

Every strategy works in place on ``surfaces[start:end]`` and returns the
split index ``mid``: the left child gets ``surfaces[start:mid]`` and the right
child ``surfaces[mid:end]``. Both sides are always non-empty.
"""
import logging
import math
from bisect import bisect_left
from typing import Callable, List, Optional, Sequence
from core.aabb import AABB, AXES
from geometry.surface import Surface, bounding_box_of

logger = logging.getLogger(__name__)

# Cost of testing the node's own box, in units of one surface test.
ROOT_TEST_COST = 1.0


def _centroid(box: AABB, axis: int) -> float:
    a = AXES[axis]
    return (getattr(box.minimum, a) + getattr(box.maximum, a)) * 0.5


def _partition_in_place(surfaces: List[Surface], start: int, end: int,
                        pred: Callable[[Surface], bool]) -> int:
    """
    Move every surface matching pred in front of the ones that don't and
    return the index of the first non-matching surface.

    The first misplaced surface from the front is swapped with the last
    misplaced one from the back, so the resulting order is fully determined
    by the input order.
    """
    flags = [pred(s) for s in surfaces[start:end]]
    lo, hi = 0, len(flags)
    while True:
        while lo < hi and flags[lo]:
            lo += 1
        if lo == hi:
            break
        left = lo
        lo += 1
        while hi > lo and not flags[hi - 1]:
            hi -= 1
        if hi == lo:
            break
        hi -= 1
        surfaces[start + left], surfaces[start + hi] = surfaces[start + hi], surfaces[start + left]
        flags[left], flags[hi] = flags[hi], flags[left]
    return start + sum(flags)


def longest_axis_bisect(surfaces: List[Surface], start: int, end: int) -> int:
    """
    Sort along the longest axis of the group's box by each surface's minimum
    coordinate and split at the middle index.
    """
    axis = bounding_box_of(surfaces[start:end]).longest_axis()
    a = AXES[axis]
    surfaces[start:end] = sorted(surfaces[start:end],
                                 key=lambda s: getattr(s.bounding_box().minimum, a))
    return start + (end - start) // 2


def longest_axis_midpoint(surfaces: List[Surface], start: int, end: int) -> int:
    """
    Split by which side of the group box's spatial midpoint each surface's
    centroid falls on, along the longest axis.

    When every centroid lands on the same side (coincident or heavily skewed
    centroids) the group is bisected by index instead.
    """
    box = bounding_box_of(surfaces[start:end])
    axis = box.longest_axis()
    midpoint = _centroid(box, axis)

    mid = _partition_in_place(surfaces, start, end,
                              lambda s: _centroid(s.bounding_box(), axis) < midpoint)
    if mid == start or mid == end:
        logger.debug("midpoint split of %d surfaces is one-sided on axis %s, bisecting instead",
                     end - start, AXES[axis])
        return longest_axis_bisect(surfaces, start, end)
    return mid


def _sah_cost(left_box: AABB, left_count: int, right_box: AABB, right_count: int,
              parent_box: AABB) -> float:
    parent_saf = parent_box.surface_area_factor()
    if parent_saf <= 0.0:
        return ROOT_TEST_COST + left_count + right_count
    p_left = left_box.surface_area_factor() / parent_saf
    p_right = right_box.surface_area_factor() / parent_saf
    return ROOT_TEST_COST + p_left * left_count + p_right * right_count


def surface_area_heuristic(left: Sequence[Surface], right: Sequence[Surface],
                           bounding_box: AABB) -> float:
    """
    Expected cost of a split: one box test plus each child's surface count
    weighted by the probability (relative surface area) of a ray entering it.
    """
    return _sah_cost(bounding_box_of(left), len(left),
                     bounding_box_of(right), len(right), bounding_box)


class _AxisSweep:
    """
    A group's boxes ordered by centroid along one axis, with the merged box
    of the first k and of the last n-k boxes for every k. Each candidate
    plane then costs one bisection instead of a pass over the group.
    """
    def __init__(self, boxes: Sequence[AABB], axis: int):
        order = sorted(boxes, key=lambda b: _centroid(b, axis))
        n = len(order)
        self.centroids = [_centroid(b, axis) for b in order]
        self.prefix = [AABB.EMPTY] * (n + 1)
        self.suffix = [AABB.EMPTY] * (n + 1)
        for k in range(1, n + 1):
            self.prefix[k] = AABB.merge(self.prefix[k - 1], order[k - 1])
        for k in range(n - 1, -1, -1):
            self.suffix[k] = AABB.merge(order[k], self.suffix[k + 1])

    def cost(self, split: float, parent_box: AABB) -> float:
        """
        SAH cost of sending centroids below split left; inf if a side is empty.
        """
        n = len(self.centroids)
        k = bisect_left(self.centroids, split)
        if k == 0 or k == n:
            return math.inf
        return _sah_cost(self.prefix[k], k, self.suffix[k], n - k, parent_box)


def _sah_partition(surfaces: List[Surface], start: int, end: int,
                   candidates: Callable[[AABB, int, _AxisSweep], Sequence[float]]) -> int:
    boxes = [s.bounding_box() for s in surfaces[start:end]]
    box = AABB.surrounding(boxes)

    best_cost = math.inf
    best_axis = None
    best_split = 0.0
    for axis in range(3):
        sweep = _AxisSweep(boxes, axis)
        for split in candidates(box, axis, sweep):
            cost = sweep.cost(split, box)
            if cost < best_cost:
                best_cost, best_axis, best_split = cost, axis, split

    if best_axis is None:
        raise AssertionError(
            f"no SAH splitting plane separates {end - start} surfaces; "
            "their centroids cannot be told apart by any candidate plane"
        )

    return _partition_in_place(surfaces, start, end,
                               lambda s: _centroid(s.bounding_box(), best_axis) < best_split)


def sah_equal_size(surfaces: List[Surface], start: int, end: int, buckets: int) -> int:
    """
    SAH over the buckets-1 inner boundaries of equal slices of each axis.

    The slices cover the span of the surfaces' centroids rather than their
    box, so any group whose centroids differ on some axis has a plane that
    leaves both sides non-empty.
    """
    def candidates(box: AABB, axis: int, sweep: _AxisSweep):
        low = sweep.centroids[0]
        step = (sweep.centroids[-1] - low) / buckets
        return [low + (i * step) for i in range(1, buckets)]

    return _sah_partition(surfaces, start, end, candidates)


def sah_per_surface(surfaces: List[Surface], start: int, end: int) -> int:
    """
    SAH over a plane through every surface's centroid on every axis.
    """
    return _sah_partition(surfaces, start, end, lambda box, axis, sweep: sweep.centroids)


class PartitionBy:
    """
    A partitioning policy, chosen once for a whole BVH build.
    """
    name = "partition"

    def partition(self, surfaces: List[Surface], start: int, end: int) -> int:
        raise NotImplementedError("partition() must be implemented by subclasses.")

    def __repr__(self) -> str:
        return self.name

    @staticmethod
    def parse(text: str) -> "PartitionBy":
        """
        Parse ``bisect``, ``midpoint``, ``sah`` (8 equal buckets), ``sah:<n>``
        or ``sah-per-surface``.
        """
        key = text.strip().lower()
        if key == "bisect":
            return LongestAxisBisect()
        if key == "midpoint":
            return LongestAxisMidpoint()
        if key == "sah":
            return SurfaceAreaHeuristic.equal_size(DEFAULT_BUCKETS)
        if key == "sah-per-surface":
            return SurfaceAreaHeuristic.per_surface()
        if key.startswith("sah:"):
            try:
                buckets = int(key[4:])
            except ValueError:
                raise ValueError(f"invalid bucket count in partition strategy {text!r}") from None
            return SurfaceAreaHeuristic.equal_size(buckets)
        raise ValueError(
            f"unknown partition strategy {text!r} "
            "(expected bisect, midpoint, sah, sah:<buckets> or sah-per-surface)"
        )


class LongestAxisBisect(PartitionBy):
    name = "bisect"

    def partition(self, surfaces, start, end):
        return longest_axis_bisect(surfaces, start, end)


class LongestAxisMidpoint(PartitionBy):
    name = "midpoint"

    def partition(self, surfaces, start, end):
        return longest_axis_midpoint(surfaces, start, end)


DEFAULT_BUCKETS = 8


class SurfaceAreaHeuristic(PartitionBy):
    """
    Minimum-SAH-cost split. buckets=None evaluates a plane at every surface
    centroid; otherwise each axis is cut into that many equal buckets.
    """
    def __init__(self, buckets: Optional[int] = None):
        if buckets is not None and buckets < 2:
            raise ValueError(f"SAH needs at least 2 buckets, got {buckets}")
        self.buckets = buckets
        self.name = "sah-per-surface" if buckets is None else f"sah:{buckets}"

    @classmethod
    def equal_size(cls, buckets: int) -> "SurfaceAreaHeuristic":
        return cls(buckets)

    @classmethod
    def per_surface(cls) -> "SurfaceAreaHeuristic":
        return cls(None)

    def partition(self, surfaces, start, end):
        if self.buckets is None:
            return sah_per_surface(surfaces, start, end)
        return sah_equal_size(surfaces, start, end, self.buckets)

"""Tests for the BVH partition strategies.

Tests cover:
- Split index contract (both sides non-empty, slice-local reordering)
- Midpoint fallback when every centroid is on one side
- SAH cost ordering and failure without a separating plane
- Parsing strategies from text
"""

import pytest

from core.vector import Vector3
from geometry.partition import (
    DEFAULT_BUCKETS,
    LongestAxisBisect,
    LongestAxisMidpoint,
    PartitionBy,
    SurfaceAreaHeuristic,
    longest_axis_bisect,
    longest_axis_midpoint,
    sah_equal_size,
    sah_per_surface,
    surface_area_heuristic,
)
from geometry.surface import bounding_box_of


class TestBisect:
    def test_sorts_by_minimum_on_longest_axis(self, sphere_surface):
        surfaces = [sphere_surface((float(x), 0.0, 0.0), 0.5) for x in (3, -1, 7, 0, 5)]
        mid = longest_axis_bisect(surfaces, 0, len(surfaces))
        assert mid == 2
        assert [s.geometry.center.x for s in surfaces] == [-1, 0, 3, 5, 7]

    def test_only_touches_its_slice(self, sphere_surface):
        surfaces = [sphere_surface((float(x), 0.0, 0.0), 0.5) for x in (9, 3, 1, 2, 8)]
        mid = longest_axis_bisect(surfaces, 1, 4)
        assert mid == 2
        assert [s.geometry.center.x for s in surfaces] == [9, 1, 2, 3, 8]


class TestMidpoint:
    def test_splits_at_box_centre(self, sphere_surface):
        surfaces = [sphere_surface((float(x), 0.0, 0.0), 0.5) for x in (4, -4, 3, -3)]
        mid = longest_axis_midpoint(surfaces, 0, 4)
        assert mid == 2
        assert sorted(s.geometry.center.x for s in surfaces[:mid]) == [-4, -3]
        assert sorted(s.geometry.center.x for s in surfaces[mid:]) == [3, 4]

    def test_concentric_surfaces_fall_back_to_bisect(self, sphere_surface):
        """Spheres sharing a centre cannot be split spatially."""
        outer = sphere_surface((-1.0, 0.0, -1.0), 0.5)
        inner = sphere_surface((-1.0, 0.0, -1.0), 0.4)
        surfaces = [outer, inner]
        assert longest_axis_midpoint(surfaces, 0, 2) == 1


class TestSurfaceAreaHeuristic:
    def test_cost_prefers_pairing_large_with_nearby(self, sphere_surface):
        small_left = sphere_surface((-10.0, 10.0, 0.0), 0.5)
        large_center = sphere_surface((-1.0, 0.0, 0.0), 3.0)
        small_right = sphere_surface((10.0, 0.0, 0.0), 0.5)
        box = bounding_box_of([small_left, large_center, small_right])

        paired_far = surface_area_heuristic([small_left, large_center], [small_right], box)
        paired_near = surface_area_heuristic([small_right, large_center], [small_left], box)
        assert paired_far > paired_near

    def test_cost_includes_root_test(self, sphere_surface):
        a = sphere_surface((0.0, 0.0, 0.0), 1.0)
        b = sphere_surface((0.0, 0.0, 0.0), 1.0)
        box = bounding_box_of([a, b])
        # Both children cover the whole parent: 1 + 1 + 1
        assert surface_area_heuristic([a], [b], box) == pytest.approx(3.0)

    def test_equal_size_splits_two_clusters(self, sphere_surface):
        left = [sphere_surface((-10.0 + 0.1 * i, 0.0, 0.0), 0.5) for i in range(3)]
        right = [sphere_surface((10.0 + 0.1 * i, 0.0, 0.0), 0.5) for i in range(3)]
        surfaces = [left[0], right[0], left[1], right[1], left[2], right[2]]
        mid = sah_equal_size(surfaces, 0, 6, 8)
        assert mid == 3
        assert all(s.geometry.center.x < 0 for s in surfaces[:mid])
        assert all(s.geometry.center.x > 0 for s in surfaces[mid:])

    def test_equal_size_separates_small_sphere_inside_large_box(self, sphere_surface):
        """Both centroids fall in the middle bucket of the big sphere's box."""
        large = sphere_surface((0.0, 0.0, 0.0), 100.0)
        small = sphere_surface((1.0, 0.0, 0.0), 0.5)
        surfaces = [small, large]
        assert sah_equal_size(surfaces, 0, 2, 8) == 1
        assert surfaces == [large, small]

    @pytest.mark.parametrize("buckets", [2, 8, 32])
    def test_equal_size_splits_any_distinct_centroids(self, rng, random_surfaces, buckets):
        surfaces = random_surfaces(rng, 30)
        for start in range(0, 28, 3):
            mid = sah_equal_size(surfaces, start, start + 3, buckets)
            assert start < mid < start + 3

    def test_per_surface_splits_two_clusters(self, sphere_surface):
        surfaces = [sphere_surface((x, 0.0, 0.0), 0.5) for x in (5.0, -5.0, 5.5, -5.5)]
        mid = sah_per_surface(surfaces, 0, 4)
        assert mid == 2
        assert sorted(s.geometry.center.x for s in surfaces[:mid]) == [-5.5, -5.0]

    def test_identical_surfaces_have_no_plane(self, sphere_surface):
        surfaces = [sphere_surface((1.0, 2.0, 3.0), 1.0), sphere_surface((1.0, 2.0, 3.0), 1.0)]
        with pytest.raises(AssertionError):
            sah_per_surface(surfaces, 0, 2)
        with pytest.raises(AssertionError):
            sah_equal_size(surfaces, 0, 2, 8)

    def test_needs_two_buckets(self):
        with pytest.raises(ValueError):
            SurfaceAreaHeuristic(1)
        with pytest.raises(ValueError):
            SurfaceAreaHeuristic.equal_size(0)


class TestParse:
    """Tests for PartitionBy.parse."""

    def test_names(self):
        assert isinstance(PartitionBy.parse("bisect"), LongestAxisBisect)
        assert isinstance(PartitionBy.parse("midpoint"), LongestAxisMidpoint)
        assert PartitionBy.parse("sah").buckets == DEFAULT_BUCKETS
        assert PartitionBy.parse("sah:16").buckets == 16
        assert PartitionBy.parse(" SAH-Per-Surface ").buckets is None

    def test_repr_round_trips(self):
        for text in ("bisect", "midpoint", "sah:4", "sah-per-surface"):
            assert repr(PartitionBy.parse(text)) == text

    @pytest.mark.parametrize("text", ["", "octree", "sah:", "sah:many", "sah:1"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            PartitionBy.parse(text)

    def test_strategies_agree_with_functions(self, sphere_surface):
        surfaces = [sphere_surface((float(x), 0.0, 0.0), 0.5) for x in (3, -1, 7, 0)]
        assert LongestAxisBisect().partition(list(surfaces), 0, 4) == longest_axis_bisect(list(surfaces), 0, 4)
        assert SurfaceAreaHeuristic.per_surface().partition(list(surfaces), 0, 4) == \
            sah_per_surface(list(surfaces), 0, 4)

    def test_base_class_is_abstract(self):
        with pytest.raises(NotImplementedError):
            PartitionBy().partition([], 0, 0)


def test_sphere_centroid_is_its_centre(sphere_surface):
    """Centroids come from bounding boxes, so a sphere's centre is its centroid."""
    surface = sphere_surface((1.0, 2.0, 3.0), 0.25)
    assert surface.bounding_box().centroid() == Vector3(1.0, 2.0, 3.0)

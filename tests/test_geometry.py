"""Unit tests for spheres, quadrilaterals, triangles and surfaces.

Tests cover:
- Ray hitting a sphere from outside (front face) and from inside (back face)
- Radius validation
- Planar hits, misses, and parallel rays
- Bounding boxes enclosing their primitives
- Brute-force nearest hit over a surface list
"""

import math

import pytest

from core.interval import Interval
from core.ray import Ray
from core.vector import Vector3
from geometry.planar import Quadrilateral, Triangle
from geometry.sphere import InvalidRadiusError, Sphere, sphere_uv
from geometry.surface import Surface, bounding_box_of, hit_linear
from materials.lambertian import Lambertian

FORWARD = Interval(0.001, math.inf)


class TestSphere:
    """Tests for ray-sphere intersection."""

    def test_direct_hit(self):
        """Ray from z=5 towards a unit sphere at the origin hits at t=4."""
        sphere = Sphere(Vector3(0.0, 0.0, 0.0), 1.0)
        rec = sphere.hit(Ray(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, -1.0)), FORWARD)
        assert rec is not None
        assert rec.t == pytest.approx(4.0)
        assert rec.p == Vector3(0.0, 0.0, 1.0)
        assert rec.front_face
        assert rec.normal == Vector3(0.0, 0.0, 1.0)

    def test_unnormalised_direction(self):
        sphere = Sphere(Vector3(0.0, 0.0, 0.0), 1.0)
        rec = sphere.hit(Ray(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, -2.0)), FORWARD)
        assert rec.t == pytest.approx(2.0)

    def test_miss(self):
        sphere = Sphere(Vector3(0.0, 0.0, 0.0), 1.0)
        assert sphere.hit(Ray(Vector3(2.0, 0.0, 5.0), Vector3(0.0, 0.0, -1.0)), FORWARD) is None

    def test_from_inside_is_back_face(self):
        """Starting at the centre the far root is used and the normal is flipped."""
        sphere = Sphere(Vector3(0.0, 0.0, 0.0), 1.0)
        rec = sphere.hit(Ray(Vector3(0.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0)), FORWARD)
        assert rec.t == pytest.approx(1.0)
        assert not rec.front_face
        assert rec.normal == Vector3(-1.0, 0.0, 0.0)

    def test_interval_excludes_hits(self):
        sphere = Sphere(Vector3(0.0, 0.0, 0.0), 1.0)
        ray = Ray(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, -1.0))
        assert sphere.hit(ray, Interval(0.001, 3.0)) is None
        # Only the exit point lies inside this window
        assert sphere.hit(ray, Interval(4.5, 10.0)).t == pytest.approx(6.0)

    def test_negative_radius_rejected(self):
        with pytest.raises(InvalidRadiusError) as excinfo:
            Sphere(Vector3(0.0, 0.0, 0.0), -1.0)
        assert excinfo.value.radius == -1.0
        assert str(excinfo.value) == "invalid radius -1.0 (expected non-negative radius)"
        assert isinstance(excinfo.value, ValueError)

    def test_zero_radius_never_hits(self):
        sphere = Sphere(Vector3(0.0, 0.0, 0.0), 0.0)
        assert sphere.hit(Ray(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, -1.0)), FORWARD) is None

    def test_bounding_box(self):
        box = Sphere(Vector3(1.0, 2.0, 3.0), 0.5).bounding_box()
        assert box.minimum == Vector3(0.5, 1.5, 2.5)
        assert box.maximum == Vector3(1.5, 2.5, 3.5)

    def test_uv(self):
        assert sphere_uv(Vector3(1.0, 0.0, 0.0)) == pytest.approx((0.5, 0.5))
        assert sphere_uv(Vector3(0.0, 1.0, 0.0))[1] == pytest.approx(1.0)
        assert sphere_uv(Vector3(0.0, -1.0, 0.0))[1] == pytest.approx(0.0)
        assert sphere_uv(Vector3(-1.0, 0.0, 0.0))[0] == pytest.approx(0.0)


class TestQuadrilateral:
    """Tests for ray-quad intersection."""

    quad = Quadrilateral(Vector3(-1.0, -1.0, 0.0), Vector3(2.0, 0.0, 0.0), Vector3(0.0, 2.0, 0.0))

    def test_hit_centre(self):
        rec = self.quad.hit(Ray(Vector3(0.0, 0.0, 3.0), Vector3(0.0, 0.0, -1.0)), FORWARD)
        assert rec.t == pytest.approx(3.0)
        assert (rec.u, rec.v) == pytest.approx((0.5, 0.5))
        assert rec.front_face
        assert rec.normal == Vector3(0.0, 0.0, 1.0)

    def test_hit_from_behind(self):
        rec = self.quad.hit(Ray(Vector3(0.0, 0.0, -3.0), Vector3(0.0, 0.0, 1.0)), FORWARD)
        assert not rec.front_face
        assert rec.normal == Vector3(0.0, 0.0, -1.0)

    def test_miss_outside_edges(self):
        assert self.quad.hit(Ray(Vector3(1.5, 0.0, 3.0), Vector3(0.0, 0.0, -1.0)), FORWARD) is None

    def test_parallel_ray_misses(self):
        assert self.quad.hit(Ray(Vector3(0.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0)), FORWARD) is None

    def test_collinear_edges_never_hit(self):
        degenerate = Quadrilateral(Vector3(0.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0), Vector3(2.0, 0.0, 0.0))
        assert degenerate.hit(Ray(Vector3(0.5, 0.0, 1.0), Vector3(0.0, 0.0, -1.0)), FORWARD) is None

    def test_bounding_box_is_padded(self):
        box = self.quad.bounding_box()
        assert box.minimum.x == -1.0
        assert box.maximum.y == 1.0
        assert box.maximum.z - box.minimum.z == pytest.approx(1e-4)

    def test_skewed_quad_box_contains_corners(self, rng):
        for _ in range(50):
            q = Vector3(rng.uniform(-5, 5), rng.uniform(-5, 5), rng.uniform(-5, 5))
            u = Vector3(rng.uniform(-5, 5), rng.uniform(-5, 5), rng.uniform(-5, 5))
            v = Vector3(rng.uniform(-5, 5), rng.uniform(-5, 5), rng.uniform(-5, 5))
            box = Quadrilateral(q, u, v).bounding_box()
            for corner in (q, q + u, q + v, q + u + v):
                assert box.contains_point(corner, 1e-9)


class TestTriangle:
    """Tests for ray-triangle intersection."""

    triangle = Triangle(Vector3(0.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0))

    def test_hit_inside(self):
        rec = self.triangle.hit(Ray(Vector3(0.25, 0.25, 1.0), Vector3(0.0, 0.0, -1.0)), FORWARD)
        assert rec.t == pytest.approx(1.0)
        assert (rec.u, rec.v) == pytest.approx((0.25, 0.25))

    def test_miss_past_hypotenuse(self):
        """(0.6, 0.6) is inside the matching quad but outside the triangle."""
        ray = Ray(Vector3(0.6, 0.6, 1.0), Vector3(0.0, 0.0, -1.0))
        assert self.triangle.hit(ray, FORWARD) is None

    def test_bounding_box_contains_vertices(self, rng):
        for _ in range(50):
            q = Vector3(rng.uniform(-5, 5), rng.uniform(-5, 5), rng.uniform(-5, 5))
            u = Vector3(rng.uniform(-5, 5), rng.uniform(-5, 5), rng.uniform(-5, 5))
            v = Vector3(rng.uniform(-5, 5), rng.uniform(-5, 5), rng.uniform(-5, 5))
            box = Triangle(q, u, v).bounding_box()
            for vertex in (q, q + u, q + v):
                assert box.contains_point(vertex, 1e-9)


class TestSurface:
    """Tests for surfaces and brute-force nearest hit."""

    def test_hit_points_lie_in_bounding_box(self, rng, random_surfaces):
        hits = 0
        for surface in random_surfaces(rng, 90):
            box = surface.bounding_box()
            origin = Vector3(rng.uniform(-15, 15), rng.uniform(-15, 15), rng.uniform(-15, 15))
            ray = Ray(origin, box.centroid() - origin)
            result = surface.hit(ray, FORWARD)
            if result is not None:
                hits += 1
                assert box.contains_point(result[0].p, 1e-9)
        assert hits > 45

    def test_hit_returns_material(self):
        material = Lambertian(Vector3(0.5, 0.5, 0.5))
        surface = Surface(Sphere(Vector3(0.0, 0.0, 0.0), 1.0), material)
        rec, hit_material = surface.hit(Ray(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, -1.0)), FORWARD)
        assert rec.t == pytest.approx(4.0)
        assert hit_material is material

    def test_hit_linear_finds_nearest(self, sphere_surface):
        far = sphere_surface((0.0, 0.0, -10.0), 1.0)
        near = sphere_surface((0.0, 0.0, -3.0), 1.0)
        rec, _ = hit_linear([far, near], Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, -1.0)), FORWARD)
        assert rec.t == pytest.approx(2.0)

    def test_hit_linear_first_surface_wins_ties(self):
        first = Surface(Sphere(Vector3(0.0, 0.0, -3.0), 1.0), Lambertian(Vector3(1.0, 0.0, 0.0)))
        second = Surface(Sphere(Vector3(0.0, 0.0, -3.0), 1.0), Lambertian(Vector3(0.0, 1.0, 0.0)))
        _, material = hit_linear([first, second], Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, -1.0)), FORWARD)
        assert material is first.material

    def test_hit_linear_empty(self):
        assert hit_linear([], Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, -1.0)), FORWARD) is None

    def test_bounding_box_of(self, sphere_surface):
        surfaces = [sphere_surface((-2.0, 0.0, 0.0), 1.0), sphere_surface((2.0, 1.0, 0.0), 0.5)]
        box = bounding_box_of(surfaces)
        assert box.minimum == Vector3(-3.0, -1.0, -1.0)
        assert box.maximum == Vector3(2.5, 1.5, 1.0)

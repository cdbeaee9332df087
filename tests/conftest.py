"""Shared fixtures for the path tracer tests.

Randomness is always drawn from an explicitly seeded ``random.Random`` so
that every test sees the same numbers on every run.
"""

import random

import pytest

from core.vector import Vector3
from geometry.planar import Quadrilateral, Triangle
from geometry.sphere import Sphere
from geometry.surface import Surface
from materials.dielectric import Dielectric
from materials.lambertian import Lambertian


@pytest.fixture
def rng():
    """A seeded random source."""
    return random.Random(1234)


@pytest.fixture
def sphere_surface():
    """Factory for a sphere surface with a neutral, index-matched material."""

    def make(center, radius, material=None):
        return Surface(Sphere(Vector3(*center), radius), material or Dielectric(1.0))

    return make


@pytest.fixture
def random_surfaces():
    """Factory for a mixed scene of spheres, quads and triangles.

    Each surface gets its own material instance so that hits can be traced
    back to the surface that produced them.
    """

    def make(rng, count):
        surfaces = []
        for i in range(count):
            material = Lambertian(Vector3(i, 0.5, 0.5))
            q = Vector3(rng.uniform(-10, 10), rng.uniform(-10, 10), rng.uniform(-10, 10))
            kind = i % 3
            if kind == 0:
                geometry = Sphere(q, rng.uniform(0.1, 2.0))
            else:
                u = Vector3(rng.uniform(-3, 3), rng.uniform(-3, 3), rng.uniform(-3, 3))
                v = Vector3(rng.uniform(-3, 3), rng.uniform(-3, 3), rng.uniform(-3, 3))
                geometry = Quadrilateral(q, u, v) if kind == 1 else Triangle(q, u, v)
            surfaces.append(Surface(geometry, material))
        return surfaces

    return make


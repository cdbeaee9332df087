# core/utils.py
import math
from core.vector import Vector3

def random_unit_vector(rng) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).

    Candidates whose squared length underflows are rejected, otherwise the
    division would produce an infinite "unit" vector.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        lensq = p.dot(p)
        if 1e-160 < lensq <= 1.0:
            return p / math.sqrt(lensq)

def sample_square(rng) -> Vector3:
    """
    Random offset in the [-0.5, 0.5) x [-0.5, 0.5) square around a pixel center.
    """
    return Vector3(rng.random() - 0.5, rng.random() - 0.5, 0.0)

def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)

# scenes/presets.py
"""
Ready-made scenes for the command line.

Every preset knows how to build its surfaces, how to frame them with a
camera at a given image width, which background colour lights the sky, and
which partition strategy builds a sensible BVH for it.
"""
import math
import random
from dataclasses import dataclass
from typing import Callable, Dict, List
from core.vector import Vector3
from camera.camera import Camera
from geometry.partition import PartitionBy
from geometry.planar import Quadrilateral, Triangle
from geometry.sphere import Sphere
from geometry.surface import Surface
from materials.dielectric import Dielectric
from materials.diffuse_light import DiffuseLight
from materials.lambertian import Lambertian
from materials.material import BLACK, Material
from materials.metal import Metal
from materials.uv_gradient import UVGradient

SKY = Vector3(0.7, 0.8, 1.0)

@dataclass(frozen=True)
class ScenePreset:
    name: str
    description: str
    surfaces: Callable[[int], List[Surface]]  # seed -> surfaces
    camera: Callable[[int], Camera]  # image width -> camera
    partition: str = "sah-per-surface"
    image_width: int = 400
    background: Vector3 = BLACK

    def partition_by(self) -> PartitionBy:
        return PartitionBy.parse(self.partition)

def simple_scene(seed: int = 0) -> List[Surface]:
    return [
        Surface(Sphere(Vector3(0, 0, -1), 0.5), Lambertian(Vector3(0.7, 0.3, 0.3))),
        Surface(Sphere(Vector3(-1, 0, -1), 0.5), Lambertian(Vector3(0.3, 0.3, 0.7))),
        Surface(Sphere(Vector3(1, 0, -1), 0.5), Metal(Vector3(0.8, 0.8, 0.9), 0.0)),
        Surface(Sphere(Vector3(0, -100.5, -1), 100), Lambertian(Vector3(0.8, 0.8, 0.0))),
    ]

def demo_spheres(seed: int = 0) -> List[Surface]:
    """
    Ground, a matte sphere, a glass sphere holding an air bubble, and fuzzy
    gold. The glass sphere and its bubble share a centre.
    """
    return [
        Surface(Sphere(Vector3(0.0, -100.5, -1.0), 100.0), Lambertian(Vector3(0.8, 0.8, 0.0))),
        Surface(Sphere(Vector3(0.0, 0.0, -1.2), 0.5), Lambertian(Vector3(0.1, 0.2, 0.5))),
        Surface(Sphere(Vector3(-1.0, 0.0, -1.0), 0.5), Dielectric(1.5)),
        Surface(Sphere(Vector3(-1.0, 0.0, -1.0), 0.4), Dielectric(1.0 / 1.5)),
        Surface(Sphere(Vector3(1.0, 0.0, -1.0), 0.5), Metal(Vector3(0.8, 0.6, 0.2), 1.0)),
    ]

def quads(seed: int = 0) -> List[Surface]:
    return [
        Surface(Quadrilateral(Vector3(-3, -2, 5), Vector3(0, 0, -4), Vector3(0, 4, 0)),
                Lambertian(Vector3(1.0, 0.2, 0.2))),
        Surface(Quadrilateral(Vector3(-2, -2, 0), Vector3(4, 0, 0), Vector3(0, 4, 0)),
                Lambertian(Vector3(0.2, 1.0, 0.2))),
        Surface(Quadrilateral(Vector3(3, -2, 1), Vector3(0, 0, 4), Vector3(0, 4, 0)),
                Lambertian(Vector3(0.2, 0.2, 1.0))),
        Surface(Quadrilateral(Vector3(-2, 3, 1), Vector3(4, 0, 0), Vector3(0, 0, 4)),
                Lambertian(Vector3(1.0, 0.5, 0.0))),
        Surface(Quadrilateral(Vector3(-2, -3, 5), Vector3(4, 0, 0), Vector3(0, 0, -4)),
                Lambertian(Vector3(0.2, 0.8, 0.8))),
    ]

def simple_light(seed: int = 0) -> List[Surface]:
    return [
        Surface(Sphere(Vector3(0, -1000, 0), 1000), Lambertian(Vector3(0.6, 0.5, 0.4))),
        Surface(Sphere(Vector3(0, 2, 0), 2), Lambertian(Vector3(0.8, 0.4, 0.6))),
        Surface(Quadrilateral(Vector3(3, 1, -2), Vector3(2, 0, 0), Vector3(0, 2, 0)),
                DiffuseLight(Vector3(10, 10, 10))),
    ]

def hello_triangle(seed: int = 0) -> List[Surface]:
    """Equilateral triangle with side 2 centred on the origin, showing its uv."""
    side = 2.0
    height = side * math.sqrt(3.0) / 2.0
    top = Vector3(0.0, height * 0.5, 0.0)
    bottom_left = Vector3(-side * 0.5, -height * 0.5, 0.0)
    bottom_right = Vector3(side * 0.5, -height * 0.5, 0.0)
    return [Surface(Triangle(bottom_left, bottom_right - bottom_left, top - bottom_left),
                    UVGradient(1.0))]

def box(a: Vector3, b: Vector3, material: Material, theta: float = 0.0) -> List[Surface]:
    """
    Six quads enclosing the box with opposite corners a and b, turned by
    theta radians about the vertical axis through its centre.
    """
    lo = Vector3(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z))
    hi = Vector3(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z))
    center = lo + (hi - lo) * 0.5
    cos_theta, sin_theta = math.cos(theta), math.sin(theta)

    def corner(x, y, z):
        rel = Vector3(x, y, z) - center
        return center + Vector3(cos_theta * rel.x + sin_theta * rel.z,
                                rel.y,
                                -sin_theta * rel.x + cos_theta * rel.z)

    v000, v001 = corner(lo.x, lo.y, lo.z), corner(lo.x, lo.y, hi.z)
    v010, v011 = corner(lo.x, hi.y, lo.z), corner(lo.x, hi.y, hi.z)
    v100, v101 = corner(hi.x, lo.y, lo.z), corner(hi.x, lo.y, hi.z)
    v110, v111 = corner(hi.x, hi.y, lo.z), corner(hi.x, hi.y, hi.z)

    faces = [
        (v001, v101, v011),  # front
        (v100, v000, v110),  # back
        (v000, v001, v010),  # left
        (v101, v100, v111),  # right
        (v000, v100, v001),  # bottom
        (v010, v011, v110),  # top
    ]
    return [Surface(Quadrilateral(q, e1 - q, e2 - q), material) for q, e1, e2 in faces]

def cornell_box(seed: int = 0) -> List[Surface]:
    red = Lambertian(Vector3(0.65, 0.05, 0.05))
    white = Lambertian(Vector3(0.73, 0.73, 0.73))
    green = Lambertian(Vector3(0.12, 0.45, 0.15))
    light = DiffuseLight(Vector3(50, 50, 50))

    surfaces = []
    surfaces += box(Vector3(265, 0, 295), Vector3(430, 330, 460),
                    Metal(Vector3(0.7, 0.6, 0.5), 0.0), math.radians(18))
    surfaces += box(Vector3(100, 0, 65), Vector3(265, 165, 230),
                    white, math.radians(-18))
    surfaces += [
        Surface(Quadrilateral(Vector3(555, 0, 0), Vector3(0, 555, 0), Vector3(0, 0, 555)), red),
        Surface(Quadrilateral(Vector3(0, 0, 0), Vector3(0, 555, 0), Vector3(0, 0, 555)), green),
        Surface(Quadrilateral(Vector3(343, 554, 332), Vector3(-130, 0, 0), Vector3(0, 0, -105)), light),
        Surface(Quadrilateral(Vector3(0, 0, 0), Vector3(555, 0, 0), Vector3(0, 0, 555)), white),
        Surface(Quadrilateral(Vector3(555, 555, 555), Vector3(-555, 0, 0), Vector3(0, 0, -555)), white),
        Surface(Quadrilateral(Vector3(0, 0, 555), Vector3(555, 0, 0), Vector3(0, 555, 0)), white),
    ]
    return surfaces

def cover_spheres(seed: int = 0) -> List[Surface]:
    """
    A grid of small random spheres around three large ones. The same seed
    always places the same spheres.
    """
    rng = random.Random(seed)
    small_radius = 0.2
    big_radius = 1.0

    big_spheres = [
        Surface(Sphere(Vector3(-4, 1, 0), big_radius), Lambertian(Vector3(0.4, 0.2, 0.1))),
        Surface(Sphere(Vector3(0, 1, 0), big_radius), Dielectric(1.5)),
        Surface(Sphere(Vector3(4, 1, 0), big_radius), Metal(Vector3(0.7, 0.6, 0.5), 0.0)),
    ]

    world = [Surface(Sphere(Vector3(0, -1000, 0), 1000), Lambertian(Vector3(0.5, 0.5, 0.5)))]
    for a in range(-11, 11):
        for b in range(-11, 11):
            center = Vector3(a + 0.9 * rng.random(), small_radius, b + 0.9 * rng.random())

            # Skip spheres that would intersect one of the big ones
            if any((s.geometry.center - center).length() < big_radius + small_radius
                   for s in big_spheres):
                continue

            choose_mat = rng.random()
            if choose_mat < 0.8:
                albedo = Vector3(rng.random(), rng.random(), rng.random()) * \
                         Vector3(rng.random(), rng.random(), rng.random())
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                albedo = Vector3(rng.uniform(0.5, 1), rng.uniform(0.5, 1), rng.uniform(0.5, 1))
                material = Metal(albedo, rng.uniform(0, 0.5))
            else:
                material = Dielectric(1.5)

            world.append(Surface(Sphere(center, small_radius), material))

    return world + big_spheres

SCENES: Dict[str, ScenePreset] = {
    preset.name: preset for preset in (
        ScenePreset(
            "simple", "three spheres on a large ground sphere", simple_scene,
            lambda width: Camera(image_width=width, aspect_ratio=16 / 9, vfov=90.0,
                                 look_from=Vector3(0, 0, 0), look_at=Vector3(0, 0, -1),
                                 focus_dist=1.0),
            background=SKY,
        ),
        ScenePreset(
            # concentric spheres leave SAH without a separating plane
            "demo_spheres", "glass, bubble, matte and metal spheres with depth of field",
            demo_spheres,
            lambda width: Camera(image_width=width, aspect_ratio=16 / 9, vfov=20.0,
                                 look_from=Vector3(-2, 2, 1), look_at=Vector3(0, 0, -1),
                                 defocus_angle=10.0, focus_dist=3.4),
            partition="bisect",
            background=SKY,
        ),
        ScenePreset(
            "quads", "five coloured quads around the camera axis", quads,
            lambda width: Camera(image_width=width, aspect_ratio=1.0, vfov=80.0,
                                 look_from=Vector3(0, 0, 9), look_at=Vector3(0, 0, 0)),
            background=SKY,
        ),
        ScenePreset(
            "simple_light", "a sphere lit by a single quad light", simple_light,
            lambda width: Camera(image_width=width, aspect_ratio=16 / 9, vfov=20.0,
                                 look_from=Vector3(26, 3, 6), look_at=Vector3(0, 2, 0),
                                 focus_dist=1.0),
        ),
        ScenePreset(
            "hello_triangle", "a single triangle painted with its uv coordinates",
            hello_triangle,
            lambda width: Camera(image_width=width, aspect_ratio=16 / 9, vfov=45.0,
                                 look_from=Vector3(0, 0, 3), look_at=Vector3(0, 0, 0)),
        ),
        ScenePreset(
            "cornell_box", "the Cornell box with a metal and a white block", cornell_box,
            lambda width: Camera(image_width=width, aspect_ratio=1.0, vfov=40.0,
                                 look_from=Vector3(278, 278, -800),
                                 look_at=Vector3(278, 278, 0)),
            image_width=600,
        ),
        ScenePreset(
            "cover_spheres", "hundreds of random small spheres around three large ones",
            cover_spheres,
            lambda width: Camera(image_width=width, aspect_ratio=16 / 9, vfov=20.0,
                                 look_from=Vector3(13, 2, 3), look_at=Vector3(0, 0, 0),
                                 defocus_angle=0.6, focus_dist=10.0),
            image_width=1200,
            background=SKY,
        ),
    )
}

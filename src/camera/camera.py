# camera/camera.py
import math
from core.vector import Vector3
from core.ray import Ray

class Camera:
    """
    Pinhole camera with optional thin-lens depth of field.

    vfov and defocus_angle are in degrees. Pixel (0, 0) is the top-left
    corner of the image; rows grow downwards.
    """
    def __init__(self,
                 image_width: int = 100,
                 aspect_ratio: float = 1.0,
                 vfov: float = 90.0,
                 look_from: Vector3 = Vector3(0, 0, 0),
                 look_at: Vector3 = Vector3(0, 0, -1),
                 vup: Vector3 = Vector3(0, 1, 0),
                 defocus_angle: float = 0.0,
                 focus_dist: float = 10.0):
        self.image_width = image_width
        self.image_height = max(1, int(image_width / aspect_ratio))
        self.vfov = vfov
        self.look_from = look_from
        self.look_at = look_at
        self.vup = vup
        self.defocus_angle = defocus_angle
        self.focus_dist = focus_dist
        self.update_camera()

    def update_camera(self):
        """Updates the camera's basis vectors and viewport."""
        self.center = self.look_from

        # Compute viewport dimensions based on fov, scaled by focus distance
        h = math.tan(math.radians(self.vfov) / 2)
        viewport_height = 2.0 * h * self.focus_dist
        viewport_width = viewport_height * self.image_width / self.image_height

        # Orthonormal basis: w points backwards, u right, v up
        self.w = (self.look_from - self.look_at).normalize()
        self.u = self.vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        viewport_u = self.u * viewport_width
        viewport_v = -self.v * viewport_height

        self.pixel_du = viewport_u / self.image_width
        self.pixel_dv = viewport_v / self.image_height

        viewport_upper_left = (self.center -
                               self.w * self.focus_dist -
                               viewport_u * 0.5 -
                               viewport_v * 0.5)
        self.pixel00_loc = viewport_upper_left + (self.pixel_du + self.pixel_dv) * 0.5

        defocus_radius = self.focus_dist * math.tan(math.radians(self.defocus_angle / 2))
        self.defocus_disk_u = self.u * defocus_radius
        self.defocus_disk_v = self.v * defocus_radius

    def get_ray(self, col: int, row: int, offset: Vector3, rng) -> Ray:
        """
        Ray through pixel (col, row) shifted by offset (in pixels), starting
        on the defocus disk when depth of field is enabled.
        """
        pixel_sample = (self.pixel00_loc +
                        self.pixel_du * (col + offset.x) +
                        self.pixel_dv * (row + offset.y))

        if self.defocus_angle <= 0:
            origin = self.center
        else:
            p = random_in_unit_disk(rng)
            origin = self.center + self.defocus_disk_u * p.x + self.defocus_disk_v * p.y

        return Ray(origin, pixel_sample - origin)

def random_in_unit_disk(rng) -> Vector3:
    """Generate random point in unit disk for DOF."""
    while True:
        p = Vector3(
            rng.uniform(-1, 1),
            rng.uniform(-1, 1),
            0
        )
        if p.dot(p) < 1:
            return p

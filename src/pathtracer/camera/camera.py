# camera/camera.py
import math
from typing import Optional

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_disk
from pathtracer.core.vector import Point3, Vector3


class SimpleCamera:
    """
    Axis-aligned pinhole camera at the origin looking down -z.

    The viewport is 2 units high and aspect_ratio * 2 wide, one focal
    length in front of the eye.
    """
    def __init__(self, aspect_ratio: float = 16.0 / 9.0, focal_length: float = 1.0):
        viewport_height = 2.0
        viewport_width = aspect_ratio * viewport_height

        self.origin = Point3(0.0, 0.0, 0.0)
        self.horizontal = Vector3(viewport_width, 0.0, 0.0)
        self.vertical = Vector3(0.0, viewport_height, 0.0)
        self.lower_left_corner = (self.origin
                                  - self.horizontal / 2.0
                                  - self.vertical / 2.0
                                  - Vector3(0.0, 0.0, focal_length))

    def get_ray(self, s: float, t: float, rng: Optional[np.random.Generator] = None) -> Ray:
        direction = self.lower_left_corner + self.horizontal * s + self.vertical * t - self.origin
        return Ray(self.origin, direction)


class Camera:
    """
    Perspective camera with a thin lens for depth of field.

    vfov is the vertical field of view in degrees. With aperture 0 it
    behaves as a pinhole and never touches the random generator.
    """
    def __init__(self, lookfrom: Point3, lookat: Point3, vup: Vector3, vfov: float,
                 aspect_ratio: float, aperture: float = 0.0, focus_dist: float = 1.0):
        theta = math.radians(vfov)
        h = math.tan(theta / 2.0)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        # Right-handed orthonormal basis; w points away from the target.
        self.w = (lookfrom - lookat).unit_vector()
        self.u = vup.cross(self.w).unit_vector()
        self.v = self.w.cross(self.u)

        self.origin = lookfrom
        self.horizontal = self.u * (focus_dist * viewport_width)
        self.vertical = self.v * (focus_dist * viewport_height)
        self.lower_left_corner = (self.origin
                                  - self.horizontal / 2.0
                                  - self.vertical / 2.0
                                  - self.w * focus_dist)
        self.lens_radius = aperture / 2.0

    def get_ray(self, s: float, t: float, rng: Optional[np.random.Generator] = None) -> Ray:
        """Generates a ray through image coordinates (s, t) in [0, 1]."""
        origin = self.origin
        if self.lens_radius > 0.0:
            rd = random_in_unit_disk(rng) * self.lens_radius
            origin = origin + self.u * rd.x + self.v * rd.y

        target = self.lower_left_corner + self.horizontal * s + self.vertical * t
        return Ray(origin, target - origin)

# materials/lambertian.py
import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_unit_vector
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, ScatterResult


class Lambertian(Material):
    """
    Lambertian diffuse material.
    """

    def __init__(self, albedo: Color):
        self.albedo = albedo

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> ScatterResult:
        """
        Scatter a ray according to a Lambertian reflection model.
        Never absorbs; the albedo is the attenuation.
        """
        # Pick a random scatter direction by adding a random vector to the normal.
        scatter_direction = rec.normal + random_unit_vector(rng)

        # A random vector opposite the normal leaves nothing to follow.
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return ScatterResult(self.albedo, Ray(rec.location, scatter_direction))

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo!r})"

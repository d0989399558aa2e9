# materials/metal.py
from typing import Optional

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_sphere, reflect
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, ScatterResult


class Metal(Material):
    """
    Metal material with reflective properties. fuzz in [0, 1] jitters the
    mirror direction.
    """
    def __init__(self, albedo: Color, fuzz: float = 0.0):
        self.albedo = albedo
        self.fuzz = fuzz

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        reflected = reflect(ray_in.unit_direction(), rec.normal)
        if self.fuzz > 0.0:
            reflected = reflected + random_in_unit_sphere(rng) * self.fuzz

        if reflected.dot(rec.normal) > 0.0:
            return ScatterResult(self.albedo, Ray(rec.location, reflected))

        return None  # Absorb the ray if it does not scatter forward

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo!r}, fuzz={self.fuzz})"

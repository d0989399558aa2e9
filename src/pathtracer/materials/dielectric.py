# materials/dielectric.py
import math

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.utils import reflect, refract
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import HitRecord, Surface
from pathtracer.materials.material import Material, ScatterResult

# Glass doesn't absorb light
CLEAR = Color(1.0, 1.0, 1.0)


class Dielectric(Material):
    """
    Clear glass-like material. Each scatter either reflects or refracts,
    chosen at random with Schlick's reflectance as the reflection odds.
    """
    def __init__(self, refractive_index: float):
        self.refractive_index = refractive_index

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> ScatterResult:
        if rec.surface is Surface.INSIDE:
            eta_ratio = self.refractive_index
        else:
            eta_ratio = 1.0 / self.refractive_index

        unit_direction = ray_in.unit_direction()
        cos_theta = min(unit_direction.dot(-rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = eta_ratio * sin_theta > 1.0
        if cannot_refract or rng.random() < reflectance(cos_theta, eta_ratio):
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, eta_ratio)

        return ScatterResult(CLEAR, Ray(rec.location, direction))

    def __repr__(self) -> str:
        return f"Dielectric(refractive_index={self.refractive_index})"


def reflectance(cosine: float, eta_ratio: float) -> float:
    """
    Schlick's approximation of the reflection probability.
    """
    r0 = (1.0 - eta_ratio) / (1.0 + eta_ratio)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow(1.0 - cosine, 5)

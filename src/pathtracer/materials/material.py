# materials/material.py
from typing import NamedTuple, Optional

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import HitRecord


class ScatterResult(NamedTuple):
    attenuation: Color
    ray: Ray


class Material:
    """
    Abstract material class. Subclasses must implement scatter().

    Materials hold no mutable state, so one instance can be shared by any
    number of spheres and render workers.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        """
        Computes the scattered ray and attenuation.
        Returns a ScatterResult, or None if the ray is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

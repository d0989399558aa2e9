# geometry/sphere.py
import math
from typing import Iterable, Optional, Tuple, TypeVar

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord, Hittable, Validator

T = TypeVar("T")


def solve_pq(p: float, q: float) -> Optional[Tuple[float, float]]:
    """
    Solves x^2 + p*x + q = 0.

    Returns both real roots in ascending order, or None when there are none.
    """
    p_half = p / 2.0
    p_half_sq = p_half * p_half
    if p_half_sq < q:
        return None
    root = math.sqrt(p_half_sq - q)
    return -p_half - root, -p_half + root


def first_acceptable(candidates: Iterable[T], validate) -> Optional[T]:
    for candidate in candidates:
        if validate(candidate):
            return candidate
    return None


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    Several spheres may share one material instance.
    """
    def __init__(self, center: Vector3, radius: float, material):
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, validate_t: Validator) -> Optional[HitRecord]:
        # Substituting origin + t*dir into |P - C|^2 = r^2 and dividing by
        # dir.dir gives the monic form t^2 + p*t + q = 0.
        oc = ray.origin - self.center
        dd = ray.direction.length_squared()
        p = 2.0 * ray.direction.dot(oc) / dd
        q = (oc.length_squared() - self.radius * self.radius) / dd

        roots = solve_pq(p, q)
        if roots is None:
            return None
        t = first_acceptable(roots, validate_t)
        if t is None:
            return None

        location = ray.at(t)
        outward_normal = (location - self.center) / self.radius
        return HitRecord.from_ray(location, outward_normal, t, ray, self.material)

    def __repr__(self) -> str:
        return f"Sphere(center={self.center!r}, radius={self.radius}, material={self.material!r})"

# core/utils.py
import math

import numpy as np

from pathtracer.core.vector import Vector3


def random_in_unit_cube(rng: np.random.Generator) -> Vector3:
    """
    Returns a random point with each coordinate uniform in [-1, 1).
    """
    return Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), rng.uniform(-1, 1))


def random_in_unit_sphere(rng: np.random.Generator) -> Vector3:
    """
    Returns a random point inside a unit sphere.

    Rejection sampling from the enclosing cube; about 1.9 draws on average.
    """
    while True:
        p = random_in_unit_cube(rng)
        if p.length_squared() < 1.0:
            return p


def random_unit_vector(rng: np.random.Generator) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    while True:
        p = random_in_unit_sphere(rng)
        if not p.near_zero():
            return p.unit_vector()


def random_in_unit_disk(rng: np.random.Generator) -> Vector3:
    """
    Returns a random point in the unit disk on the z = 0 plane.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), 0.0)
        if p.length_squared() < 1.0:
            return p


def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * (2.0 * v.dot(n))


def refract(uv: Vector3, n: Vector3, eta_ratio: float) -> Vector3:
    """
    Bends the unit direction uv through a surface with unit normal n.

    eta_ratio is eta / eta' for the incoming and outgoing media. The caller
    is responsible for ruling out total internal reflection.
    """
    cos_theta = min(-uv.dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * eta_ratio
    r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + r_out_parallel

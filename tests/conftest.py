"""Shared fixtures for the path tracer tests."""

import numpy as np
import pytest

from pathtracer.core.vector import Color, Point3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.lambertian import Lambertian


@pytest.fixture
def rng():
    """A seeded generator so stochastic tests are repeatable."""
    return np.random.default_rng(1234)


@pytest.fixture
def grey():
    return Lambertian(Color(0.5, 0.5, 0.5))


@pytest.fixture
def unit_sphere(grey):
    return Sphere(Point3(0.0, 0.0, 0.0), 1.0, grey)


@pytest.fixture
def small_world(grey):
    """A diffuse sphere on a diffuse ground, viewed from the origin along -z."""
    return HittableList([
        Sphere(Point3(0.0, -100.5, -1.0), 100.0, grey),
        Sphere(Point3(0.0, 0.0, -1.0), 0.5, grey),
    ])

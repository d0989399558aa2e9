"""Tests for the Renderer: sampling loop, row order, determinism and setup checks."""

import io

import numpy as np
import pytest

from pathtracer.camera.camera import SimpleCamera
from pathtracer.config import ConfigurationError, RenderSettings
from pathtracer.core.vector import Color, Point3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.renderer.image_writer import write_ppm
from pathtracer.renderer.raytracer import Renderer
from pathtracer.renderer.sampler import ColorSampler
from pathtracer.scenes import three_spheres_scene


def small_settings(**kwargs):
    params = dict(image_width=8, image_height=6, samples_per_pixel=4, max_depth=5, seed=7)
    params.update(kwargs)
    return RenderSettings(**params)


def make_renderer(world, **kwargs):
    settings = small_settings(**kwargs)
    return Renderer(world, SimpleCamera(settings.image_aspect_ratio), settings)


class TestRender:
    def test_image_shape_and_range(self, small_world):
        image = make_renderer(small_world).render()
        assert image.shape == (6, 8, 3)
        assert image.min() >= 0.0
        assert image.max() <= 1.0

    def test_top_row_is_first(self):
        # Only sky: the top of the picture is bluer, so it has less red.
        image = make_renderer(HittableList()).render()
        assert image[0, :, 0].mean() < image[-1, :, 0].mean()

    def test_sky_pixels_are_gamma_corrected(self):
        renderer = make_renderer(HittableList(), samples_per_pixel=1)
        image = renderer.render()
        # The bluest possible channel value is 1.0 before and after gamma.
        assert image[..., 2].max() == pytest.approx(1.0)
        # Red never drops below 0.5 in the gradient, so not below sqrt(0.5).
        assert image[..., 0].min() >= np.sqrt(0.5) - 1e-12

    def test_render_row_width(self, small_world):
        renderer = make_renderer(small_world)
        row = renderer.render_row(0, np.random.default_rng(0))
        assert row.shape == (8, 3)

    def test_sample_pixel_averages_samples(self):
        renderer = make_renderer(HittableList(), samples_per_pixel=3)
        sampler = ColorSampler()
        color = renderer.sample_pixel(4, 3, np.random.default_rng(0), sampler)
        assert sampler.count == 0
        assert all(0.0 <= c <= 1.0 for c in color)


class TestDeterminism:
    def test_same_seed_same_bytes(self, small_world):
        outputs = []
        for _ in range(2):
            out = io.StringIO()
            write_ppm(make_renderer(small_world).render(), out)
            outputs.append(out.getvalue())
        assert outputs[0] == outputs[1]

    def test_different_seed_differs(self, small_world):
        a = make_renderer(small_world, seed=1).render()
        b = make_renderer(small_world, seed=2).render()
        assert not np.array_equal(a, b)

    def test_parallel_matches_sequential(self):
        scene = three_spheres_scene()
        settings = small_settings()
        camera = scene.camera.build(settings.image_aspect_ratio)
        sequential = Renderer(scene.world, camera, settings).render()
        parallel = Renderer(scene.world, camera, small_settings(workers=2)).render()
        assert np.array_equal(sequential, parallel)


class TestStrictMode:
    def bright_world(self):
        # Albedo above one pushes the color out of range.
        return HittableList([Sphere(Point3(0.0, 0.0, -1.0), 0.5, Lambertian(Color(4.0, 4.0, 4.0)))])

    def test_clamps_by_default(self):
        image = make_renderer(self.bright_world()).render()
        assert image.max() == 1.0

    def test_strict_raises(self):
        with pytest.raises(ValueError, match="outside"):
            make_renderer(self.bright_world(), strict=True).render()

    def dark_world(self):
        return HittableList([Sphere(Point3(0.0, 0.0, -1.0), 0.5, Lambertian(Color(-1.0, -1.0, -1.0)))])

    def test_negative_radiance_clamped_to_black(self):
        image = make_renderer(self.dark_world()).render()
        assert image.min() == 0.0

    def test_strict_raises_on_negative_radiance(self):
        with pytest.raises(ValueError, match="outside"):
            make_renderer(self.dark_world(), strict=True).render()


class TestSetupValidation:
    def test_negative_radius_rejected(self, grey):
        world = HittableList([Sphere(Point3.zero(), -1.0, grey)])
        with pytest.raises(ConfigurationError) as excinfo:
            make_renderer(world)
        assert excinfo.value.parameter == "spheres[0].radius"

    def test_negative_fuzz_rejected(self):
        world = HittableList([Sphere(Point3.zero(), 1.0, Metal(Color(1.0, 1.0, 1.0), fuzz=-0.5))])
        with pytest.raises(ConfigurationError, match="fuzz"):
            make_renderer(world)

    def test_fuzz_above_one_rejected(self):
        world = HittableList([Sphere(Point3.zero(), 1.0, Metal(Color(1.0, 1.0, 1.0), fuzz=5.0))])
        with pytest.raises(ConfigurationError) as excinfo:
            make_renderer(world)
        assert excinfo.value.parameter == "spheres[0].material.fuzz"

    def test_settings_changed_after_construction_are_rechecked(self, small_world):
        settings = small_settings()
        settings.samples_per_pixel = -1
        with pytest.raises(ConfigurationError, match="samples_per_pixel"):
            Renderer(small_world, SimpleCamera(), settings)

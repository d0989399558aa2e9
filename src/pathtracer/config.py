"""Render and camera settings.

Both dataclasses validate themselves on construction so that a bad value is
reported, by name, before any rendering work starts.
"""
import os
from dataclasses import dataclass, field
from typing import Optional

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Point3, Vector3
from pathtracer.geometry.hittable import Hittable
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.metal import Metal


class ConfigurationError(ValueError):
    """Raised when a render, camera or scene parameter is invalid."""

    def __init__(self, parameter: str, message: str):
        super().__init__(f"{parameter}: {message}")
        self.parameter = parameter


@dataclass
class RenderSettings:
    image_width: int = 400
    image_height: Optional[int] = None
    aspect_ratio: Optional[float] = None
    samples_per_pixel: int = 100
    max_depth: int = 50
    gamma: float = 2.0
    t_min: float = 0.001
    seed: Optional[int] = None
    workers: int = 1
    strict: bool = False

    def __post_init__(self):
        if self.image_height is None:
            if self.aspect_ratio is None:
                self.aspect_ratio = 16.0 / 9.0
            if self.aspect_ratio <= 0:
                raise ConfigurationError("aspect_ratio", f"must be positive, got {self.aspect_ratio}")
            self.image_height = int(self.image_width / self.aspect_ratio)
        self.validate()

    def validate(self):
        # Pixel jitter divides by width - 1 and height - 1.
        for name in ("image_width", "image_height"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigurationError(name, f"image must not be empty, got {value}")
            if value < 2:
                raise ConfigurationError(name, f"must be at least 2 pixels, got {value}")
        if self.samples_per_pixel <= 0:
            raise ConfigurationError("samples_per_pixel", f"must be positive, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ConfigurationError("max_depth", f"must not be negative, got {self.max_depth}")
        if self.gamma <= 0:
            raise ConfigurationError("gamma", f"must be positive, got {self.gamma}")
        if self.t_min < 0:
            raise ConfigurationError("t_min", f"must not be negative, got {self.t_min}")
        if self.workers < 0:
            raise ConfigurationError("workers", f"must not be negative, got {self.workers}")

    @property
    def image_aspect_ratio(self) -> float:
        return self.image_width / self.image_height

    @property
    def worker_count(self) -> int:
        """Number of render processes; 0 means one per CPU."""
        if self.workers == 0:
            return os.cpu_count() or 1
        return self.workers


@dataclass
class CameraSettings:
    lookfrom: Point3 = field(default_factory=lambda: Point3(13.0, 2.0, 3.0))
    lookat: Point3 = field(default_factory=lambda: Point3(0.0, 0.0, 0.0))
    vup: Vector3 = field(default_factory=lambda: Vector3(0.0, 1.0, 0.0))
    vfov: float = 20.0
    aperture: float = 0.0
    focus_dist: Optional[float] = None

    def __post_init__(self):
        self.validate()

    def validate(self):
        if self.vfov <= 0 or self.vfov >= 180:
            raise ConfigurationError("vfov", f"must be between 0 and 180 degrees, got {self.vfov}")
        if self.aperture < 0:
            raise ConfigurationError("aperture", f"must not be negative, got {self.aperture}")
        if (self.lookfrom - self.lookat).near_zero():
            raise ConfigurationError("lookat", "must differ from lookfrom")
        if self.focus_dist is not None and self.focus_dist <= 0:
            raise ConfigurationError("focus_dist", f"must be positive, got {self.focus_dist}")
        view = (self.lookfrom - self.lookat).unit_vector()
        if self.vup.cross(view).near_zero():
            raise ConfigurationError("vup", "must not be parallel to the viewing direction")

    def build(self, aspect_ratio: float) -> Camera:
        focus_dist = self.focus_dist
        if focus_dist is None:
            focus_dist = (self.lookfrom - self.lookat).length()
        return Camera(self.lookfrom, self.lookat, self.vup, self.vfov,
                      aspect_ratio, self.aperture, focus_dist)


def validate_material(material, parameter: str = "material"):
    if isinstance(material, Metal) and not 0.0 <= material.fuzz <= 1.0:
        raise ConfigurationError(f"{parameter}.fuzz", f"must be in [0, 1], got {material.fuzz}")
    if isinstance(material, Dielectric) and material.refractive_index <= 0:
        raise ConfigurationError(f"{parameter}.refractive_index",
                                 f"must be positive, got {material.refractive_index}")


def validate_world(world: Hittable):
    """Reject degenerate spheres and out-of-range materials before rendering."""
    if isinstance(world, HittableList):
        for index, obj in enumerate(world):
            if isinstance(obj, Sphere):
                if obj.radius <= 0:
                    raise ConfigurationError(f"spheres[{index}].radius", f"must be positive, got {obj.radius}")
                validate_material(obj.material, f"spheres[{index}].material")
            else:
                validate_world(obj)
    elif isinstance(world, Sphere):
        if world.radius <= 0:
            raise ConfigurationError("radius", f"must be positive, got {world.radius}")
        validate_material(world.material)

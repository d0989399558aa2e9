# geometry/hittable.py
import enum
from typing import TYPE_CHECKING, Callable, Optional

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3

if TYPE_CHECKING:
    from pathtracer.materials.material import Material

# Decides whether a ray parameter t is an acceptable intersection distance.
Validator = Callable[[float], bool]

UNIT_TOLERANCE = 1e-4


class Surface(enum.Enum):
    INSIDE = "inside"
    OUTSIDE = "outside"


class HitRecord:
    """
    Records details of a ray-object intersection.

    The normal is always unit length and points against the incoming ray.
    """
    __slots__ = ("location", "normal", "t", "surface", "material")

    def __init__(self, location: Vector3, normal: Vector3, t: float,
                 surface: Surface, material: "Material"):
        assert abs(normal.length() - 1.0) <= UNIT_TOLERANCE, f"normal {normal!r} is not unit length"
        self.location = location
        self.normal = normal
        self.t = t
        self.surface = surface
        self.material = material

    @classmethod
    def from_ray(cls, location: Vector3, outward_normal: Vector3, t: float,
                 ray: Ray, material: "Material") -> "HitRecord":
        """
        Ensures that the normal always points against the ray.
        A ray travelling along the outward normal started inside the surface.
        """
        if ray.direction.dot(outward_normal) > 0.0:
            return cls(location, -outward_normal, t, Surface.INSIDE, material)
        return cls(location, outward_normal, t, Surface.OUTSIDE, material)

    @property
    def front_face(self) -> bool:
        return self.surface is Surface.OUTSIDE

    def __repr__(self) -> str:
        return (f"HitRecord(location={self.location!r}, normal={self.normal!r}, "
                f"t={self.t}, surface={self.surface.name})")


class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def hit(self, ray: Ray, validate_t: Validator) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")


def trivial_validator() -> Validator:
    return lambda t: True


def interval_validator(t_min: Optional[float] = None, t_max: Optional[float] = None) -> Validator:
    """
    Accepts t in the closed interval [t_min, t_max]. A missing bound is open.
    """
    def validate(t: float) -> bool:
        if t_min is not None and t < t_min:
            return False
        if t_max is not None and t > t_max:
            return False
        return True
    return validate

# renderer/integrator.py
import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import Hittable, interval_validator

BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)

# Shadow-acne epsilon: hits closer than this to the ray origin are ignored.
DEFAULT_T_MIN = 0.001


def background_color(ray: Ray) -> Color:
    """
    Vertical white-to-sky-blue gradient keyed on the ray direction.
    """
    unit_direction = ray.unit_direction()
    a = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - a) + SKY_BLUE * a


def ray_to_color(ray: Ray, world: Hittable, depth: int, rng: np.random.Generator,
                 t_min: float = DEFAULT_T_MIN) -> Color:
    """
    Radiance arriving along ray, following at most depth bounces.

    Each bounce multiplies the running attenuation by the material's
    attenuation; running out of depth or being absorbed yields black.
    Written as a loop so large depth limits do not grow the call stack.
    """
    validate_t = interval_validator(t_min, None)
    attenuation = WHITE
    for _ in range(depth):
        rec = world.hit(ray, validate_t)
        if rec is None:
            return attenuation * background_color(ray)

        scattered = rec.material.scatter(ray, rec, rng)
        if scattered is None:
            return BLACK

        attenuation = attenuation * scattered.attenuation
        ray = scattered.ray

    return BLACK

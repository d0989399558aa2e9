"""Scene construction.

Built-in scenes and a JSON scene loader. A scene is a world of spheres plus
the camera settings that frame it; materials are shared between spheres
wherever the description names the same material twice.

JSON layout::

    {
        "camera": {"lookfrom": [13, 2, 3], "lookat": [0, 0, 0], "vfov": 20},
        "materials": {
            "ground": {"type": "lambertian", "albedo": [0.5, 0.5, 0.5]},
            "steel": {"type": "metal", "albedo": [0.7, 0.6, 0.5], "fuzz": 0.0},
            "glass": {"type": "dielectric", "refractive_index": 1.5},
            "gold": {"type": "preset", "name": "gold"}
        },
        "spheres": [
            {"center": [0, -1000, 0], "radius": 1000, "material": "ground"}
        ]
    }
"""
import json
import math
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

import numpy as np

from pathtracer.config import CameraSettings, ConfigurationError, validate_material, validate_world
from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal
from pathtracer.materials.presets import ColorPresets, DielectricPresets, preset


@dataclass
class Scene:
    world: HittableList
    camera: CameraSettings = field(default_factory=CameraSettings)


def three_spheres_scene() -> Scene:
    """Ground, a diffuse sphere flanked by glass on the left and metal on the right."""
    ground = Lambertian(ColorPresets.GROUND)
    center = Lambertian(ColorPresets.BLUE)
    left = DielectricPresets.glass()
    right = Metal(Color(0.8, 0.6, 0.2), fuzz=0.3)

    world = HittableList([
        Sphere(Point3(0.0, -100.5, -1.0), 100.0, ground),
        Sphere(Point3(0.0, 0.0, -1.0), 0.5, center),
        Sphere(Point3(-1.0, 0.0, -1.0), 0.5, left),
        Sphere(Point3(1.0, 0.0, -1.0), 0.5, right),
    ])
    camera = CameraSettings(lookfrom=Point3(-2.0, 2.0, 1.0), lookat=Point3(0.0, 0.0, -1.0), vfov=20.0)
    return Scene(world, camera)


def diffuse_scene(albedo: float = 0.5) -> Scene:
    """A grey diffuse sphere resting on a grey diffuse ground."""
    material = Lambertian(Color(albedo, albedo, albedo))
    world = HittableList([
        Sphere(Point3(0.0, -100.5, -1.0), 100.0, material),
        Sphere(Point3(0.0, 0.0, -1.0), 0.5, material),
    ])
    camera = CameraSettings(lookfrom=Point3(0.0, 0.0, 0.0), lookat=Point3(0.0, 0.0, -1.0), vfov=90.0)
    return Scene(world, camera)


def _random_color(rng: np.random.Generator, low: float = 0.0, high: float = 1.0) -> Color:
    return Color(rng.uniform(low, high), rng.uniform(low, high), rng.uniform(low, high))


def random_spheres_scene(rng: Optional[np.random.Generator] = None) -> Scene:
    """
    The classic cover scene: a ground plane covered in a 22 x 22 grid of
    small random spheres around three large ones.
    """
    if rng is None:
        rng = np.random.default_rng()

    glass = DielectricPresets.glass()
    world = HittableList()
    world.add(Sphere(Point3(0.0, -1000.0, 0.0), 1000.0, Lambertian(ColorPresets.GRAY)))

    clearing = Point3(4.0, 0.2, 0.0)
    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - clearing).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                # Diffuse
                material = Lambertian(_random_color(rng) * _random_color(rng))
            elif choose_mat < 0.95:
                # Metal
                material = Metal(_random_color(rng, 0.5, 1.0), fuzz=rng.uniform(0.0, 0.5))
            else:
                material = glass
            world.add(Sphere(center, 0.2, material))

    world.add(Sphere(Point3(0.0, 1.0, 0.0), 1.0, glass))
    world.add(Sphere(Point3(-4.0, 1.0, 0.0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4.0, 1.0, 0.0), 1.0, Metal(Color(0.7, 0.6, 0.5), fuzz=0.0)))

    camera = CameraSettings(lookfrom=Point3(13.0, 2.0, 3.0), lookat=Point3(0.0, 0.0, 0.0),
                            vfov=20.0, aperture=0.1, focus_dist=10.0)
    return Scene(world, camera)


BUILTIN_SCENES: Dict[str, Callable[[], Scene]] = {
    "three-spheres": three_spheres_scene,
    "random": random_spheres_scene,
    "diffuse": diffuse_scene,
}


def _require(data: Dict[str, Any], key: str, where: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ConfigurationError(f"{where}.{key}", "is required") from None


def _check_mapping(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigurationError(where, f"expected an object, got {value!r}")
    return value


def _check_list(value: Any, where: str) -> List[Any]:
    if not isinstance(value, list):
        raise ConfigurationError(where, f"expected a list, got {value!r}")
    return value


def _number(value: Any, where: str) -> float:
    # bool is an int subclass; JSON true/false is never a valid number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(where, f"expected a number, got {value!r}")
    if not math.isfinite(value):
        raise ConfigurationError(where, f"must be finite, got {value!r}")
    return float(value)


def _vector(value: Any, where: str) -> Vector3:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ConfigurationError(where, f"expected three numbers, got {value!r}")
    return Vector3(*(_number(v, where) for v in value))


def material_from_dict(data: Dict[str, Any], where: str = "material") -> Material:
    _check_mapping(data, where)
    kind = _require(data, "type", where)
    if kind == "lambertian":
        material = Lambertian(_vector(_require(data, "albedo", where), f"{where}.albedo"))
    elif kind == "metal":
        fuzz = _number(data.get("fuzz", 0.0), f"{where}.fuzz")
        material = Metal(_vector(_require(data, "albedo", where), f"{where}.albedo"), fuzz)
    elif kind == "dielectric":
        material = Dielectric(_number(_require(data, "refractive_index", where), f"{where}.refractive_index"))
    elif kind == "preset":
        name = _require(data, "name", where)
        if not isinstance(name, str):
            raise ConfigurationError(f"{where}.name", f"expected a string, got {name!r}")
        try:
            material = preset(name)
        except ValueError as e:
            raise ConfigurationError(f"{where}.name", str(e)) from None
    else:
        raise ConfigurationError(f"{where}.type", f"unknown material type {kind!r}")
    validate_material(material, where)
    return material


def camera_from_dict(data: Dict[str, Any]) -> CameraSettings:
    _check_mapping(data, "camera")
    kwargs = {}
    for key in ("lookfrom", "lookat", "vup"):
        if key in data:
            kwargs[key] = _vector(data[key], f"camera.{key}")
    for key in ("vfov", "aperture", "focus_dist"):
        if key in data:
            kwargs[key] = _number(data[key], f"camera.{key}")
    return CameraSettings(**kwargs)


def scene_from_dict(data: Dict[str, Any]) -> Scene:
    _check_mapping(data, "scene")
    materials = {
        name: material_from_dict(spec, f"materials.{name}")
        for name, spec in _check_mapping(data.get("materials", {}), "scene.materials").items()
    }

    world = HittableList()
    for index, spec in enumerate(_check_list(_require(data, "spheres", "scene"), "scene.spheres")):
        where = f"spheres[{index}]"
        _check_mapping(spec, where)
        name = _require(spec, "material", where)
        if not isinstance(name, str) or name not in materials:
            raise ConfigurationError(f"{where}.material", f"unknown material {name!r}")
        center = _vector(_require(spec, "center", where), f"{where}.center")
        radius = _number(_require(spec, "radius", where), f"{where}.radius")
        world.add(Sphere(center, radius, materials[name]))
    validate_world(world)

    camera = camera_from_dict(data.get("camera", {}))
    return Scene(world, camera)


def load_scene(path: Union[str, os.PathLike]) -> Scene:
    """
    Load a scene from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the description is incomplete or invalid
    """
    with open(path) as f:
        data = json.load(f)
    return scene_from_dict(data)

"""Tests for the built-in scenes and the JSON scene loader."""

import json

import numpy as np
import pytest

from pathtracer.config import ConfigurationError
from pathtracer.core.vector import Point3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.scenes import (
    BUILTIN_SCENES,
    diffuse_scene,
    load_scene,
    random_spheres_scene,
    scene_from_dict,
    three_spheres_scene,
)

SCENE = {
    "camera": {"lookfrom": [0, 1, 5], "lookat": [0, 0, -1], "vfov": 40, "aperture": 0.05},
    "materials": {
        "ground": {"type": "lambertian", "albedo": [0.5, 0.5, 0.5]},
        "steel": {"type": "metal", "albedo": [0.7, 0.6, 0.5], "fuzz": 0.2},
        "glass": {"type": "dielectric", "refractive_index": 1.5},
        "gold": {"type": "preset", "name": "gold"},
    },
    "spheres": [
        {"center": [0, -100.5, -1], "radius": 100, "material": "ground"},
        {"center": [-1, 0, -1], "radius": 0.5, "material": "glass"},
        {"center": [1, 0, -1], "radius": 0.5, "material": "steel"},
        {"center": [0, 0, -2], "radius": 0.5, "material": "gold"},
        {"center": [0, 2, -3], "radius": 0.5, "material": "glass"},
    ],
}


class TestBuiltinScenes:
    def test_three_spheres(self):
        scene = three_spheres_scene()
        assert len(scene.world) == 4
        materials = {type(s.material) for s in scene.world}
        assert materials == {Lambertian, Metal, Dielectric}

    def test_diffuse(self):
        scene = diffuse_scene(0.3)
        spheres = list(scene.world)
        assert spheres[0].material is spheres[1].material
        assert spheres[0].material.albedo.x == 0.3

    def test_random_scene_is_reproducible(self):
        a = random_spheres_scene(np.random.default_rng(42))
        b = random_spheres_scene(np.random.default_rng(42))
        assert len(a.world) == len(b.world)
        assert [s.center for s in a.world] == [s.center for s in b.world]

    def test_random_scene_shares_glass(self):
        scene = random_spheres_scene(np.random.default_rng(0))
        glass = [s.material for s in scene.world if isinstance(s.material, Dielectric)]
        assert len(glass) >= 1
        assert all(m is glass[0] for m in glass)

    def test_random_scene_keeps_clearing_free(self):
        scene = random_spheres_scene(np.random.default_rng(0))
        clearing = Point3(4.0, 0.2, 0.0)
        small = [s for s in scene.world if s.radius == 0.2]
        assert small
        assert all((s.center - clearing).length() > 0.9 for s in small)

    def test_registry(self):
        assert set(BUILTIN_SCENES) == {"three-spheres", "random", "diffuse"}


class TestSceneLoader:
    def test_load_from_file(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_text(json.dumps(SCENE))
        scene = load_scene(path)

        assert len(scene.world) == 5
        assert all(isinstance(s, Sphere) for s in scene.world)
        assert scene.camera.lookfrom == Point3(0.0, 1.0, 5.0)
        assert scene.camera.vfov == 40.0
        assert scene.camera.aperture == 0.05

    def test_materials_are_shared_by_name(self):
        spheres = list(scene_from_dict(SCENE).world)
        assert spheres[1].material is spheres[4].material
        assert isinstance(spheres[3].material, Metal)
        assert spheres[2].material.fuzz == 0.2

    def test_camera_defaults(self):
        scene = scene_from_dict({"spheres": []})
        assert scene.camera.vfov == 20.0
        assert len(scene.world) == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_scene(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(json.JSONDecodeError):
            load_scene(path)

    @pytest.mark.parametrize("mutate,parameter", [
        (lambda d: d["spheres"][0].update(material="plastic"), "spheres[0].material"),
        (lambda d: d["spheres"][1].update(radius=-0.5), "spheres[1].radius"),
        (lambda d: d["spheres"][2].pop("center"), "spheres[2].center"),
        (lambda d: d["spheres"][2].update(center=[1, 2]), "spheres[2].center"),
        (lambda d: d["materials"]["steel"].update(fuzz=1.5), "materials.steel.fuzz"),
        (lambda d: d["materials"]["glass"].update(refractive_index=0), "materials.glass.refractive_index"),
        (lambda d: d["materials"]["ground"].update(type="velvet"), "materials.ground.type"),
        (lambda d: d["materials"]["gold"].update(name="mithril"), "materials.gold.name"),
        (lambda d: d.pop("spheres"), "scene.spheres"),
        (lambda d: d["camera"].update(vfov=-10), "vfov"),
        (lambda d: d["spheres"][1].update(radius="big"), "spheres[1].radius"),
        (lambda d: d["spheres"][2].update(center=[1, "a", 2]), "spheres[2].center"),
        (lambda d: d["spheres"].__setitem__(0, 5), "spheres[0]"),
        (lambda d: d.update(spheres={}), "scene.spheres"),
        (lambda d: d["spheres"][0].update(material=["ground"]), "spheres[0].material"),
        (lambda d: d["materials"]["steel"].update(fuzz=None), "materials.steel.fuzz"),
        (lambda d: d["materials"]["glass"].update(refractive_index="1.5"), "materials.glass.refractive_index"),
        (lambda d: d["materials"].update(steel="shiny"), "materials.steel"),
        (lambda d: d.update(materials=[]), "scene.materials"),
        (lambda d: d["camera"].update(focus_dist=None), "camera.focus_dist"),
        (lambda d: d["camera"].update(vfov="wide"), "camera.vfov"),
        (lambda d: d["camera"].update(aperture=True), "camera.aperture"),
        (lambda d: d.update(camera=[0, 0, 0]), "camera"),
    ])
    def test_invalid_scenes_name_the_problem(self, mutate, parameter):
        data = json.loads(json.dumps(SCENE))
        mutate(data)
        with pytest.raises(ConfigurationError) as excinfo:
            scene_from_dict(data)
        assert excinfo.value.parameter == parameter

    def test_top_level_must_be_an_object(self):
        with pytest.raises(ConfigurationError) as excinfo:
            scene_from_dict([SCENE])
        assert excinfo.value.parameter == "scene"

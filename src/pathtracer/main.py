# main.py
import argparse
import json
import sys
from typing import List, Optional

import numpy as np

from pathtracer.config import ConfigurationError, RenderSettings
from pathtracer.core.vector import Point3
from pathtracer.renderer.image_writer import save_image, write_ppm
from pathtracer.renderer.raytracer import Renderer
from pathtracer.scenes import BUILTIN_SCENES, Scene, load_scene, random_spheres_scene


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pathtracer", description="Monte-Carlo path tracer for sphere scenes")
    parser.add_argument("--scene", default="random",
                        help=f"built-in scene ({', '.join(BUILTIN_SCENES)}) or path to a JSON scene file")
    parser.add_argument("-o", "--output", default=None,
                        help="output image (.ppm or any format Pillow writes); PPM to stdout if omitted")
    parser.add_argument("--width", type=int, default=400, help="image width in pixels")
    size = parser.add_mutually_exclusive_group()
    size.add_argument("--height", type=int, default=None, help="image height in pixels")
    size.add_argument("--aspect-ratio", type=float, default=None,
                      help="derive the height from the width (default 16:9)")
    parser.add_argument("--samples", type=int, default=100, help="samples per pixel")
    parser.add_argument("--max-depth", type=int, default=50, help="maximum bounces per path")
    parser.add_argument("--gamma", type=float, default=2.0, help="gamma used before quantization")
    parser.add_argument("--epsilon", type=float, default=0.001, help="minimum hit distance (shadow acne)")
    parser.add_argument("--seed", type=int, default=None, help="random seed for a reproducible image")
    parser.add_argument("--workers", type=int, default=1, help="render processes; 0 uses every CPU")
    parser.add_argument("--vfov", type=float, default=None, help="override the scene's vertical field of view")
    parser.add_argument("--aperture", type=float, default=None, help="override the scene's lens aperture")
    parser.add_argument("--focus-dist", type=float, default=None, help="override the scene's focus distance")
    parser.add_argument("--lookfrom", type=float, nargs=3, default=None, metavar=("X", "Y", "Z"))
    parser.add_argument("--lookat", type=float, nargs=3, default=None, metavar=("X", "Y", "Z"))
    parser.add_argument("--strict", action="store_true",
                        help="fail on out-of-range colors instead of clamping them")
    parser.add_argument("--preview", action="store_true", help="show the finished image in a window")
    parser.add_argument("-q", "--quiet", action="store_true", help="no progress or status output")
    return parser


def create_scene(name: str, seed: Optional[int]) -> Scene:
    if name == "random":
        return random_spheres_scene(np.random.default_rng(seed))
    if name in BUILTIN_SCENES:
        return BUILTIN_SCENES[name]()
    return load_scene(name)


def apply_camera_overrides(scene: Scene, args: argparse.Namespace):
    camera = scene.camera
    if args.vfov is not None:
        camera.vfov = args.vfov
    if args.aperture is not None:
        camera.aperture = args.aperture
    if args.focus_dist is not None:
        camera.focus_dist = args.focus_dist
    if args.lookfrom is not None:
        camera.lookfrom = Point3(*args.lookfrom)
    if args.lookat is not None:
        camera.lookat = Point3(*args.lookat)
    camera.validate()


def status(message: str, quiet: bool):
    # stdout may be carrying the image
    if not quiet:
        print(message, file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = RenderSettings(
            image_width=args.width,
            image_height=args.height,
            aspect_ratio=args.aspect_ratio,
            samples_per_pixel=args.samples,
            max_depth=args.max_depth,
            gamma=args.gamma,
            t_min=args.epsilon,
            seed=args.seed,
            workers=args.workers,
            strict=args.strict,
        )
        status("\n=== Creating World ===", args.quiet)
        scene = create_scene(args.scene, args.seed)
        apply_camera_overrides(scene, args)
        status(f"Scene: {args.scene} ({len(scene.world)} spheres)", args.quiet)
        status(f"Camera position: {scene.camera.lookfrom}", args.quiet)
        camera = scene.camera.build(settings.image_aspect_ratio)
        renderer = Renderer(scene.world, camera, settings, verbose=not args.quiet)
    except (ConfigurationError, json.JSONDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except FileNotFoundError as e:
        print(f"error: scene file not found: {e.filename}", file=sys.stderr)
        return 2

    image = renderer.render()

    if args.output is None:
        write_ppm(image, sys.stdout)
        sys.stdout.flush()
    else:
        save_image(image, args.output)
        status(f"Saved {args.output}", args.quiet)

    if args.preview:
        from pathtracer.preview import show_image
        show_image(image, title=f"pathtracer - {args.scene}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

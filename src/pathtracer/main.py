# main.py
import argparse
import logging
import random
import sys
from typing import List, Optional

from pathtracer.camera.camera import Camera
from pathtracer.config import (
    DEFAULT_ASPECT_RATIO, DEFAULT_FOCUS_DIST, DEFAULT_SAMPLES, DEFAULT_SCENE,
    DEFAULT_WIDTH, MAX_DEPTH, QUALITY_PRESETS, RenderSettings
)
from pathtracer.renderer.output import save_image, write_ppm
from pathtracer.renderer.raytracer import Renderer
from pathtracer.scene.library import mesh_in_cornell_box, select_scene

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Offline Monte Carlo path tracer writing PPM images",
    )
    parser.add_argument("-w", "--width", type=int, default=DEFAULT_WIDTH,
                        help="Output image width in pixels")
    parser.add_argument("-r", "--aspect-ratio", type=float, default=DEFAULT_ASPECT_RATIO,
                        help="Aspect ratio")
    parser.add_argument("-a", "--aperture", type=float, default=0.0,
                        help="Camera aperture")
    parser.add_argument("-n", "--samples", type=int, default=None,
                        help=f"Samples per pixel (default {DEFAULT_SAMPLES})")
    parser.add_argument("-s", "--scene", type=int, default=DEFAULT_SCENE,
                        help="Scene select (1 - 10; anything else gives the final scene)")
    parser.add_argument("-o", "--outfile", default=None,
                        help="Output file (stdout if omitted)")
    parser.add_argument("--max-depth", type=int, default=None,
                        help=f"Maximum bounces per path (default {MAX_DEPTH})")
    parser.add_argument("--quality", choices=sorted(QUALITY_PRESETS), default=None,
                        help="Sample/depth preset; -n and --max-depth override it")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for scene construction and sampling")
    parser.add_argument("-j", "--workers", type=int, default=1,
                        help="Number of worker processes")
    parser.add_argument("--obj", default=None,
                        help="Render this OBJ model in the Cornell box instead of --scene")
    parser.add_argument("--obj-scale", type=float, default=1.0,
                        help="Scale applied to the OBJ model")
    parser.add_argument("--no-progress", action="store_true",
                        help="Hide the scanline progress bar")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    return parser


def settings_from_args(args: argparse.Namespace) -> RenderSettings:
    overrides = dict(width=args.width, aspect_ratio=args.aspect_ratio,
                     aperture=args.aperture, seed=args.seed, workers=args.workers)
    if args.samples is not None:
        overrides["samples_per_pixel"] = args.samples
    if args.max_depth is not None:
        overrides["max_depth"] = args.max_depth
    if args.quality is not None:
        return RenderSettings.from_preset(args.quality, **overrides)
    return RenderSettings(**overrides)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # stdout carries image data only
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = settings_from_args(args)
    if settings.seed is not None:
        random.seed(settings.seed)

    if args.obj is not None:
        scene = mesh_in_cornell_box(args.obj, args.obj_scale)
    else:
        scene = select_scene(args.scene)
    camera = Camera.for_scene(scene, settings.aspect_ratio, settings.aperture, DEFAULT_FOCUS_DIST)

    image = Renderer(scene, camera, settings).render_rgb8(show_progress=not args.no_progress)

    if args.outfile is None:
        write_ppm(image, sys.stdout)
        sys.stdout.flush()
    else:
        save_image(image, args.outfile)
    logger.info("Done")
    return 0


if __name__ == "__main__":
    sys.exit(main())

# main.py
import argparse
import logging
import sys
from renderer.raytracer import RenderSettings
from renderer.runner import RenderRunner
from renderer.tone_mapping import save_image, write_ppm
from geometry.partition import PartitionBy
from scenes.presets import SCENES

logger = logging.getLogger("pathtracer")

# samples per pixel, max bounces, and the fraction of the scene's width
QUALITY_LEVELS = {
    "preview": {"samples": 4, "bounces": 8, "scale": 0.25},
    "balanced": {"samples": 32, "bounces": 20, "scale": 0.5},
    "final": {"samples": 100, "bounces": 50, "scale": 1.0},
}

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render one of the built-in scenes with a BVH-accelerated path tracer.",
    )
    parser.add_argument("--scene", choices=sorted(SCENES), default="simple",
                        help="scene to render (default: simple)")
    parser.add_argument("--quality", choices=list(QUALITY_LEVELS), default="preview",
                        help="sampling preset (default: preview)")
    parser.add_argument("--width", type=int,
                        help="image width in pixels (overrides the quality preset)")
    parser.add_argument("--samples", type=int,
                        help="samples per pixel (overrides the quality preset)")
    parser.add_argument("--depth", type=int,
                        help="maximum bounces per path (overrides the quality preset)")
    parser.add_argument("--partition",
                        help="BVH partition strategy: bisect, midpoint, sah, sah:<buckets> "
                             "or sah-per-surface (default: the scene's own)")
    parser.add_argument("--seed", type=int, default=0, help="random seed (default: 0)")
    parser.add_argument("--workers", type=int,
                        help="render processes (default: one per CPU)")
    parser.add_argument("-o", "--output",
                        help="image file to write; .ppm is written as text, other "
                             "extensions through Pillow (default: PPM on stdout)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    return parser

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )

    preset = SCENES[args.scene]
    quality = QUALITY_LEVELS[args.quality]
    width = args.width or max(1, int(preset.image_width * quality["scale"]))

    try:
        partition_by = PartitionBy.parse(args.partition) if args.partition else preset.partition_by()
        settings = RenderSettings(
            samples_per_pixel=args.samples if args.samples is not None else quality["samples"],
            max_depth=args.depth if args.depth is not None else quality["bounces"],
            background=preset.background,
            seed=args.seed,
            workers=args.workers,
        )
        camera = preset.camera(width)
        surfaces = preset.surfaces(args.seed)
    except ValueError as e:
        logger.error("cannot set up scene %r: %s", args.scene, e)
        return 1

    logger.info("scene %s: %d surfaces, %dx%d", preset.name, len(surfaces),
                camera.image_width, camera.image_height)

    runner = RenderRunner(camera, settings, partition_by)
    rgb8 = runner.run(surfaces)

    if args.output:
        save_image(rgb8, args.output)
        logger.info("wrote %s", args.output)
    else:
        write_ppm(rgb8, sys.stdout)
        sys.stdout.flush()
    return 0

if __name__ == "__main__":
    sys.exit(main())

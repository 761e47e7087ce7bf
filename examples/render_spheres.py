#!/usr/bin/env python3
"""Render the three-spheres scene to a PPM image.

Renders a diffuse, a glass and a metal sphere on a large diffuse ground,
lit only by the sky, and writes the result as plain-text PPM.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH       Image width in pixels (default: 400)
    --samples SAMPLES   Samples per pixel (default: 100)
    --depth DEPTH       Maximum bounces per path (default: 50)
    --seed SEED         Random seed (default: 0)
    --output OUTPUT     Output file path, or - for stdout (default: spheres.ppm)
    --gradient          Write the red/green test gradient instead of rendering
    --quiet             Suppress progress output

Example:
    python -m examples.render_spheres --width 200 --samples 20 --output small.ppm
"""

import argparse
import sys
import time
from pathlib import Path

import taichi as ti

from pathtracer.output.ppm import gradient_image, write_ppm


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the three-spheres scene to a PPM image.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=100,
        help="Samples per pixel (default: 100)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=50,
        help="Maximum bounces per path (default: 50)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed (default: 0)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.ppm",
        help="Output file path, or - for stdout (default: spheres.ppm)",
    )
    parser.add_argument(
        "--gradient",
        action="store_true",
        help="Write the 256x256 test gradient instead of rendering",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def log(message: str, quiet: bool, **kwargs) -> None:
    # Progress goes to stderr so the image can be streamed to stdout
    if not quiet:
        print(message, file=sys.stderr, **kwargs)


def render_spheres(
    width: int = 400,
    num_samples: int = 100,
    max_depth: int = 50,
    seed: int = 0,
    output_path: str = "spheres.ppm",
    quiet: bool = False,
) -> None:
    """Render the three-spheres scene and save it.

    Args:
        width: Image width in pixels; height follows from a 16:9 aspect.
        num_samples: Samples per pixel.
        max_depth: Maximum bounces per path.
        seed: Random seed.
        output_path: Output file path, or "-" for stdout.
        quiet: If True, suppress progress output.
    """
    # Lazy imports to allow Taichi initialization first
    from pathtracer.config import RenderSettings
    from pathtracer.core.renderer import Renderer
    from pathtracer.scene.presets import create_three_spheres_scene

    settings = RenderSettings(
        image_width=width,
        samples_per_pixel=num_samples,
        max_depth=max_depth,
        seed=seed,
    )
    world = create_three_spheres_scene()
    renderer = Renderer(settings)

    log(
        f"Rendering {settings.image_width}x{settings.image_height}, "
        f"{num_samples} spp, depth {max_depth}...",
        quiet,
    )
    start_time = time.time()

    def progress_callback(rows_done: int, total_rows: int) -> None:
        log(
            f"\r  Scanlines remaining: {total_rows - rows_done:4d}",
            quiet,
            end="",
            flush=True,
        )

    image = renderer.render(world, callback=progress_callback)
    log("", quiet)

    _write(image, output_path)
    log(f"Done in {time.time() - start_time:.2f}s", quiet)


def write_gradient(output_path: str, quiet: bool = False) -> None:
    """Write the 256x256 test gradient."""
    _write(gradient_image(256, 256), output_path)
    log("Done.", quiet)


def _write(image, output_path: str) -> None:
    if output_path == "-":
        write_ppm(image, sys.stdout)
    else:
        write_ppm(image, Path(output_path))


def main() -> int:
    """Main entry point."""
    args = parse_args()

    if args.gradient:
        write_gradient(args.output, quiet=args.quiet)
        return 0

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
        log("Using GPU backend", args.quiet)
    except Exception:
        ti.init(arch=ti.cpu)
        log("Using CPU backend", args.quiet)

    try:
        render_spheres(
            width=args.width,
            num_samples=args.samples,
            max_depth=args.depth,
            seed=args.seed,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (ValueError, RuntimeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

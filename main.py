#!/usr/bin/env python3
"""
phongtrace - A small Python ray caster

Main entry point for rendering a single shaded sphere to a PPM file.
"""

import argparse
import dataclasses
import logging
import math
import sys
import time
from typing import List, Optional

from phongtrace.vec4 import point
from phongtrace.color import Color
from phongtrace.matrix import Matrix
from phongtrace.shapes import Sphere
from phongtrace.materials import Material
from phongtrace.lights import PointLight
from phongtrace.renderer import Renderer, RenderSettings, RENDER_MODES
from phongtrace.scene_parser import SceneParseError, load_scene

logger = logging.getLogger("phongtrace")


def create_demo_scene():
    """Create the default scene: a magenta sphere lit from the upper left."""
    sphere = Sphere(material=Material(color=Color(1, 0.2, 1)))
    light = PointLight(point(-10, 10, -10), Color(1, 1, 1))
    return sphere, light


def create_squashed_scene():
    """Create a sphere squashed along y and rotated about z."""
    transform = Matrix.identity().rotate_z(math.pi / 5).scale(1, 0.5, 1)
    sphere = Sphere(transform=transform, material=Material(color=Color(0.2, 0.6, 1)))
    light = PointLight(point(-10, 10, -10), Color(1, 1, 1))
    return sphere, light


SCENES = {
    'demo': create_demo_scene,
    'squashed': create_squashed_scene,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='phongtrace - A small Python ray caster',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --output output/sphere.ppm
  python main.py --pixels 200 --mode silhouette --output silhouette.ppm
  python main.py --scene-file scene.yaml --output scene.ppm
        '''
    )

    parser.add_argument('--pixels', type=int, default=None, help='Canvas size in pixels (default: 100)')
    parser.add_argument('--wall-size', type=float, default=None, help='Virtual wall size (default: 7.0)')
    parser.add_argument('--wall-z', type=float, default=None, help='Virtual wall z position (default: 10.0)')
    parser.add_argument('--mode', type=str, default=None, choices=RENDER_MODES,
                        help='Render mode (default: shaded)')
    parser.add_argument('--scene', type=str, default='demo', choices=sorted(SCENES),
                        help='Built-in scene to render (default: demo)')
    parser.add_argument('--scene-file', type=str, default=None,
                        help='YAML or JSON scene description (overrides --scene)')
    parser.add_argument('--output', type=str, default='output/render.ppm', help='Output PPM filename')
    parser.add_argument('--quiet', action='store_true', help='Do not print progress')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser


def apply_overrides(settings: RenderSettings, args: argparse.Namespace) -> RenderSettings:
    """Return settings with any command line flags applied on top."""
    overrides = {}
    if args.pixels is not None:
        overrides['canvas_pixels'] = args.pixels
    if args.wall_size is not None:
        overrides['wall_size'] = args.wall_size
    if args.wall_z is not None:
        overrides['wall_z'] = args.wall_z
    if args.mode is not None:
        overrides['mode'] = args.mode
    return dataclasses.replace(settings, **overrides) if overrides else settings


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    try:
        if args.scene_file:
            logger.info("Loading scene file %s", args.scene_file)
            sphere, light, settings = load_scene(args.scene_file)
        else:
            sphere, light = SCENES[args.scene]()
            settings = RenderSettings()
        settings = apply_overrides(settings, args)
    except (SceneParseError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print("=" * 60)
        print("phongtrace")
        print("=" * 60)
        print(f"  Canvas: {settings.canvas_pixels}x{settings.canvas_pixels}")
        print(f"  Wall: size {settings.wall_size} at z={settings.wall_z}")
        print(f"  Mode: {settings.mode}")

    renderer = Renderer(settings)

    if not args.quiet:
        last_progress = [0]

        def progress_callback(progress: float):
            pct = int(progress * 100)
            if pct > last_progress[0]:
                last_progress[0] = pct
                bar_len = 40
                filled = int(bar_len * progress)
                bar = '#' * filled + '.' * (bar_len - filled)
                print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

        renderer.set_progress_callback(progress_callback)

    start_time = time.time()
    canvas = renderer.render(sphere, light)
    elapsed = time.time() - start_time

    path = canvas.save_ppm(args.output)

    if not args.quiet:
        print(f"\nRender completed in {elapsed:.2f} seconds")
        print(f"Saved to: {path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())

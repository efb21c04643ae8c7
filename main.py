#!/usr/bin/env python3
"""
spherecast - A Python Monte-Carlo path tracer for sphere scenes

Main entry point for rendering scenes.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from spherecast.camera import Camera
from spherecast.renderer import Renderer, RenderSettings
from spherecast.image import save_image
from spherecast.scene_parser import SceneParser, SceneParseError, default_scene


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='spherecast - A Python Monte-Carlo path tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --output render.ppm
  python main.py --width 800 --height 450 --samples 200 --seed 7 --output render.png
  python main.py --scene-file scenes/default.yaml --output default.png
        '''
    )

    parser.add_argument('--width', type=int, default=None, help='Image width (default: 400)')
    parser.add_argument('--height', type=int, default=None, help='Image height (default: 225)')
    parser.add_argument('--samples', type=int, default=None, help='Samples per pixel (default: 100)')
    parser.add_argument('--depth', type=int, default=None, help='Max ray depth (default: 50)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible renders')
    parser.add_argument('--scene-file', type=str, default=None,
                        help='YAML or JSON scene description (default: built-in scene)')
    parser.add_argument('--output', type=str, default='output/render.ppm', help='Output filename')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    print("=" * 60)
    print("spherecast Path Tracer")
    print("=" * 60)

    # Scene files carry their own settings; command-line flags override them
    scene_parser = None
    if args.scene_file:
        scene_parser = SceneParser()
        try:
            world, _, base = scene_parser.parse_file(args.scene_file)
        except SceneParseError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    else:
        world, base = default_scene(), RenderSettings()

    try:
        settings = RenderSettings(
            width=args.width if args.width is not None else base.width,
            height=args.height if args.height is not None else base.height,
            samples_per_pixel=args.samples if args.samples is not None else base.samples_per_pixel,
            max_depth=args.depth if args.depth is not None else base.max_depth,
            seed=args.seed if args.seed is not None else base.seed
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # The camera is built once the final image size is known
    if scene_parser is not None:
        camera = scene_parser.camera_for(settings)
    else:
        camera = Camera(aspect_ratio=settings.aspect_ratio)

    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Samples: {settings.samples_per_pixel}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Seed: {settings.seed}")
    print(f"  Objects in scene: {len(world)}")

    renderer = Renderer(settings)

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()

    image = renderer.render(world, camera)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    print(f"  Samples per second: {(settings.width * settings.height * settings.samples_per_pixel) / elapsed:.0f}")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving to: {args.output}")
    save_image(image, output_path)

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())

#!/usr/bin/env python3
"""
stochray - A small Monte Carlo ray tracer

Main entry point for rendering scenes.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from stochray.renderer import Renderer, get_platform_info
from stochray.scene_parser import SceneParseError, create_default_scene, load_scene


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='stochray - A small Monte Carlo ray tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --output render.png
  python main.py --width 1280 --height 720 --samples 32 --seed 1 --output hd.png
  python main.py --scene scenes/ball.yaml --threads 8 --output ball.png
        '''
    )

    parser.add_argument('--scene', type=str, default=None,
                        help='Scene file (YAML or JSON); built-in demo if omitted')
    parser.add_argument('--width', type=int, default=None, help='Image width (default: 800)')
    parser.add_argument('--height', type=int, default=None, help='Image height (default: 600)')
    parser.add_argument('--samples', type=int, default=None, help='Samples per camera ray (default: 16)')
    parser.add_argument('--aa', type=int, default=None, help='Anti-aliasing rays per pixel (default: 4)')
    parser.add_argument('--depth', type=int, default=None, help='Max bounces (default: 3)')
    parser.add_argument('--threads', type=int, default=None, help='Number of threads (0=auto)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible renders')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log render details')
    parser.add_argument('--info', action='store_true', help='Show platform info and exit')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    if args.info:
        info = get_platform_info()
        print("stochray Platform Info:")
        print(f"  System: {info['system']}")
        print(f"  Machine: {info['machine']}")
        print(f"  Python: {info['python_version']}")
        print(f"  NumPy: {info['numpy_version']}")
        print(f"  CPU Cores: {info['cpu_count']}")
        return 0

    print("=" * 60)
    print("stochray Ray Tracer")
    print("=" * 60)

    try:
        if args.scene:
            print(f"\nLoading scene: {args.scene}")
            world, camera, settings = load_scene(args.scene)
        else:
            print("\nCreating built-in scene")
            world, camera, settings = create_default_scene(
                args.width or 800, args.height or 600
            )

        overrides = {
            'width': args.width,
            'height': args.height,
            'samples_per_pixel': args.samples,
            'aa_samples': args.aa,
            'max_bounces': args.depth,
            'num_threads': args.threads,
            'seed': args.seed,
        }
        settings = settings.replace(**{k: v for k, v in overrides.items() if v is not None})
    except (SceneParseError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Samples: {settings.samples_per_pixel} x {settings.aa_samples} AA")
    print(f"  Max Bounces: {settings.max_bounces}")
    print(f"  Threads: {settings.num_threads}")
    print(f"  Objects in scene: {len(world)}")

    renderer = Renderer(settings)

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

    rgba = renderer.render_rgba(world, camera)

    elapsed = time.time() - start_time
    paths = settings.width * settings.height * settings.samples_per_pixel * settings.aa_samples
    print(f"\nRender completed in {elapsed:.2f} seconds")
    if elapsed > 0:
        print(f"  Paths per second: {paths / elapsed:.0f}")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving to: {args.output}")
    renderer.to_image(rgba).save(output_path)

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())

"""
Command line front end for PathForge.

Renders a built-in demo scene or a YAML/JSON scene file to an image.
Installed as the ``pathforge`` console script; ``main.py`` at the
repository root runs the same entry point.
"""

import argparse
import sys
import time
from pathlib import Path

from .camera import OriginCamera
from .renderer import Renderer, RenderSettings
from .scene_parser import load_scene, SceneParseError
from .scenes import SCENES
from .logconfig import level_for_verbosity, setup_logging


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='PathForge - A Python Recursive Path Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  pathforge --scene diffuse --output render.png
  pathforge --scene mirror --width 800 --height 600 --bounces 6 --workers 0
  pathforge --scene-file scenes/example.yaml --output example.png
        '''
    )

    parser.add_argument('--width', type=int, default=None, help='Image width (default: 400)')
    parser.add_argument('--height', type=int, default=None, help='Image height (default: 400)')
    parser.add_argument('--bounces', type=int, default=None, help='Bounce limit (default: 4)')
    parser.add_argument('--aperture', type=float, default=None, help='Camera aperture (default: 2.0)')
    parser.add_argument('--workers', type=int, default=None, help='Worker threads (0=auto, default: 1)')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename')
    parser.add_argument('--scene', type=str, default='diffuse', choices=sorted(SCENES),
                        help='Built-in scene to render (default: diffuse)')
    parser.add_argument('--scene-file', type=str, default=None,
                        help='YAML or JSON scene description (overrides --scene)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log render details')
    parser.add_argument('--log-file', type=str, default=None, help='Also write the log to this file')

    args = parser.parse_args(argv)

    setup_logging('pathforge', level_for_verbosity(args.verbose), log_file=args.log_file)

    # Scene and defaults
    if args.scene_file:
        try:
            scene, camera, settings = load_scene(args.scene_file)
        except SceneParseError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        scene_name = args.scene_file
    else:
        scene = SCENES[args.scene]()
        settings = RenderSettings()
        camera = OriginCamera(aperture=2.0, width=settings.width, height=settings.height)
        scene_name = args.scene

    # Command line overrides
    try:
        settings = RenderSettings(
            width=args.width if args.width is not None else settings.width,
            height=args.height if args.height is not None else settings.height,
            bounce_limit=args.bounces if args.bounces is not None else settings.bounce_limit,
            tile_size=settings.tile_size,
            num_workers=args.workers if args.workers is not None else settings.num_workers
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    camera = OriginCamera(
        aperture=args.aperture if args.aperture is not None else camera.aperture,
        width=settings.width,
        height=settings.height
    )

    print("=" * 60)
    print("PathForge Path Tracer")
    print("=" * 60)

    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Bounce Limit: {settings.bounce_limit}")
    print(f"  Aperture: {camera.aperture}")
    print(f"  Workers: {settings.num_workers}")

    print(f"\nScene: {scene_name}")
    print(f"  Objects in scene: {len(scene.objects)}")
    print(f"  Lights in scene: {len(scene.light_sources)}")

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

    image = renderer.render(scene, camera)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    if elapsed > 0:
        print(f"  Primary rays per second: {(settings.width * settings.height) / elapsed:.0f}")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving to: {args.output}")
    renderer.save_image(image, str(output_path))

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())

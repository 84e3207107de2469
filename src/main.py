# main.py
import argparse
import random
import sys
from core.vector import Vector3
from camera.camera import Camera
from renderer.raytracer import Renderer
from renderer.tone_mapping import gamma_correct
from renderer.image_io import save_image
from scenes.random_scene import random_scene
from scenes.export import build_scene_tables, write_scene_tables
from config import RENDER_SETTINGS, CAMERA_SETTINGS, QUALITY_LEVELS, merged

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Generate a random sphere scene, export its data tables and ray trace it')
    parser.add_argument('--quality', choices=sorted(QUALITY_LEVELS), default=None,
                        help='Render quality preset')
    parser.add_argument('--width', type=int, default=None, help='Image width in pixels')
    parser.add_argument('--samples', type=int, default=None, help='Samples per pixel')
    parser.add_argument('--max-depth', type=int, default=None, help='Maximum ray bounces')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for a reproducible scene')
    parser.add_argument('--output', default='render.ppm',
                        help='Image file (.ppm is written as plain PPM, other extensions through Pillow)')
    parser.add_argument('--scene-out', default='scene_data.glsl', help='File for the scene data tables')
    parser.add_argument('--scene-only', action='store_true',
                        help='Write the scene data tables and exit without rendering')
    parser.add_argument('--empty-world', action='store_true',
                        help='Keep the generated spheres out of the rendered world (background only)')
    parser.add_argument('--preview', action='store_true', help='Show the finished render in a window')
    return parser

def render_settings(args) -> dict:
    settings = merged(RENDER_SETTINGS, QUALITY_LEVELS.get(args.quality))
    if args.width is not None:
        settings['image_width'] = args.width
    if args.samples is not None:
        settings['samples_per_pixel'] = args.samples
    if args.max_depth is not None:
        settings['max_depth'] = args.max_depth
    return settings

def make_camera(aspect_ratio: float, settings: dict = None) -> Camera:
    settings = merged(CAMERA_SETTINGS, settings)
    return Camera(
        look_from=Vector3(*settings['look_from']),
        look_at=Vector3(*settings['look_at']),
        vup=Vector3(*settings['vup']),
        vfov=settings['vfov'],
        aspect_ratio=aspect_ratio,
        aperture=settings['aperture'],
        focus_dist=settings['focus_dist'],
    )

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = render_settings(args)
    rng = random.Random(args.seed)

    image_width = settings['image_width']
    image_height = int(image_width / settings['aspect_ratio'])

    print("\n=== Creating World ===")
    world, spheres = random_scene(rng, {'populate_world': not args.empty_world})

    tables = build_scene_tables(spheres)
    try:
        write_scene_tables(args.scene_out, tables)
    except OSError as e:
        print(f"Error: could not write scene data to {args.scene_out}: {e}")
        return 1
    print(f"Scene data written to {args.scene_out}")

    if args.scene_only:
        return 0

    print("\n=== Rendering ===")
    print(f"Render resolution: {image_width}x{image_height}")
    print(f"Samples per pixel: {settings['samples_per_pixel']}")
    print(f"Max bounces: {settings['max_depth']}")

    try:
        renderer = Renderer(image_width, image_height,
                            samples_per_pixel=settings['samples_per_pixel'],
                            max_depth=settings['max_depth'],
                            rng=rng)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    camera = make_camera(settings['aspect_ratio'])
    accumulated = renderer.render(camera, world)
    pixels = gamma_correct(accumulated, settings['samples_per_pixel'])

    try:
        save_image(args.output, pixels)
    except OSError as e:
        print(f"Error: could not write image to {args.output}: {e}")
        return 1
    print(f"Image written to {args.output}")

    if args.preview:
        from renderer.preview import show_preview
        show_preview(pixels)
    return 0

if __name__ == "__main__":
    sys.exit(main())

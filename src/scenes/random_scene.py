# scenes/random_scene.py
import random
from typing import List, Tuple
from core.vector import Color, Point3
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.material import Material, MaterialKind
from materials.lambertian import Lambertian
from materials.metal import Metal
from materials.dielectric import Dielectric
from config import SCENE_SETTINGS, merged

GROUND_CENTER = Point3(0, -1000, 0)
GROUND_RADIUS = 1000.0
GROUND_ALBEDO = Color(0.5, 0.5, 0.5)

def random_small_material(choose_mat: float, rng, settings: dict) -> Material:
    """
    Weighted pick between diffuse, metal and glass from an already drawn
    selector in [0, 1). Draws the albedo and fuzz it needs from rng.
    """
    if choose_mat < settings['diffuse_probability']:
        # Product of two random colors skews toward darker tones
        albedo = Color.random(rng) * Color.random(rng)
        return Lambertian(albedo)
    if choose_mat < settings['diffuse_probability'] + settings['metal_probability']:
        albedo = Color.random(rng, 0.5, 1)
        fuzz = rng.uniform(0, 0.5)
        return Metal(albedo, fuzz)
    return Dielectric(settings['glass_ir'])

def feature_spheres() -> List[Sphere]:
    """The three large spheres: glass in the middle, diffuse behind, mirror in front."""
    return [
        Sphere(Point3(0, 1, 0), 1.0, Dielectric(1.5)),
        Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))),
        Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)),
    ]

def random_scene(rng=random, settings: dict = None) -> Tuple[HittableList, List[Sphere]]:
    """
    Build the random sphere scene.

    Returns (world, spheres): spheres is every generated sphere in order
    (ground, small spheres, three feature spheres). world receives the same
    spheres unless settings['populate_world'] is False, in which case it is
    returned empty and renders as pure background.
    """
    settings = merged(SCENE_SETTINGS, settings)
    small_radius = settings['small_radius']
    exclusion_point = Point3(*settings['exclusion_point'])
    exclusion_radius = settings['exclusion_radius']
    max_small = settings['max_small_spheres']

    spheres = [Sphere(GROUND_CENTER, GROUND_RADIUS, Lambertian(GROUND_ALBEDO))]

    placed = 0
    skipped = 0
    grid = range(settings['grid_start'], settings['grid_stop'], settings['grid_step'])
    for a in grid:
        if placed >= max_small:
            break
        for b in grid:
            if placed >= max_small:
                break
            # Draw order per candidate: selector, x jitter, z jitter, then material parameters
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), small_radius, b + 0.9 * rng.random())

            if (center - exclusion_point).length() <= exclusion_radius:
                skipped += 1
                continue

            material = random_small_material(choose_mat, rng, settings)
            spheres.append(Sphere(center, small_radius, material))
            placed += 1

    spheres.extend(feature_spheres())

    world = HittableList()
    if settings['populate_world']:
        for sphere in spheres:
            world.add(sphere)

    counts = {kind: 0 for kind in MaterialKind}
    for sphere in spheres:
        counts[sphere.material.kind] += 1
    summary = ", ".join(f"{kind.value}={n}" for kind, n in counts.items())
    print(f"Generated {len(spheres)} spheres ({placed} small, {skipped} skipped near exclusion point): {summary}")
    if not settings['populate_world']:
        print("World left empty; renders will show only the background")

    return world, spheres

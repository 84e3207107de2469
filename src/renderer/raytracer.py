# renderer/raytracer.py
import math
import random
import sys
import numpy as np
from core.ray import Ray
from core.vector import Color
from camera.camera import Camera
from geometry.hittable import Hittable

INFINITY = math.inf
T_MIN = 0.001  # keeps secondary rays from re-hitting the surface they left
MAX_BOUNCES = 50

WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)
BLACK = Color(0.0, 0.0, 0.0)

def background_color(ray: Ray) -> Color:
    """Vertical white to sky-blue gradient seen by rays that escape the scene."""
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t

def ray_color(ray: Ray, world: Hittable, depth: int, rng=random) -> Color:
    """
    Color carried back along ray. Each bounce multiplies the running
    attenuation; the loop ends on a miss (background), an absorption (black)
    or when the bounce budget runs out (black).
    """
    attenuation = WHITE
    while depth > 0:
        rec = world.hit(ray, T_MIN, INFINITY)
        if rec is None:
            return attenuation * background_color(ray)

        scattered = rec.material.scatter(ray, rec, rng)
        if scattered is None:
            return BLACK

        ray, bounce_attenuation = scattered
        attenuation = attenuation * bounce_attenuation
        depth -= 1

    # Exceeded the bounce limit, no more light is gathered.
    return BLACK

class Renderer:
    """
    CPU sampling loop. Fills a float32 (height, width, 3) buffer with the summed
    sample colors of every pixel, top row first.
    """
    def __init__(self, width: int, height: int, samples_per_pixel: int = 10,
                 max_depth: int = MAX_BOUNCES, rng=random, verbose: bool = True):
        if width < 2 or height < 2:
            raise ValueError(f"Image must be at least 2x2 pixels, got {width}x{height}")
        if samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be positive, got {samples_per_pixel}")
        self.width = width
        self.height = height
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.rng = rng
        self.verbose = verbose
        self.accumulation_buffer = np.zeros((height, width, 3), dtype=np.float32)

    def reset_accumulation(self):
        self.accumulation_buffer.fill(0.0)

    def render_pixel(self, camera: Camera, world: Hittable, i: int, j: int) -> Color:
        """Sum of samples_per_pixel colors for column i, row j (row 0 at the bottom)."""
        pixel_color = Color(0.0, 0.0, 0.0)
        for _ in range(self.samples_per_pixel):
            u = (i + self.rng.random()) / (self.width - 1)
            v = (j + self.rng.random()) / (self.height - 1)
            ray = camera.get_ray(u, v, self.rng)
            pixel_color = pixel_color + ray_color(ray, world, self.max_depth, self.rng)
        return pixel_color

    def render(self, camera: Camera, world: Hittable) -> np.ndarray:
        self.reset_accumulation()
        for j in range(self.height - 1, -1, -1):
            if self.verbose:
                print(f"\rScanlines remaining: {j} ", end="", file=sys.stderr, flush=True)
            row = self.height - 1 - j
            for i in range(self.width):
                pixel_color = self.render_pixel(camera, world, i, j)
                self.accumulation_buffer[row, i] = (pixel_color.x, pixel_color.y, pixel_color.z)
        if self.verbose:
            print("\nDone.", file=sys.stderr)
        return self.accumulation_buffer

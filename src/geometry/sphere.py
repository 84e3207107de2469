# geometry/sphere.py
import math
from typing import Optional
from core.vector import Point3
from core.ray import Ray
from geometry.hittable import Hittable, HitRecord

class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    The material may be shared with any number of other spheres.
    """
    def __init__(self, center: Point3, radius: float, material):
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if self.radius <= 0:
            return None

        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        if a == 0:
            return None
        half_b = oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        if discriminant < 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = (-half_b - sqrt_disc) / a
        if root < t_min or root > t_max:
            root = (-half_b + sqrt_disc) / a
            if root < t_min or root > t_max:
                return None

        outward_normal = (ray.at(root) - self.center) / self.radius
        return HitRecord.facing(ray, root, outward_normal, self.material)

    def __repr__(self) -> str:
        return f"Sphere({self.center}, {self.radius}, {self.material!r})"

# materials/material.py
import random
from enum import Enum
from typing import Optional, Tuple
from core.ray import Ray
from core.vector import Color
from geometry.hittable import HitRecord

class MaterialKind(Enum):
    """Closed set of material variants understood by the shader and the exporter."""
    LAMBERTIAN = "lambertian"
    METAL = "metal"
    DIELECTRIC = "dielectric"

class Material:
    """
    Abstract material class. Subclasses must implement scatter() and set kind.
    Materials are immutable once created and may be shared between spheres.
    """
    kind: Optional[MaterialKind] = None

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=random) -> Optional[Tuple[Ray, Color]]:
        """
        Computes the scattered ray and attenuation.
        Returns a tuple (scattered_ray, attenuation) or None if the ray is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

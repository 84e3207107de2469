# geometry/hittable.py
from typing import Optional
from core.vector import Vector3, Point3
from core.ray import Ray

class HitRecord:
    """
    Result of one ray-object intersection query. The normal is unit length
    and always faces against the incoming ray; front_face tells which side
    of the surface was hit.
    """
    def __init__(self, p: Point3, normal: Vector3, t: float, front_face: bool, material):
        self.p = p
        self.normal = normal
        self.t = t
        self.front_face = front_face
        self.material = material

    @classmethod
    def facing(cls, ray: Ray, t: float, outward_normal: Vector3, material) -> "HitRecord":
        """Build the record at ray.at(t), flipping outward_normal when the ray hits from inside."""
        front_face = ray.direction.dot(outward_normal) < 0
        normal = outward_normal if front_face else -outward_normal
        return cls(ray.at(t), normal, t, front_face, material)

    def __repr__(self) -> str:
        side = "front" if self.front_face else "back"
        return f"HitRecord(t={self.t}, p={self.p}, normal={self.normal}, {side})"

class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

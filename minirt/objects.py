"""Scene primitives and ray intersection."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple, Union

from .materials import Material
from .textures import Checkered, Texture
from .vector import Interval, Ray, Vec3, clamp

_PARALLEL_EPS = 1e-6
_PLANE_U_DEFAULT = Vec3(1.0, 0.0, 0.0)
_PLANE_U_FALLBACK = Vec3(0.8, 0.6, 0.0)


@dataclass
class Hit:
    """Where and how a ray met a surface."""

    t: float
    point: Vec3
    material: Material
    hit_color: Vec3
    normal: Vec3 = field(default_factory=Vec3)
    front_face: bool = False

    def set_face_normal(self, ray: Ray, outward_normal: Vec3) -> None:
        """Orient the stored normal against the incoming ray."""
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal


@dataclass
class Plane:
    """An infinite plane through ``coord`` with normal ``vector``."""

    coord: Vec3
    vector: Vec3
    material: Material
    texture: Optional[Texture] = None

    def hit(self, ray: Ray, interval: Interval) -> Optional[Hit]:
        denom = self.vector.dot(ray.direction)
        if abs(denom) < _PARALLEL_EPS:
            return None
        t = (self.coord - ray.origin).dot(self.vector) / denom
        if not interval.contains(t):
            return None
        point = ray.at(t)
        front_face = denom < 0
        return Hit(
            t=t,
            point=point,
            material=self.material,
            hit_color=self._color_at(point),
            normal=self.vector if front_face else -self.vector,
            front_face=front_face,
        )

    def _color_at(self, point: Vec3) -> Vec3:
        if not isinstance(self.texture, Checkered):
            return self.material.albedo
        v = self.vector
        if ((v.x == 0 and abs(v.y) == 1 and v.z == 0)
                or (abs(v.x) == 1 and v.y == 0 and v.z == 0)):
            reference = _PLANE_U_FALLBACK
        else:
            reference = _PLANE_U_DEFAULT
        vec_u = v.cross(reference).unit()
        vec_v = v.cross(vec_u).unit()
        to_hit = point - self.coord
        return self.texture.color_at(to_hit.dot(vec_u), to_hit.dot(vec_v))


@dataclass
class Disk:
    """A round piece of a plane, centred on the plane's point."""

    plane: Plane
    radius: float

    def hit(self, ray: Ray, interval: Interval) -> Optional[Hit]:
        hit = self.plane.hit(ray, interval)
        if hit is None:
            return None
        if not self.plane.coord.dist_squared(hit.point) <= self.radius * self.radius:
            return None
        return hit


@dataclass
class Sphere:
    center: Vec3
    radius: float
    material: Material
    texture: Optional[Texture] = None

    def hit(self, ray: Ray, interval: Interval) -> Optional[Hit]:
        root = self._root(ray, interval)
        if root is None:
            return None
        point = ray.at(root)
        hit = Hit(t=root, point=point, material=self.material,
                  hit_color=self._color_at(point))
        hit.set_face_normal(ray, (point - self.center) / self.radius)
        return hit

    def _root(self, ray: Ray, interval: Interval) -> Optional[float]:
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        if a == 0:
            return None
        minus_half_b = -oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = minus_half_b * minus_half_b - a * c
        if discriminant < 0:
            return None
        sq = math.sqrt(discriminant)
        for root in ((minus_half_b - sq) / a, (minus_half_b + sq) / a):
            if interval.contains(root):
                return root
        return None

    def _color_at(self, point: Vec3) -> Vec3:
        if self.texture is None:
            return self.material.albedo
        rel = point - self.center
        u = math.atan2(rel.x, rel.z) / (2 * math.pi) + 0.5
        v = math.acos(clamp(rel.y / self.radius, -1.0, 1.0)) / math.pi
        return self.texture.color_at(u, v)


@dataclass
class Tube:
    """The open side of a cylinder; ``radius`` and ``half_height`` are final sizes."""

    center: Vec3
    axis: Vec3
    radius: float
    half_height: float
    material: Material
    texture: Optional[Texture] = None

    def hit(self, ray: Ray, interval: Interval) -> Optional[Hit]:
        new_dir = ray.direction.cross(self.axis)
        oc_axis = (ray.origin - self.center).cross(self.axis)
        a = new_dir.length_squared()
        if a == 0:
            return None
        half_b = new_dir.dot(oc_axis)
        discriminant = half_b * half_b - a * (
            oc_axis.length_squared() - self.radius * self.radius)
        if discriminant < 0:
            return None
        sq = math.sqrt(discriminant)
        limit = self.half_height ** 2 + self.radius ** 2
        for t in ((-half_b - sq) / a, (-half_b + sq) / a):
            point = ray.at(t)
            if interval.contains(t) and point.dist_squared(self.center) < limit:
                break
        else:
            return None
        center_to_hit = point - self.center
        outward = (center_to_hit
                   - self.axis * self.axis.dot(center_to_hit)).unit()
        hit = Hit(t=t, point=point, material=self.material,
                  hit_color=self._color_at(point))
        hit.set_face_normal(ray, outward)
        return hit

    def caps(self) -> Tuple[Disk, Disk]:
        """Return the two disks closing the tube: (top, bottom)."""
        scaled = self.axis * self.half_height
        top = Disk(Plane(self.center - scaled, -self.axis, self.material,
                         self.texture), self.radius)
        bottom = Disk(Plane(self.center + scaled, self.axis, self.material,
                            self.texture), self.radius)
        return top, bottom

    def _align(self, point: Vec3) -> Vec3:
        """Rotate ``point`` so that the tube axis maps onto the y axis."""
        dx, dy, dz = self.axis
        d = math.sqrt(dx * dx + dy * dy + dz * dz)
        horizontal = dx * dx + dz * dz
        if dy in (1, -1) or horizontal == 0:
            return point
        cross_term = dx * dz * (dy / d - 1) / horizontal
        return Vec3(
            ((dx * dx * dy / d) + dz * dz) / horizontal * point.x
            - (dx / d) * point.y
            + cross_term * point.z,
            (dx / d) * point.x + (dy / d) * point.y + (dz / d) * point.z,
            cross_term * point.x
            - (dz / d) * point.y
            + ((dz * dz * dy / d) + dx * dx) / horizontal * point.z,
        )

    def _color_at(self, point: Vec3) -> Vec3:
        if not isinstance(self.texture, Checkered):
            return self.material.albedo
        rel = self._align(point) - self._align(self.center)
        u = math.atan2(rel.z, rel.x) / (2 * math.pi) + 0.5
        v = rel.y / (2 * self.half_height)
        return self.texture.color_at(u, v)


Shape = Union[Plane, Disk, Sphere, Tube]


def hit_world(objects: Iterable[Shape], ray: Ray,
              interval: Interval) -> Optional[Hit]:
    """Return the nearest hit among ``objects`` within ``interval``."""
    closest = None
    for obj in objects:
        hit = obj.hit(ray, interval)
        if hit is not None:
            closest = hit
            interval = Interval(interval.low, hit.t)
    return closest
"""Materials and how they scatter rays."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Union

from .rng import XorShift32
from .vector import Ray, Vec3

if TYPE_CHECKING:
    from .objects import Hit


def reflect(v: Vec3, n: Vec3) -> Vec3:
    """Mirror ``v`` about the surface with normal ``n``."""
    return v - n * (2 * v.dot(n))


def reflectance(cosine: float, ref_idx: float) -> float:
    """Schlick's approximation of the reflection coefficient."""
    r0 = (1 - ref_idx) / (1 + ref_idx)
    r0 *= r0
    return r0 + (1 - r0) * (1 - cosine) ** 5


def refract(v: Vec3, n: Vec3, ir: float) -> Vec3:
    """Bend the unit vector ``v`` through a surface with refraction ratio ``ir``."""
    cos_theta = min(-v.dot(n), 1.0)
    perpendicular = (v + n * cos_theta) * ir
    parallel = n * -math.sqrt(abs(1 - perpendicular.length_squared()))
    return perpendicular + parallel


@dataclass
class Lambertian:
    """A diffuse surface shaded with ambient, diffuse and specular terms."""

    ka: float
    kd: float
    ks: float
    specular_exponent: float
    albedo: Vec3 = field(default_factory=Vec3)

    def scatter(self, ray: Ray, hit: Hit, rng: XorShift32) -> Optional[Ray]:
        direction = hit.normal + rng.unit_vector()
        if direction.near_zero():
            direction = hit.normal
        return Ray(hit.point, direction)


@dataclass
class Metal:
    """A reflective surface, blurred by ``fuzz``."""

    fuzz: float
    albedo: Vec3 = field(default_factory=Vec3)

    def scatter(self, ray: Ray, hit: Hit, rng: XorShift32) -> Optional[Ray]:
        reflected = reflect(ray.direction.unit(), hit.normal)
        fuzzed = reflected + rng.in_unit_sphere() * self.fuzz
        if reflected.dot(hit.normal) > 0:
            return Ray(hit.point, fuzzed)
        return None


@dataclass
class Dielectric:
    """A transparent surface with index of refraction ``ir``."""

    ir: float
    albedo: Vec3 = field(default_factory=Vec3)

    def scatter(self, ray: Ray, hit: Hit, rng: XorShift32) -> Optional[Ray]:
        ratio = 1.0 / self.ir if hit.front_face else self.ir
        unit_direction = ray.direction.unit()
        cos_theta = min(-unit_direction.dot(hit.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1 - cos_theta * cos_theta))
        if (ratio * sin_theta > 1
                or reflectance(cos_theta, ratio) > rng.random_float()):
            direction = reflect(unit_direction, hit.normal)
        else:
            direction = refract(unit_direction, hit.normal, ratio)
        return Ray(hit.point, direction)


Material = Union[Lambertian, Metal, Dielectric]
"""Parsing of the individual fields of a scene line."""

from __future__ import annotations

import math
import re
from typing import List

from .materials import Dielectric, Lambertian, Material, Metal
from .vector import Vec3, is_close

_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")
_COMPONENT_RE = re.compile(r"[0-9]+")
_FLOAT32_MAX = 3.4028234663852886e38


class FieldError(ValueError):
    """Raised when a field of a scene line is malformed or out of range."""


def parse_float(s: str) -> float:
    """Parse a plain decimal number: optional sign, digits, optional fraction."""
    if not _FLOAT_RE.fullmatch(s):
        raise FieldError(f"invalid number: {s!r}")
    value = float(s)
    if not math.isfinite(value) or abs(value) > _FLOAT32_MAX:
        raise FieldError(f"number out of range: {s!r}")
    return value


def parse_float_range(s: str, low: float, high: float) -> float:
    """Parse a number and require it to lie in [low, high]."""
    value = parse_float(s)
    if not low <= value <= high:
        raise FieldError(f"{value} is not within [{low}, {high}]")
    return value


def split_commas(s: str, count: int) -> List[str]:
    """Cut ``s`` at its first ``count - 1`` commas; the last piece keeps the rest."""
    parts = s.split(",", count - 1)
    if len(parts) != count:
        raise FieldError(f"expected {count} comma-separated values: {s!r}")
    return parts


def _parse_component(s: str) -> float:
    if not _COMPONENT_RE.fullmatch(s) or int(s) > 255:
        raise FieldError(f"invalid colour component: {s!r}")
    return int(s) / 255.0


def parse_color(s: str) -> Vec3:
    """Parse ``R,G,B`` with components 0-255 into a colour in [0, 1]."""
    return Vec3(*(_parse_component(part) for part in split_commas(s, 3)))


def parse_coord(s: str) -> Vec3:
    """Parse ``x,y,z``."""
    return Vec3(*(parse_float(part) for part in split_commas(s, 3)))


def parse_normalized_vector(s: str) -> Vec3:
    """Parse ``x,y,z`` and require it to have length one."""
    vector = parse_coord(s)
    if not is_close(vector.length_squared(), 1):
        raise FieldError(f"vector is not normalized: {s!r}")
    return vector


def parse_material(name: str, attributes: str, albedo: Vec3) -> Material:
    """Build the material ``name`` from its comma-separated ``attributes``."""
    if name == "lambertian":
        ka, kd, ks, exponent = split_commas(attributes, 4)
        return Lambertian(
            ka=parse_float_range(ka, 0, 1),
            kd=parse_float_range(kd, 0, 1),
            ks=parse_float_range(ks, 0, 1),
            specular_exponent=parse_float_range(exponent, 0, math.inf),
            albedo=albedo,
        )
    if name == "metal":
        return Metal(fuzz=parse_float_range(attributes, 0, math.inf),
                     albedo=albedo)
    if name == "dielectric":
        ir = parse_float_range(attributes, 0, math.inf)
        if ir <= 0:
            raise FieldError("index of refraction must be positive")
        return Dielectric(ir=ir, albedo=albedo)
    raise FieldError(f"unknown material: {name!r}")
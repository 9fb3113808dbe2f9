"""Three-component vectors, rays, intervals and small numeric helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Union

_NEAR_ZERO_EPS = 1e-8
_CLOSE_EPS = 1e-5


def _div(a: float, b: float) -> float:
    """Divide with IEEE semantics: a zero divisor yields inf or nan."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


class Vec3:
    """An immutable-by-convention 3D vector, also used for RGB colours."""

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.x = x
        self.y = y
        self.z = z

    def __repr__(self) -> str:
        return f"Vec3({self.x!r}, {self.y!r}, {self.z!r})"

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    __rmul__ = __mul__

    def __truediv__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(_div(self.x, other.x), _div(self.y, other.y),
                        _div(self.z, other.z))
        return Vec3(_div(self.x, other), _div(self.y, other),
                    _div(self.z, other))

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def unit(self) -> Vec3:
        """Return the vector scaled to length one (nan components if zero)."""
        return self / self.length()

    def near_zero(self) -> bool:
        return (abs(self.x) < _NEAR_ZERO_EPS and abs(self.y) < _NEAR_ZERO_EPS
                and abs(self.z) < _NEAR_ZERO_EPS)

    def dist_squared(self, other: Vec3) -> float:
        return (self - other).length_squared()


@dataclass
class Ray:
    """A half-line from an origin along a direction."""

    origin: Vec3
    direction: Vec3
    distance: float = 0.0

    def at(self, t: float) -> Vec3:
        return self.origin + self.direction * t


@dataclass(frozen=True)
class Interval:
    """A closed interval of ray parameters."""

    low: float
    high: float

    def contains(self, x: float) -> bool:
        return self.low <= x <= self.high

    def expand(self, delta: float) -> Interval:
        padding = delta / 2
        return Interval(self.low - padding, self.high + padding)


@dataclass(frozen=True)
class Aabb:
    """An axis-aligned bounding box."""

    x: Interval
    y: Interval
    z: Interval


def new_aabb(a: Vec3, b: Vec3) -> Aabb:
    """Build the box whose opposite corners are ``a`` and ``b``."""
    return Aabb(
        Interval(min(a.x, b.x), max(a.x, b.x)),
        Interval(min(a.y, b.y), max(a.y, b.y)),
        Interval(min(a.z, b.z), max(a.z, b.z)),
    )


def clamp(x, low, high):
    """Limit ``x`` to the range [low, high]."""
    if x < low:
        return low
    if x > high:
        return high
    return x


def is_close(x: float, y: float) -> bool:
    return abs(x - y) < _CLOSE_EPS


def sign(x: float) -> int:
    return (x > 0) - (x < 0)
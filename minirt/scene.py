"""Scene elements: ambient light, point lights, the camera and the scene itself."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .objects import Shape
from .rng import XorShift32
from .textures import Texture
from .vector import Ray, Vec3

WINDOW_WIDTH = 640
WINDOW_HEIGHT = 360
_UP = Vec3(0.0, 1.0, 0.0)


@dataclass
class Ambient:
    """Ambient lighting; ``ratio`` is read from the scene but not applied."""

    ratio: float
    color: Vec3


@dataclass
class Light:
    """A point light whose colour is already scaled by its brightness."""

    coord: Vec3
    color: Vec3


@dataclass
class Camera:
    """A pinhole (or thin-lens) camera looking along ``orientation``."""

    origin: Vec3
    orientation: Vec3
    fov: float
    aspect_ratio: float = WINDOW_WIDTH / WINDOW_HEIGHT
    lens_radius: float = 0.0
    focus_dist: float = 1.0
    viewport_width: float = field(init=False)
    viewport_height: float = field(init=False)
    u: Vec3 = field(init=False)
    v: Vec3 = field(init=False)
    horizontal: Vec3 = field(init=False)
    vertical: Vec3 = field(init=False)
    lower_left: Vec3 = field(init=False)

    def __post_init__(self) -> None:
        self.viewport_width = 2 * math.tan(self.fov * math.pi / 360)
        self.viewport_height = self.viewport_width / self.aspect_ratio
        self.u = self.orientation.cross(_UP).unit()
        self.v = self.u.cross(self.orientation)
        self.horizontal = self.u * (self.focus_dist * self.viewport_width)
        self.vertical = self.v * (self.focus_dist * self.viewport_height)
        self.lower_left = (self.origin
                           - (self.horizontal + self.vertical) * 0.5
                           + self.orientation * self.focus_dist)

    def get_ray(self, s: float, t: float, rng: XorShift32) -> Ray:
        """Return the ray through viewport coordinates (s, t), both in [0, 1]."""
        rd = rng.in_unit_disk() * self.lens_radius
        offset = self.u * rd.x + self.v * rd.y
        moved = self.origin + offset
        direction = (self.lower_left - moved
                     + self.horizontal * s + self.vertical * t)
        return Ray(moved, direction, 0.0)


@dataclass
class Scene:
    """Everything needed to render a picture."""

    camera: Camera
    ambient: Optional[Ambient] = None
    lights: List[Light] = field(default_factory=list)
    objects: List[Shape] = field(default_factory=list)
    textures: Dict[str, Texture] = field(default_factory=dict)

    @property
    def ambient_color(self) -> Vec3:
        """The ambient colour, black when the scene defines none."""
        return self.ambient.color if self.ambient is not None else Vec3()
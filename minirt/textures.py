"""Surface textures: checkerboards and RGB images."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from PIL import Image

from .errors import SceneError
from .vector import Vec3, clamp

IMAGE_NOT_FOUND = "file not found"


@dataclass(frozen=True)
class Checkered:
    """Two colours alternating on a grid in texture space."""

    color1: Vec3
    color2: Vec3
    squares_height: float
    squares_width: float

    def color_at(self, u: float, v: float) -> Vec3:
        """Return the colour of the square holding texture point (u, v)."""
        try:
            cell = (math.floor(u * self.squares_width)
                    + math.floor(v * self.squares_height))
        except (ValueError, OverflowError):
            return self.color2
        return self.color1 if cell % 2 == 0 else self.color2


def _pixel_index(coord: float, size: int) -> int:
    try:
        index = math.floor(coord * size)
    except (ValueError, OverflowError):
        return 0
    return clamp(index, 0, size - 1)


@dataclass(frozen=True)
class ImageTexture:
    """An RGB image stored row by row, three bytes per pixel."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("image dimensions must be positive")
        if len(self.pixels) != self.width * self.height * 3:
            raise ValueError("pixel data does not match image dimensions")

    def color_at(self, u: float, v: float) -> Vec3:
        """Return the colour at normalised coordinates u (columns), v (rows)."""
        x = _pixel_index(u, self.width)
        y = _pixel_index(v, self.height)
        offset = (y * self.width + x) * 3
        r, g, b = self.pixels[offset:offset + 3]
        return Vec3(r / 255.0, g / 255.0, b / 255.0)


Texture = Union[Checkered, ImageTexture]


def load_image_texture(path: Union[str, Path]) -> ImageTexture:
    """Read an image file (XPM, PNG, ...) into an :class:`ImageTexture`."""
    try:
        with Image.open(path) as img:
            rgb = img.convert("RGB")
    except OSError as exc:
        raise SceneError(IMAGE_NOT_FOUND) from exc
    return ImageTexture(rgb.width, rgb.height, rgb.tobytes())
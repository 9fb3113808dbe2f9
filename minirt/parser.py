"""Reading scene files into :class:`~minirt.scene.Scene` objects."""

from __future__ import annotations

import re
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Union

from . import errors
from .errors import SceneError
from .fields import (
    FieldError,
    parse_color,
    parse_coord,
    parse_float,
    parse_float_range,
    parse_material,
    parse_normalized_vector,
)
from .objects import Plane, Shape, Sphere, Tube
from .scene import Ambient, Camera, Light, Scene
from .textures import Checkered, Texture, load_image_texture

SCENE_SUFFIX = ".rtb"
_SPACES = re.compile(r"[ \f\n\r\t\v]+")
_IDENTIFIERS = frozenset({"A", "C", "L", "T", "sp", "pl", "cy"})


def read_words(path: Union[str, Path]) -> List[List[str]]:
    """Return the words of each non-empty, non-comment line of a file."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SceneError(errors.READ_ERROR) from exc
    except OSError as exc:
        raise SceneError(errors.OPEN_ERROR) from exc
    return [
        [word for word in _SPACES.split(line) if word]
        for line in content.split("\n")
        if line and not line.startswith("#")
    ]


@contextmanager
def _reporting(message: str) -> Iterator[None]:
    try:
        yield
    except FieldError as exc:
        raise SceneError(message) from exc


def _expect(condition: bool) -> None:
    if not condition:
        raise FieldError("wrong number of fields")


class _SceneBuilder:
    def __init__(self) -> None:
        self.ambient: Optional[Ambient] = None
        self.camera: Optional[Camera] = None
        self.lights: List[Light] = []
        self.objects: List[Shape] = []
        self.textures: Dict[str, Texture] = {}
        self._handlers = {
            "A": self._ambient, "C": self._camera, "L": self._light,
            "T": self._texture, "sp": self._sphere, "pl": self._plane,
            "cy": self._cylinder,
        }

    def add(self, line: Sequence[str]) -> None:
        self._handlers[line[0]](line)

    def _ambient(self, line: Sequence[str]) -> None:
        if self.ambient is not None:
            raise SceneError(errors.DOUBLE_AMBIENT)
        with _reporting(errors.ERROR_AMBIENT):
            _expect(len(line) == 3)
            ratio = parse_float_range(line[1], 0, 1)
            color = parse_color(line[2])
        self.ambient = Ambient(ratio, color)

    def _camera(self, line: Sequence[str]) -> None:
        if self.camera is not None:
            raise SceneError(errors.DOUBLE_CAMERA)
        with _reporting(errors.ERROR_CAMERA):
            _expect(len(line) == 4)
            origin = parse_coord(line[1])
            orientation = parse_normalized_vector(line[2])
            fov = parse_float_range(line[3], 0, 180)
        if fov in (0, 180):
            raise SceneError(errors.FOV_ERROR)
        self.camera = Camera(origin, orientation, fov)

    def _light(self, line: Sequence[str]) -> None:
        with _reporting(errors.ERROR_LIGHT):
            _expect(len(line) == 4)
            coord = parse_coord(line[1])
            brightness = parse_float_range(line[2], 0, 1)
            color = parse_color(line[3])
        self.lights.append(Light(coord, color * brightness))

    def _texture(self, line: Sequence[str]) -> None:
        if len(line) < 4:
            raise SceneError(errors.ERROR_TEXTURE)
        kind = line[1]
        if kind == "checkered":
            with _reporting(errors.ERROR_TEXTURE):
                _expect(len(line) == 7)
                texture: Texture = Checkered(
                    color1=parse_color(line[3]),
                    color2=parse_color(line[4]),
                    squares_height=parse_float(line[5]),
                    squares_width=parse_float(line[6]),
                )
        elif kind == "image":
            if len(line) != 4:
                raise SceneError(errors.ERROR_TEXTURE)
            texture = load_image_texture(line[3])
        else:
            raise SceneError(errors.ERROR_TEXTURE)
        self.textures.setdefault(line[2], texture)

    def _texture_ref(self, line: Sequence[str], index: int) -> Optional[Texture]:
        if len(line) <= index:
            return None
        try:
            return self.textures[line[index]]
        except KeyError:
            raise SceneError(errors.ERROR_TEXTURE) from None

    def _sphere(self, line: Sequence[str]) -> None:
        with _reporting(errors.ERROR_SPHERE):
            _expect(6 <= len(line) <= 7)
            center = parse_coord(line[1])
            diameter = parse_float(line[2])
            _expect(diameter > 0)
            material = parse_material(line[4], line[5], parse_color(line[3]))
        texture = self._texture_ref(line, 6)
        self.objects.append(Sphere(center, diameter * 0.5, material, texture))

    def _plane(self, line: Sequence[str]) -> None:
        with _reporting(errors.ERROR_PLANE):
            _expect(6 <= len(line) <= 7)
            coord = parse_coord(line[1])
            vector = parse_normalized_vector(line[2])
            material = parse_material(line[4], line[5], parse_color(line[3]))
        texture = self._texture_ref(line, 6)
        self.objects.append(Plane(coord, vector, material, texture))

    def _cylinder(self, line: Sequence[str]) -> None:
        with _reporting(errors.ERROR_CYLINDER):
            _expect(8 <= len(line) <= 9)
            center = parse_coord(line[1])
            axis = parse_normalized_vector(line[2])
            diameter = parse_float(line[3])
            _expect(diameter > 0)
            height = parse_float(line[4])
            _expect(height > 0)
            material = parse_material(line[6], line[7], parse_color(line[5]))
        texture = self._texture_ref(line, 8)
        tube = Tube(center, axis, diameter * 0.5, height * 0.5, material,
                    texture)
        self.objects.extend((tube, *tube.caps()))

    def build(self) -> Scene:
        if self.camera is None:
            raise SceneError(errors.NO_CAMERA)
        if self.ambient is None and not self.lights:
            raise SceneError(errors.NO_LIGHT)
        return Scene(camera=self.camera, ambient=self.ambient,
                     lights=self.lights, objects=self.objects,
                     textures=self.textures)


def parse_lines(words: Iterable[Sequence[str]]) -> Scene:
    """Build a scene from the words of each line."""
    lines = [list(line) for line in words]
    for line in lines:
        if not line:
            raise SceneError(errors.SPACY_LINE)
        if line[0] not in _IDENTIFIERS:
            raise SceneError(errors.INVALID_IDENTIFIER)
    builder = _SceneBuilder()
    for line in lines:
        builder.add(line)
    return builder.build()


def load_scene(path: Union[str, Path]) -> Scene:
    """Read and parse a ``.rtb`` scene file."""
    if not str(path).endswith(SCENE_SUFFIX):
        raise SceneError(errors.USAGE_BONUS)
    return parse_lines(read_words(path))
import math

import pytest
from PIL import Image

from minirt.errors import SceneError
from minirt.textures import Checkered, ImageTexture, load_image_texture
from minirt.vector import Vec3

RED = Vec3(1.0, 0.0, 0.0)
BLUE = Vec3(0.0, 0.0, 1.0)


def test_checkered_origin_square_is_first_colour():
    tex = Checkered(RED, BLUE, 1.0, 1.0)
    assert tex.color_at(0.1, 0.1) == RED


def test_checkered_alternates_along_each_axis():
    tex = Checkered(RED, BLUE, 2.0, 2.0)
    base = tex.color_at(0.1, 0.1)
    assert tex.color_at(0.6, 0.1) != base
    assert tex.color_at(0.1, 0.6) != base
    assert tex.color_at(0.6, 0.6) == base


def test_checkered_negative_coordinates_alternate():
    tex = Checkered(RED, BLUE, 1.0, 1.0)
    assert tex.color_at(-0.5, 0.5) == BLUE
    assert tex.color_at(-1.5, 0.5) == RED


def test_image_texture_rejects_wrong_size():
    with pytest.raises(ValueError):
        ImageTexture(2, 2, bytes(5))


def test_image_texture_rejects_empty_dimensions():
    with pytest.raises(ValueError):
        ImageTexture(0, 1, b"")


def test_image_texture_reads_pixels():
    tex = ImageTexture(2, 1, bytes([255, 0, 0, 0, 0, 255]))
    assert tex.color_at(0.25, 0.5) == RED
    assert tex.color_at(0.75, 0.5) == BLUE


def test_image_texture_edges_are_clamped():
    tex = ImageTexture(2, 1, bytes([255, 0, 0, 0, 0, 255]))
    assert tex.color_at(1.0, 1.0) == BLUE
    assert tex.color_at(-0.5, 0.0) == RED


def test_image_texture_scales_components():
    tex = ImageTexture(1, 1, bytes([51, 102, 255]))
    color = tex.color_at(0.5, 0.5)
    assert math.isclose(color.x, 51 / 255.0)
    assert math.isclose(color.y, 102 / 255.0)
    assert color.z == 1.0


def test_load_image_texture_round_trip(tmp_path):
    path = tmp_path / "tex.png"
    img = Image.new("RGB", (2, 1))
    img.putpixel((0, 0), (255, 0, 0))
    img.putpixel((1, 0), (0, 0, 255))
    img.save(path)
    tex = load_image_texture(path)
    assert (tex.width, tex.height) == (2, 1)
    assert tex.color_at(0.25, 0.0) == RED
    assert tex.color_at(0.75, 0.0) == BLUE


def test_load_image_texture_missing_file(tmp_path):
    with pytest.raises(SceneError) as info:
        load_image_texture(tmp_path / "missing.xpm")
    assert info.value.message == "file not found"
import pytest

from minirt import errors
from minirt.errors import SceneError
from minirt.objects import Disk, Plane, Sphere, Tube
from minirt.parser import load_scene, parse_lines, read_words
from minirt.textures import Checkered, IMAGE_NOT_FOUND
from minirt.vector import Vec3

CAMERA = ["C", "0,0,0", "0,0,-1", "70"]
AMBIENT = ["A", "0.2", "255,255,255"]
LIGHT = ["L", "0,5,0", "0.5", "255,255,255"]
SPHERE = ["sp", "0,0,-5", "2", "255,0,0", "lambertian", "0.1,0.8,0.5,10"]
PLANE = ["pl", "0,-1,0", "0,1,0", "0,255,0", "metal", "0.2"]
CYLINDER = ["cy", "2,0,-5", "0,1,0", "1", "4", "0,0,255", "dielectric", "1.5"]


def _error(words):
    with pytest.raises(SceneError) as info:
        parse_lines(words)
    return info.value.message


def test_read_words_drops_comments_and_blank_lines(tmp_path):
    path = tmp_path / "scene.rtb"
    path.write_text("A 0.2\t255,255,255\n# comment\n\nC  0,0,0 0,0,-1 70\n")
    assert read_words(path) == [
        ["A", "0.2", "255,255,255"],
        ["C", "0,0,0", "0,0,-1", "70"],
    ]


def test_read_words_keeps_space_only_lines_as_empty(tmp_path):
    path = tmp_path / "scene.rtb"
    path.write_text("   \nC 0,0,0 0,0,-1 70\n")
    assert read_words(path)[0] == []


def test_read_words_missing_file(tmp_path):
    with pytest.raises(SceneError) as info:
        read_words(tmp_path / "missing.rtb")
    assert info.value.message == errors.OPEN_ERROR


def test_full_scene():
    scene = parse_lines([AMBIENT, CAMERA, LIGHT, SPHERE, PLANE, CYLINDER])
    kinds = [type(obj) for obj in scene.objects]
    assert kinds == [Sphere, Plane, Tube, Disk, Disk]
    sphere, _, tube = scene.objects[:3]
    assert sphere.radius == 1.0
    assert sphere.material.albedo == Vec3(1.0, 0.0, 0.0)
    assert tube.radius == 0.5 and tube.half_height == 2.0
    assert scene.lights[0].color == Vec3(0.5, 0.5, 0.5)
    assert scene.ambient.color == Vec3(1.0, 1.0, 1.0)
    assert scene.camera.fov == 70.0


def test_light_alone_is_enough():
    scene = parse_lines([CAMERA, LIGHT])
    assert scene.ambient is None
    assert len(scene.lights) == 1


def test_duplicates():
    assert _error([AMBIENT, AMBIENT, CAMERA]) == errors.DOUBLE_AMBIENT
    assert _error([AMBIENT, CAMERA, CAMERA]) == errors.DOUBLE_CAMERA


def test_missing_camera_and_light():
    assert _error([AMBIENT, SPHERE]) == errors.NO_CAMERA
    assert _error([CAMERA, SPHERE]) == errors.NO_LIGHT


def test_identifier_checks_come_first():
    assert _error([CAMERA, []]) == errors.SPACY_LINE
    bad_sphere = ["sp", "0,0,0", "0", "255,0,0", "metal", "0"]
    assert _error([bad_sphere, ["X"]]) == errors.INVALID_IDENTIFIER


@pytest.mark.parametrize("fov", ["0", "180"])
def test_fov_limits(fov):
    assert _error([AMBIENT, ["C", "0,0,0", "0,0,-1", fov]]) == errors.FOV_ERROR


def test_element_errors():
    assert _error([["A", "2", "255,255,255"]]) == errors.ERROR_AMBIENT
    assert _error([["C", "0,0,0", "0,0,-2", "70"]]) == errors.ERROR_CAMERA
    assert _error([["L", "0,0,0", "0.5"]]) == errors.ERROR_LIGHT
    assert _error([["sp", "0,0,0", "0", "255,0,0", "metal", "0"]]) == errors.ERROR_SPHERE
    assert _error([["pl", "0,0,0", "0,1,0", "0,0,0", "wood", "1"]]) == errors.ERROR_PLANE
    assert _error([CYLINDER[:5]]) == errors.ERROR_CYLINDER


def test_checkered_texture_applies_to_objects():
    texture = ["T", "checkered", "board", "255,255,255", "0,0,0", "2", "3"]
    scene = parse_lines([AMBIENT, CAMERA, texture, SPHERE + ["board"],
                         CYLINDER + ["board"]])
    tex = scene.textures["board"]
    assert isinstance(tex, Checkered)
    assert tex.squares_height == 2.0 and tex.squares_width == 3.0
    assert scene.objects[0].texture is tex
    assert all(obj.texture is tex for obj in scene.objects[1:])


def test_texture_errors():
    assert _error([AMBIENT, CAMERA, SPHERE + ["nowhere"]]) == errors.ERROR_TEXTURE
    assert _error([["T", "checkered", "x"]]) == errors.ERROR_TEXTURE
    assert _error([["T", "wood", "x", "y"]]) == errors.ERROR_TEXTURE
    assert _error([["T", "checkered", "x", "1,1,1", "0,0,0", "2"]]) == errors.ERROR_TEXTURE


def test_missing_image_texture(tmp_path):
    missing = str(tmp_path / "missing.xpm")
    assert _error([["T", "image", "pic", missing]]) == IMAGE_NOT_FOUND


def test_load_scene(tmp_path):
    path = tmp_path / "scene.rtb"
    path.write_text("\n".join(" ".join(line) for line in [AMBIENT, CAMERA, SPHERE]))
    scene = load_scene(path)
    assert len(scene.objects) == 1
    assert isinstance(scene.objects[0], Sphere)


def test_load_scene_requires_suffix(tmp_path):
    path = tmp_path / "scene.rt"
    path.write_text(" ".join(CAMERA))
    with pytest.raises(SceneError) as info:
        load_scene(path)
    assert info.value.message == errors.USAGE_BONUS
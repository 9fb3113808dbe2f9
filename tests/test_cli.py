from PIL import Image

from minirt import errors
from minirt.cli import main

SCENE = (
    "# a small scene\n"
    "A 0.2 255,255,255\n"
    "C 0,0,0 0,0,-1 70\n"
    "L 0,5,0 0.6 255,255,255\n"
    "sp 0,0,-3 1 255,0,0 lambertian 0.2,0.8,0.2,10\n"
)

SMALL = ["--frames", "1", "--width", "8", "--height", "4", "--threads", "2"]


def _write(tmp_path, name, content=SCENE):
    path = tmp_path / name
    path.write_text(content)
    return path


def test_renders_to_output(tmp_path, capsys):
    scene = _write(tmp_path, "scene.rtb")
    out = tmp_path / "picture.png"
    assert main([str(scene), "-o", str(out), *SMALL]) == 0
    with Image.open(out) as image:
        assert image.size == (8, 4)
    printed = capsys.readouterr().out
    assert "Frame: 1/1" in printed
    assert "Completed." in printed


def test_default_output_next_to_scene(tmp_path):
    scene = _write(tmp_path, "room.rtb")
    assert main([str(scene), *SMALL]) == 0
    with Image.open(tmp_path / "room.png") as image:
        assert image.size == (8, 4)


def test_wrong_suffix_prints_usage(tmp_path, capsys):
    scene = _write(tmp_path, "scene.rt")
    assert main([str(scene), *SMALL]) == 1
    assert capsys.readouterr().err == f"Error\n{errors.USAGE_BONUS}\n"


def test_no_arguments_prints_usage(capsys):
    assert main([]) == 1
    assert capsys.readouterr().err == f"Error\n{errors.USAGE_BONUS}\n"


def test_bad_option_prints_usage(tmp_path, capsys):
    scene = _write(tmp_path, "scene.rtb")
    assert main([str(scene), "--frames", "0"]) == 1
    assert errors.USAGE_BONUS in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.rtb"), *SMALL]) == 1
    assert capsys.readouterr().err == f"Error\n{errors.OPEN_ERROR}\n"


def test_scene_without_camera(tmp_path, capsys):
    scene = _write(tmp_path, "nocam.rtb", "A 0.2 255,255,255\n")
    assert main([str(scene), *SMALL]) == 1
    assert capsys.readouterr().err == f"Error\n{errors.NO_CAMERA}\n"
    assert not (tmp_path / "nocam.png").exists()
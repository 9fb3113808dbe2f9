# minirt

A small progressive path tracer. It reads a scene described in a `.rtb`
text file, renders it frame after frame and writes the result to an image
file. Every frame adds one sample per pixel and is averaged into the frames
before it, so the picture grows less noisy as frames add up.

## Installation

```
pip install .
```

Pillow is the only dependency; it is used to read image textures and to
write the rendered picture.

## Usage

```
minirt scene.rtb
```

Options:

| Option | Meaning | Default |
|--------|---------|---------|
| `-o`, `--output PATH` | image file to write; the format follows the suffix | the scene path with `.png` |
| `--frames N` | number of frames (samples per pixel) | 100 |
| `--width N` | image width in pixels | 640 |
| `--height N` | image height in pixels | 360 |
| `--threads N` | number of worker threads | 20 |

While rendering, `Frame: n/total` is shown on standard output, followed by
`Completed.` at the end. Pressing Ctrl-C stops after the current frame and
still saves what has been rendered so far.

The scene file has to end in `.rtb`. If the arguments are wrong or the scene
is malformed, `Error` is printed on standard error, then a line that says
what went wrong, and the command exits with status 1. The same happens when
the output image cannot be written.

## Scene files

Each line holds one element. Fields are separated by whitespace. Blank lines
and lines starting with `#` are ignored; a line holding only whitespace is an
error. Vectors are written as three comma-separated numbers such as
`0,1.5,-3`, colours as three integers from 0 to 255 such as `255,128,0`.

| Identifier | Fields |
|------------|--------|
| `A` | ambient ratio in [0, 1], colour |
| `C` | position, normalized orientation, field of view strictly between 0 and 180 |
| `L` | position, brightness in [0, 1], colour |
| `T` | `checkered` name colour1 colour2 squares_height squares_width |
| `T` | `image` name path-to-image |
| `sp` | centre, diameter, colour, material, material attributes, [texture name] |
| `pl` | point, normalized normal, colour, material, material attributes, [texture name] |
| `cy` | centre, normalized axis, diameter, height, colour, material, material attributes, [texture name] |

At most one `A` line and at most one `C` line are allowed. A camera is
required, and so is either an ambient light or at least one `L` light.
Diameters and heights must be greater than 0. A texture must be defined on
an earlier line than the object that names it; if two textures share a name,
the first one is used. The ambient ratio is checked but does not scale the
ambient colour.

A cylinder is made of its side and two closing disks. Checkered textures
apply to spheres, planes and cylinders; image textures (any file Pillow can
open, XPM included) are mapped onto spheres only.

The three materials are:

* `lambertian ka,kd,ks,specular_exponent`: a diffuse surface with ambient,
  diffuse and specular lighting. `ka`, `kd` and `ks` lie in [0, 1].
* `metal fuzz`: a mirror, blurred by `fuzz` (0 or more).
* `dielectric ir`: glass with refractive index `ir` (greater than 0).

Example:

```
A 0.2 255,255,255
C 0,1,-5 0,0,1 70
L 3,5,-3 0.8 255,255,255
T checkered board 255,255,255 30,30,30 2 2
pl 0,0,0 0,1,0 200,200,200 lambertian 0.3,0.7,0.2,10 board
sp 0,1,0 2 255,60,60 lambertian 0.3,0.8,0.5,32
sp 2,1,1 1.5 255,255,255 dielectric 1.5
cy -2,1,1 0,1,0 1 2 180,180,255 metal 0.1
```

## Using it from Python

```python
from minirt.parser import load_scene
from minirt.render import Renderer

scene = load_scene("scene.rtb")
renderer = Renderer(scene, 320, 180, 4)
renderer.render(20, None)
renderer.save("scene.png")
```

`load_scene` raises `minirt.errors.SceneError` when the file cannot be read
or parsed; its `message` attribute holds the error text. `parse_lines` in
`minirt.parser` builds a scene from already split lines. `Renderer` also
offers `render_frame()` for one frame at a time, `stop()` to end a running
`render`, and `to_image()` returning a Pillow image.

## What it does not do

There is no interactive window: the picture is not shown while it renders,
and there are no key bindings. The result is only available as an image file
(or a Pillow image from `Renderer.to_image()`) once rendering ends.
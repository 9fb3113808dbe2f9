"""Path tracing of a scene into an accumulated, progressively refined image."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar, Union

from PIL import Image

from .materials import Lambertian, reflect
from .objects import Hit, hit_world
from .rng import XorShift32
from .scene import WINDOW_HEIGHT, WINDOW_WIDTH, Light, Scene
from .vector import Interval, Ray, Vec3, clamp

CPUS = 20
FRAMES = 100
MAX_DEPTH = 20
LIGHT_INTENSITY = 100.0
SHADOW_ACNE_FIX = 1e-3

_START_INTERVAL = Interval(SHADOW_ACNE_FIX, float("inf"))

T = TypeVar("T")
Pixel = Tuple[int, int]
ProgressCallback = Callable[[int, int], None]


def _light_ray(light: Light, hit: Hit) -> Ray:
    direction = light.coord - hit.point
    distance = direction.length()
    return Ray(hit.point, direction.unit(), distance)


def shade(scene: Scene, hit: Hit, ray: Ray) -> Vec3:
    """Return the colour seen at ``hit``: ambient, diffuse and specular light."""
    material = hit.material
    if not isinstance(material, Lambertian):
        return hit.hit_color
    color = hit.hit_color * scene.ambient_color * material.ka
    if not scene.lights:
        return color
    view = ray.direction.unit()
    for light in scene.lights:
        light_ray = _light_ray(light, hit)
        if light_ray.distance == 0:
            continue
        shadow = Interval(SHADOW_ACNE_FIX, light_ray.distance)
        if hit_world(scene.objects, light_ray, shadow) is not None:
            continue
        attenuation = LIGHT_INTENSITY / (light_ray.distance * light_ray.distance)
        lambert = max(light_ray.direction.dot(hit.normal), 0.0)
        diffuse = light.color * hit.hit_color * (attenuation * lambert * material.kd)
        reflection = reflect(-light_ray.direction, hit.normal)
        highlight = max(0.0, -reflection.dot(view)) ** material.specular_exponent
        specular = light.color * (attenuation * material.ks * highlight)
        color = color + diffuse + specular
    return color


def trace(scene: Scene, ray: Ray, depth: int, rng: XorShift32) -> Vec3:
    """Follow ``ray`` through at most ``depth`` bounces and return its colour."""
    attenuation = Vec3(1.0, 1.0, 1.0)
    while depth > 0:
        hit = hit_world(scene.objects, ray, _START_INTERVAL)
        if hit is None:
            break
        color = shade(scene, hit, ray)
        scattered = hit.material.scatter(ray, hit, rng)
        if scattered is None:
            return attenuation * color
        attenuation = attenuation * color
        ray = scattered
        depth -= 1
    return attenuation * scene.ambient_color


def shuffled_pixels(width: int, height: int, rng: XorShift32) -> List[Pixel]:
    """Return every (x, y) of a width x height image in a random order."""
    pixels = [(x, y) for y in range(height) for x in range(width)]
    size = len(pixels)
    for i in range(size):
        j = rng.uint_range(i, size)
        pixels[i], pixels[j] = pixels[j], pixels[i]
    return pixels


def split_pixels(pixels: Sequence[T], parts: int) -> List[List[T]]:
    """Cut ``pixels`` into ``parts`` consecutive chunks of near-equal size."""
    if parts < 1:
        raise ValueError("parts must be at least 1")
    size = len(pixels)
    bounds = [size * i // parts for i in range(parts + 1)]
    return [list(pixels[start:end]) for start, end in zip(bounds, bounds[1:])]


def to_rgb(color: Vec3) -> Tuple[int, int, int]:
    """Convert a linear colour to gamma-corrected 8-bit RGB."""

    def component(value: float) -> int:
        if not value > 0:
            return 0
        if value == float("inf"):
            return 255
        return clamp(int(255.9999 * value ** 0.5), 0, 255)

    return component(color.x), component(color.y), component(color.z)


class Renderer:
    """Renders a scene frame after frame, averaging the samples of each pixel."""

    def __init__(self, scene: Scene, width: int = WINDOW_WIDTH,
                 height: int = WINDOW_HEIGHT, threads: int = CPUS) -> None:
        if width < 1 or height < 1:
            raise ValueError("image dimensions must be positive")
        if threads < 1:
            raise ValueError("at least one thread is needed")
        self.scene = scene
        self.width = width
        self.height = height
        self.frame = 0
        self._colors = [[Vec3() for _ in range(width)] for _ in range(height)]
        pixels = shuffled_pixels(width, height, XorShift32())
        self._chunks = split_pixels(pixels, threads)
        self._rngs = [XorShift32() for _ in self._chunks]
        self._stop = threading.Event()

    def _render_pixel(self, x: int, y: int, rng: XorShift32) -> None:
        u = (x + rng.random_float()) / self.width
        v = (self.height - y - 1 + rng.random_float()) / self.height
        ray = self.scene.camera.get_ray(u, v, rng)
        c = trace(self.scene, ray, MAX_DEPTH, rng)
        sample = Vec3(clamp(c.x, 0.0, 1.0), clamp(c.y, 0.0, 1.0),
                      clamp(c.z, 0.0, 1.0))
        frame = float(self.frame)
        self._colors[y][x] = (self._colors[y][x] * frame + sample) / (frame + 1)

    def _render_chunk(self, chunk: Sequence[Pixel], rng: XorShift32) -> None:
        for x, y in chunk:
            self._render_pixel(x, y, rng)

    def render_frame(self) -> int:
        """Add one sample to every pixel and return the number of frames done."""
        if self._stop.is_set():
            return self.frame
        with ThreadPoolExecutor(max_workers=len(self._chunks)) as pool:
            list(pool.map(self._render_chunk, self._chunks, self._rngs))
        self.frame += 1
        return self.frame

    def render(self, frames: int = FRAMES,
               progress: Optional[ProgressCallback] = None) -> int:
        """Render until ``frames`` frames are done or :meth:`stop` is called."""
        while self.frame < frames and not self._stop.is_set():
            self.render_frame()
            if progress is not None:
                progress(self.frame, frames)
        return self.frame

    def stop(self) -> None:
        """Ask the renderer to stop before its next frame."""
        self._stop.set()

    def to_image(self) -> Image.Image:
        image = Image.new("RGB", (self.width, self.height))
        image.putdata([to_rgb(color) for row in self._colors for color in row])
        return image

    def save(self, path: Union[str, Path]) -> None:
        self.to_image().save(path)
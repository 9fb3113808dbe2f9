"""Command line entry point: render a scene file to an image."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from . import errors
from .errors import SceneError, complain
from .parser import load_scene
from .render import CPUS, FRAMES, Renderer
from .scene import WINDOW_HEIGHT, WINDOW_WIDTH

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise SceneError(errors.USAGE_BONUS)


def _positive(text: str) -> int:
    value = int(text)
    if value < 1:
        raise ValueError(text)
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="minirt", description="Render a .rtb scene.")
    parser.add_argument("scene", help="scene file (*.rtb)")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="image to write (default: scene name with .png)")
    parser.add_argument("--frames", type=_positive, default=FRAMES)
    parser.add_argument("--width", type=_positive, default=WINDOW_WIDTH)
    parser.add_argument("--height", type=_positive, default=WINDOW_HEIGHT)
    parser.add_argument("--threads", type=_positive, default=CPUS)
    return parser


def _report(frame: int, total: int) -> None:
    print(f"\rFrame: {frame}/{total}", end="", flush=True)
    if frame == total:
        print("\nCompleted.")


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
        scene = load_scene(args.scene)
    except SceneError as exc:
        complain(exc.message)
        return EXIT_FAILURE

    renderer = Renderer(scene, args.width, args.height, args.threads)
    output = args.output or Path(args.scene).with_suffix(".png")
    try:
        renderer.render(args.frames, _report)
    except KeyboardInterrupt:
        renderer.stop()
        print()
    try:
        renderer.save(output)
    except (OSError, ValueError) as exc:
        complain(f"Cannot write {output}: {exc}")
        return EXIT_FAILURE
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
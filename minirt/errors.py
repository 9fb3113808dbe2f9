"""Error messages and the error type raised for invalid scenes."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

USAGE_MANDATORY = "Usage: ./miniRT *.rt"
USAGE_BONUS = "Usage: ./miniRTbonus *.rtb"

SPACY_LINE = "Line contains only spaces and tabulations"
OPEN_ERROR = "File cannot be opened"
MALLOC_ERROR = "Impossible to allocate heap memory"
READ_ERROR = "Error while reading the file"
INVALID_IDENTIFIER = "Invalid identifier"

DOUBLE_AMBIENT = "Too many ambient lights"
DOUBLE_CAMERA = "Too many cameras"
DOUBLE_LIGHT = "Too many lights"
ERROR_AMBIENT = "Error parsing ambient light"
ERROR_CAMERA = "Error parsing camera"
ERROR_LIGHT = "Error parsing light"
NO_CAMERA = "There is no camera"
NO_LIGHT = "There is no light"
FOV_ERROR = "Field of view is invalid"
ERROR_TEXTURE = "Error parsing texture"

ERROR_CYLINDER = "Error parsing cylinder"
ERROR_PLANE = "Error parsing plane"
ERROR_SPHERE = "Error parsing sphere"

ERROR_MLX = "Failed to initialize mlx"
ERROR_WINDOW = "Failed to initialize window"
ERROR_IMAGE = "Failed to initialize image"
ERROR_ADDR = "Failed to initialize addr"


class SceneError(Exception):
    """Raised when a scene file cannot be read or is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def complain(message, stream: Optional[TextIO] = None) -> None:
    """Write the standard two-line error report to ``stream`` (stderr by default)."""
    out = sys.stderr if stream is None else stream
    out.write("Error\n")
    out.write(f"{message}\n")
"""Progressive path tracer that renders .rtb scene files to images."""

__version__ = "0.1.0"
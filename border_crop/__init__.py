"""Crop a PNG down to the rectangle drawn by its exact-black border."""

__version__ = "1.0.0"

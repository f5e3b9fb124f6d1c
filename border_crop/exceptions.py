"""
Error taxonomy for the cropping tool.

Every failure is fatal for a run; the CLI maps any ``BorderCropError`` to a
logged error and a non-zero exit status.
"""


class BorderCropError(Exception):
    """Base class for all errors raised by border_crop."""


class ImageReadError(BorderCropError, OSError):
    """The input file could not be opened or read."""


class ImageDecodeError(BorderCropError, ValueError):
    """The input bytes are not an image the codec understands."""


class ImageWriteError(BorderCropError, OSError):
    """The output file could not be created or written."""


class ImageEncodeError(BorderCropError, ValueError):
    """The codec refused to encode the cropped image."""


class NoBorderFoundError(BorderCropError):
    """The image contains no border pixel, so there is nothing to crop to."""

from __future__ import annotations
from io import BytesIO
from pathlib import Path
from typing import Tuple, Union
import logging
import numpy as np
import cv2
from PIL import Image as PILImage

from ..exceptions import ImageDecodeError, ImageEncodeError, ImageReadError, ImageWriteError
from ..models.bounding_box import BoundingBox
from ..models.image import Image

logger = logging.getLogger(__name__)

# OpenCV hands back channels in BGR(A) order, greyscale as a single channel.
_TO_RGBA = {
    1: cv2.COLOR_GRAY2RGBA,
    3: cv2.COLOR_BGR2RGBA,
    4: cv2.COLOR_BGRA2RGBA,
}


class ImageRepository:
    """
    Handles file I/O and sub-region extraction for Image entities.
    """

    @staticmethod
    def retrieve_image_dimensions(img: Image) -> Tuple[int, int]:
        return img.pixels.shape[:2]

    @staticmethod
    def retrieve_bounds(img: Image) -> BoundingBox:
        height, width = img.pixels.shape[:2]
        x0, y0 = img.origin
        return BoundingBox(x0, y0, x0 + width, y0 + height)

    @staticmethod
    def _to_rgba(arr: np.ndarray) -> np.ndarray:
        channels = 1 if arr.ndim == 2 else arr.shape[2]
        code = _TO_RGBA.get(channels)
        if code is None:
            raise ImageDecodeError(f"Unsupported channel layout: shape={arr.shape}")
        return cv2.cvtColor(arr, code)

    @staticmethod
    def load(path: Union[str, Path]) -> Image:
        """
        Decode an image file into RGBA pixels, keeping its bit depth (8 or 16).
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as err:
            raise ImageReadError(f"Cannot open image file {path}: {err}") from err

        if not data:
            raise ImageDecodeError(f"Image file is empty: {path}")

        try:
            arr = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
        except cv2.error as err:
            raise ImageDecodeError(f"Cannot decode image file {path}: {err}") from err
        if arr is None:
            raise ImageDecodeError(f"Cannot decode image file {path}: unsupported or corrupt data")

        pixels = ImageRepository._to_rgba(arr)
        logger.debug(f"Decoded {path}: shape={pixels.shape}, dtype={pixels.dtype}")
        return Image(pixels=pixels, path=path)

    @staticmethod
    def _encode_png(pixels: np.ndarray) -> bytes:
        if not pixels.flags['C_CONTIGUOUS']:
            pixels = np.ascontiguousarray(pixels)

        if pixels.dtype == np.uint8:
            buffer = BytesIO()
            try:
                PILImage.fromarray(pixels).save(buffer, format="PNG")
            except (OSError, ValueError, TypeError) as err:
                raise ImageEncodeError(f"Cannot encode image: {err}") from err
            return buffer.getvalue()

        # Pillow has no 16-bit RGBA mode, OpenCV writes it natively.
        try:
            ok, encoded = cv2.imencode(".png", cv2.cvtColor(pixels, cv2.COLOR_RGBA2BGRA))
        except cv2.error as err:
            raise ImageEncodeError(f"Cannot encode image: {err}") from err
        if not ok:
            raise ImageEncodeError(f"Cannot encode image with dtype {pixels.dtype}")
        return encoded.tobytes()

    @staticmethod
    def save(image: Image) -> None:
        if image.path is None:
            raise ImageWriteError("Image has no destination path")

        data = ImageRepository._encode_png(image.pixels)
        try:
            with open(image.path, "wb") as fh:
                fh.write(data)
        except OSError as err:
            raise ImageWriteError(f"Cannot create image file {image.path}: {err}") from err

    @staticmethod
    def crop(image: Image, box: BoundingBox) -> Image:
        """
        Cut *box* (absolute coordinates) out of *image*.

        The sub-image keeps the box's top-left corner as its origin, so
        coordinates found in it line up with the parent image.
        """
        bounds = ImageRepository.retrieve_bounds(image)
        if box.is_empty:
            raise ValueError(f"Invalid crop bounds would create {box.width}x{box.height} image")
        if not bounds.contains_box(box):
            raise ValueError(f"Crop bounds {box.as_tuple()} fall outside image bounds {bounds.as_tuple()}")

        x0, y0 = image.origin
        pixels = image.pixels[box.min_y - y0:box.max_y - y0, box.min_x - x0:box.max_x - x0].copy()
        return Image(pixels=pixels, origin=(box.min_x, box.min_y))

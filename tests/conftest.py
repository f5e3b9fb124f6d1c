from pathlib import Path
import numpy as np
import pytest
from PIL import Image as PILImage

from border_crop.models.image import Image

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


def make_canvas(width, height, color=WHITE, dtype=np.uint8) -> np.ndarray:
    pixels = np.empty((height, width, 4), dtype=dtype)
    pixels[...] = color
    return pixels


def draw_frame(pixels, min_x, min_y, max_x, max_y, color=BLACK) -> np.ndarray:
    """Draw a one-pixel rectangle outline; all bounds inclusive."""
    pixels[min_y, min_x:max_x + 1] = color
    pixels[max_y, min_x:max_x + 1] = color
    pixels[min_y:max_y + 1, min_x] = color
    pixels[min_y:max_y + 1, max_x] = color
    return pixels


def write_png(path: Path, pixels: np.ndarray) -> Path:
    PILImage.fromarray(pixels).save(path)
    return path


@pytest.fixture
def framed_pixels() -> np.ndarray:
    """12x10 white canvas with a black frame from (2, 1) to (8, 7) inclusive."""
    return draw_frame(make_canvas(12, 10), 2, 1, 8, 7)


@pytest.fixture
def framed_image(framed_pixels) -> Image:
    return Image(pixels=framed_pixels)

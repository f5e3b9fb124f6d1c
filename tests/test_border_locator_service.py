import logging

import numpy as np
import pytest

from border_crop.exceptions import NoBorderFoundError
from border_crop.models.bounding_box import BoundingBox
from border_crop.models.crop_strategy import CropStrategy
from border_crop.models.image import Image
from border_crop.services.border_locator_service import BorderLocatorService
from border_crop.services.image_service import ImageService

from conftest import BLACK, draw_frame, make_canvas

FRAME = BoundingBox(2, 1, 9, 8)
LOGGER_NAME = "tests.border_locator"


@pytest.fixture
def locator():
    return BorderLocatorService(logger=logging.getLogger(LOGGER_NAME))


@pytest.mark.parametrize("strategy", list(CropStrategy))
def test_single_frame_gives_frame_rectangle(locator, framed_image, strategy):
    assert locator.locate(framed_image, strategy) == FRAME


def test_coarse_and_refined_agree_on_clean_frame(locator, framed_image):
    coarse = locator.coarse_scan(framed_image)
    assert coarse == FRAME
    assert locator.refine(framed_image, coarse) == FRAME


def test_stray_pixel_above_frame(locator, framed_pixels):
    framed_pixels[0, 5] = BLACK
    img = Image(pixels=framed_pixels)

    assert locator.locate(img, CropStrategy.COARSE) == BoundingBox(2, 0, 9, 8)
    assert locator.locate(img, CropStrategy.REFINED) == FRAME


def test_stray_pixel_right_of_frame(locator, framed_pixels, caplog):
    framed_pixels[4, 10] = BLACK
    img = Image(pixels=framed_pixels)
    caplog.set_level(logging.WARNING, logger=LOGGER_NAME)

    assert locator.locate(img, CropStrategy.COARSE) == BoundingBox(2, 1, 11, 8)
    assert locator.locate(img, CropStrategy.REFINED) == FRAME

    # no row spans x=2..10 in black, so both row edges keep their coarse values
    messages = [r.getMessage() for r in caplog.records]
    assert any("top edge unchanged" in m for m in messages)
    assert any("bottom edge unchanged" in m for m in messages)


def test_diagonal_stray_pixel_leaves_coarse_box(locator, framed_pixels, caplog):
    # Outside both the row and the column span of the frame: no line of the
    # coarse box is black end to end, so every edge keeps its coarse value.
    framed_pixels[9, 10] = BLACK
    img = Image(pixels=framed_pixels)
    caplog.set_level(logging.WARNING, logger=LOGGER_NAME)

    coarse = locator.locate(img, CropStrategy.COARSE)
    refined = locator.locate(img, CropStrategy.REFINED)

    assert coarse == BoundingBox(2, 1, 11, 10)
    assert refined == coarse
    messages = [r.getMessage() for r in caplog.records]
    for edge in ("top", "bottom", "left", "right"):
        assert any(f"{edge} edge unchanged" in m for m in messages)


def test_interior_pixel_does_not_move_edges(locator, framed_pixels):
    framed_pixels[4, 5] = BLACK
    img = Image(pixels=framed_pixels)

    assert locator.locate(img, CropStrategy.COARSE) == FRAME
    assert locator.locate(img, CropStrategy.REFINED) == FRAME


def test_rows_refined_before_columns(locator):
    # Black bar across the top, frame below it. The left column is only
    # fully black once the top edge has moved down to the frame.
    pixels = draw_frame(make_canvas(10, 10), 1, 3, 8, 8)
    pixels[0, 3:7] = BLACK
    img = Image(pixels=pixels)

    assert locator.coarse_scan(img) == BoundingBox(1, 0, 9, 9)
    assert locator.refine(img, BoundingBox(1, 0, 9, 9)) == BoundingBox(1, 3, 9, 9)


@pytest.mark.parametrize("strategy", list(CropStrategy))
def test_no_border_pixels_raises(locator, strategy):
    img = Image(pixels=make_canvas(5, 4))
    with pytest.raises(NoBorderFoundError):
        locator.locate(img, strategy)


def test_transparent_black_is_not_a_border(locator):
    img = Image(pixels=make_canvas(5, 4, color=(0, 0, 0, 0)))
    with pytest.raises(NoBorderFoundError):
        locator.coarse_scan(img)


@pytest.mark.parametrize("strategy", list(CropStrategy))
def test_fully_black_image_gives_full_bounds(locator, strategy):
    pixels = make_canvas(6, 4, color=BLACK)
    img = Image(pixels=pixels)

    box = locator.locate(img, strategy)
    assert box == BoundingBox(0, 0, 6, 4)

    cropped = ImageService().crop_to_box(img, box)
    assert np.array_equal(cropped.pixels, pixels)


def test_crop_rectangle_is_inclusive_max_plus_one(locator):
    pixels = make_canvas(8, 8)
    pixels[3, 4] = BLACK
    img = Image(pixels=pixels)

    box = locator.locate(img)
    assert box.as_tuple() == (4, 3, 4 + 1, 3 + 1)


def test_locate_again_on_cropped_output_is_stable(locator, framed_image):
    box = locator.locate(framed_image)
    cropped = ImageService().crop_to_box(framed_image, box)

    assert cropped.origin == (2, 1)
    assert locator.locate(cropped) == box
    assert locator.locate(cropped, CropStrategy.COARSE) == box


def test_locate_on_cropped_interior_has_no_border(locator, framed_image):
    inner = ImageService().crop_to_box(framed_image, BoundingBox(3, 2, 8, 7))
    with pytest.raises(NoBorderFoundError):
        locator.locate(inner)


def test_sixteen_bit_image(locator):
    pixels = draw_frame(make_canvas(12, 10, color=(65535, 65535, 65535, 65535), dtype=np.uint16),
                        2, 1, 8, 7, color=(0, 0, 0, 65535))
    pixels[5, 5] = (0, 0, 1, 65535)     # near-black, ignored
    assert locator.locate(Image(pixels=pixels)) == FRAME


def test_refine_rejects_box_outside_image(locator, framed_image):
    with pytest.raises(ValueError):
        locator.refine(framed_image, BoundingBox(0, 0, 13, 10))
    with pytest.raises(ValueError):
        locator.refine(framed_image, BoundingBox(4, 4, 4, 6))


def test_trace_logs_every_coordinate_in_box(locator, caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    img = Image(pixels=make_canvas(2, 2, color=BLACK))

    locator.locate(img, trace_coordinates=True)

    traced = [r.getMessage() for r in caplog.records
              if r.getMessage().startswith("Coordinate inside of the border")]
    assert traced == [
        "Coordinate inside of the border: x=0 y=0",
        "Coordinate inside of the border: x=1 y=0",
        "Coordinate inside of the border: x=0 y=1",
        "Coordinate inside of the border: x=1 y=1",
    ]


def test_trace_is_off_by_default(locator, caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    locator.locate(Image(pixels=make_canvas(2, 2, color=BLACK)))
    assert not any("Coordinate inside" in r.getMessage() for r in caplog.records)

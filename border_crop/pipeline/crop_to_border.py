# pipeline/crop_to_border.py
from __future__ import annotations
from pathlib import Path
import logging
import os
from typing import Union

from dotenv import load_dotenv

from ..models.crop_strategy import CropStrategy
from ..models.image import Image
from ..services.border_locator_service import BorderLocatorService
from ..services.image_service import ImageService

# ------------------------------------------------------------------
# env‑vars
load_dotenv()
CROP_STRATEGY     = os.getenv("CROP_STRATEGY", CropStrategy.REFINED.value)
TRACE_COORDINATES = os.getenv("TRACE_COORDINATES", "false").strip().lower() in {"1", "true", "yes", "on"}

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
def crop_to_border(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    *,
    strategy: Union[CropStrategy, str] = CROP_STRATEGY,
    trace_coordinates: bool          = TRACE_COORDINATES,
    image_service: ImageService      = ImageService(),
    locator_service: BorderLocatorService | None = None,
    logger: logging.Logger           = logger,
) -> Image:
    """
    Read one image, find its black border, write the cropped region.

    Steps:
        • decode *input_path*
        • locate the crop box with the chosen strategy
        • cut the box out of the image
        • encode the result to *output_path*

    Any failure raises a BorderCropError subclass; nothing is written
    unless the crop box was found.

    Returns:
        Image: the cropped image, path set to *output_path*.
    """
    if not isinstance(strategy, CropStrategy):
        strategy = CropStrategy.from_name(strategy)
    locator_service = locator_service or BorderLocatorService(logger=logger)

    logger.info(f"Starting image cropping ({strategy.value} strategy)...")

    # 1. decode
    logger.info(f"Decoding image {input_path}...")
    img = image_service.load(input_path)
    height, width = image_service.get_image_dimensions(img)
    logger.info(f"Decoded {width}x{height} image ({img.pixels.dtype})")

    # 2. locate
    box = locator_service.locate(img, strategy, trace_coordinates=trace_coordinates)

    # 3. crop
    cropped = image_service.crop_to_box(img, box, output_path)

    # 4. encode
    logger.info(f"Encoding cropped image file {output_path}...")
    image_service.save(cropped)

    logger.info("Image cropping completed successfully.")
    return cropped

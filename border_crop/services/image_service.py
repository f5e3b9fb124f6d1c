from __future__ import annotations
from pathlib import Path
from typing import Tuple, Union
import logging

from ..models.bounding_box import BoundingBox
from ..models.image import Image
from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)


class ImageService:
    """I/O and cropping helpers. No border detection logic."""
    def __init__(self, image_repository: ImageRepository | None = None):
        self.image_repository = image_repository or ImageRepository()

    def load(self, path: Union[str, Path]) -> Image:
        """Load a single image from disk into an Image object."""
        return self.image_repository.load(path)

    def save(self, image: Image) -> None:
        """
        Business-level method to save the image to its path.
        """
        self.image_repository.save(image)

    def get_image_dimensions(self, img: Image) -> Tuple[int, int]:
        return self.image_repository.retrieve_image_dimensions(img)

    def get_bounds(self, img: Image) -> BoundingBox:
        return self.image_repository.retrieve_bounds(img)

    def crop_to_box(self, img: Image, box: BoundingBox, path: Union[str, Path] = None) -> Image:
        """
        Cut *box* out of *img* and return it as a new Image.

        Args:
            img (Image): Source image, left untouched.
            box (BoundingBox): Half-open region in absolute coordinates.
            path: Optional destination for the new image.

        Returns:
            Image: the sub-image, origin set to the box's top-left corner.
        """
        logger.info(
            f"Creating sub-image from rectangle: top-left=({box.min_x},{box.min_y}), "
            f"bottom-right=({box.max_x},{box.max_y}) -> {box.width}x{box.height}"
        )
        cropped = self.image_repository.crop(img, box)
        if path is not None:
            cropped.path = Path(path)
        return cropped

from __future__ import annotations
from enum import Enum
import logging
import numpy as np

from ..exceptions import NoBorderFoundError
from ..models.bounding_box import BoundingBox
from ..models.crop_strategy import CropStrategy
from ..models.image import Image
from ..repositories.image_repository import ImageRepository
from .pixel_classifier_service import PixelClassifierService


class Line(Enum):
    ROW = "row"
    COLUMN = "column"


class BorderLocatorService:
    """
    Finds the rectangle to crop to.

    • coarse_scan: tightest box around every border pixel.
    • refine: trims that box edge by edge to the innermost rows/columns
      that are border pixels end to end.

    All coordinates are absolute, i.e. they include the image origin.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        classifier: PixelClassifierService | None = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.classifier = classifier or PixelClassifierService()

    # ---------- helpers ----------
    def _mask(self, img: Image) -> np.ndarray:
        return self.classifier.border_mask(img.pixels)

    @staticmethod
    def _is_valid_border(
        line: Line,
        mask: np.ndarray,
        origin: tuple[int, int],
        coordinate: int,
        start: int,
        end: int,
    ) -> bool:
        """
        True if every pixel on *line* at *coordinate*, from *start* to *end*
        (both inclusive, absolute), is a border pixel.
        """
        x0, y0 = origin
        if line is Line.ROW:
            return bool(mask[coordinate - y0, start - x0:end - x0 + 1].all())
        return bool(mask[start - y0:end - y0 + 1, coordinate - x0].all())

    # ---------- coarse pass ----------
    def coarse_scan(self, img: Image, mask: np.ndarray | None = None) -> BoundingBox:
        """
        Tightest enclosing rectangle of all border pixels.

        Raises:
            NoBorderFoundError: the image has no border pixel at all.
        """
        bounds = ImageRepository.retrieve_bounds(img)
        self.logger.info(
            f"Full image area: top-left=({bounds.min_x},{bounds.min_y}), "
            f"bottom-right=({bounds.max_x},{bounds.max_y})"
        )

        if mask is None:
            mask = self._mask(img)

        self.logger.info("Scanning image to find black pixel coordinates for cropping...")
        ys, xs = np.nonzero(mask)
        if ys.size == 0:
            raise NoBorderFoundError(
                f"No black border pixel found in {bounds.width}x{bounds.height} image"
            )

        x0, y0 = img.origin
        box = BoundingBox.from_inclusive(
            x0 + int(xs.min()), y0 + int(ys.min()),
            x0 + int(xs.max()), y0 + int(ys.max()),
        )
        self.logger.debug(f"Coarse box: {box.as_tuple()} from {ys.size} border pixels")
        return box

    # ---------- refinement pass ----------
    def refine(self, img: Image, box: BoundingBox, mask: np.ndarray | None = None) -> BoundingBox:
        """
        Move each edge of *box* inward to the first fully bordered row/column.

        Order is top, bottom, left, right; every updated edge bounds the
        scans that follow it. An edge with no fully bordered line in range is
        left where it is.
        """
        bounds = ImageRepository.retrieve_bounds(img)
        if box.is_empty or not bounds.contains_box(box):
            raise ValueError(f"Cannot refine box {box.as_tuple()} inside image bounds {bounds.as_tuple()}")

        if mask is None:
            mask = self._mask(img)
        origin = img.origin
        min_x, min_y = box.min_x, box.min_y
        max_x, max_y = box.max_x - 1, box.max_y - 1

        # Top row
        for y in range(min_y, max_y + 1):
            if self._is_valid_border(Line.ROW, mask, origin, y, min_x, max_x):
                min_y = y
                break
        else:
            self.logger.warning(f"No fully black row between y={min_y} and y={max_y}; top edge unchanged")

        # Bottom row
        for y in range(max_y, min_y - 1, -1):
            if self._is_valid_border(Line.ROW, mask, origin, y, min_x, max_x):
                max_y = y
                break
        else:
            self.logger.warning(f"No fully black row between y={max_y} and y={min_y}; bottom edge unchanged")

        # Left column
        for x in range(min_x, max_x + 1):
            if self._is_valid_border(Line.COLUMN, mask, origin, x, min_y, max_y):
                min_x = x
                break
        else:
            self.logger.warning(f"No fully black column between x={min_x} and x={max_x}; left edge unchanged")

        # Right column
        for x in range(max_x, min_x - 1, -1):
            if self._is_valid_border(Line.COLUMN, mask, origin, x, min_y, max_y):
                max_x = x
                break
        else:
            self.logger.warning(f"No fully black column between x={max_x} and x={min_x}; right edge unchanged")

        refined = BoundingBox.from_inclusive(min_x, min_y, max_x, max_y)
        self.logger.debug(f"Refined box: {box.as_tuple()} -> {refined.as_tuple()}")
        return refined

    # ---------- public API ----------
    def locate(
        self,
        img: Image,
        strategy: CropStrategy = CropStrategy.REFINED,
        *,
        trace_coordinates: bool = False,
    ) -> BoundingBox:
        mask = self._mask(img)
        box = self.coarse_scan(img, mask)
        if strategy is CropStrategy.REFINED:
            box = self.refine(img, box, mask)

        if trace_coordinates:
            self.trace(box)

        self.logger.info(
            f"Create cropping image area. Top-left=({box.min_x},{box.min_y}), "
            f"Bottom-right=({box.max_x},{box.max_y})"
        )
        return box

    def trace(self, box: BoundingBox) -> None:
        """Write one DEBUG line per coordinate inside *box*."""
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        for y in range(box.min_y, box.max_y):
            for x in range(box.min_x, box.max_x):
                self.logger.debug(f"Coordinate inside of the border: x={x} y={y}")

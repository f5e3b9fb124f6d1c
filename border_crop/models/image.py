from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple
import numpy as np


@dataclass
class Image:
    """
    Simple data object: RGBA pixels (+ optional path and origin for bookkeeping).
    No codec logic outside the repository layer.
    """
    pixels: np.ndarray # Shape (H, W, 4), dtype uint8 or uint16, RGBA order.
    path: Path | None = None # Source (or destination) of the image.
    origin: Tuple[int, int] = (0, 0) # Absolute (x, y) of pixels[0, 0]; non-zero for sub-images.

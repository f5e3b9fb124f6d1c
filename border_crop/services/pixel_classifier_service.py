from typing import Sequence
import numpy as np


class PixelClassifierService:
    """
    Decides what counts as border material: exact, opaque black.

    There is deliberately no tolerance. Anti-aliased or near-black pixels are
    not border pixels, so source images must use pure black for the frame.
    """

    @staticmethod
    def is_border_pixel(pixel: Sequence[int]) -> bool:
        """
        Args:
            pixel: (R, G, B, A) sample, any intensity range (0-255, 0-65535, ...).

        Returns:
            True iff alpha is non-zero and R, G and B are all zero.
        """
        r, g, b, a = (int(c) for c in pixel[:4])
        if a == 0:
            return False
        return r == 0 and g == 0 and b == 0

    @staticmethod
    def border_mask(pixels: np.ndarray) -> np.ndarray:
        """
        Vectorised is_border_pixel over an (H, W, 4) RGBA array.

        Returns:
            (H, W) bool array, True where the pixel is border material.
        """
        rgb_black = ~pixels[..., :3].any(axis=-1)
        opaque = pixels[..., 3] != 0
        return rgb_black & opaque

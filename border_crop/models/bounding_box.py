from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class BoundingBox:
    """
    Axis-aligned rectangle in absolute image coordinates.

    Half-open: ``min_x``/``min_y`` are inclusive, ``max_x``/``max_y`` exclusive.
    """
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @classmethod
    def from_inclusive(cls, min_x: int, min_y: int, max_x: int, max_y: int) -> "BoundingBox":
        """Build a box from the inclusive maxima found while scanning pixels."""
        return cls(min_x, min_y, max_x + 1, max_y + 1)

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains_box(self, other: "BoundingBox") -> bool:
        return (self.min_x <= other.min_x and self.min_y <= other.min_y
                and other.max_x <= self.max_x and other.max_y <= self.max_y)

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.min_x, self.min_y, self.max_x, self.max_y

from enum import Enum


class CropStrategy(str, Enum):
    """
    Which question the locator answers.

    COARSE  -> tightest box around every border pixel in the image.
    REFINED -> coarse box trimmed to the innermost unbroken border lines.
    """
    COARSE = "coarse"
    REFINED = "refined"

    @classmethod
    def from_name(cls, name: str) -> "CropStrategy":
        try:
            return cls(name.strip().lower())
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown crop strategy {name!r} (expected one of: {valid})") from None

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class BackgroundStats:
    """
    Brightness distribution of the border ring of a grayscale image.
    Computed once per image, consumed by the mask builder.
    """
    mean: float     # average ring intensity [0, 255]
    std_dev: float  # population standard deviation of the ring

    @property
    def is_bright(self) -> bool:
        """Light (likely white) background."""
        return self.mean > 180

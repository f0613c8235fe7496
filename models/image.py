from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import numpy as np


@dataclass
class Image:
    """
    Simple data object: BGR pixels (+ optional source path for bookkeeping).
    No OpenCV logic outside the services/repositories.
    """
    pixels: np.ndarray # Shape (H, W, 3) or (H, W, 4), dtype uint8, BGR(A) order.
    path: Path | None = None # Source (or destination) of the image.

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def channels(self) -> int:
        return 1 if self.pixels.ndim == 2 else int(self.pixels.shape[2])

    @property
    def area(self) -> int:
        return self.width * self.height

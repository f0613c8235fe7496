from __future__ import annotations
from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True, eq=False)
class Contour:
    """
    Closed polygon boundary traced from a binary mask.
    Points keep OpenCV's (N, 1, 2) int32 layout so they can be handed back to cv2.
    """
    points: np.ndarray
    area: float

    def __len__(self) -> int:
        return len(self.points)

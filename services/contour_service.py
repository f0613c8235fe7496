import logging
from typing import List

import cv2
import numpy as np

from models.contour import Contour

logger = logging.getLogger(__name__)


class ContourService:
    """
    Picks the dominant foreground shapes out of a cleaned binary mask.
    """

    _MIN_AREA_FRACTION: float = 0.001  # 0.1 % of the frame
    _MAX_CONTOURS: int = 3

    @staticmethod
    def trace_external(mask: np.ndarray) -> List[Contour]:
        """Outermost boundaries only, compressed to their vertices."""
        # findContours must not mutate the caller's mask on older OpenCV builds
        traced, _ = cv2.findContours(mask.copy(), cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
        return [Contour(points=c, area=float(cv2.contourArea(c))) for c in traced]

    def min_area(self, image_area: int) -> float:
        return image_area * self._MIN_AREA_FRACTION

    def find_main_contours(self, mask: np.ndarray, image_area: int) -> List[Contour]:
        """
        Args:
            mask (np.ndarray): (H, W) uint8 0/255 mask.
            image_area (int): width * height of the source image.

        Returns:
            List[Contour]: At most three contours, largest first. Empty when
            nothing clears the area filter.
        """
        contours = self.trace_external(mask)
        if not contours:
            return []

        min_area = self.min_area(image_area)
        kept = [c for c in contours if c.area >= min_area]
        # stable sort keeps trace order for equal areas
        kept.sort(key=lambda c: c.area, reverse=True)

        logger.debug(f"Traced {len(contours)} contours, {len(kept)} above {min_area:.1f}px")
        return kept[:self._MAX_CONTOURS]

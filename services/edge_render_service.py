from typing import Sequence, Tuple

import cv2
import numpy as np

from models.contour import Contour


class EdgeRenderService:
    """
    Draws simplified contour outlines onto a blank white canvas.
    """

    _EDGE_COLOR: Tuple[int, int, int] = (255, 0, 0)  # pure blue in BGR
    _THICKNESS: int = 3
    _EPSILON: float = 2.0

    @staticmethod
    def blank_canvas(height: int, width: int) -> np.ndarray:
        return np.full((height, width, 3), 255, dtype=np.uint8)

    def simplify(self, contour: Contour) -> np.ndarray:
        return cv2.approxPolyDP(contour.points, self._EPSILON, True)

    def draw_contours_on_canvas(
            self,
            height: int,
            width: int,
            contours: Sequence[Contour],
    ) -> np.ndarray:
        """
        Returns a new (H, W, 3) uint8 canvas; white when *contours* is empty.
        """
        canvas = self.blank_canvas(height, width)
        for contour in contours:
            smoothed = self.simplify(contour)
            cv2.drawContours(canvas, [smoothed], -1, self._EDGE_COLOR,
                             thickness=self._THICKNESS, lineType=cv2.LINE_AA)
        return canvas

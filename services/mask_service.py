import logging

import cv2
import numpy as np

from models.background_stats import BackgroundStats

logger = logging.getLogger(__name__)


class MaskService:
    """
    Adaptive foreground mask.

    Two independent hypotheses are evaluated over the same blurred grayscale
    buffer and combined with a logical AND:
      • contrast mask  - deviation from the border-ring background brightness
      • Otsu mask      - bimodal intensity split of the whole frame
    The result is cleaned with a morphological close followed by an open.
    """

    _BRIGHT_THRESHOLD: float = 5.0
    _MIN_DARK_THRESHOLD: float = 10.0
    _KERNEL_SIZE = (5, 5)
    _CLOSE_ITERATIONS: int = 2
    _OPEN_ITERATIONS: int = 1

    def __init__(self):
        self.kernel = cv2.getStructuringElement(cv2.MORPH_RECT, self._KERNEL_SIZE)

    # ─── Hypotheses ───────────────────────────────────────────────────
    def contrast_threshold(self, stats: BackgroundStats) -> float:
        if stats.is_bright:
            return self._BRIGHT_THRESHOLD
        return max(self._MIN_DARK_THRESHOLD, stats.std_dev)

    def create_contrast_mask(self, gray: np.ndarray, stats: BackgroundStats) -> np.ndarray:
        """
        255 where |gray - background mean| >= contrast threshold, else 0.
        """
        difference = np.abs(gray.astype(np.float64) - stats.mean)
        threshold = self.contrast_threshold(stats)
        logger.debug(f"Contrast threshold={threshold:.2f} (bright background: {stats.is_bright})")
        return np.where(difference >= threshold, 255, 0).astype(np.uint8)

    @staticmethod
    def create_otsu_mask(gray: np.ndarray, stats: BackgroundStats) -> np.ndarray:
        """
        Otsu split of *gray*. The threshold comes from the histogram alone;
        the class holding the background mean is treated as background.
        """
        otsu_t, above = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
        logger.debug(f"Otsu threshold={otsu_t:.1f}")
        if stats.mean > otsu_t:
            return cv2.bitwise_not(above)
        return above

    @staticmethod
    def combine_masks(contrast_mask: np.ndarray, otsu_mask: np.ndarray) -> np.ndarray:
        return cv2.bitwise_and(contrast_mask, otsu_mask)

    def apply_morphology(self, mask: np.ndarray) -> np.ndarray:
        """
        1) Close 5x5, 2 iterations: merge nearby fragments
        2) Open 5x5, 1 iteration: strip isolated speckles
        """
        closed = cv2.morphologyEx(mask, cv2.MORPH_CLOSE, self.kernel,
                                  iterations=self._CLOSE_ITERATIONS)
        return cv2.morphologyEx(closed, cv2.MORPH_OPEN, self.kernel,
                                iterations=self._OPEN_ITERATIONS)

    # ─── Public API ───────────────────────────────────────────────────
    def build_mask(self, gray: np.ndarray, stats: BackgroundStats) -> np.ndarray:
        """
        Args:
            gray (np.ndarray): Blurred (H, W) uint8 grayscale image.
            stats (BackgroundStats): Border-ring statistics of *gray*.

        Returns:
            np.ndarray: (H, W) uint8 mask with 0/255 values.
        """
        contrast_mask = self.create_contrast_mask(gray, stats)
        otsu_mask = self.create_otsu_mask(gray, stats)
        mask = self.combine_masks(contrast_mask, otsu_mask)
        return self.apply_morphology(mask)

import logging

import numpy as np

from models.background_stats import BackgroundStats

logger = logging.getLogger(__name__)


class BackgroundService:
    """
    Estimates background brightness and noise from a border ring of the
    grayscale image.
    """

    _MIN_RING: int = 4
    _RING_DIVISOR: int = 20
    _FALLBACK: BackgroundStats = BackgroundStats(mean=127.0, std_dev=10.0)

    @classmethod
    def ring_width(cls, rows: int, cols: int) -> int:
        return max(cls._MIN_RING, min(rows, cols) // cls._RING_DIVISOR)

    @classmethod
    def border_mask(cls, rows: int, cols: int) -> np.ndarray:
        """
        Boolean (rows, cols) mask of the full border frame; corners counted once.
        """
        width = cls.ring_width(rows, cols)
        mask = np.zeros((rows, cols), dtype=bool)
        mask[:width, :] = True
        mask[max(rows - width, 0):, :] = True
        mask[:, :width] = True
        mask[:, max(cols - width, 0):] = True
        return mask

    def collect_border_samples(self, gray: np.ndarray) -> np.ndarray:
        rows, cols = gray.shape[:2]
        return gray[self.border_mask(rows, cols)]

    def measure_background(self, gray: np.ndarray) -> BackgroundStats:
        """
        Args:
            gray (np.ndarray): (H, W) single-channel image.

        Returns:
            BackgroundStats: mean and population std-dev of the border ring,
            or the neutral (127, 10) fallback when the ring is empty.
        """
        samples = self.collect_border_samples(gray)
        if samples.size == 0:
            logger.debug("Empty border sample set, using fallback background stats")
            return self._FALLBACK

        values = samples.astype(np.float64)
        mean = float(values.mean())
        variance = float(np.mean((values - mean) ** 2))
        stats = BackgroundStats(mean=mean, std_dev=float(np.sqrt(variance)))
        logger.debug(f"Background mean={stats.mean:.2f} std={stats.std_dev:.2f}")
        return stats

import cv2
import numpy as np


class AsciiPreviewService:
    """
    Text preview of a rendered edge image for the console.

    Each pixel of a downsampled copy maps onto a 10-character brightness ramp;
    strongly red pixels are forced to the most intense glyph.
    """

    RAMP: str = " .:-=+*#%@"
    HIGHLIGHT: str = "@"
    # character cells are roughly twice as tall as wide
    _ROW_SCALE: float = 0.5

    def target_size(self, width: int, height: int, max_width: int):
        target_width = min(max_width, width)
        aspect_ratio = height / width
        target_height = max(1, round(target_width * aspect_ratio * self._ROW_SCALE))
        return target_width, target_height

    def resize_for_ascii(self, pixels: np.ndarray, max_width: int) -> np.ndarray:
        h, w = pixels.shape[:2]
        size = self.target_size(w, h, max_width)
        return cv2.resize(pixels, size, interpolation=cv2.INTER_AREA)

    def character_for(self, r: int, g: int, b: int) -> str:
        if r > 200 and g < 50 and b < 50:
            return self.HIGHLIGHT

        brightness = (r + g + b) / (3.0 * 255.0)
        last = len(self.RAMP) - 1
        index = int(min(max(round(brightness * last), 0), last))
        return self.RAMP[index]

    def convert_to_ascii(self, resized: np.ndarray) -> str:
        """
        Args:
            resized (np.ndarray): (H, W, 3) uint8 BGR image, already at text size.

        Returns:
            str: H newline-terminated rows of W characters.
        """
        rows = []
        for row in resized.tolist():
            rows.append("".join(self.character_for(r, g, b) for b, g, r in row))
        return "".join(line + "\n" for line in rows)

    def render_ascii(self, pixels: np.ndarray, max_width: int) -> str:
        if max_width <= 0:
            return ""
        return self.convert_to_ascii(self.resize_for_ascii(pixels, max_width))

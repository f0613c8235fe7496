from pathlib import Path
from typing import Union, Tuple

import cv2
import numpy as np

from models.image import Image
from repositories.image_repository import ImageRepository


class ImageService:
    """
    I/O helpers plus the colour-level preparation every image goes through
    before mask construction (alpha flattening, grayscale, blur).
    """
    _WHITE: float = 255.0
    _BLUR_KERNEL: Tuple[int, int] = (7, 7)
    _BLUR_SIGMA: float = 2.0

    def __init__(self):
        self.image_repository = ImageRepository()

    def create_image(self, pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        return self.image_repository.create_image(pixels, path)

    def load(self, path: str | Path) -> Image:
        """Load a single image from disk into an Image object."""
        return self.image_repository.load(path)

    def save(self, image: Image) -> None:
        """
        Business-level method to save the image to its path.
        """
        self.image_repository.save(image)

    # ─── Preparation ──────────────────────────────────────────────────
    @classmethod
    def _flatten_alpha(cls, bgra: np.ndarray) -> np.ndarray:
        """
        Composite BGRA over an opaque white canvas:
        out = alpha * colour + (1 - alpha) * white, per pixel.
        """
        alpha = bgra[:, :, 3].astype("float32") / 255.0
        alpha = cv2.merge([alpha, alpha, alpha])  # (H,W,3)

        colour = bgra[:, :, :3].astype("float32")
        composed = colour * alpha + cls._WHITE * (1.0 - alpha)
        return np.clip(np.rint(composed), 0, 255).astype("uint8")

    def normalize(self, img: Image) -> Image:
        """
        Guarantee a 3-channel BGR buffer of identical size.

        Args:
            img (Image): Decoded image with 3 (BGR) or 4 (BGRA) channels.

        Returns:
            Image: A new Image that owns its pixels; the input is never aliased.

        Raises:
            ValueError: Channel count other than 3 or 4.
        """
        channels = img.channels
        if channels == 4:
            pixels = self._flatten_alpha(img.pixels)
        elif channels == 3:
            pixels = img.pixels.copy()
        else:
            raise ValueError(f"Unsupported channel count {channels}, expected 3 or 4")
        return self.create_image(pixels, img.path)

    @staticmethod
    def to_grayscale(img_pixels: np.ndarray) -> np.ndarray:
        return cv2.cvtColor(img_pixels, cv2.COLOR_BGR2GRAY)

    def blur(self, grayscale_pixels: np.ndarray) -> np.ndarray:
        return cv2.GaussianBlur(grayscale_pixels, self._BLUR_KERNEL, self._BLUR_SIGMA)

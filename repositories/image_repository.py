from pathlib import Path
from typing import Union, Iterable, List, Iterator, Optional
import logging
import os

import numpy as np
import cv2
from PIL import Image as PILImage
from dotenv import load_dotenv

from models.image import Image

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_EXTS = ".jpg,.jpeg,.png,.bmp,.tiff,.tif,.webp"


class ImageRepository:
    """
    Handles file I/O and directory layout for Image entities.
    Pixels travel as BGR(A) uint8, the way OpenCV decodes them.
    """
    def __init__(self):
        exts = os.getenv("VALID_IMAGE_EXTENSIONS") or DEFAULT_EXTS
        self.VALID_EXTS = {ext.strip().lower() for ext in exts.split(",") if ext.strip()}
        self.assets_dir_name = os.getenv("ASSETS_DIR_NAME", "Assets")
        self.output_dir_name = os.getenv("OUTPUT_DIR_NAME", "Output")

    @staticmethod
    def create_image(pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        if path is None:
            return Image(pixels)
        return Image(pixels=pixels, path=Path(path))

    @staticmethod
    def _to_uint8(arr: np.ndarray) -> np.ndarray:
        if arr.dtype == np.uint8:
            return arr
        if arr.dtype == np.uint16:
            return (arr // 257).astype(np.uint8)
        if arr.dtype.kind == "f":
            # float images are usually normalised to [0, 1]
            scale = 255.0 if arr.size and float(np.nanmax(arr)) <= 1.0 else 1.0
            arr = np.nan_to_num(arr.astype(np.float64) * scale)
            return np.clip(np.rint(arr), 0, 255).astype(np.uint8)
        return np.clip(arr, 0, 255).astype(np.uint8)

    @classmethod
    def load(cls, path: Union[str, Path]) -> Image:
        """
        Decode a file into a BGR (or BGRA when the file carries alpha) Image.
        Grayscale files are expanded to three channels. Files without alpha go
        through the colour decoder so EXIF orientation is applied.
        """
        path = Path(path)
        arr = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)

        if arr is None or arr.size == 0:
            raise FileNotFoundError(f"Image not found or unreadable: {path}")

        has_alpha = arr.ndim == 3 and arr.shape[2] == 4
        if not has_alpha and arr.dtype.kind != "f":
            colour = cv2.imread(str(path), cv2.IMREAD_COLOR)
            if colour is None or colour.size == 0:
                raise FileNotFoundError(f"Image not found or unreadable: {path}")
            return Image(pixels=colour, path=path)

        arr = cls._to_uint8(arr)
        if arr.ndim == 2:
            arr = cv2.cvtColor(arr, cv2.COLOR_GRAY2BGR)
        elif arr.shape[2] == 1:
            arr = cv2.cvtColor(arr[:, :, 0], cv2.COLOR_GRAY2BGR)
        return Image(pixels=arr, path=path)

    @staticmethod
    def save(image: Image) -> None:
        if image.path is None:
            raise ValueError("Image has no destination path")
        path = Path(image.path)
        path.parent.mkdir(parents=True, exist_ok=True)
        code = cv2.COLOR_BGRA2RGBA if image.channels == 4 else cv2.COLOR_BGR2RGB
        PILImage.fromarray(cv2.cvtColor(image.pixels, code)).save(path)

    # ─── Directory layout ─────────────────────────────────────────────
    def find_assets_dir(self, roots: Iterable[Union[str, Path]]) -> Optional[Path]:
        """
        Walk up from every root and return the first '<dir>/Assets' found.
        """
        for root in roots:
            directory = Path(root).resolve()
            for candidate_parent in (directory, *directory.parents):
                candidate = candidate_parent / self.assets_dir_name
                if candidate.is_dir():
                    return candidate
        return None

    def setup_output_dir(self, assets_dir: Union[str, Path]) -> Path:
        """Create (if needed) the output folder next to the assets folder."""
        assets_dir = Path(assets_dir).resolve()
        output_dir = assets_dir.parent / self.output_dir_name
        output_dir.mkdir(parents=True, exist_ok=True)
        return output_dir

    def list_image_files(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> List[Path]:
        """
        Image files in *folder* with an allowed extension, sorted by path.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(folder)

        allowed = {e.lower() for e in (exts or self.VALID_EXTS)}
        pattern = "**/*" if recursive else "*"

        files = []
        for p in folder.glob(pattern):
            if p.suffix.lower() not in allowed:
                logger.debug(f"Skipping due to extension: {p}")
                continue
            if not p.is_file():
                logger.debug(f"Skipping because not file: {p}")
                continue
            files.append(p)
        return sorted(files, key=str)

    def iter_dir(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Image]:
        """
        Yield Image objects one at a time.  Nothing accumulates in memory.
        """
        for p in self.list_image_files(folder, recursive=recursive, exts=exts):
            try:
                yield self.load(p)
            except FileNotFoundError as err:
                logger.warning(f"Skipping {p.name}: {err}")

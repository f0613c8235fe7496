# pipeline/batch_processor.py
from pathlib import Path
from typing import Iterable, List
import logging
import os

import cv2
from dotenv import load_dotenv
from tqdm import tqdm

from services.image_service import ImageService
from services.ascii_preview_service import AsciiPreviewService
from pipeline.edge_detector import detect_edges

# ------------------------------------------------------------------
# env‑vars
load_dotenv()
OUTPUT_PREFIX = os.getenv("OUTPUT_PREFIX", "output-")
OUTPUT_EXT    = os.getenv("OUTPUT_IMG_EXT", ".png")
PREVIEW_WIDTH = int(os.getenv("ASCII_PREVIEW_WIDTH", "72"))

logger = logging.getLogger(__name__)


def output_path_for(input_path: str | Path, output_dir: str | Path,
                    prefix: str = OUTPUT_PREFIX, ext: str = OUTPUT_EXT) -> Path:
    return Path(output_dir) / f"{prefix}{Path(input_path).stem}{ext}"


def print_preview(edges_pixels, *, width: int = PREVIEW_WIDTH,
                  ascii_service: AsciiPreviewService = AsciiPreviewService()) -> None:
    print("Preview:")
    print(ascii_service.render_ascii(edges_pixels, max_width=width))
    print()


def process_single_image(
    input_path: str | Path,
    output_dir: str | Path,
    *,
    image_service: ImageService = ImageService(),
    preview_width: int | None = PREVIEW_WIDTH,
) -> bool:
    """
    Load → detect edges → save → preview for one file.

    Returns:
        bool: True when the edge map was written. Load or write failures are
        logged and reported as False so the batch can carry on.
    """
    input_path = Path(input_path)
    destination = output_path_for(input_path, output_dir)

    logger.info(f"Processing: {input_path.name}...")
    try:
        source = image_service.load(input_path)
        edges = detect_edges(source, image_service=image_service)
        edges.path = destination
        image_service.save(edges)
    except (OSError, ValueError, cv2.error) as err:
        logger.warning(f"Skipping {input_path.name}: {err}")
        return False

    logger.info(f"Saved edge map to '{destination}'.")

    if preview_width:
        print_preview(edges.pixels, width=preview_width)
    return True


def process_images(
    image_files: Iterable[str | Path],
    output_dir: str | Path,
    *,
    image_service: ImageService = ImageService(),
    preview_width: int | None = PREVIEW_WIDTH,
    progress: bool = False,
) -> int:
    """
    Process every file in order. One bad file never stops the batch.

    Returns:
        int: Number of images successfully processed.
    """
    files: List[Path] = [Path(f) for f in image_files]
    processed_count = 0
    for input_path in tqdm(files, desc="edges", ncols=70, disable=not progress):
        if process_single_image(input_path, output_dir,
                                image_service=image_service,
                                preview_width=preview_width):
            processed_count += 1
    return processed_count

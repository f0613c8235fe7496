# pipeline/edge_detector.py
from typing import List

from models.contour import Contour
from models.image import Image
from services.image_service import ImageService
from services.background_service import BackgroundService
from services.mask_service import MaskService
from services.contour_service import ContourService
from services.edge_render_service import EdgeRenderService


def find_foreground_contours(
    image: Image,
    *,
    image_service: ImageService = ImageService(),
    background_service: BackgroundService = BackgroundService(),
    mask_service: MaskService = MaskService(),
    contour_service: ContourService = ContourService(),
) -> List[Contour]:
    """
    normalise → grayscale → blur → background stats → mask → top contours
    """
    prepared = image_service.normalize(image)
    gray = image_service.to_grayscale(prepared.pixels)
    blurred = image_service.blur(gray)

    stats = background_service.measure_background(blurred)
    mask = mask_service.build_mask(blurred, stats)
    return contour_service.find_main_contours(mask, image.area)


def detect_edges(
    image: Image,
    *,
    image_service: ImageService = ImageService(),
    background_service: BackgroundService = BackgroundService(),
    mask_service: MaskService = MaskService(),
    contour_service: ContourService = ContourService(),
    edge_render_service: EdgeRenderService = EdgeRenderService(),
) -> Image:
    """
    Turn a decoded photo into a line drawing of its dominant foreground objects.

    Args:
        image: BGR or BGRA Image. Left untouched.

    Returns:
        Image: New white (H, W, 3) canvas with the selected outlines drawn in
        blue. No path is set; the caller decides where it goes.
    """
    contours = find_foreground_contours(
        image,
        image_service=image_service,
        background_service=background_service,
        mask_service=mask_service,
        contour_service=contour_service,
    )
    canvas = edge_render_service.draw_contours_on_canvas(image.height, image.width, contours)
    return image_service.create_image(canvas)

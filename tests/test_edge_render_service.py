from __future__ import annotations

import numpy as np
import pytest

from models.contour import Contour
from services.contour_service import ContourService
from services.edge_render_service import EdgeRenderService


@pytest.fixture
def service() -> EdgeRenderService:
    return EdgeRenderService()


def test_no_contours_gives_white_canvas(service):
    canvas = service.draw_contours_on_canvas(100, 200, [])
    assert canvas.shape == (100, 200, 3)
    assert canvas.dtype == np.uint8
    assert canvas.min() == 255


def test_square_outline_drawn_in_blue(service):
    mask = np.zeros((100, 100), dtype=np.uint8)
    mask[30:70, 30:70] = 255
    contours = ContourService().find_main_contours(mask, mask.size)

    canvas = service.draw_contours_on_canvas(100, 100, contours)
    b, g, r = (int(v) for v in canvas[30, 50])
    assert b > 200 and g < 60 and r < 60
    assert tuple(canvas[50, 50]) == (255, 255, 255)
    assert tuple(canvas[5, 5]) == (255, 255, 255)


def test_simplify_square_to_corners(service):
    mask = np.zeros((100, 100), dtype=np.uint8)
    mask[30:70, 30:70] = 255
    contour = ContourService().find_main_contours(mask, mask.size)[0]
    assert len(service.simplify(contour)) == 4


def test_stroke_is_three_pixels_wide(service):
    mask = np.zeros((100, 100), dtype=np.uint8)
    mask[30:70, 30:70] = 255
    contours = ContourService().find_main_contours(mask, mask.size)

    canvas = service.draw_contours_on_canvas(100, 100, contours)
    column = canvas[:50, 50].astype(int)
    blue_rows = [y for y, (b, g, r) in enumerate(column) if b > 200 and r < 128]
    assert 2 <= len(blue_rows) <= 4
    assert min(blue_rows) >= 28 and max(blue_rows) <= 32


def test_diagonal_edges_are_antialiased(service):
    diamond = np.array([[[50, 10]], [[90, 50]], [[50, 90]], [[10, 50]]], dtype=np.int32)
    canvas = service.draw_contours_on_canvas(
        100, 100, [Contour(points=diamond, area=3200.0)])
    red = canvas[:, :, 2]
    assert np.any((red > 0) & (red < 255))

from __future__ import annotations

import numpy as np
import pytest

from models.background_stats import BackgroundStats
from services.background_service import BackgroundService
from services.mask_service import MaskService


@pytest.fixture
def service() -> MaskService:
    return MaskService()


class TestContrastThreshold:
    def test_bright_background_uses_fixed_threshold(self, service):
        assert service.contrast_threshold(BackgroundStats(230.0, 40.0)) == 5

    def test_dark_background_has_floor(self, service):
        assert service.contrast_threshold(BackgroundStats(50.0, 3.0)) == 10

    def test_dark_background_scales_with_noise(self, service):
        assert service.contrast_threshold(BackgroundStats(50.0, 25.5)) == 25.5


def test_contrast_mask_is_inclusive(service):
    gray = np.array([[195, 196, 200, 204, 205]], dtype=np.uint8)
    mask = service.create_contrast_mask(gray, BackgroundStats(200.0, 0.0))
    assert mask.tolist() == [[255, 0, 0, 0, 255]]


def test_otsu_flags_dark_object_on_light_background(service):
    gray = np.full((50, 50), 240, dtype=np.uint8)
    gray[20:30, 20:30] = 10
    mask = service.create_otsu_mask(gray, BackgroundStats(240.0, 0.0))
    assert mask[25, 25] == 255
    assert mask[2, 2] == 0


def test_otsu_flags_light_object_on_dark_background(service):
    gray = np.full((50, 50), 15, dtype=np.uint8)
    gray[20:30, 20:30] = 230
    mask = service.create_otsu_mask(gray, BackgroundStats(15.0, 0.0))
    assert mask[25, 25] == 255
    assert mask[2, 2] == 0


def test_combine_is_logical_and(service):
    a = np.array([[255, 255, 0, 0]], dtype=np.uint8)
    b = np.array([[255, 0, 255, 0]], dtype=np.uint8)
    assert service.combine_masks(a, b).tolist() == [[255, 0, 0, 0]]


def test_morphology_removes_speckle(service):
    mask = np.zeros((40, 40), dtype=np.uint8)
    mask[20, 20] = 255
    assert service.apply_morphology(mask).max() == 0


def test_morphology_bridges_small_gap(service):
    mask = np.zeros((60, 80), dtype=np.uint8)
    mask[20:40, 10:38] = 255
    mask[20:40, 40:70] = 255
    cleaned = service.apply_morphology(mask)
    assert cleaned[30, 38] == 255
    assert cleaned[30, 39] == 255


def test_uniform_image_yields_empty_mask(service):
    gray = np.full((100, 200), 255, dtype=np.uint8)
    stats = BackgroundService().measure_background(gray)
    assert service.build_mask(gray, stats).max() == 0


def test_square_is_foreground(service):
    gray = np.full((100, 100), 255, dtype=np.uint8)
    gray[30:70, 30:70] = 0
    stats = BackgroundService().measure_background(gray)
    mask = service.build_mask(gray, stats)
    assert mask[50, 50] == 255
    assert mask[5, 5] == 0
    assert mask.shape == gray.shape

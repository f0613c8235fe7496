"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from models.image import Image


def white_bgr(height: int, width: int) -> np.ndarray:
    return np.full((height, width, 3), 255, dtype=np.uint8)


def square_on_white(size: int = 100, side: int = 40, value: int = 0) -> np.ndarray:
    pixels = white_bgr(size, size)
    start = (size - side) // 2
    pixels[start:start + side, start:start + side] = value
    return pixels


@pytest.fixture
def white_image() -> Image:
    return Image(pixels=white_bgr(100, 200))


@pytest.fixture
def square_image() -> Image:
    return Image(pixels=square_on_white())


@pytest.fixture
def three_squares_image() -> Image:
    """Four dark squares of different sizes on white, well apart."""
    pixels = white_bgr(300, 300)
    pixels[20:100, 20:100] = 0      # 80x80
    pixels[20:90, 180:250] = 0      # 70x70
    pixels[180:240, 20:80] = 0      # 60x60
    pixels[190:240, 190:240] = 0    # 50x50
    return Image(pixels=pixels)


@pytest.fixture
def bgra_image() -> Image:
    pixels = np.zeros((10, 10, 4), dtype=np.uint8)
    pixels[:, :, :3] = (0, 0, 200)
    pixels[:, :5, 3] = 255     # opaque left half
    pixels[:, 5:, 3] = 0       # transparent right half
    pixels[0, 0, 3] = 128      # half-transparent corner
    return Image(pixels=pixels)


@pytest.fixture
def noisy_border_image() -> Image:
    """Light square on a dark, blocky textured background."""
    rng = np.random.default_rng(7)
    blocks = rng.choice(np.array([30, 90], dtype=np.uint8), size=(20, 20))
    gray = np.kron(blocks, np.ones((8, 8), dtype=np.uint8))
    gray[48:112, 48:112] = 230
    return Image(pixels=np.dstack([gray, gray, gray]))

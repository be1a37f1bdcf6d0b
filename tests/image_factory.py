"""Synthetic screenshots for the comparison tests."""
import cv2
import numpy as np

# BGR colors
NEAR_WHITE = (240, 240, 240)
RED = (0, 0, 220)
GREEN = (40, 180, 40)
MUSTARD = (30, 200, 230)
BLUE = (200, 60, 20)
PURPLE = (160, 40, 120)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


def solid(width, height, bgr):
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:] = bgr
    return img


def blocks(width, height, block, seed):
    """Random flat-colored blocks; resampling by an integer factor keeps block interiors exact."""
    rng = np.random.default_rng(seed)
    grid = rng.integers(0, 256, size=(height // block, width // block, 3), dtype=np.uint8)
    return np.repeat(np.repeat(grid, block, axis=0), block, axis=1)


def product_photo(size, background, body, accent):
    """A flat product shot: round body with a rectangular label on a plain backdrop."""
    img = solid(size, size, background)
    center = size // 2
    cv2.circle(img, (center, center), size // 4, body, thickness=-1)
    cv2.rectangle(img, (center - size // 8, center + size // 3),
                  (center + size // 8, center + size // 3 + size // 10), accent, thickness=-1)
    return img


def mug_photo(size):
    return product_photo(size, NEAR_WHITE, RED, GREEN)


def lamp_photo(size):
    return product_photo(size, MUSTARD, BLUE, PURPLE)


def thumbnail(img, size):
    return cv2.resize(img, (size, size), interpolation=cv2.INTER_AREA)

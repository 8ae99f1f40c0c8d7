"""
Programmatic test frame generation for cone tracking tests.
"""

import numpy as np
import cv2
from typing import Tuple


ORANGE_HSV = (10, 255, 255)
BLUE_HSV = (110, 255, 255)


def hsv_to_bgr(hsv: Tuple[int, int, int]) -> Tuple[int, int, int]:
    """Convert a single HSV color to a BGR pixel value."""
    patch = np.zeros((1, 1, 3), dtype=np.uint8)
    patch[:, :] = hsv
    b, g, r = cv2.cvtColor(patch, cv2.COLOR_HSV2BGR)[0, 0]
    return int(b), int(g), int(r)


def create_blank_frame(size: Tuple[int, int] = (200, 200)) -> np.ndarray:
    """
    Create a white BGR frame with nothing colored in it.

    Args:
        size: Frame dimensions (height, width)
    """
    return np.ones((size[0], size[1], 3), dtype=np.uint8) * 255


def create_cone_frame(
    size: Tuple[int, int] = (200, 200),
    top_left: Tuple[int, int] = (50, 50),
    cone_size: Tuple[int, int] = (100, 100),
    hsv: Tuple[int, int, int] = ORANGE_HSV,
) -> np.ndarray:
    """
    Create a white frame with one solid colored rectangle.

    Args:
        size: Frame dimensions (height, width)
        top_left: (x, y) of the rectangle's top-left pixel
        cone_size: Rectangle (width, height) in pixels
        hsv: HSV color of the rectangle

    Returns:
        BGR frame
    """
    frame = create_blank_frame(size)
    add_rectangle(frame, top_left, cone_size, hsv)
    return frame


def add_rectangle(
    frame: np.ndarray,
    top_left: Tuple[int, int],
    rect_size: Tuple[int, int],
    hsv: Tuple[int, int, int] = ORANGE_HSV,
) -> np.ndarray:
    """Paint a solid HSV-colored rectangle onto a BGR frame in place."""
    x, y = top_left
    width, height = rect_size
    frame[y:y + height, x:x + width] = hsv_to_bgr(hsv)
    return frame


def rectangle_points(x: int, y: int, width: int, height: int):
    """Corner points of an axis-aligned rectangle, as a boundary."""
    return [(x, y), (x + width, y), (x + width, y + height), (x, y + height)]

"""
Color mask detection and cleaning operations.
"""

import cv2
import numpy as np
from typing import List

from .color_config import ColorBandConfig


# Conversion chains from each supported frame layout to HSV (hue 0-179)
HSV_CONVERSIONS = {
    "bgr": [cv2.COLOR_BGR2HSV],
    "rgb": [cv2.COLOR_RGB2HSV],
    "bgra": [cv2.COLOR_BGRA2BGR, cv2.COLOR_BGR2HSV],
    "rgba": [cv2.COLOR_RGBA2RGB, cv2.COLOR_RGB2HSV],
}

CHANNEL_COUNTS = {
    "bgr": 3,
    "rgb": 3,
    "bgra": 4,
    "rgba": 4,
}


def validate_frame(frame: np.ndarray, color_order: str = "bgr") -> None:
    """
    Check that a frame has the layout implied by its color order.

    Raises:
        ValueError: If the color order is unknown or the frame layout does not match
    """
    if color_order not in HSV_CONVERSIONS:
        raise ValueError(
            f"Unknown color order: {color_order}. Available: {list(HSV_CONVERSIONS.keys())}"
        )

    if frame.dtype != np.uint8:
        raise ValueError(f"Expected a uint8 frame, got dtype {frame.dtype}")

    expected = CHANNEL_COUNTS[color_order]
    if frame.ndim != 3 or frame.shape[2] != expected:
        raise ValueError(
            f"Expected a {expected}-channel {color_order} frame, got shape {frame.shape}"
        )
    if frame.shape[0] == 0 or frame.shape[1] == 0:
        raise ValueError(f"Frame has no pixels, got shape {frame.shape}")


def convert_to_hsv(frame: np.ndarray, color_order: str = "bgr") -> np.ndarray:
    """
    Convert a color frame to OpenCV HSV.

    The input frame is never modified; cv2.cvtColor always allocates.

    Args:
        frame: Color frame (uint8)
        color_order: Channel layout of the frame ("bgr", "rgb", "bgra", "rgba")

    Returns:
        HSV image (uint8, 3 channels)
    """
    validate_frame(frame, color_order)

    converted = frame
    for code in HSV_CONVERSIONS[color_order]:
        converted = cv2.cvtColor(converted, code)

    return converted


def create_band_mask(
    hsv: np.ndarray,
    band_config: ColorBandConfig,
) -> np.ndarray:
    """
    Create a binary mask of HSV pixels inside the acceptance band.

    A hue interval that wraps past 179 is tested as two ranges and the
    results are OR-ed together.

    Args:
        hsv: HSV image
        band_config: Target color and tolerance radius

    Returns:
        Binary mask (uint8) where matching pixels are 255, others are 0
    """
    masks: List[np.ndarray] = []
    for color_range in band_config.acceptance_bands():
        lower, upper = color_range.to_numpy()
        masks.append(cv2.inRange(hsv, lower, upper))

    mask = masks[0]
    for other in masks[1:]:
        mask = cv2.bitwise_or(mask, other)

    return mask


def create_color_mask(
    frame: np.ndarray,
    band_config: ColorBandConfig,
    color_order: str = "bgr",
) -> np.ndarray:
    """
    Create a binary mask for frame pixels matching the target color.

    Args:
        frame: Color frame
        band_config: Target color and tolerance radius
        color_order: Channel layout of the frame

    Returns:
        Binary mask (uint8) with the frame's height and width

    Example:
        >>> mask = create_color_mask(frame, ColorBandConfig())
    """
    hsv = convert_to_hsv(frame, color_order)
    return create_band_mask(hsv, band_config)


def dilate_mask(
    mask: np.ndarray,
    iterations: int = 1,
    kernel_size: int = 3,
) -> np.ndarray:
    """
    Grow matching regions so that nearly touching fragments merge.

    Args:
        mask: Binary mask (uint8)
        iterations: Number of dilation passes (0 returns the mask unchanged)
        kernel_size: Size of the rectangular structuring element

    Returns:
        Dilated binary mask
    """
    # Nothing to grow
    if iterations <= 0 or mask.size == 0 or np.count_nonzero(mask) == 0:
        return mask

    kernel = cv2.getStructuringElement(
        cv2.MORPH_RECT,
        (kernel_size, kernel_size)
    )

    return cv2.dilate(mask, kernel, iterations=iterations)

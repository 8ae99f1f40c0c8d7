"""
Debug overlay drawing for cone detections.

Purely presentational: drawing never changes the detection values.
"""

import cv2
import numpy as np
from typing import List, Optional, Tuple

from .cone_locator import denormalize_offsets
from .models import ConeDetection, FrameGeometry


# BGR(A) colors; red in BGR frames
CONTOUR_COLOR = (0, 0, 255, 255)
MARKER_RADIUS = 5
TEXT_COLOR = (255, 255, 255, 255)


def _color_for(frame: np.ndarray, color: Tuple[int, ...]) -> Tuple[int, ...]:
    """Trim a 4-component color to the frame's channel count."""
    channels = frame.shape[2] if frame.ndim == 3 else 1
    return tuple(color[:channels])


def draw_detection(
    frame: np.ndarray,
    contours: List[np.ndarray],
    detection: ConeDetection,
    geometry: FrameGeometry,
    contour_color: Tuple[int, ...] = CONTOUR_COLOR,
) -> np.ndarray:
    """
    Draw all blob contours and a marker at the cone center onto the frame.

    The frame is annotated in place and also returned.

    Args:
        frame: Frame to draw on
        contours: All contours extracted for this frame
        detection: Result of locating the cone
        geometry: Session frame geometry
        contour_color: Color for contours and marker

    Returns:
        The annotated frame
    """
    color = _color_for(frame, contour_color)

    if contours:
        cv2.drawContours(frame, contours, -1, color)

    if detection.found:
        center_x, center_y = denormalize_offsets(detection, geometry)
        cv2.circle(
            frame,
            (int(round(center_x)), int(round(center_y))),
            MARKER_RADIUS,
            color,
            -1,
        )

    return frame


def draw_status_text(
    frame: np.ndarray,
    detection: ConeDetection,
    origin: Optional[Tuple[int, int]] = None,
) -> np.ndarray:
    """
    Write the formatted detection values onto the frame.

    Args:
        frame: Frame to draw on (modified in place)
        detection: Result of locating the cone
        origin: Top-left text position (default: (10, 20))

    Returns:
        The annotated frame
    """
    x, y = origin or (10, 20)
    left_right, top_bottom, size = detection.format_display()
    labels = [
        f"Left-right: {left_right}",
        f"Top-bottom: {top_bottom}",
        f"Size: {size}",
    ]

    color = _color_for(frame, TEXT_COLOR)
    for i, label in enumerate(labels):
        cv2.putText(
            frame,
            label,
            (x, y + i * 20),
            cv2.FONT_HERSHEY_SIMPLEX,
            0.5,
            color,
            1,
        )

    return frame

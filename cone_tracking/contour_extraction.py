"""
Contour extraction and contour geometry.
"""

import cv2
import numpy as np
from typing import List, Sequence, Tuple, Union


Boundary = Union[np.ndarray, Sequence[Tuple[int, int]]]


def extract_contours(mask: np.ndarray) -> List[np.ndarray]:
    """
    Extract the outer boundary of every connected region in a binary mask.

    No area filtering is applied: single pixel regions are returned too.

    Args:
        mask: Binary mask (uint8) with white (255) regions to extract

    Returns:
        List of contours (each is Nx1x2 int32 numpy array)

    Example:
        >>> contours = extract_contours(mask)
    """
    # Handle empty mask
    if mask.size == 0 or np.count_nonzero(mask) == 0:
        return []

    contours, _ = cv2.findContours(
        mask,
        cv2.RETR_EXTERNAL,  # Only external contours
        cv2.CHAIN_APPROX_SIMPLE  # Compress horizontal/vertical segments
    )

    return list(contours)


def points_to_contour(points: Sequence[Tuple[int, int]]) -> np.ndarray:
    """
    Convert a list of (x, y) points to OpenCV contour format.

    Args:
        points: List of (x, y) tuples

    Returns:
        OpenCV contour (Nx1x2 int32 array)
    """
    array = np.array(points, dtype=np.int32)
    return array.reshape((-1, 1, 2))


def as_contour(boundary: Boundary) -> np.ndarray:
    """Return the boundary as an OpenCV contour, converting point lists."""
    if isinstance(boundary, np.ndarray):
        if boundary.dtype in (np.int32, np.float32):
            return boundary.reshape((-1, 1, 2))
        return boundary.astype(np.float32).reshape((-1, 1, 2))
    return points_to_contour(boundary)


def contour_to_points(contour: np.ndarray) -> List[Tuple[int, int]]:
    """
    Convert an OpenCV contour to a list of (x, y) Python int tuples.

    Args:
        contour: OpenCV contour (Nx1x2 array)

    Returns:
        List of (x, y) tuples as Python integers
    """
    return [(int(point[0][0]), int(point[0][1])) for point in contour]


def contour_area(boundary: Boundary) -> float:
    """
    Calculate the enclosed area of a boundary (shoelace formula).

    Args:
        boundary: OpenCV contour or list of (x, y) vertices

    Returns:
        Area in square pixels (always non-negative)
    """
    contour = as_contour(boundary)
    if len(contour) < 3:
        return 0.0
    return float(cv2.contourArea(contour))


def contour_centroid(boundary: Boundary) -> Tuple[float, float]:
    """
    Calculate the area-weighted centroid of a boundary.

    Uses first-order moments: (m10 / m00, m01 / m00).

    Args:
        boundary: OpenCV contour or list of (x, y) vertices

    Returns:
        (x, y) centroid in pixel coordinates

    Raises:
        ValueError: If the boundary encloses no area
    """
    moments = cv2.moments(as_contour(boundary))
    if moments["m00"] == 0:
        raise ValueError("Cannot compute the centroid of a zero-area boundary")

    return (
        moments["m10"] / moments["m00"],
        moments["m01"] / moments["m00"],
    )

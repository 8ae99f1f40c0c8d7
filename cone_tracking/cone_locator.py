"""
Reduce a frame's color blobs to a single cone location.

Coordinate contract with the steering code:
    horizontal_offset = centroid_y / (height / 2) - 1    (-1 left ... 1 right)
    vertical_offset   = centroid_x / width               (0 ... 1, not centered)

The phone camera is mounted rotated, so the pixel Y axis is the robot's
left-right axis. Keep these formulas exactly as they are; downstream
steering logic depends on them.
"""

import logging
from typing import Optional, Sequence, Tuple

from .contour_extraction import Boundary, as_contour, contour_area, contour_centroid
from .models import ConeDetection, FrameGeometry

logger = logging.getLogger(__name__)


DEFAULT_MIN_SIZE_FRACTION = 0.001


def validate_min_size_fraction(min_size_fraction: float) -> None:
    """
    Raises:
        ValueError: If the threshold is not in (0, 1]
    """
    if not (0.0 < min_size_fraction <= 1.0):
        raise ValueError(
            f"min_size_fraction must be > 0.0 and <= 1.0, got {min_size_fraction}"
        )


def select_largest(boundaries: Sequence[Boundary]) -> Optional[Tuple[int, float]]:
    """
    Find the boundary with the greatest enclosed area.

    Ties keep the earliest boundary in input order.

    Args:
        boundaries: Contours or point lists

    Returns:
        (index, area) of the largest boundary, or None if there are none
    """
    best_index = None
    best_area = 0.0

    for index, boundary in enumerate(boundaries):
        area = contour_area(boundary)
        if best_index is None or area > best_area:
            best_index = index
            best_area = area

    if best_index is None:
        return None
    return best_index, best_area


def normalize_centroid(
    centroid: Tuple[float, float],
    geometry: FrameGeometry,
) -> Tuple[float, float]:
    """
    Map a pixel centroid to (horizontal_offset, vertical_offset).

    See the module docstring for the axis swap.
    """
    centroid_x, centroid_y = centroid
    horizontal_offset = centroid_y / (geometry.height / 2.0) - 1.0
    vertical_offset = centroid_x / geometry.width
    return horizontal_offset, vertical_offset


def locate_cone(
    boundaries: Sequence[Boundary],
    min_size_fraction: float,
    geometry: FrameGeometry,
) -> ConeDetection:
    """
    Locate the cone among a frame's color blobs.

    Steps:
    1. No boundaries -> not found
    2. Pick the largest boundary by area
    3. Reject it if area / frame area < min_size_fraction
    4. Compute its centroid from moments
    5. Normalize the centroid to the steering coordinates

    The size check must run before the centroid: a boundary that passes it
    has positive area, so the moment division is safe.

    Args:
        boundaries: Contours from BlobExtractor.process (or point lists)
        min_size_fraction: Smallest accepted area fraction, e.g. 0.001
        geometry: Frame dimensions of the current session

    Returns:
        ConeDetection; found=False is a normal outcome, not an error

    Raises:
        ValueError: If min_size_fraction is not in (0, 1]
    """
    validate_min_size_fraction(min_size_fraction)

    # Step 1: anything matching the target color at all?
    if len(boundaries) == 0:
        logger.debug("No blobs in frame")
        return ConeDetection.not_found()

    # Step 2: only the largest blob is considered
    index, largest_area = select_largest(boundaries)

    # Step 3: size requirement
    size_fraction = largest_area / geometry.area
    if size_fraction < min_size_fraction:
        logger.debug(
            f"Largest of {len(boundaries)} blobs too small: "
            f"{size_fraction:.5f} < {min_size_fraction}"
        )
        return ConeDetection.not_found()

    # Step 4: centroid
    contour = as_contour(boundaries[index])
    centroid = contour_centroid(contour)

    # Step 5: steering coordinates
    horizontal_offset, vertical_offset = normalize_centroid(centroid, geometry)

    logger.debug(
        f"Cone at blob {index}/{len(boundaries)}: area={largest_area:.1f}, "
        f"centroid=({centroid[0]:.1f}, {centroid[1]:.1f})"
    )

    return ConeDetection(
        found=True,
        horizontal_offset=horizontal_offset,
        vertical_offset=vertical_offset,
        size_fraction=size_fraction,
        centroid=centroid,
        contour=contour,
    )


class ConeLocator:
    """
    Session-bound cone locator.

    Holds the frame geometry and size threshold for one camera session
    so each frame only needs its boundaries.

    Example:
        >>> locator = ConeLocator(FrameGeometry(640, 480), min_size_fraction=0.001)
        >>> detection = locator.locate(contours)
        >>> if detection.found:
        ...     print(detection.horizontal_offset)
    """

    def __init__(
        self,
        geometry: FrameGeometry,
        min_size_fraction: float = DEFAULT_MIN_SIZE_FRACTION,
    ):
        validate_min_size_fraction(min_size_fraction)
        self.geometry = geometry
        self.min_size_fraction = min_size_fraction

    def locate(self, boundaries: Sequence[Boundary]) -> ConeDetection:
        return locate_cone(boundaries, self.min_size_fraction, self.geometry)


def denormalize_offsets(detection: ConeDetection, geometry: FrameGeometry) -> Tuple[float, float]:
    """Map (horizontal_offset, vertical_offset) back to pixel (x, y)."""
    x = detection.vertical_offset * geometry.width
    y = (detection.horizontal_offset + 1.0) / 2.0 * geometry.height
    return x, y

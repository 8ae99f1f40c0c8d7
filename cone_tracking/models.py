"""
Data structures for cone detection results.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional, Tuple
import numpy as np

from .contour_extraction import contour_to_points


NOT_FOUND_PLACEHOLDER = "---"


@dataclass(frozen=True)
class FrameGeometry:
    """
    Width and height of the frames in one camera session.

    Fixed from session start to session stop; the area is computed once.
    """
    width: int
    height: int

    def __post_init__(self):
        """Validate frame dimensions."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Frame dimensions must be positive, got {self.width}x{self.height}"
            )

    @property
    def area(self) -> float:
        return float(self.width) * float(self.height)

    def matches(self, frame: np.ndarray) -> bool:
        """Check whether a frame has this geometry."""
        return frame.ndim >= 2 and frame.shape[0] == self.height and frame.shape[1] == self.width

    def to_dict(self) -> Dict[str, int]:
        return {"width": int(self.width), "height": int(self.height)}

    @classmethod
    def from_frame(cls, frame: np.ndarray) -> "FrameGeometry":
        """Create from a frame's shape (height, width, ...)."""
        height, width = frame.shape[:2]
        return cls(width=int(width), height=int(height))


@dataclass
class ConeDetection:
    """
    Result of locating the cone in one frame.

    Attributes:
        found: Whether a cone large enough was found
        horizontal_offset: Left-right location, -1 (left) ... 1 (right).
            Derived from the pixel Y axis because the camera is mounted rotated.
        vertical_offset: Top-bottom location, 0 ... 1.
            Derived from the pixel X axis, not re-centered.
        size_fraction: Area of the cone relative to the frame area
        centroid: (x, y) centroid of the cone in pixels, when found
        contour: The selected contour (Nx1x2), when found
    """
    found: bool
    horizontal_offset: float = 0.0
    vertical_offset: float = 0.0
    size_fraction: float = 0.0
    centroid: Optional[Tuple[float, float]] = None
    contour: Optional[np.ndarray] = None

    def as_tuple(self) -> Tuple[bool, float, float, float]:
        return (self.found, self.horizontal_offset, self.vertical_offset, self.size_fraction)

    def format_display(self) -> Tuple[str, str, str]:
        """
        Format the three values for display.

        Returns:
            ("%.3f", "%.3f", "%.5f") strings, or placeholders when not found
        """
        if not self.found:
            return (NOT_FOUND_PLACEHOLDER, NOT_FOUND_PLACEHOLDER, NOT_FOUND_PLACEHOLDER)
        return (
            f"{self.horizontal_offset:.3f}",
            f"{self.vertical_offset:.3f}",
            f"{self.size_fraction:.5f}",
        )

    def to_dict(self, include_contour: bool = False) -> Dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        if not self.found:
            return {"found": False}

        result = {
            "found": True,
            "horizontal_offset": float(self.horizontal_offset),
            "vertical_offset": float(self.vertical_offset),
            "size_fraction": float(self.size_fraction),
        }
        if self.centroid is not None:
            result["centroid"] = {"x": float(self.centroid[0]), "y": float(self.centroid[1])}
        if include_contour and self.contour is not None:
            result["contour"] = [{"x": x, "y": y} for x, y in contour_to_points(self.contour)]
        return result

    @classmethod
    def not_found(cls) -> "ConeDetection":
        """Create an empty result (no cone detected)."""
        return cls(found=False)

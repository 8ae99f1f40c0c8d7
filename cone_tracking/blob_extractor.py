"""
Color blob extraction: frame -> contours of pixels matching the target color.
"""

import logging
import threading
from typing import Any, List, Optional

import numpy as np

from .color_config import ColorBandConfig
from .config import MorphologySettings
from .contour_extraction import extract_contours
from .mask_detection import create_color_mask, dilate_mask

logger = logging.getLogger(__name__)


def extract_blobs(
    frame: np.ndarray,
    band_config: ColorBandConfig,
    color_order: str = "bgr",
    morphology: Optional[MorphologySettings] = None,
) -> List[np.ndarray]:
    """
    Extract the outer contours of all blobs matching the target color.

    Every blob is reported regardless of size; ranking and size rejection
    happen in the cone locator.

    Args:
        frame: Color frame (not modified)
        band_config: Target color and tolerance radius
        color_order: Channel layout of the frame
        morphology: Optional mask dilation settings

    Returns:
        List of contours (each is Nx1x2 int32 numpy array)

    Raises:
        ValueError: If the frame layout does not match color_order
    """
    mask = create_color_mask(frame, band_config, color_order)

    if morphology is not None:
        mask = dilate_mask(mask, morphology.dilate_iterations, morphology.kernel_size)

    contours = extract_contours(mask)
    logger.debug(f"Extracted {len(contours)} blobs")
    return contours


class BlobExtractor:
    """
    Finds color blobs using a replaceable target color and tolerance.

    The configuration is an immutable ColorBandConfig swapped under a lock;
    process() takes one snapshot per call so a concurrent setter never
    changes the band halfway through a frame.

    Example:
        >>> extractor = BlobExtractor()
        >>> extractor.set_target_color((10, 255, 255))
        >>> extractor.set_tolerance_radius((25, 50, 50))
        >>> contours = extractor.process(frame)
    """

    def __init__(
        self,
        band_config: Optional[ColorBandConfig] = None,
        color_order: str = "bgr",
        morphology: Optional[MorphologySettings] = None,
    ):
        """
        Initialize the blob extractor.

        Args:
            band_config: Initial target color and tolerance. If None, uses defaults.
            color_order: Channel layout of frames passed to process().
            morphology: Optional mask dilation settings.
        """
        self._lock = threading.Lock()
        self._band_config = band_config or ColorBandConfig()
        self.color_order = color_order
        self.morphology = morphology

    @property
    def band_config(self) -> ColorBandConfig:
        with self._lock:
            return self._band_config

    def set_band_config(self, band_config: ColorBandConfig):
        """Replace target color and tolerance radius together."""
        with self._lock:
            self._band_config = band_config

    def set_target_color(self, color: Any):
        """
        Replace the target color; takes effect on the next process() call.

        Raises:
            ValueError: If a channel is out of range
        """
        with self._lock:
            self._band_config = self._band_config.with_target(color)

    def set_tolerance_radius(self, radius: Any):
        """
        Replace the tolerance radius; takes effect on the next process() call.

        Raises:
            ValueError: If a channel is out of range
        """
        with self._lock:
            self._band_config = self._band_config.with_radius(radius)

    def process(
        self,
        frame: np.ndarray,
        band_config: Optional[ColorBandConfig] = None,
    ) -> List[np.ndarray]:
        """
        Extract blobs from one frame.

        Args:
            frame: Color frame in this extractor's color order
            band_config: Caller-owned configuration overriding the current one

        Returns:
            List of contours, possibly empty
        """
        if band_config is None:
            band_config = self.band_config

        return extract_blobs(frame, band_config, self.color_order, self.morphology)

"""
Camera session lifecycle: start with the view size, process frames, stop.
"""

import logging
from typing import Optional

import numpy as np

from .blob_extractor import BlobExtractor
from .config import TrackerConfig
from .cone_locator import ConeLocator
from .mask_detection import CHANNEL_COUNTS
from .models import ConeDetection, FrameGeometry
from .overlay import draw_detection

logger = logging.getLogger(__name__)


class TrackingSession:
    """
    Runs blob extraction and cone location for a stream of frames.

    The frame size is fixed when the session starts; frames of any other
    size are skipped as not found.

    Example:
        >>> session = TrackingSession(TrackerConfig.default())
        >>> session.start(640, 480)
        >>> detection = session.process_frame(frame)
        >>> session.stop()
    """

    def __init__(self, config: Optional[TrackerConfig] = None):
        self.config = config or TrackerConfig.default()
        self.extractor = BlobExtractor(
            color_order=self.config.color_order,
            morphology=self.config.morphology,
        )
        self.geometry: Optional[FrameGeometry] = None
        self.locator: Optional[ConeLocator] = None
        self.frames_processed = 0

    @property
    def is_active(self) -> bool:
        return self.geometry is not None

    def start(self, width: int, height: int):
        """
        Start a session for frames of the given size.

        Applies the configured target color and tolerance to the extractor.

        Raises:
            ValueError: If width or height is not positive
        """
        geometry = FrameGeometry(width=int(width), height=int(height))

        self.extractor.set_band_config(self.config.band_config())

        self.geometry = geometry
        self.locator = ConeLocator(geometry, self.config.min_size_fraction)
        self.frames_processed = 0

        logger.info(
            f"Session started: {geometry.width}x{geometry.height}, "
            f"target={self.config.target_color.as_tuple()}, "
            f"radius={self.config.tolerance_radius.as_tuple()}"
        )

    def stop(self):
        """Stop the session."""
        if self.is_active:
            logger.info(f"Session stopped after {self.frames_processed} frames")
        self.geometry = None
        self.locator = None

    def _frame_usable(self, frame: np.ndarray) -> bool:
        if frame.dtype != np.uint8:
            logger.warning(f"Skipping frame with dtype {frame.dtype}: expected uint8")
            return False
        expected_channels = CHANNEL_COUNTS[self.config.color_order]
        if frame.ndim != 3 or frame.shape[2] != expected_channels:
            logger.warning(
                f"Skipping frame with shape {frame.shape}: "
                f"expected {expected_channels} channels ({self.config.color_order})"
            )
            return False
        if not self.geometry.matches(frame):
            logger.warning(
                f"Skipping frame of size {frame.shape[1]}x{frame.shape[0]}: "
                f"session is {self.geometry.width}x{self.geometry.height}"
            )
            return False
        return True

    def process_frame(self, frame: np.ndarray, draw_overlay: bool = False) -> ConeDetection:
        """
        Locate the cone in one frame.

        Args:
            frame: Color frame in the configured color order
            draw_overlay: Draw contours and the cone marker onto the frame

        Returns:
            ConeDetection for this frame

        Raises:
            RuntimeError: If the session has not been started
        """
        if not self.is_active:
            raise RuntimeError("Session not started; call start(width, height) first")

        self.frames_processed += 1

        if not self._frame_usable(frame):
            return ConeDetection.not_found()

        contours = self.extractor.process(frame)
        detection = self.locator.locate(contours)

        if draw_overlay:
            draw_detection(frame, contours, detection, self.geometry)

        return detection

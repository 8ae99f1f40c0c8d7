"""
Cone Tracking Package

Locates a single color-distinctive object (a traffic cone) in camera frames
and reports its normalized position and size as a steering signal.
"""

from .color_config import ColorBandConfig, ColorRange, HsvColor
from .blob_extractor import BlobExtractor, extract_blobs
from .cone_locator import ConeLocator, locate_cone
from .config import TrackerConfig, MorphologySettings
from .models import ConeDetection, FrameGeometry
from .session import TrackingSession

__all__ = [
    "ColorBandConfig",
    "ColorRange",
    "HsvColor",
    "BlobExtractor",
    "extract_blobs",
    "ConeLocator",
    "locate_cone",
    "TrackerConfig",
    "MorphologySettings",
    "ConeDetection",
    "FrameGeometry",
    "TrackingSession",
]

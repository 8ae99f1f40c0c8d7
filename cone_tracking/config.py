"""
Tracker configuration: target color, tolerance, size threshold and mask settings.
"""

from dataclasses import dataclass, field
from typing import Dict, Any

from .color_config import (
    ColorBandConfig,
    HsvColor,
    DEFAULT_TARGET_COLOR,
    DEFAULT_TOLERANCE_RADIUS,
)
from .cone_locator import DEFAULT_MIN_SIZE_FRACTION, validate_min_size_fraction
from .mask_detection import HSV_CONVERSIONS


@dataclass
class MorphologySettings:
    """Settings for the optional mask dilation before contour tracing."""
    dilate_iterations: int = 0
    kernel_size: int = 3

    def __post_init__(self):
        """Validate morphology settings."""
        if self.kernel_size < 1:
            raise ValueError(f"kernel_size must be >= 1, got {self.kernel_size}")
        if self.dilate_iterations < 0:
            raise ValueError(f"dilate_iterations must be >= 0, got {self.dilate_iterations}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "dilate_iterations": self.dilate_iterations,
            "kernel_size": self.kernel_size,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MorphologySettings":
        """Create from dictionary."""
        return cls(
            dilate_iterations=data.get("dilate_iterations", 0),
            kernel_size=data.get("kernel_size", 3),
        )


@dataclass
class TrackerConfig:
    """
    Configuration for one cone tracking session.

    Attributes:
        target_color: HSV color of the cone
        tolerance_radius: Accepted distance from the target per HSV channel
        min_size_fraction: Smallest blob area, as a fraction of the frame, called a cone
        color_order: Channel layout of incoming frames ("bgr", "rgb", "bgra", "rgba")
        morphology: Mask dilation settings
    """
    target_color: HsvColor = DEFAULT_TARGET_COLOR
    tolerance_radius: HsvColor = DEFAULT_TOLERANCE_RADIUS
    min_size_fraction: float = DEFAULT_MIN_SIZE_FRACTION
    color_order: str = "bgr"
    morphology: MorphologySettings = field(default_factory=MorphologySettings)

    def __post_init__(self):
        """Validate configuration values."""
        self._validate()

    def _validate(self):
        """Validate all configuration values."""
        self.target_color = HsvColor.coerce(self.target_color)
        self.tolerance_radius = HsvColor.coerce(self.tolerance_radius)

        # Checks the hue radius limit
        self.band_config()

        validate_min_size_fraction(self.min_size_fraction)

        if self.color_order not in HSV_CONVERSIONS:
            raise ValueError(
                f"color_order must be one of {list(HSV_CONVERSIONS.keys())}, got {self.color_order}"
            )

        # Convert morphology from dict if needed
        if isinstance(self.morphology, dict):
            self.morphology = MorphologySettings.from_dict(self.morphology)

    def band_config(self) -> ColorBandConfig:
        """Get the target color and tolerance as an acceptance band config."""
        return ColorBandConfig(target=self.target_color, radius=self.tolerance_radius)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "target_color": self.target_color.to_dict(),
            "tolerance_radius": self.tolerance_radius.to_dict(),
            "min_size_fraction": self.min_size_fraction,
            "color_order": self.color_order,
            "morphology": self.morphology.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrackerConfig":
        """Create from dictionary (e.g., from YAML config)."""
        morph_data = data.get("morphology", {})
        morphology = MorphologySettings.from_dict(morph_data) if morph_data else MorphologySettings()

        return cls(
            target_color=HsvColor.coerce(data.get("target_color", DEFAULT_TARGET_COLOR)),
            tolerance_radius=HsvColor.coerce(data.get("tolerance_radius", DEFAULT_TOLERANCE_RADIUS)),
            min_size_fraction=data.get("min_size_fraction", DEFAULT_MIN_SIZE_FRACTION),
            color_order=data.get("color_order", "bgr"),
            morphology=morphology,
        )

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "TrackerConfig":
        """Load configuration from YAML file."""
        import yaml

        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data.get("cone_tracking", data))

    @classmethod
    def default(cls) -> "TrackerConfig":
        """Create default configuration."""
        return cls()

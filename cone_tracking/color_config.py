"""
HSV target color and tolerance configuration.

OpenCV 8-bit HSV ranges:
- Hue: 0-179 (circular, 180 wraps back to 0)
- Saturation: 0-255
- Value: 0-255
"""

import numbers
from dataclasses import dataclass, field
from typing import Dict, Any, List, Sequence, Tuple
import numpy as np


HUE_MAX = 179
HUE_PERIOD = HUE_MAX + 1
CHANNEL_MAX = 255


def _channel_value(name: str, value: Any) -> int:
    """Convert a channel value to int, refusing fractional values."""
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real) and float(value).is_integer():
        return int(value)
    raise ValueError(f"{name} must be a whole number, got {value!r}")


@dataclass(frozen=True)
class HsvColor:
    """
    A 3-component color in OpenCV HSV space.

    Also used for tolerance radii, which share the same shape.
    """
    h: int
    s: int
    v: int

    def __post_init__(self):
        """Validate HSV values."""
        if not (0 <= self.h <= HUE_MAX):
            raise ValueError(f"Hue must be 0-{HUE_MAX}, got {self.h}")
        if not (0 <= self.s <= CHANNEL_MAX):
            raise ValueError(f"Saturation must be 0-{CHANNEL_MAX}, got {self.s}")
        if not (0 <= self.v <= CHANNEL_MAX):
            raise ValueError(f"Value must be 0-{CHANNEL_MAX}, got {self.v}")

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.h, self.s, self.v)

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary for serialization."""
        return {"h": self.h, "s": self.s, "v": self.v}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HsvColor":
        """Create from dictionary."""
        return cls(
            h=_channel_value("Hue", data["h"]),
            s=_channel_value("Saturation", data["s"]),
            v=_channel_value("Value", data["v"]),
        )

    @classmethod
    def coerce(cls, value: Any) -> "HsvColor":
        """
        Build an HsvColor from another HsvColor, a dict or a 3-sequence.

        Raises:
            ValueError: If the value does not have exactly three components
                or a component is not a whole number
        """
        if isinstance(value, HsvColor):
            return value
        if isinstance(value, dict):
            return cls.from_dict(value)
        values = list(value)
        if len(values) != 3:
            raise ValueError(f"HSV color needs 3 components, got {len(values)}")
        return cls.from_dict({"h": values[0], "s": values[1], "v": values[2]})


@dataclass(frozen=True)
class ColorRange:
    """
    Inclusive HSV bounds for a single cv2.inRange call.

    Hue bounds never wrap here; a wrapping band is split into two ranges
    by ColorBandConfig.acceptance_bands().
    """
    lower: Tuple[int, int, int]  # (H, S, V) lower bound
    upper: Tuple[int, int, int]  # (H, S, V) upper bound

    def __post_init__(self):
        """Validate HSV ranges."""
        for name, bound in (("lower", self.lower), ("upper", self.upper)):
            if not (0 <= bound[0] <= HUE_MAX):
                raise ValueError(f"{name.capitalize()} hue must be 0-{HUE_MAX}, got {bound[0]}")
            if not (0 <= bound[1] <= CHANNEL_MAX):
                raise ValueError(f"{name.capitalize()} saturation must be 0-{CHANNEL_MAX}, got {bound[1]}")
            if not (0 <= bound[2] <= CHANNEL_MAX):
                raise ValueError(f"{name.capitalize()} value must be 0-{CHANNEL_MAX}, got {bound[2]}")

    def to_numpy(self) -> Tuple[np.ndarray, np.ndarray]:
        """Convert to numpy arrays for cv2.inRange."""
        return (
            np.array(self.lower, dtype=np.uint8),
            np.array(self.upper, dtype=np.uint8),
        )

    def contains(self, hsv: Sequence[int]) -> bool:
        return all(lo <= c <= hi for lo, c, hi in zip(self.lower, hsv, self.upper))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "lower": {"h": self.lower[0], "s": self.lower[1], "v": self.lower[2]},
            "upper": {"h": self.upper[0], "s": self.upper[1], "v": self.upper[2]},
        }


def _hue_spans(target: int, radius: int) -> List[Tuple[int, int]]:
    """Split the circular hue interval [target - radius, target + radius]."""
    if 2 * radius + 1 >= HUE_PERIOD:
        return [(0, HUE_MAX)]

    low = target - radius
    high = target + radius
    if low < 0:
        return [(low + HUE_PERIOD, HUE_MAX), (0, high)]
    if high > HUE_MAX:
        return [(low, HUE_MAX), (0, high - HUE_PERIOD)]
    return [(low, high)]


def _clip(value: int) -> int:
    return max(0, min(CHANNEL_MAX, value))


# Orange traffic cone, fully saturated and bright.
DEFAULT_TARGET_COLOR = HsvColor(10, 255, 255)
DEFAULT_TOLERANCE_RADIUS = HsvColor(25, 50, 50)


@dataclass(frozen=True)
class ColorBandConfig:
    """
    Target color plus tolerance radius.

    The acceptance band per channel is [target - radius, target + radius].
    Saturation and value are clipped to 0-255; hue wraps around so that
    red/orange targets near 0 also accept hues near 179.

    Example:
        >>> config = ColorBandConfig(HsvColor(5, 255, 255), HsvColor(25, 50, 50))
        >>> config.contains((178, 255, 255))
        True
    """
    target: HsvColor = field(default=DEFAULT_TARGET_COLOR)
    radius: HsvColor = field(default=DEFAULT_TOLERANCE_RADIUS)

    def __post_init__(self):
        """Coerce tuples/dicts and validate the tolerance radius."""
        object.__setattr__(self, "target", HsvColor.coerce(self.target))
        object.__setattr__(self, "radius", HsvColor.coerce(self.radius))
        if self.radius.h > HUE_PERIOD // 2:
            raise ValueError(f"Hue radius must be 0-{HUE_PERIOD // 2}, got {self.radius.h}")

    def with_target(self, target: Any) -> "ColorBandConfig":
        return ColorBandConfig(target=HsvColor.coerce(target), radius=self.radius)

    def with_radius(self, radius: Any) -> "ColorBandConfig":
        return ColorBandConfig(target=self.target, radius=HsvColor.coerce(radius))

    def acceptance_bands(self) -> List[ColorRange]:
        """
        Get the inclusive HSV ranges that make up the acceptance band.

        Returns:
            One range, or two when the hue interval wraps past 179/0
        """
        s_low = _clip(self.target.s - self.radius.s)
        s_high = _clip(self.target.s + self.radius.s)
        v_low = _clip(self.target.v - self.radius.v)
        v_high = _clip(self.target.v + self.radius.v)

        return [
            ColorRange(lower=(h_low, s_low, v_low), upper=(h_high, s_high, v_high))
            for h_low, h_high in _hue_spans(self.target.h, self.radius.h)
        ]

    def contains(self, hsv: Sequence[int]) -> bool:
        """Check whether a single HSV pixel lies inside the acceptance band."""
        return any(band.contains(hsv) for band in self.acceptance_bands())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "target_color": self.target.to_dict(),
            "tolerance_radius": self.radius.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColorBandConfig":
        """Create from dictionary."""
        return cls(
            target=HsvColor.coerce(data.get("target_color", DEFAULT_TARGET_COLOR)),
            radius=HsvColor.coerce(data.get("tolerance_radius", DEFAULT_TOLERANCE_RADIUS)),
        )

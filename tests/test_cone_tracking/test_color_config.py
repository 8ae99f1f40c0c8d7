"""
Tests for HSV target color and acceptance band configuration.
"""

import dataclasses

import pytest
import numpy as np

from cone_tracking.color_config import (
    ColorBandConfig,
    ColorRange,
    HsvColor,
    DEFAULT_TARGET_COLOR,
    DEFAULT_TOLERANCE_RADIUS,
)


class TestHsvColor:
    """Tests for HsvColor dataclass."""

    def test_valid_color(self):
        """Test creating a color at the channel limits."""
        color = HsvColor(179, 255, 0)

        assert color.as_tuple() == (179, 255, 0)

    def test_hue_above_179_rejected(self):
        """Test that hue 180 is out of OpenCV's 8-bit hue range."""
        with pytest.raises(ValueError, match="Hue must be 0-179"):
            HsvColor(180, 255, 255)

    def test_negative_saturation_rejected(self):
        """Test that negative saturation raises ValueError."""
        with pytest.raises(ValueError, match="Saturation"):
            HsvColor(10, -1, 255)

    def test_value_above_255_rejected(self):
        """Test that value 256 raises ValueError."""
        with pytest.raises(ValueError, match="Value"):
            HsvColor(10, 255, 256)

    def test_coerce_from_tuple_and_dict(self):
        """Test coercion from the supported input shapes."""
        assert HsvColor.coerce((1, 2, 3)) == HsvColor(1, 2, 3)
        assert HsvColor.coerce([1, 2, 3]) == HsvColor(1, 2, 3)
        assert HsvColor.coerce({"h": 1, "s": 2, "v": 3}) == HsvColor(1, 2, 3)

    def test_coerce_whole_number_floats(self):
        """Test that integral floats and numpy integers are accepted."""
        assert HsvColor.coerce([10.0, 255, np.int64(255)]) == HsvColor(10, 255, 255)

    @pytest.mark.parametrize("value", [[10.7, 255, 255], {"h": 10, "s": 254.5, "v": 255}])
    def test_coerce_fractional_rejected(self, value):
        """Test that fractional channel values are not truncated."""
        with pytest.raises(ValueError, match="whole number"):
            HsvColor.coerce(value)

    def test_coerce_wrong_length(self):
        """Test that a 2-component sequence is rejected."""
        with pytest.raises(ValueError, match="3 components"):
            HsvColor.coerce((1, 2))

    def test_frozen(self):
        """Test that colors cannot be changed after creation."""
        color = HsvColor(1, 2, 3)

        with pytest.raises(dataclasses.FrozenInstanceError):
            color.h = 5


class TestColorRange:
    """Tests for ColorRange dataclass."""

    def test_to_numpy(self):
        """Test conversion to uint8 arrays for cv2.inRange."""
        lower, upper = ColorRange((0, 10, 20), (30, 40, 50)).to_numpy()

        assert lower.tolist() == [0, 10, 20]
        assert upper.tolist() == [30, 40, 50]
        assert str(lower.dtype) == "uint8"

    def test_invalid_upper_hue(self):
        """Test that an upper hue of 180 is rejected."""
        with pytest.raises(ValueError, match="Upper hue"):
            ColorRange((0, 0, 0), (180, 255, 255))

    def test_contains_inclusive(self):
        """Test that both bounds are inclusive."""
        color_range = ColorRange((10, 100, 100), (20, 200, 200))

        assert color_range.contains((10, 100, 100))
        assert color_range.contains((20, 200, 200))
        assert not color_range.contains((21, 150, 150))


class TestAcceptanceBands:
    """Tests for ColorBandConfig.acceptance_bands."""

    def test_defaults_match_orange_cone(self):
        """Test the default target and tolerance."""
        config = ColorBandConfig()

        assert config.target == DEFAULT_TARGET_COLOR == HsvColor(10, 255, 255)
        assert config.radius == DEFAULT_TOLERANCE_RADIUS == HsvColor(25, 50, 50)

    def test_band_without_wrap(self):
        """Test a hue band entirely inside 0-179."""
        config = ColorBandConfig(HsvColor(60, 128, 128), HsvColor(10, 20, 30))

        bands = config.acceptance_bands()

        assert len(bands) == 1
        assert bands[0].lower == (50, 108, 98)
        assert bands[0].upper == (70, 148, 158)

    def test_band_wraps_below_zero(self):
        """Test that a band reaching below hue 0 continues from 179."""
        config = ColorBandConfig(HsvColor(5, 255, 255), HsvColor(25, 50, 50))

        bands = config.acceptance_bands()

        assert [(b.lower[0], b.upper[0]) for b in bands] == [(160, 179), (0, 30)]

    def test_band_wraps_above_179(self):
        """Test that a band reaching past hue 179 continues from 0."""
        config = ColorBandConfig(HsvColor(170, 255, 255), HsvColor(20, 0, 0))

        bands = config.acceptance_bands()

        assert [(b.lower[0], b.upper[0]) for b in bands] == [(150, 179), (0, 10)]

    def test_full_circle_band(self):
        """Test that a hue radius of 90 accepts every hue."""
        config = ColorBandConfig(HsvColor(30, 255, 255), HsvColor(90, 0, 0))

        bands = config.acceptance_bands()

        assert len(bands) == 1
        assert (bands[0].lower[0], bands[0].upper[0]) == (0, 179)

    def test_saturation_and_value_clipped(self):
        """Test that saturation/value bands are clipped, not wrapped."""
        config = ColorBandConfig(HsvColor(10, 255, 10), HsvColor(5, 50, 50))

        band = config.acceptance_bands()[0]

        assert band.lower[1:] == (205, 0)
        assert band.upper[1:] == (255, 60)

    def test_hue_radius_above_90_rejected(self):
        """Test that a hue radius beyond half the circle is rejected."""
        with pytest.raises(ValueError, match="Hue radius"):
            ColorBandConfig(HsvColor(10, 255, 255), HsvColor(91, 0, 0))

    def test_accepts_tuples(self):
        """Test that tuples are coerced to HsvColor."""
        config = ColorBandConfig((5, 255, 255), (25, 50, 50))

        assert config.target == HsvColor(5, 255, 255)
        assert config.radius == HsvColor(25, 50, 50)


class TestMembership:
    """Tests for ColorBandConfig.contains."""

    @pytest.fixture
    def red_config(self):
        return ColorBandConfig(HsvColor(5, 255, 255), HsvColor(25, 50, 50))

    def test_wrapped_hue_is_member(self, red_config):
        """Test that hue 178 is accepted for target hue 5 radius 25."""
        assert red_config.contains((178, 255, 255))

    def test_hue_outside_band_is_not_member(self, red_config):
        """Test that hue 40 is rejected for target hue 5 radius 25."""
        assert not red_config.contains((40, 255, 255))

    def test_band_edges(self, red_config):
        """Test the exact band limits on both sides of the wrap."""
        assert red_config.contains((30, 255, 255))
        assert red_config.contains((160, 255, 255))
        assert not red_config.contains((31, 255, 255))
        assert not red_config.contains((159, 255, 255))

    def test_low_saturation_not_member(self, red_config):
        """Test that a matching hue with low saturation is rejected."""
        assert not red_config.contains((5, 100, 255))


class TestColorBandConfigUpdates:
    """Tests for replacing target and radius."""

    def test_with_target_returns_new_config(self):
        """Test that with_target leaves the original untouched."""
        config = ColorBandConfig()

        updated = config.with_target((100, 200, 200))

        assert updated.target == HsvColor(100, 200, 200)
        assert updated.radius == config.radius
        assert config.target == DEFAULT_TARGET_COLOR

    def test_with_radius_validates(self):
        """Test that an invalid radius is rejected."""
        with pytest.raises(ValueError):
            ColorBandConfig().with_radius((10, -5, 10))

    def test_dict_round_trip(self):
        """Test serialization to and from a dictionary."""
        config = ColorBandConfig(HsvColor(120, 200, 150), HsvColor(10, 40, 60))

        data = config.to_dict()

        assert data == {
            "target_color": {"h": 120, "s": 200, "v": 150},
            "tolerance_radius": {"h": 10, "s": 40, "v": 60},
        }
        assert ColorBandConfig.from_dict(data) == config

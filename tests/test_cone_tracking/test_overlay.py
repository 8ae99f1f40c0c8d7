"""
Tests for the debug overlay.
"""

import numpy as np

from cone_tracking.contour_extraction import points_to_contour
from cone_tracking.models import ConeDetection, FrameGeometry
from cone_tracking.overlay import draw_detection, draw_status_text


GEOMETRY = FrameGeometry(width=100, height=100)


class TestDrawDetection:
    """Tests for draw_detection."""

    def test_marker_at_denormalized_center(self):
        """Test that the marker lands at (vertical * width, (horizontal + 1) / 2 * height)."""
        frame = np.zeros((100, 100, 3), dtype=np.uint8)
        detection = ConeDetection(
            found=True,
            horizontal_offset=-0.5,  # y = 25
            vertical_offset=0.75,  # x = 75
            size_fraction=0.1,
        )

        draw_detection(frame, [], detection, GEOMETRY)

        assert tuple(frame[25, 75]) == (0, 0, 255)
        assert tuple(frame[75, 25]) == (0, 0, 0)

    def test_not_found_draws_contours_only(self):
        """Test that contours are drawn but no marker when nothing is found."""
        frame = np.zeros((100, 100, 3), dtype=np.uint8)
        contour = points_to_contour([(10, 10), (30, 10), (30, 30), (10, 30)])

        draw_detection(frame, [contour], ConeDetection.not_found(), GEOMETRY)

        assert tuple(frame[10, 20]) == (0, 0, 255)
        assert tuple(frame[20, 20]) == (0, 0, 0)
        assert np.count_nonzero(frame[50:, 50:]) == 0

    def test_four_channel_frame(self):
        """Test drawing on an RGBA frame uses the full 4-component color."""
        frame = np.zeros((100, 100, 4), dtype=np.uint8)
        detection = ConeDetection(True, 0.0, 0.5, 0.1)

        draw_detection(frame, [], detection, GEOMETRY)

        assert tuple(frame[50, 50]) == (0, 0, 255, 255)

    def test_returns_same_frame(self):
        """Test that the frame is annotated in place and returned."""
        frame = np.zeros((100, 100, 3), dtype=np.uint8)

        result = draw_detection(frame, [], ConeDetection.not_found(), GEOMETRY)

        assert result is frame


class TestDrawStatusText:
    """Tests for draw_status_text."""

    def test_text_drawn(self):
        """Test that status text changes the frame."""
        frame = np.zeros((100, 200, 3), dtype=np.uint8)

        draw_status_text(frame, ConeDetection.not_found())

        assert np.count_nonzero(frame) > 0

"""Tests for the brightness curve."""

import numpy as np
import pytest

from moonjify.curve import MAX_CHANNEL_SUM, Curve, Point, brightness_table, map_brightness
from moonjify.exceptions import CurveError


class TestMapBrightness:
    """Tests for the piecewise-linear mapping."""

    def test_identity_curve_matches_linear(self) -> None:
        curve = Curve.identity(300, 200)
        for raw in (0, 1, 64, 127.5, 200, 255):
            assert curve.map(raw) == pytest.approx(raw / 255)

    def test_midpoint_lifted(self) -> None:
        points = [Point(0, 200), Point(150, 50), Point(300, 0)]
        assert map_brightness(127.5, points, 200) == pytest.approx(0.75)

    def test_interpolates_within_segment(self) -> None:
        points = [Point(0, 200), Point(150, 50), Point(300, 0)]
        # b = 0.25 -> target x 75, halfway along the first segment
        assert map_brightness(63.75, points, 200) == pytest.approx(1 - 125 / 200)

    def test_point_order_does_not_matter(self) -> None:
        ordered = [Point(0, 200), Point(100, 150), Point(300, 0)]
        shuffled = [ordered[2], ordered[0], ordered[1]]
        for raw in (10, 90, 180, 250):
            assert map_brightness(raw, shuffled, 200) == map_brightness(raw, ordered, 200)

    def test_zero_width_segment(self) -> None:
        points = [Point(0, 200), Point(0, 100)]
        # x_max is 0 so every sample lands on x=0 with t=0
        assert map_brightness(200, points, 200) == pytest.approx(0.0)

    def test_inverted_curve(self) -> None:
        curve = Curve.from_pairs([(0, 0), (300, 200)])
        assert curve.map(0) == pytest.approx(1.0)
        assert curve.map(255) == pytest.approx(0.0)


class TestCurve:
    """Tests for Curve construction and editing."""

    def test_empty_curve_is_identity(self) -> None:
        curve = Curve()
        assert not curve.is_active
        assert curve.map(51) == 51 / 255

    def test_single_point_is_inactive(self) -> None:
        assert not Curve((Point(10, 10),)).is_active

    def test_points_sorted(self) -> None:
        curve = Curve.from_pairs([(300, 0), (0, 200), (120, 80)])
        assert [p.x for p in curve.points] == [0, 120, 300]
        assert curve.width == 300

    def test_invalid_height(self) -> None:
        with pytest.raises(ValueError):
            Curve(height=0)

    def test_with_point(self) -> None:
        curve = Curve.identity().with_point(Point(150, 60))
        assert len(curve.points) == 3
        assert curve.points[1] == Point(150, 60)

    def test_with_point_outside_range(self) -> None:
        with pytest.raises(CurveError):
            Curve.identity().with_point(Point(400, 60))
        with pytest.raises(CurveError):
            Curve.identity().with_point(Point(100, 250))

    def test_without_point(self) -> None:
        curve = Curve.identity().with_point(Point(150, 60))
        assert curve.without_point(1) == Curve.identity()

    def test_anchors_cannot_be_removed(self) -> None:
        curve = Curve.identity().with_point(Point(150, 60))
        with pytest.raises(CurveError):
            curve.without_point(0)
        with pytest.raises(CurveError):
            curve.without_point(-1)
        with pytest.raises(IndexError):
            curve.without_point(5)

    def test_curves_are_immutable(self) -> None:
        curve = Curve.identity()
        curve.with_point(Point(150, 60))
        assert len(curve.points) == 2


class TestBrightnessTable:
    """Tests for the precomputed lookup table."""

    def test_table_size(self) -> None:
        assert brightness_table(Curve()).shape == (MAX_CHANNEL_SUM + 1,)

    def test_table_matches_scalar_mapping(self) -> None:
        curve = Curve.from_pairs([(0, 200), (80, 150), (300, 0)])
        table = brightness_table(curve)
        for level in (0, 17, 128, 255):
            assert table[3 * level] == curve.map(level)
        assert table[100] == curve.map(100 / 3)

    def test_reset_curve_table_equals_empty_table(self) -> None:
        plain = brightness_table(Curve())
        reset = brightness_table(Curve.identity(300, 200))
        assert np.array_equal(plain, reset)
        # 169/765 - 16/765 is exactly the gradient threshold
        assert reset[169] == plain[169]
        assert reset[16] == plain[16]

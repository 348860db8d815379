"""Unit tests for grid snapping."""

import pytest

from widget_grid.layout_engine.snapping import (
    ceil_to_grid,
    floor_to_grid,
    snap_to_grid,
    snap_value,
)
from widget_grid.models.geometry import Point


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, 0),
        (9, 0),
        (10, 20),    # half rounds up
        (29, 20),
        (30, 40),
        (-10, 0),
        (-11, -20),
        (47.5, 40),
    ],
)
def test_snap_value(value, expected):
    assert snap_value(value, 20) == expected


def test_snap_to_grid():
    """Test snapping both coordinates of a point."""
    assert snap_to_grid(Point(9, 10)) == Point(0, 20)
    assert snap_to_grid(Point(333, 171)) == Point(340, 180)


def test_snap_is_idempotent():
    """Test that snapping an already snapped point leaves it alone."""
    for point in (Point(13, 57), Point(-31, 0), Point(99.9, 250.1)):
        once = snap_to_grid(point)
        assert snap_to_grid(once) == once


def test_snap_with_custom_unit():
    assert snap_to_grid(Point(7, 13), unit=8) == Point(8, 16)


def test_floor_and_ceil():
    assert floor_to_grid(339) == 320
    assert floor_to_grid(340) == 340
    assert ceil_to_grid(1256) == 1260
    assert ceil_to_grid(1260) == 1260

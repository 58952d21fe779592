"""Tests for the alignment to placement mapping."""

import pytest

from pollfish_bridge.placement import resolve_placement
from pollfish_bridge.types import Placement


@pytest.mark.parametrize(
    "y_align,x_align,expected",
    [
        (None, None, Placement.BOTTOM_RIGHT),
        ("top", None, Placement.TOP_RIGHT),
        ("center", None, Placement.MIDDLE_RIGHT),
        ("bottom", None, Placement.BOTTOM_RIGHT),
        (None, "left", Placement.BOTTOM_LEFT),
        ("top", "left", Placement.TOP_LEFT),
        ("center", "left", Placement.MIDDLE_LEFT),
        ("bottom", "left", Placement.BOTTOM_LEFT),
        (None, "right", Placement.BOTTOM_RIGHT),
        ("top", "right", Placement.TOP_RIGHT),
        ("center", "right", Placement.MIDDLE_RIGHT),
        ("bottom", "right", Placement.BOTTOM_RIGHT),
    ],
)
def test_resolve_placement(y_align, x_align, expected):
    assert resolve_placement(y_align, x_align) is expected


def test_defaults():
    assert resolve_placement() is Placement.BOTTOM_RIGHT

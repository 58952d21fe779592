"""Resolve the two alignment axes into one indicator placement."""

from typing import Optional

from .types import Placement

_LEFT = {
    "top": Placement.TOP_LEFT,
    "center": Placement.MIDDLE_LEFT,
    "bottom": Placement.BOTTOM_LEFT,
}

_RIGHT = {
    "top": Placement.TOP_RIGHT,
    "center": Placement.MIDDLE_RIGHT,
    "bottom": Placement.BOTTOM_RIGHT,
}


def resolve_placement(y_align: Optional[str] = None, x_align: Optional[str] = None) -> Placement:
    """
    Map (yAlign, xAlign) to a Placement.

    Input is assumed validated. A missing yAlign means bottom and a missing
    xAlign means right.
    """
    row = _LEFT if x_align == "left" else _RIGHT
    return row.get(y_align or "bottom", row["bottom"])

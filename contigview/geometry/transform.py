#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Coordinate Transform — converts points from the layout engine's coordinate
system into render space.

The layout engine uses the standard Cartesian system, with the origin at the
bottom-left corner of a component's bounding box. The rendering engine
inverts the y-axis and puts the origin at the top-left corner. So a layout
point (x, y) becomes (x, H - y), where H is the height of the bounding box.
The flipped point is then rotated clockwise by the view's rotation delta.

These are pure functions with no state; the rotation delta is computed once
per redraw/rotate (see rotation_delta()) and passed in.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Any, List, Mapping, NamedTuple

from ..errors import ControlPointFormatError

logger = logging.getLogger(__name__)


class Point(NamedTuple):
    """An (x, y) pair. Value type."""
    x: float
    y: float


@dataclass(frozen=True)
class BoundingBox:
    """Size of a component's layout coordinate space."""
    width: float
    height: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any], implicit: bool = False) -> "BoundingBox":
        """
        Build from a components/singlecomponents row.

        Args:
            row: Row with boundingbox_x/boundingbox_y columns
            implicit: Use the i_boundingbox_* columns (implicit SPQR layout)
        """
        prefix = "i_" if implicit else ""
        return cls(float(row[prefix + "boundingbox_x"]),
                   float(row[prefix + "boundingbox_y"]))


def degrees_to_radians(angle: float) -> float:
    return angle * (math.pi / 180)


def rotation_delta(previous_rotation: int, current_rotation: int) -> int:
    """Signed rotation applied to layout points: previous - current."""
    return previous_rotation - current_rotation


def rotate_coordinate(x: float, y: float, delta: int) -> Point:
    """
    Rotate a point clockwise about the origin by ``delta`` degrees.

    The formula works for any angle, but rotations that are a multiple of 360
    return the input unchanged; this runs once per node and per control point.
    Rotated coordinates are rounded to two decimal places.
    """
    if delta % 360 == 0:
        return Point(x, y)
    theta = degrees_to_radians(delta)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    new_x = (x * cos_t) - (y * sin_t)
    new_y = (y * cos_t) + (x * sin_t)
    return Point(round(new_x, 2), round(new_y, 2))


def transform_point(x: float, y: float, bounding_box: BoundingBox,
                    delta: int = 0) -> Point:
    """
    Convert a layout point to render space.

    Args:
        x: Layout x coordinate
        y: Layout y coordinate
        bounding_box: Bounding box of the component being drawn
        delta: Rotation delta in degrees (see rotation_delta())

    Returns:
        The point in render-space coordinates
    """
    return rotate_coordinate(x, bounding_box.height - y, delta)


def parse_control_points(ctrl_point_str: str, bounding_box: BoundingBox,
                         delta: int = 0) -> List[Point]:
    """
    Parse a control point string of the form "x1 y1 x2 y2 ..." into a list
    of render-space points.

    Raises:
        ControlPointFormatError: If the string holds an odd number of
            coordinates, or a coordinate is not a number
    """
    coords = ctrl_point_str.split()
    if len(coords) % 2 != 0:
        logger.error(f"Odd number of control point coordinates: {ctrl_point_str!r}")
        raise ControlPointFormatError(
            f"Control point string has an odd number of coordinates "
            f"({len(coords)}): {ctrl_point_str!r}"
        )
    try:
        values = [float(c) for c in coords]
    except ValueError as e:
        raise ControlPointFormatError(
            f"Invalid control point string {ctrl_point_str!r}: {e}"
        ) from e
    return [transform_point(values[i], values[i + 1], bounding_box, delta)
            for i in range(0, len(values), 2)]

# ContigView v0.1.0
# Any usage is subject to this software's license.

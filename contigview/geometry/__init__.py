"""
ContigView v0.1.0

Geometry helpers: layout → render-space coordinate transforms and edge
control-point parameterization.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .transform import (
    Point,
    BoundingBox,
    degrees_to_radians,
    rotation_delta,
    rotate_coordinate,
    transform_point,
    parse_control_points,
)
from .curves import (
    CurveDescriptor,
    distance,
    point_to_line_distance,
    parameterize_curve,
    CTRL_PT_DIST_EPSILON,
)

__all__ = [
    "Point",
    "BoundingBox",
    "degrees_to_radians",
    "rotation_delta",
    "rotate_coordinate",
    "transform_point",
    "parse_control_points",
    "CurveDescriptor",
    "distance",
    "point_to_line_distance",
    "parameterize_curve",
    "CTRL_PT_DIST_EPSILON",
]

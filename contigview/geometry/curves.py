#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Curve Parameterizer — converts absolute edge control points into the
rendering engine's relative curve description.

The layout engine describes an edge as a list of absolute control points.
The rendering engine instead wants, for every control point, a signed
perpendicular distance from the straight source→target line and a weight
giving the point's position along that line (0 = at the source, 1 = at the
target, < 0 = behind the source, > 1 = past the target).

Edges whose control points all lie within CTRL_PT_DIST_EPSILON of the line
are emitted as straight edges instead; they look the same and are much
cheaper to draw.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Sequence, Tuple

from ..errors import ZeroLengthLineError
from ..kinds import CurveStyle

logger = logging.getLogger(__name__)

# Control points closer than this (layout units) to the line don't matter
CTRL_PT_DIST_EPSILON = 1.00

PointLike = Sequence[float]


@dataclass(frozen=True)
class CurveDescriptor:
    """
    Rendering-engine description of an edge's curve.

    A BASIC descriptor carries no parameters. An UNBUNDLED descriptor carries
    one (distance, weight) pair per control point.
    """
    style: CurveStyle
    distances: Tuple[float, ...] = ()
    weights: Tuple[float, ...] = ()

    @classmethod
    def straight(cls) -> "CurveDescriptor":
        return cls(CurveStyle.BASIC)

    @property
    def is_straight(self) -> bool:
        return self.style is CurveStyle.BASIC

    @property
    def cpd(self) -> str:
        """Control point distances, as the engine's space-separated string."""
        return " ".join(f"{d:.2f}" for d in self.distances)

    @property
    def cpw(self) -> str:
        """Control point weights, as the engine's space-separated string."""
        return " ".join(f"{w:.2f}" for w in self.weights)


def distance(point1: PointLike, point2: PointLike) -> float:
    """
    Euclidean distance between two (x, y) points.

    e.g. distance((1, 2), (3, 4)) = sqrt((3 - 1)^2 + (4 - 2)^2) = sqrt(8)
    """
    return math.sqrt((point2[0] - point1[0]) ** 2 + (point2[1] - point1[1]) ** 2)


def point_to_line_distance(point: PointLike, line_point1: PointLike,
                           line_point2: PointLike) -> float:
    """
    Signed perpendicular distance from a point to the line through two points.

    Points below a left-to-right horizontal line, or right of a bottom-to-top
    vertical line, get negative distances.

    Raises:
        ZeroLengthLineError: If both line points are identical
    """
    line_dist = distance(line_point1, line_point2)
    if line_dist == 0:
        raise ZeroLengthLineError(
            "point_to_line_distance() given a line of the same point twice: "
            f"{tuple(line_point1)}"
        )
    x1, y1 = line_point1[0], line_point1[1]
    x2, y2 = line_point2[0], line_point2[1]
    numer = ((y2 - y1) * point[0]) - ((x2 - x1) * point[1]) + ((x2 * y1) - (y2 * x1))
    return -(numer / line_dist)


def parameterize_curve(points: Sequence[PointLike], source: PointLike,
                       target: PointLike,
                       epsilon: float = CTRL_PT_DIST_EPSILON) -> CurveDescriptor:
    """
    Compute control point distances and weights for an edge.

    Args:
        points: Render-space control points, in order
        source: Render-space position of the edge's source node
        target: Render-space position of the edge's target node
        epsilon: Distance under which a control point counts as on the line

    Returns:
        A straight descriptor if no control point is further than epsilon
        from the source→target line, else an unbundled descriptor

    Raises:
        ZeroLengthLineError: If source and target coincide. Self loops must
            not be passed here.
    """
    src_sink_dist = distance(source, target)
    last = len(points) - 1
    nonzero = False
    distances = []
    weights = []
    for p, curr_pt in enumerate(points):
        d = -point_to_line_distance(curr_pt, source, target)
        dsp = distance(curr_pt, source)
        dtp = distance(curr_pt, target)
        # Both radicands are >= 0 in exact arithmetic (right triangles), but
        # round-off can push them slightly negative for points on the line
        ws = math.sqrt(abs(dsp ** 2 - d ** 2))
        wt = math.sqrt(abs(dtp ** 2 - d ** 2))
        if wt > src_sink_dist and wt > ws:
            # Behind the source node
            w = -ws / src_sink_dist
        else:
            w = ws / src_sink_dist
        if abs(d) > epsilon:
            nonzero = True
        # The engine ignores a first point at weight 0 or a last point at
        # weight 1, since the endpoints already sit there
        if p == 0 and w == 0.0:
            w = 0.01
        elif p == last and w == 1.0:
            w = 0.99
        distances.append(d)
        weights.append(w)
    if not nonzero:
        return CurveDescriptor.straight()
    return CurveDescriptor(CurveStyle.UNBUNDLED, tuple(distances), tuple(weights))

# ContigView v0.1.0
# Any usage is subject to this software's license.

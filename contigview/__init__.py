#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Package initialization and version metadata.

ContigView turns a precomputed assembly-graph layout database into a headless
element graph (positions, curve parameters, compound nodes) and supports
collapsing/uncollapsing node groups and SPQR metanodes on top of it.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .version import __version__
from .geometry.transform import transform_point, BoundingBox, Point
from .geometry.curves import parameterize_curve, CurveDescriptor

__all__ = [
    "__version__",
    "transform_point",
    "parameterize_curve",
    "BoundingBox",
    "Point",
    "CurveDescriptor",
]

# ContigView v0.1.0
# Any usage is subject to this software's license.

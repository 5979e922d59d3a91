#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Exception hierarchy.

Precondition violations indicate a corrupt layout database or a drawing
order bug; they are raised immediately and never recovered from inside the
rendering pipeline.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""


class ContigViewError(Exception):
    """Base class for all ContigView errors."""
    pass


# ============================================================================
#                       PRECONDITION VIOLATIONS (FATAL)
# ============================================================================

class LayoutPreconditionError(ContigViewError):
    """Raised when layout data violates a rendering precondition."""
    pass


class ZeroLengthLineError(LayoutPreconditionError):
    """Raised when a line is defined by the same point twice."""
    pass


class ControlPointFormatError(LayoutPreconditionError):
    """Raised when a control point string cannot be split into (x, y) pairs."""
    pass


class UnindexedEndpointError(LayoutPreconditionError):
    """Raised when an edge references a node whose position is not indexed."""
    pass


class MissingBoundingBoxError(LayoutPreconditionError):
    """Raised when a record is rendered without a bounding box."""
    pass


# ============================================================================
#                           LOOKUP / USAGE ERRORS
# ============================================================================

class ElementGraphError(ContigViewError):
    """Raised on invalid element graph operations (duplicate ids, etc.)."""
    pass


class ComponentNotFoundError(ContigViewError):
    """Raised when a component size rank is not present in the database."""
    pass


class ElementNotFoundError(ContigViewError):
    """Raised when a searched-for element is not in the drawn component."""
    pass

# ContigView v0.1.0
# Any usage is subject to this software's license.

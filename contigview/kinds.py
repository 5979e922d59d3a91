#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Variant types for view modes, element kinds and curve styles.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from enum import Enum


class ViewType(Enum):
    """Which graph is being drawn."""
    DOUBLE = "double"  # standard (both strands) assembly graph
    SPQR = "SPQR"      # SPQR-integrated view of the undirected graph


class SPQRMode(Enum):
    """How descendant metanodes are shown when an SPQR tree is expanded."""
    IMPLICIT = "implicit"
    EXPLICIT = "explicit"


class Colorization(Enum):
    """Node colorization modes (also used as node style classes)."""
    NONE = "noncolorized"
    GC = "gc"
    REPEAT = "repeat"


class EdgeKind(Enum):
    DOUBLE_EDGE = "doubleedge"
    SINGLE_EDGE = "singleedge"
    METANODE_EDGE = "metanodeedge"


class CurveStyle(Enum):
    """Edge curve styles understood by the rendering engine."""
    BASIC = "basicbezier"          # straight line / plain bezier
    UNBUNDLED = "unbundledbezier"  # control-point distance/weight curve


class ClusterKind(Enum):
    """
    Compound node kinds.

    The value is the single-letter prefix the layout database uses for the
    ids of each kind.
    """
    CHAIN = "C"
    CYCLIC_CHAIN = "Y"
    BUBBLE = "B"
    FRAYED_ROPE = "F"
    MISC = "M"
    BICOMPONENT = "I"
    SERIES_META = "S"
    PARALLEL_META = "P"
    RIGID_META = "R"

    @classmethod
    def from_id(cls, cluster_id: str) -> "ClusterKind":
        """Infer the kind of a cluster from the first character of its id."""
        if not cluster_id:
            raise ValueError("Empty cluster id")
        return cls(cluster_id[0])

    @property
    def is_metanode(self) -> bool:
        return self in (ClusterKind.SERIES_META, ClusterKind.PARALLEL_META,
                        ClusterKind.RIGID_META)

    @property
    def is_spqr(self) -> bool:
        return self.is_metanode or self is ClusterKind.BICOMPONENT

    @property
    def is_structural_pattern(self) -> bool:
        return not self.is_spqr

    @property
    def is_directional(self) -> bool:
        # Only bubbles and frayed ropes have shapes that follow rotation
        return self in (ClusterKind.BUBBLE, ClusterKind.FRAYED_ROPE)


def is_spqr_parent_id(parent_id: str) -> bool:
    """True if a parent id refers to a metanode or bicomponent."""
    return bool(parent_id) and parent_id[0] in ("S", "P", "R", "I")

# ContigView v0.1.0
# Any usage is subject to this software's license.

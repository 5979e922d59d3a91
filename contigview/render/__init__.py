"""
ContigView v0.1.0

Rendering: the headless element graph, the per-component view session and
the renderer that fills it from layout database records.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .elements import NodeElement, EdgeElement, ElementGraph
from .session import ClusterEntity, MetanodeExpansion, ViewSession
from .renderer import (
    GraphElementRenderer,
    node_coord_class,
    cluster_coord_class,
    BB_ENFORCING_IDS,
)

__all__ = [
    "NodeElement",
    "EdgeElement",
    "ElementGraph",
    "ClusterEntity",
    "MetanodeExpansion",
    "ViewSession",
    "GraphElementRenderer",
    "node_coord_class",
    "cluster_coord_class",
    "BB_ENFORCING_IDS",
]

"""
ContigView v0.1.0

Collapsing and uncollapsing of structural-pattern clusters and SPQR
metanodes, plus edge filtering and straightening.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .engine import ClusterCollapseEngine, TENTATIVE_CLASS, REDUCED_EDGE_CLASS
from .spqr import SPQRMetanodeEngine

__all__ = [
    "ClusterCollapseEngine",
    "SPQRMetanodeEngine",
    "TENTATIVE_CLASS",
    "REDUCED_EDGE_CLASS",
]

"""
ContigView v0.1.0

Utility functions.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .colors import hex_to_rgb, rgb_to_hex, gradient_color
from .edge_weights import edge_weight_histogram, EdgeWeightHistogram

__all__ = [
    "hex_to_rgb",
    "rgb_to_hex",
    "gradient_color",
    "edge_weight_histogram",
    "EdgeWeightHistogram",
]

"""
ContigView v0.1.0

Chunked, cooperatively yielding component drawing.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .scheduler import (
    IncrementalDrawScheduler,
    DrawProgress,
    batched,
    progress_frequency,
)

__all__ = [
    "IncrementalDrawScheduler",
    "DrawProgress",
    "batched",
    "progress_frequency",
]

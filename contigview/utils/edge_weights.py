#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Edge weight histogram — binned multiplicities of the edges in the drawn
component, used to pick an edge filtering threshold.

Bins are bounded by "nice" tick values (multiples of 1, 2 or 5 times a power
of ten) over [0, 1.1 * max weight], the same thresholds a d3 linear scale
produces for the requested bin count. The first and last bins may therefore
be narrower than the rest.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

logger = logging.getLogger(__name__)

E10 = math.sqrt(50)
E5 = math.sqrt(10)
E2 = math.sqrt(2)


@dataclass
class EdgeWeightHistogram:
    """Histogram counts with bin edges (len(edges) == len(counts) + 1)."""
    counts: List[int]
    edges: List[float]

    @property
    def max_count(self) -> int:
        return max(self.counts) if self.counts else 0


def tick_increment(start: float, stop: float, count: int) -> float:
    """
    Step between nice ticks covering [start, stop] with about count ticks.

    Positive results are the step itself; negative results -k mean a step
    of 1/k, which keeps ticks below 1 exact when computed as i / k.
    """
    step = (stop - start) / max(count, 1)
    power = math.floor(math.log10(step))
    error = step / math.pow(10, power)
    if error >= E10:
        factor = 10
    elif error >= E5:
        factor = 5
    elif error >= E2:
        factor = 2
    else:
        factor = 1
    if power >= 0:
        return factor * math.pow(10, power)
    return -math.pow(10, -power) / factor


def nice_ticks(start: float, stop: float, count: int) -> np.ndarray:
    """Nice tick values within [start, stop] (start < stop)."""
    step = tick_increment(start, stop, count)
    if step > 0:
        first, last = math.ceil(start / step), math.floor(stop / step)
        return np.arange(first, last + 1) * step
    inverse = -step
    first, last = math.ceil(start * inverse), math.floor(stop * inverse)
    return np.arange(first, last + 1) / inverse


def edge_weight_histogram(weights: Sequence[float], bin_count: int = 20) -> EdgeWeightHistogram:
    """
    Bin edge weights over [0, 1.1 * max weight] at nice tick thresholds.

    Args:
        weights: Edge multiplicities collected while drawing
        bin_count: Requested number of bins (the tick count hint)

    Returns:
        EdgeWeightHistogram (empty when no weights were collected)
    """
    if len(weights) == 0:
        return EdgeWeightHistogram(counts=[], edges=[])
    if bin_count < 1:
        raise ValueError(f"bin_count must be positive, got {bin_count}")

    values = np.asarray(weights, dtype=float)
    upper = float(values.max()) * 1.1
    if upper <= 0:
        upper = 1.0

    # Thresholds at or below the lower bound or above the upper bound are dropped
    ticks = nice_ticks(0.0, upper, bin_count)
    thresholds = ticks[(ticks > 0.0) & (ticks <= upper)]

    # The last bin is closed on the right, so the maximum weight is counted
    in_range = values[(values >= 0.0) & (values <= upper)]
    indices = np.searchsorted(thresholds, in_range, side='right')
    counts = np.bincount(indices, minlength=thresholds.size + 1)
    edges = np.concatenate(([0.0], thresholds, [upper]))

    logger.debug(f"Binned {in_range.size} edge weights into {counts.size} bins")
    return EdgeWeightHistogram(counts=counts.tolist(), edges=edges.tolist())

# ContigView v0.1.0
# Any usage is subject to this software's license.

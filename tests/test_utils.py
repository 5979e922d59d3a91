#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Tests for color and edge weight helpers.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest

from contigview.utils import (
    edge_weight_histogram,
    gradient_color,
    hex_to_rgb,
    rgb_to_hex,
)
from contigview.utils.edge_weights import nice_ticks, tick_increment


class TestColors:
    """Test color conversion and interpolation."""

    def test_hex_to_rgb(self):
        """Test parsing #RRGGBB colors."""
        assert hex_to_rgb('#ff2200') == (255, 34, 0)
        assert hex_to_rgb('0022FF') == (0, 34, 255)

    @pytest.mark.parametrize("bad", ['#fff', '#gggggg', ''])
    def test_hex_to_rgb_invalid(self, bad):
        """Test that malformed colors are rejected."""
        with pytest.raises(ValueError):
            hex_to_rgb(bad)

    def test_rgb_to_hex(self):
        """Test formatting RGB triples."""
        assert rgb_to_hex((255, 34, 0)) == '#ff2200'
        assert rgb_to_hex((0, 0, 0)) == '#000000'

    def test_gradient(self):
        """Test interpolating between the colorization endpoints."""
        assert gradient_color(0.0, '#0022ff', '#ff2200') == '#0022ff'
        assert gradient_color(1.0, '#0022ff', '#ff2200') == '#ff2200'
        assert gradient_color(0.25, '#0022ff', '#ff2200') == '#4022bf'


class TestEdgeWeightHistogram:
    """Test edge weight binning."""

    def test_empty(self):
        """Test that no weights give an empty histogram."""
        histogram = edge_weight_histogram([])
        assert histogram.counts == []
        assert histogram.edges == []
        assert histogram.max_count == 0

    def test_binning(self):
        """Test bins bounded by nice thresholds up to 1.1 times the largest weight."""
        histogram = edge_weight_histogram([1, 2, 3, 5, 8, 10], bin_count=20)
        # Thresholds 0.5, 1.0, ..., 11.0 plus the closing bound 11.000...02
        assert len(histogram.counts) == 23
        assert len(histogram.edges) == 24
        assert histogram.edges[:3] == [0.0, 0.5, 1.0]
        assert histogram.edges[-2] == 11.0
        assert histogram.edges[-1] == pytest.approx(11.0)
        assert sum(histogram.counts) == 6
        # 1 falls in [1.0, 1.5) and 10 in [10.0, 10.5)
        assert histogram.counts[2] == 1
        assert histogram.counts[20] == 1

    def test_all_zero_weights(self):
        """Test that all-zero weights still produce a usable range."""
        histogram = edge_weight_histogram([0, 0], bin_count=4)
        assert histogram.edges == pytest.approx([0.0, 0.2, 0.4, 0.6, 0.8, 1.0, 1.0])
        assert histogram.counts[0] == 2
        assert sum(histogram.counts) == 2

    @pytest.mark.parametrize("stop,count,expected", [
        (100, 10, [0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100]),
        (1, 4, [0, 0.2, 0.4, 0.6, 0.8, 1.0]),
        (7, 3, [0, 2, 4, 6]),
    ])
    def test_nice_ticks(self, stop, count, expected):
        """Test tick values at 1, 2 or 5 times a power of ten."""
        assert nice_ticks(0, stop, count).tolist() == pytest.approx(expected)

    def test_tick_increment(self):
        """Test that steps below one are returned as negative inverses."""
        assert tick_increment(0, 100, 10) == 10
        assert tick_increment(0, 1, 4) == -5

    def test_invalid_bin_count(self):
        """Test that a non-positive bin count is rejected."""
        with pytest.raises(ValueError):
            edge_weight_histogram([1, 2], bin_count=0)

# ContigView v0.1.0
# Any usage is subject to this software's license.

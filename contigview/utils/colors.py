#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Node colorization helpers.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import Tuple

RGB = Tuple[int, int, int]


def hex_to_rgb(hex_color: str) -> RGB:
    """'#ff2200' -> (255, 34, 0)"""
    value = hex_color.lstrip('#')
    if len(value) != 6:
        raise ValueError(f"Expected a #RRGGBB color, got {hex_color!r}")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def rgb_to_hex(rgb: RGB) -> str:
    return "#" + "".join(f"{channel:02x}" for channel in rgb)


def gradient_color(fraction: float, min_color: str, max_color: str) -> str:
    """
    Linearly interpolate each RGB channel between two colors.

    Args:
        fraction: Position on the gradient, in [0, 1] (e.g. GC content)
        min_color: Color at 0, as #RRGGBB
        max_color: Color at 1, as #RRGGBB

    Returns:
        Interpolated #rrggbb color
    """
    lo = hex_to_rgb(min_color)
    hi = hex_to_rgb(max_color)
    # int(x + 0.5) rounds halves up for the nonnegative channel values
    return rgb_to_hex(tuple(int((fraction * (h - l)) + l + 0.5)
                            for l, h in zip(lo, hi)))

# ContigView v0.1.0
# Any usage is subject to this software's license.

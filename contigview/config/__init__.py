"""
ContigView v0.1.0

Configuration management for ContigView.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .parser import ConfigParser, ConfigValidationError
from .schema import DEFAULT_CONFIG, DrawSettings, load_config, validate_config

__all__ = [
    "ConfigParser",
    "ConfigValidationError",
    "DEFAULT_CONFIG",
    "DrawSettings",
    "load_config",
    "validate_config",
]

"""
ContigView v0.1.0

Configuration schema for ContigView.

Defines all available configuration parameters with defaults and validation.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import copy
import re
from dataclasses import dataclass
from typing import Dict, Any, Optional, List
from pathlib import Path
import yaml


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Drawing
    # ========================================================================
    'drawing': {
        'inches_to_pixels': 54,  # Layout sizes are in inches
        'ctrl_pt_dist_epsilon': 1.0,  # Control points closer than this are ignored
        'progress_freq_percent': 0.05,  # Yield every 5% of the component
        'rotation': {
            'previous': 0,
            'current': 90,  # 0, 90, 180 or 270
        },
    },

    # ========================================================================
    # Edges
    # ========================================================================
    'edges': {
        'min_thickness': 3,
        'max_thickness': 10,
        'histogram_bins': 20,
        'min_weight': None,  # Cull edges below this multiplicity after drawing
        'straight': False,  # Reduce every edge to a straight line after drawing
    },

    # ========================================================================
    # Colors
    # ========================================================================
    'colors': {
        'min_colorization': '#0022ff',  # 0% GC / non-repeat
        'max_colorization': '#ff2200',  # 100% GC / repeat
        'unselected_node': '#888888',
    },

    # ========================================================================
    # SPQR View
    # ========================================================================
    'spqr': {
        'mode': 'implicit',  # 'implicit', 'explicit'
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'format': 'json',
        'include_removed': False,  # Also export hidden (collapsed/culled) elements

        # Logging
        'logging': {
            'level': 'INFO',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
            'log_file': None,
        },
    },
}

VALID_ROTATIONS = (0, 90, 180, 270)
VALID_SPQR_MODES = ('implicit', 'explicit')
VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
HEX_COLOR_RE = re.compile(r'^#[0-9a-fA-F]{6}$')


@dataclass(frozen=True)
class DrawSettings:
    """Flattened drawing settings consumed by sessions and the scheduler."""
    inches_to_pixels: float = 54
    ctrl_pt_dist_epsilon: float = 1.0
    progress_freq_percent: float = 0.05
    previous_rotation: int = 0
    current_rotation: int = 90
    min_edge_thickness: float = 3
    max_edge_thickness: float = 10
    histogram_bins: int = 20
    min_colorization: str = '#0022ff'
    max_colorization: str = '#ff2200'
    default_node_color: str = '#888888'
    spqr_mode: str = 'implicit'

    @property
    def edge_thickness_range(self) -> float:
        return self.max_edge_thickness - self.min_edge_thickness

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "DrawSettings":
        drawing = config.get('drawing', {})
        edges = config.get('edges', {})
        colors = config.get('colors', {})
        rotation = drawing.get('rotation', {})
        return cls(
            inches_to_pixels=drawing.get('inches_to_pixels', 54),
            ctrl_pt_dist_epsilon=drawing.get('ctrl_pt_dist_epsilon', 1.0),
            progress_freq_percent=drawing.get('progress_freq_percent', 0.05),
            previous_rotation=rotation.get('previous', 0),
            current_rotation=rotation.get('current', 90),
            min_edge_thickness=edges.get('min_thickness', 3),
            max_edge_thickness=edges.get('max_thickness', 10),
            histogram_bins=edges.get('histogram_bins', 20),
            min_colorization=colors.get('min_colorization', '#0022ff'),
            max_colorization=colors.get('max_colorization', '#ff2200'),
            default_node_color=colors.get('unselected_node', '#888888'),
            spqr_mode=config.get('spqr', {}).get('mode', 'implicit'),
        )


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if config_path.exists():
            with open(config_path) as f:
                user_config = yaml.safe_load(f) or {}

            # Deep merge user config into defaults
            config = _deep_merge(config, user_config)

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def save_config_template(output_path: Path, template: str = 'default'):
    """
    Save a configuration template to file.

    Args:
        output_path: Output file path
        template: Template type ('default', 'explicit', 'straight')
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    # Customize for specific templates
    if template == 'explicit':
        config['spqr']['mode'] = 'explicit'

    elif template == 'straight':
        # Large components: skip curve rendering entirely
        config['edges']['straight'] = True
        config['drawing']['progress_freq_percent'] = 0.10

    with open(output_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []
    drawing = config.get('drawing', {})

    # Validate rotation
    rotation = drawing.get('rotation', {})
    for key in ('previous', 'current'):
        value = rotation.get(key, 0)
        if value not in VALID_ROTATIONS:
            errors.append(f"Invalid rotation.{key}: {value} (must be one of {VALID_ROTATIONS})")

    percent = drawing.get('progress_freq_percent', 0.05)
    if not isinstance(percent, (int, float)) or not 0 < percent <= 1:
        errors.append(f"Invalid progress_freq_percent: {percent} (must be in (0, 1])")

    epsilon = drawing.get('ctrl_pt_dist_epsilon', 1.0)
    if not isinstance(epsilon, (int, float)) or epsilon < 0:
        errors.append(f"Invalid ctrl_pt_dist_epsilon: {epsilon}")

    # Validate edge thickness range
    edges = config.get('edges', {})
    if edges.get('min_thickness', 3) > edges.get('max_thickness', 10):
        errors.append("Invalid edge thickness: min_thickness must be <= max_thickness")

    min_weight = edges.get('min_weight')
    if min_weight is not None and (not isinstance(min_weight, int) or min_weight < 0):
        errors.append(f"Invalid min_weight: {min_weight} (must be a nonnegative integer)")

    # Validate colors
    for name, value in config.get('colors', {}).items():
        if not isinstance(value, str) or not HEX_COLOR_RE.match(value):
            errors.append(f"Invalid color for {name}: {value} (expected #RRGGBB)")

    mode = config.get('spqr', {}).get('mode', 'implicit')
    if mode not in VALID_SPQR_MODES:
        errors.append(f"Invalid spqr.mode: {mode}")

    level = config.get('output', {}).get('logging', {}).get('level', 'INFO')
    if str(level).upper() not in VALID_LOG_LEVELS:
        errors.append(f"Invalid logging level: {level}")

    return errors

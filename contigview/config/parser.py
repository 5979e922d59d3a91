#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Configuration parser — layers schema defaults, a YAML config file and
command-line options into the settings used to draw a component.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import copy
import logging
import os
import re
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .schema import DEFAULT_CONFIG, DrawSettings, _deep_merge, validate_config

logger = logging.getLogger(__name__)

# ${VAR} or ${VAR:-default}
ENV_VAR_RE = re.compile(r'\$\{([^}:]+)(?::-(.*?))?\}')


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


def _env_value(match: re.Match) -> str:
    name, default = match.group(1), match.group(2)
    return os.environ.get(name, default or '')


def _scalar(text: str) -> Any:
    """Numbers and booleans keep their YAML type; anything else stays text."""
    try:
        value = yaml.safe_load(text)
    except yaml.YAMLError:
        return text
    return value if isinstance(value, (bool, int, float)) else text


def substitute_env_vars(value: Any) -> Any:
    """
    Resolve ${VAR} and ${VAR:-default} references in config values.

    A value consisting of a single reference takes the type of the resolved
    text, so `current: ${ROTATION}` with ROTATION=180 gives the integer 180.
    References embedded in longer strings are substituted as text.
    """
    if isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    if not isinstance(value, str):
        return value

    match = ENV_VAR_RE.fullmatch(value)
    if match:
        return _scalar(_env_value(match))
    return ENV_VAR_RE.sub(_env_value, value)


class ConfigParser:
    """
    Drawing configuration assembled in layers.

    1. DEFAULT_CONFIG from the schema
    2. A user YAML file, with environment variable references resolved
    3. Command-line options given as dotted keys ('edges.min_weight')

    Values are read back with dotted keys and handed to the draw scheduler
    as a validated, frozen DrawSettings.
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        self.config_file = Path(config_file) if config_file else None
        self._config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_file:
            user_config = substitute_env_vars(self._read(self.config_file))
            self._config = _deep_merge(self._config, user_config)
            logger.debug(f"Loaded configuration from {self.config_file}")

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        try:
            with open(path) as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in config file {path}: {e}") from e

        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ConfigValidationError(
                f"Config file {path} must contain a mapping of sections, "
                f"got {type(loaded).__name__}"
            )
        return loaded

    def merge_cli_overrides(self, overrides: Dict[str, Any]):
        """
        Apply command-line options on top of the loaded configuration.

        Args:
            overrides: Dotted key -> value. None means the option wasn't given.
        """
        for key, value in overrides.items():
            if value is None:
                continue
            nested = value
            for part in reversed(key.split('.')):
                nested = {part: nested}
            self._config = _deep_merge(self._config, nested)

    def get(self, key: str, default: Any = None) -> Any:
        """Value at a dotted key, e.g. get('drawing.rotation.current')."""
        value: Any = self._config
        for part in key.split('.'):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def validate(self) -> bool:
        """
        Raises:
            ConfigValidationError: listing every invalid value
        """
        errors = validate_config(self._config)
        if errors:
            raise ConfigValidationError("Invalid configuration: " + "; ".join(errors))
        return True

    def draw_settings(self) -> DrawSettings:
        """Validated drawing settings for sessions and the draw scheduler."""
        self.validate()
        return DrawSettings.from_config(self._config)

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)

# ContigView v0.1.0
# Any usage is subject to this software's license.

"""Configuration management for the Sudoku search engine.

This module provides Hydra-based configuration management with hierarchical
parameter groups and runtime override capabilities.
"""

from .config_manager import (
    ConfigManager, ConfigContext, load_config, get_config, get_parameter,
    default_config_dir, PACKAGE_LOGGER
)
from .validators import validate_config, ConfigValidationError

__all__ = [
    'ConfigManager',
    'ConfigContext',
    'load_config',
    'get_config',
    'get_parameter',
    'default_config_dir',
    'PACKAGE_LOGGER',
    'validate_config',
    'ConfigValidationError'
]

"""
Configuration management for degviz

This module provides configuration loading, validation, and defaults
for the volcano, Venn and UpSet plotting helpers.
"""

from .config import (Config, get_default_config, load_config, save_config,
                     validate_config)

__all__ = [
    "Config",
    "load_config",
    "save_config",
    "validate_config",
    "get_default_config",
]

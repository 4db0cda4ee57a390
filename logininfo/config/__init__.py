"""
Configuration management for Login Info.

This package provides typed configuration models and loaders.
"""

from .models import InjectorConfig, LoginInfoConfig, UserConfig
from .loader import build_config_from_raw, config_to_raw, load_config_from_file

__all__ = [
    "InjectorConfig",
    "LoginInfoConfig",
    "UserConfig",
    "build_config_from_raw",
    "config_to_raw",
    "load_config_from_file",
]

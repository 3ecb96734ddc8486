"""
Configuration management module for the target price monitor.

This module handles loading and validating the YAML target list, the
environment-derived runtime settings, and reports any problem as a fatal
ConfigurationError.
"""

from .config_manager import ConfigurationManager, ConfigurationError
from .models import MonitorConfig, MonitorSettings, PacingConfig, TargetEntry

__all__ = [
    "ConfigurationManager",
    "ConfigurationError",
    "MonitorConfig",
    "MonitorSettings",
    "PacingConfig",
    "TargetEntry",
]
